from typing import Annotated, Optional

from pydantic import BaseModel, StringConstraints

from src.service.catalog.domain.enum import SeatType
from src.service.reservation.domain.value_object.snapshot_types import (
    SNAPSHOT_MODEL_CONFIG,
    PositiveMoney,
)


class SeatSnapshot(BaseModel):
    model_config = SNAPSHOT_MODEL_CONFIG

    seat_ledger_id: int  # traceability back to the contended ledger entry
    seat_id: int
    seat_identifier: Annotated[
        str, StringConstraints(min_length=3, max_length=20, pattern=r'^[^\s-]+-\d+$')
    ]  # '{row}-{number}'
    seat_type: SeatType
    seat_label: Optional[Annotated[str, StringConstraints(max_length=50)]] = None
    price_paid: PositiveMoney
