from decimal import Decimal
from typing import Optional

import attrs

from src.service.catalog.domain.enum.seat_type import SeatLayoutType, SeatType


@attrs.define
class Seat:
    id: int
    screen_id: int
    row: str
    number: int
    seat_type: SeatType
    layout_type: SeatLayoutType = SeatLayoutType.SEAT
    is_available: bool = True
    price_multiplier: Decimal = Decimal('1')
    seat_label: Optional[str] = None

    @property
    def identifier(self) -> str:
        """Stable human identifier, e.g. 'C-12'."""
        return f'{self.row}-{self.number}'

    @property
    def is_bookable(self) -> bool:
        return self.layout_type == SeatLayoutType.SEAT and self.is_available
