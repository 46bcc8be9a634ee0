from decimal import Decimal
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.catalog.domain.entity import Seat
from src.service.reservation.domain.enum import SeatLedgerStatus


@attrs.define
class SeatLedgerEntry:
    """Availability of one seat for one showing; the unit of contention."""

    showing_id: int
    seat_id: int
    base_price: Decimal
    id: Optional[int] = None
    price_multiplier: Decimal = Decimal('1')
    override_price: Optional[Decimal] = None
    status: SeatLedgerStatus = SeatLedgerStatus.AVAILABLE
    reservation_id: Optional[UUID] = None
    seat: Optional[Seat] = None  # populated by the seat-aware projections only
