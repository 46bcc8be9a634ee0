from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.value_object import ShowingSnapshot


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'showing_id': 1,
                'status': 'RESERVED',
                'reservation_type': 'RESERVED_SEATS',
                'ticket_count': 2,
                'selected_seating': [11, 12],
                'price_paid': '27.00',
                'currency': 'USD',
                'date_reserved': '2025-01-10T10:30:00Z',
                'expires_at': '2025-01-10T11:00:00Z',
            }
        },
    }

    id: UtilsUUID7
    user_id: int
    showing_id: int
    status: str
    reservation_type: str
    ticket_count: int
    selected_seating: Optional[List[int]] = None
    price_paid: Decimal
    currency: str
    date_reserved: datetime
    expires_at: datetime
    date_paid: Optional[datetime] = None
    date_cancelled: Optional[datetime] = None
    date_refunded: Optional[datetime] = None
    date_expired: Optional[datetime] = None
    notes: Optional[str] = None
    snapshot: Optional[ShowingSnapshot] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            id=reservation.id,  # type: ignore[arg-type]
            user_id=reservation.user_id,
            showing_id=reservation.showing_id,
            status=reservation.status.value,
            reservation_type=reservation.reservation_type.value,
            ticket_count=reservation.ticket_count,
            selected_seating=reservation.selected_seating,
            price_paid=reservation.price_paid,
            currency=reservation.currency,
            date_reserved=reservation.date_reserved,
            expires_at=reservation.expires_at,
            date_paid=reservation.date_paid,
            date_cancelled=reservation.date_cancelled,
            date_refunded=reservation.date_refunded,
            date_expired=reservation.date_expired,
            notes=reservation.notes,
            snapshot=reservation.snapshot,
        )
