from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

import attrs
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.reservation.domain.enum import ReservationStatus, ReservationType
from src.service.reservation.domain.value_object import ShowingSnapshot


# Lifecycle timestamp carried by each dated status; present iff the status matches
STATUS_DATE_FIELDS: dict[ReservationStatus, str] = {
    ReservationStatus.PAID: 'date_paid',
    ReservationStatus.CANCELLED: 'date_cancelled',
    ReservationStatus.REFUNDED: 'date_refunded',
    ReservationStatus.EXPIRED: 'date_expired',
}

ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.RESERVED: frozenset(
        {
            ReservationStatus.PAID,
            ReservationStatus.CANCELLED,
            ReservationStatus.EXPIRED,
            ReservationStatus.INVALID,
        }
    ),
    ReservationStatus.PAID: frozenset({ReservationStatus.REFUNDED, ReservationStatus.CANCELLED}),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.REFUNDED: frozenset(),
    ReservationStatus.EXPIRED: frozenset(),
    ReservationStatus.INVALID: frozenset(),
}


@attrs.define
class Reservation:
    id: UUID
    user_id: int
    showing_id: int
    ticket_count: int
    price_paid: Decimal
    currency: str
    reservation_type: ReservationType
    date_reserved: datetime
    expires_at: datetime
    snapshot: Optional[ShowingSnapshot] = None
    selected_seating: Optional[List[int]] = None
    status: ReservationStatus = ReservationStatus.RESERVED
    date_paid: Optional[datetime] = None
    date_cancelled: Optional[datetime] = None
    date_refunded: Optional[datetime] = None
    date_expired: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: int,
        showing_id: int,
        ticket_count: int,
        price_paid: Decimal,
        currency: str,
        reservation_type: ReservationType,
        selected_seating: Optional[List[int]],
        snapshot: ShowingSnapshot,
        date_reserved: datetime,
        expires_at: datetime,
    ) -> 'Reservation':
        # Shape rules are enforced by ReservationLifecycleService before any write
        return cls(
            id=id,
            user_id=user_id,
            showing_id=showing_id,
            ticket_count=ticket_count,
            price_paid=price_paid,
            currency=currency,
            reservation_type=reservation_type,
            selected_seating=list(selected_seating) if selected_seating is not None else None,
            snapshot=snapshot,
            status=ReservationStatus.RESERVED,
            date_reserved=date_reserved,
            expires_at=expires_at,
        )

    @property
    def is_reserved_seating(self) -> bool:
        return self.reservation_type == ReservationType.RESERVED_SEATS

    def can_transition_to(self, status: ReservationStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

    def _transition(
        self, status: ReservationStatus, at: datetime | None, **changes: Any
    ) -> 'Reservation':
        # Dated statuses are mutually exclusive: clear every other lifecycle date
        dates: dict[str, datetime | None] = {field: None for field in STATUS_DATE_FIELDS.values()}
        if status in STATUS_DATE_FIELDS:
            dates[STATUS_DATE_FIELDS[status]] = at
        return attrs.evolve(self, status=status, **dates, **changes)

    @Logger.io
    def mark_as_paid(self, *, now: datetime) -> 'Reservation':
        return self._transition(ReservationStatus.PAID, now)

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Reservation':
        return self._transition(ReservationStatus.CANCELLED, now)

    @Logger.io
    def refund(self, *, now: datetime) -> 'Reservation':
        return self._transition(ReservationStatus.REFUNDED, now)

    @Logger.io
    def expire(self, *, now: datetime) -> 'Reservation':
        return self._transition(ReservationStatus.EXPIRED, now)

    @Logger.io
    def mark_as_invalid(self, *, note: str) -> 'Reservation':
        return self._transition(ReservationStatus.INVALID, None, notes=note)
