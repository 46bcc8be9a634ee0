"""
Reservation lifecycle gateway.

Every write of a Reservation goes through ``persist_new`` or ``persist_transition``,
which run ``validate`` first. The checks are pre-write invariants, not workflow steps:
the orchestrator, cancellation, expiry, payment and the seat-lock rollback all pass
through the same rules.

State machine::

    RESERVED -> PAID | CANCELLED | EXPIRED | INVALID
    PAID     -> REFUNDED | CANCELLED
    CANCELLED, REFUNDED, EXPIRED, INVALID are terminal
"""

from datetime import datetime
from decimal import Decimal

from src.platform.clock.utc_clock import utc_now
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.entity.reservation_entity import STATUS_DATE_FIELDS
from src.service.reservation.domain.enum import (
    ReservationErrorCode,
    ReservationStatus,
    ReservationType,
)
from src.service.reservation.domain.reservation_validation_error import (
    ReservationValidationError,
)


# Fields fixed at creation
_IMMUTABLE_FIELDS = (
    'user_id',
    'showing_id',
    'reservation_type',
    'ticket_count',
    'selected_seating',
    'price_paid',
    'currency',
    'date_reserved',
)


class ReservationLifecycleService:
    def __init__(self, *, reservation_repo: IReservationRepo) -> None:
        self.reservation_repo = reservation_repo

    def validate(
        self,
        *,
        reservation: Reservation,
        previous: Reservation | None = None,
        now: datetime | None = None,
    ) -> None:
        """
        Raises:
            ReservationValidationError: with every violated field, not just the first
        """
        now = now or utc_now()
        errors: dict[str, str] = {}

        self._check_status_dates(reservation, errors)
        self._check_expiry(reservation, previous, now, errors)
        self._check_seating_shape(reservation, errors)
        self._check_amounts(reservation, errors)

        if reservation.snapshot is None:
            errors['snapshot'] = 'snapshot is required'

        if previous is None:
            if reservation.status != ReservationStatus.RESERVED:
                errors['status'] = f'new reservations start as {ReservationStatus.RESERVED}'
        else:
            self._check_transition(reservation, previous, errors)

        if errors:
            raise ReservationValidationError(errors)

    @staticmethod
    def _check_status_dates(reservation: Reservation, errors: dict[str, str]) -> None:
        if reservation.date_reserved is None:
            errors['date_reserved'] = 'date_reserved is required'

        for status, field in STATUS_DATE_FIELDS.items():
            is_set = getattr(reservation, field) is not None
            if reservation.status == status and not is_set:
                errors[field] = f'{field} is required when status is {status}'
            elif reservation.status != status and is_set:
                errors[field] = f'{field} must be empty unless status is {status}'

    @staticmethod
    def _check_expiry(
        reservation: Reservation,
        previous: Reservation | None,
        now: datetime,
        errors: dict[str, str],
    ) -> None:
        if reservation.expires_at is None:
            errors['expires_at'] = 'expires_at is required'
            return

        expiry_changed = previous is None or previous.expires_at != reservation.expires_at
        if (
            reservation.status == ReservationStatus.RESERVED
            and expiry_changed
            and reservation.expires_at <= now
        ):
            errors['expires_at'] = 'expires_at must be in the future'

    @staticmethod
    def _check_seating_shape(reservation: Reservation, errors: dict[str, str]) -> None:
        if reservation.reservation_type == ReservationType.RESERVED_SEATS:
            if not reservation.selected_seating:
                errors['selected_seating'] = 'selected_seating is required for reserved seating'
            elif len(reservation.selected_seating) != reservation.ticket_count:
                errors['ticket_count'] = 'ticket_count must match the number of selected seats'
        elif reservation.reservation_type == ReservationType.GENERAL_ADMISSION:
            if reservation.selected_seating is not None:
                errors['selected_seating'] = 'selected_seating must be empty for general admission'
        else:
            errors['reservation_type'] = f'unknown reservation type {reservation.reservation_type}'

    @staticmethod
    def _check_amounts(reservation: Reservation, errors: dict[str, str]) -> None:
        if reservation.ticket_count < 1:
            errors['ticket_count'] = 'ticket_count must be at least 1'
        if reservation.price_paid <= Decimal('0'):
            errors['price_paid'] = 'price_paid must be positive'

    @staticmethod
    def _check_transition(
        reservation: Reservation, previous: Reservation, errors: dict[str, str]
    ) -> None:
        if reservation.status != previous.status and not previous.can_transition_to(
            reservation.status
        ):
            errors['status'] = f'cannot move from {previous.status} to {reservation.status}'

        if reservation.snapshot != previous.snapshot:
            errors['snapshot'] = 'snapshot cannot change once persisted'

        for field in _IMMUTABLE_FIELDS:
            if getattr(reservation, field) != getattr(previous, field):
                errors[field] = f'{field} cannot change once persisted'

    @Logger.io
    async def persist_new(
        self, *, reservation: Reservation, now: datetime | None = None
    ) -> Reservation:
        self.validate(reservation=reservation, now=now)
        created = await self.reservation_repo.create(reservation=reservation)
        Logger.base.info(
            f'📝 [LIFECYCLE] Reservation {created.id} created as {created.status} '
            f'({created.reservation_type}, {created.ticket_count} tickets)'
        )
        return created

    @Logger.io
    async def persist_transition(
        self, *, reservation: Reservation, now: datetime | None = None
    ) -> Reservation:
        previous = await self.reservation_repo.get_by_id(reservation_id=reservation.id)
        if previous is None:
            raise NotFoundError(
                'Reservation not found.', error_code=ReservationErrorCode.RESERVATION_NOT_FOUND
            )

        self.validate(reservation=reservation, previous=previous, now=now)
        updated = await self.reservation_repo.update(reservation=reservation)
        Logger.base.info(
            f'🔁 [LIFECYCLE] Reservation {updated.id}: {previous.status} → {updated.status}'
        )
        return updated
