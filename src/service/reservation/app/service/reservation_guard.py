"""
Assertions shared by the checkout, cancel and expiry flows.

Expiry is enforced lazily here rather than by a background sweeper.
"""

from datetime import datetime

from uuid_utils import UUID

from src.platform.clock.utc_clock import utc_now
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationErrorCode, ReservationStatus


async def fetch_reservation_or_throw(
    *, reservation_repo: IReservationRepo, reservation_id: UUID
) -> Reservation:
    reservation = await reservation_repo.get_by_id(reservation_id=reservation_id)
    if reservation is None:
        raise NotFoundError(
            'Reservation not found.', error_code=ReservationErrorCode.RESERVATION_NOT_FOUND
        )
    return reservation


def is_expired(reservation: Reservation, *, now: datetime | None = None) -> bool:
    return (now or utc_now()) >= reservation.expires_at


def assert_not_expired(reservation: Reservation, *, now: datetime | None = None) -> None:
    if is_expired(reservation, now=now):
        raise ConflictError(
            'Reservation has expired.', error_code=ReservationErrorCode.RESERVATION_EXPIRED
        )


def assert_owned_by(user_id: int, reservation: Reservation) -> None:
    if reservation.user_id != user_id:
        raise ForbiddenError(
            'You are not allowed to access this reservation.',
            error_code=ReservationErrorCode.UNAUTHORIZED,
        )


def assert_status(reservation: Reservation, *allowed: ReservationStatus) -> None:
    if reservation.status not in allowed:
        raise ConflictError(
            f'Reservation is {reservation.status}.',
            error_code=ReservationErrorCode.INVALID_RESERVATION_STATUS,
        )
