from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.service.reservation_guard import (
    assert_not_expired,
    assert_owned_by,
    assert_status,
    fetch_reservation_or_throw,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationStatus


class CompleteCheckoutUseCase:
    """
    Second checkout step: bind the held seats to the reservation.

    General admission reservations have nothing to finalize and pass straight through.
    """

    def __init__(
        self, *, reservation_repo: IReservationRepo, lock_manager: SeatLockManager
    ) -> None:
        self.reservation_repo = reservation_repo
        self.lock_manager = lock_manager
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        reservation_repo: IReservationRepo = Depends(Provide[Container.reservation_repo]),
        lock_manager: SeatLockManager = Depends(Provide[Container.seat_lock_manager]),
    ) -> Self:
        return cls(reservation_repo=reservation_repo, lock_manager=lock_manager)

    @Logger.io
    async def complete_checkout(self, *, reservation_id: UUID, user_id: int) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.complete_checkout',
            attributes={'reservation.id': str(reservation_id), 'user.id': user_id},
        ):
            reservation = await fetch_reservation_or_throw(
                reservation_repo=self.reservation_repo, reservation_id=reservation_id
            )
            assert_owned_by(user_id, reservation)
            assert_status(reservation, ReservationStatus.RESERVED)
            assert_not_expired(reservation)

            await self.lock_manager.finalize(reservation=reservation)
            return reservation
