from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.clock.utc_clock import utc_now
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.service.reservation_guard import (
    assert_owned_by,
    fetch_reservation_or_throw,
)
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationStatus


class CancelReservationUseCase:
    """
    Cancel a RESERVED or PAID reservation and hand its seats back.

    Cancelling twice is harmless: a reservation already CANCELLED, or in any other state
    that cannot be cancelled, is returned unchanged.
    """

    def __init__(
        self,
        *,
        reservation_repo: IReservationRepo,
        lock_manager: SeatLockManager,
        lifecycle_service: ReservationLifecycleService,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.lock_manager = lock_manager
        self.lifecycle_service = lifecycle_service
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        reservation_repo: IReservationRepo = Depends(Provide[Container.reservation_repo]),
        lock_manager: SeatLockManager = Depends(Provide[Container.seat_lock_manager]),
        lifecycle_service: ReservationLifecycleService = Depends(
            Provide[Container.reservation_lifecycle_service]
        ),
    ) -> Self:
        return cls(
            reservation_repo=reservation_repo,
            lock_manager=lock_manager,
            lifecycle_service=lifecycle_service,
        )

    @Logger.io
    async def cancel(self, *, reservation_id: UUID, user_id: int) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.cancel_reservation',
            attributes={'reservation.id': str(reservation_id), 'user.id': user_id},
        ):
            reservation = await fetch_reservation_or_throw(
                reservation_repo=self.reservation_repo, reservation_id=reservation_id
            )
            assert_owned_by(user_id, reservation)

            if reservation.status not in (ReservationStatus.RESERVED, ReservationStatus.PAID):
                Logger.base.info(
                    f'⏭️ [CANCEL] Reservation {reservation_id} is {reservation.status}; '
                    'returned unchanged'
                )
                return reservation

            now = utc_now()
            cancelled = reservation.cancel(now=now)
            # Seats go back only for a transition that will be accepted. Release reads the
            # stored status, so it must run before the update
            self.lifecycle_service.validate(reservation=cancelled, previous=reservation, now=now)
            await self.lock_manager.release(reservation_id=reservation_id)
            return await self.lifecycle_service.persist_transition(reservation=cancelled, now=now)
