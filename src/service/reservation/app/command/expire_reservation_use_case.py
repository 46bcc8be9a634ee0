from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.clock.utc_clock import utc_now
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.service.reservation_guard import (
    fetch_reservation_or_throw,
    is_expired,
)
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationStatus


class ExpireReservationUseCase:
    """Moves a lapsed RESERVED reservation to EXPIRED; anything else is returned as-is."""

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
    async def expire(self, *, reservation_id: UUID, now: datetime | None = None) -> Reservation:
        now = now or utc_now()
        reservation = await fetch_reservation_or_throw(
            reservation_repo=self.reservation_repo, reservation_id=reservation_id
        )
        if reservation.status != ReservationStatus.RESERVED or not is_expired(
            reservation, now=now
        ):
            return reservation

        expired = reservation.expire(now=now)
        self.lifecycle_service.validate(reservation=expired, previous=reservation, now=now)
        await self.lock_manager.release(reservation_id=reservation_id)
        expired = await self.lifecycle_service.persist_transition(reservation=expired, now=now)
        Logger.base.info(f'⌛ [EXPIRE] Reservation {reservation_id} expired')
        return expired
