from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.clock.utc_clock import utc_now
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.service.reservation_guard import (
    assert_not_expired,
    assert_owned_by,
    assert_status,
    fetch_reservation_or_throw,
)
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.domain.entity import Reservation
from src.service.reservation.domain.enum import ReservationStatus


class MarkReservationPaidUseCase:
    """
    Records a successful payment. The payment itself happens outside this service;
    this only moves RESERVED to PAID once the caller confirms it.
    """

    def __init__(
        self,
        *,
        reservation_repo: IReservationRepo,
        lifecycle_service: ReservationLifecycleService,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.lifecycle_service = lifecycle_service

    @classmethod
    @inject
    def depends(
        cls,
        reservation_repo: IReservationRepo = Depends(Provide[Container.reservation_repo]),
        lifecycle_service: ReservationLifecycleService = Depends(
            Provide[Container.reservation_lifecycle_service]
        ),
    ) -> Self:
        return cls(reservation_repo=reservation_repo, lifecycle_service=lifecycle_service)

    @Logger.io
    async def mark_paid(self, *, reservation_id: UUID, user_id: int) -> Reservation:
        now = utc_now()
        reservation = await fetch_reservation_or_throw(
            reservation_repo=self.reservation_repo, reservation_id=reservation_id
        )
        assert_owned_by(user_id, reservation)
        assert_status(reservation, ReservationStatus.RESERVED)
        assert_not_expired(reservation, now=now)

        return await self.lifecycle_service.persist_transition(
            reservation=reservation.mark_as_paid(now=now), now=now
        )
