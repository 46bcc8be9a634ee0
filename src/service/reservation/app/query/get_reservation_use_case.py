from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo
from src.service.reservation.app.service.reservation_guard import (
    assert_owned_by,
    fetch_reservation_or_throw,
)
from src.service.reservation.domain.entity import Reservation


class GetReservationUseCase:
    def __init__(self, *, reservation_repo: IReservationRepo) -> None:
        self.reservation_repo = reservation_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_repo: IReservationRepo = Depends(Provide[Container.reservation_repo]),
    ) -> Self:
        return cls(reservation_repo=reservation_repo)

    @Logger.io
    async def get(self, *, reservation_id: UUID, user_id: int) -> Reservation:
        reservation = await fetch_reservation_or_throw(
            reservation_repo=self.reservation_repo, reservation_id=reservation_id
        )
        assert_owned_by(user_id, reservation)
        return reservation
