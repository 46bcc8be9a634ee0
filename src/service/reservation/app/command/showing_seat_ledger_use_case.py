from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.reservation.app.interface.i_seat_ledger_repo import ISeatLedgerRepo
from src.service.reservation.domain.entity import SeatLedgerEntry
from src.service.reservation.domain.enum import ReservationErrorCode, SeatLedgerStatus


class ShowingSeatLedgerUseCase:
    """
    Creates and removes the per-showing seat ledger.

    Called explicitly when a showing is scheduled or deleted; nothing provisions the
    ledger implicitly.
    """

    def __init__(
        self, *, catalog_query_repo: ICatalogQueryRepo, seat_ledger_repo: ISeatLedgerRepo
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.seat_ledger_repo = seat_ledger_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
        seat_ledger_repo: ISeatLedgerRepo = Depends(Provide[Container.seat_ledger_repo]),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo, seat_ledger_repo=seat_ledger_repo)

    @Logger.io
    async def provision(self, *, showing_id: int) -> int:
        """One AVAILABLE entry per bookable seat; seats that already have one are skipped."""
        showing = await self.catalog_query_repo.get_showing(showing_id=showing_id)
        if showing is None:
            raise NotFoundError(
                'Showing not found.', error_code=ReservationErrorCode.SHOWING_NOT_FOUND
            )

        seats = await self.catalog_query_repo.list_bookable_seats(screen_id=showing.screen_id)
        created = await self.seat_ledger_repo.bulk_create(
            entries=[
                SeatLedgerEntry(
                    showing_id=showing.id,
                    seat_id=seat.id,
                    base_price=showing.ticket_price,
                    price_multiplier=seat.price_multiplier,
                    status=SeatLedgerStatus.AVAILABLE,
                )
                for seat in seats
            ]
        )
        Logger.base.info(
            f'🪑 [LEDGER] Showing {showing_id}: '
            f'{created} new entries ({len(seats)} bookable seats)'
        )
        return created

    @Logger.io
    async def purge(self, *, showing_id: int) -> int:
        deleted = await self.seat_ledger_repo.delete_by_showing(showing_id=showing_id)
        Logger.base.info(f'🧹 [LEDGER] Showing {showing_id}: {deleted} entries deleted')
        return deleted
