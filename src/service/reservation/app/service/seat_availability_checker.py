from datetime import datetime

from src.platform.clock.utc_clock import utc_now
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.reservation.app.interface.i_reservation_repo import IReservationRepo


class SeatAvailabilityChecker:
    """
    Capacity check for general admission, where seats are not tracked per reservation.

    Capacity is the number of SEAT slots on the screen's layout; committed tickets are
    those held by PAID reservations and by RESERVED ones that have not expired.
    """

    def __init__(
        self, *, catalog_query_repo: ICatalogQueryRepo, reservation_repo: IReservationRepo
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.reservation_repo = reservation_repo

    @Logger.io
    async def check_capacity(
        self,
        *,
        showing_id: int,
        screen_id: int,
        requested_count: int,
        now: datetime | None = None,
    ) -> bool:
        configured = await self.catalog_query_repo.count_seat_slots(screen_id=screen_id)
        if configured == 0:
            return False

        committed = await self.reservation_repo.sum_committed_tickets(
            showing_id=showing_id, now=now or utc_now()
        )
        return configured >= committed + requested_count
