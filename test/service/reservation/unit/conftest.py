from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.service.catalog.domain.enum import SeatType
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_availability_checker import (
    SeatAvailabilityChecker,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.app.service.snapshot_builder import SnapshotBuilder
from src.service.reservation.domain.entity import SeatLedgerEntry
from test.service.reservation.factories import (
    SEAT_IDS,
    SHOWING_ID,
    TICKET_PRICE,
    VIP_SEAT_ID,
    make_movie,
    make_screen,
    make_seat,
    make_showing,
    make_theatre,
)
from test.service.reservation.fakes import InMemoryReservationRepo, InMemorySeatLedgerRepo


@pytest.fixture
def catalog_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_showing = AsyncMock(return_value=make_showing())
    repo.get_movie = AsyncMock(return_value=make_movie())
    repo.get_theatre = AsyncMock(return_value=make_theatre())
    repo.get_screen = AsyncMock(return_value=make_screen())
    repo.count_seat_slots = AsyncMock(return_value=100)
    return repo


@pytest.fixture
def seat_ledger_repo() -> InMemorySeatLedgerRepo:
    repo = InMemorySeatLedgerRepo()
    for seat_id in SEAT_IDS:
        repo.add(
            SeatLedgerEntry(
                id=seat_id, showing_id=SHOWING_ID, seat_id=seat_id, base_price=TICKET_PRICE
            ),
            seat=make_seat(seat_id),
        )
    repo.add(
        SeatLedgerEntry(
            id=VIP_SEAT_ID,
            showing_id=SHOWING_ID,
            seat_id=VIP_SEAT_ID,
            base_price=TICKET_PRICE,
            price_multiplier=Decimal('1.5'),
        ),
        seat=make_seat(VIP_SEAT_ID, row='A', seat_type=SeatType.RECLINER, seat_label='VIP 1'),
    )
    return repo


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def lifecycle_service(reservation_repo: InMemoryReservationRepo) -> ReservationLifecycleService:
    return ReservationLifecycleService(reservation_repo=reservation_repo)


@pytest.fixture
def lock_manager(
    seat_ledger_repo: InMemorySeatLedgerRepo,
    reservation_repo: InMemoryReservationRepo,
    catalog_query_repo: AsyncMock,
    lifecycle_service: ReservationLifecycleService,
) -> SeatLockManager:
    return SeatLockManager(
        seat_ledger_repo=seat_ledger_repo,
        reservation_repo=reservation_repo,
        catalog_query_repo=catalog_query_repo,
        lifecycle_service=lifecycle_service,
    )


@pytest.fixture
def availability_checker(
    catalog_query_repo: AsyncMock, reservation_repo: InMemoryReservationRepo
) -> SeatAvailabilityChecker:
    return SeatAvailabilityChecker(
        catalog_query_repo=catalog_query_repo, reservation_repo=reservation_repo
    )


@pytest.fixture
def snapshot_builder(
    catalog_query_repo: AsyncMock, seat_ledger_repo: InMemorySeatLedgerRepo
) -> SnapshotBuilder:
    return SnapshotBuilder(catalog_query_repo=catalog_query_repo, seat_ledger_repo=seat_ledger_repo)
