"""
Integration fixtures: real repositories over an in-memory SQLite database (aiosqlite).

Every test gets a fresh engine and schema. ``StaticPool`` keeps the single in-memory
connection alive across sessions so the data survives each repository commit.
"""

from typing import AsyncGenerator, Dict

import orjson
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.platform.database.orm_db_setting import Database, create_db_and_tables, orjson_serializer
from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.reservation.app.command.showing_seat_ledger_use_case import (
    ShowingSeatLedgerUseCase,
)
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_availability_checker import (
    SeatAvailabilityChecker,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.app.service.snapshot_builder import SnapshotBuilder
from src.service.reservation.driven_adapter.repo.reservation_repo_impl import ReservationRepoImpl
from src.service.reservation.driven_adapter.repo.seat_ledger_repo_impl import SeatLedgerRepoImpl
from test.service.reservation.factories import SHOWING_ID
from test.service.reservation.integration.catalog_seed import seed_catalog


@pytest.fixture(scope='function')
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        'sqlite+aiosqlite://',
        poolclass=StaticPool,
        connect_args={'check_same_thread': False},
        json_serializer=orjson_serializer,
        json_deserializer=orjson.loads,
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def database(engine: AsyncEngine) -> Database:
    return Database(session_maker=async_sessionmaker(engine, expire_on_commit=False))


@pytest.fixture
async def seeded_catalog(database: Database) -> None:
    async with database.session() as session:
        await seed_catalog(session)


@pytest.fixture
def catalog_query_repo(database: Database) -> CatalogQueryRepoImpl:
    return CatalogQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def seat_ledger_repo(database: Database) -> SeatLedgerRepoImpl:
    return SeatLedgerRepoImpl(session_factory=database.session)


@pytest.fixture
def reservation_repo(database: Database) -> ReservationRepoImpl:
    return ReservationRepoImpl(session_factory=database.session)


@pytest.fixture
def ledger_use_case(
    catalog_query_repo: CatalogQueryRepoImpl, seat_ledger_repo: SeatLedgerRepoImpl
) -> ShowingSeatLedgerUseCase:
    return ShowingSeatLedgerUseCase(
        catalog_query_repo=catalog_query_repo, seat_ledger_repo=seat_ledger_repo
    )


@pytest.fixture
async def ledger_ids(
    seeded_catalog: None,
    ledger_use_case: ShowingSeatLedgerUseCase,
    seat_ledger_repo: SeatLedgerRepoImpl,
) -> Dict[int, int]:
    """Provisions the seeded showing; maps seat id -> ledger entry id."""
    await ledger_use_case.provision(showing_id=SHOWING_ID)
    entries = await seat_ledger_repo.list_by_showing(showing_id=SHOWING_ID)
    return {entry.seat_id: entry.id for entry in entries}  # type: ignore[misc]


@pytest.fixture
def lifecycle_service(reservation_repo: ReservationRepoImpl) -> ReservationLifecycleService:
    return ReservationLifecycleService(reservation_repo=reservation_repo)


@pytest.fixture
def lock_manager(
    seat_ledger_repo: SeatLedgerRepoImpl,
    reservation_repo: ReservationRepoImpl,
    catalog_query_repo: CatalogQueryRepoImpl,
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
    catalog_query_repo: CatalogQueryRepoImpl, reservation_repo: ReservationRepoImpl
) -> SeatAvailabilityChecker:
    return SeatAvailabilityChecker(
        catalog_query_repo=catalog_query_repo, reservation_repo=reservation_repo
    )


@pytest.fixture
def snapshot_builder(
    catalog_query_repo: CatalogQueryRepoImpl, seat_ledger_repo: SeatLedgerRepoImpl
) -> SnapshotBuilder:
    return SnapshotBuilder(catalog_query_repo=catalog_query_repo, seat_ledger_repo=seat_ledger_repo)
