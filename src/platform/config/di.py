"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html

Use cases are not registered here: each one builds itself through its ``depends``
classmethod from the providers below, which keeps this module free of use case imports.
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.reservation.app.service.reservation_lifecycle_service import (
    ReservationLifecycleService,
)
from src.service.reservation.app.service.seat_availability_checker import (
    SeatAvailabilityChecker,
)
from src.service.reservation.app.service.seat_lock_manager import SeatLockManager
from src.service.reservation.app.service.snapshot_builder import SnapshotBuilder
from src.service.reservation.driven_adapter.repo.reservation_repo_impl import (
    ReservationRepoImpl,
)
from src.service.reservation.driven_adapter.repo.seat_ledger_repo_impl import (
    SeatLedgerRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    catalog_query_repo = providers.Singleton(
        CatalogQueryRepoImpl, session_factory=database.provided.session
    )
    seat_ledger_repo = providers.Singleton(
        SeatLedgerRepoImpl, session_factory=database.provided.session
    )
    reservation_repo = providers.Singleton(
        ReservationRepoImpl, session_factory=database.provided.session
    )

    # Engine services
    reservation_lifecycle_service = providers.Singleton(
        ReservationLifecycleService, reservation_repo=reservation_repo
    )
    seat_availability_checker = providers.Singleton(
        SeatAvailabilityChecker,
        catalog_query_repo=catalog_query_repo,
        reservation_repo=reservation_repo,
    )
    seat_lock_manager = providers.Singleton(
        SeatLockManager,
        seat_ledger_repo=seat_ledger_repo,
        reservation_repo=reservation_repo,
        catalog_query_repo=catalog_query_repo,
        lifecycle_service=reservation_lifecycle_service,
    )
    snapshot_builder = providers.Singleton(
        SnapshotBuilder,
        catalog_query_repo=catalog_query_repo,
        seat_ledger_repo=seat_ledger_repo,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
