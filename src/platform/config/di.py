"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import SnapshotUnitOfWork
from src.platform.types.clock import utc_now
from src.service.inventory.domain.inventory_ledger import InventoryLedger
from src.service.inventory.driven_adapter.repo.catalog_json_repo_impl import CatalogJsonRepoImpl
from src.service.reservation.domain.seat_allocator import SeatAllocator
from src.service.reservation.driven_adapter.state.seat_grid_registry import SeatGridRegistry
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle
from src.service.ticketing.driven_adapter.catalog.default_showings import (
    build_default_showing_catalog,
)
from src.service.ticketing.driven_adapter.payment.payment_reference_generator import (
    PaymentReferenceGenerator,
)
from src.service.ticketing.driven_adapter.repo.reservation_json_repo_impl import (
    ReservationJsonRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)
    clock = providers.Object(utc_now)

    # Snapshot repositories
    catalog_repo = providers.Singleton(
        CatalogJsonRepoImpl,
        path=config_service.provided.INVENTORY_PATH,
        default_stock=config_service.provided.DEFAULT_STOCK,
        default_reorder_level=config_service.provided.DEFAULT_REORDER_LEVEL,
    )
    reservation_repo = providers.Singleton(
        ReservationJsonRepoImpl, path=config_service.provided.BOOKINGS_PATH
    )

    # In-process state (one instance per process, shared by every use case)
    seat_grid_registry = providers.Singleton(
        SeatGridRegistry,
        rows=config_service.provided.SEAT_ROWS,
        cols=config_service.provided.SEAT_COLS,
    )
    seat_allocator = providers.Singleton(SeatAllocator)
    inventory_ledger = providers.Singleton(
        InventoryLedger, items=catalog_repo.provided.load_catalog.call()
    )
    showing_catalog = providers.Singleton(build_default_showing_catalog)
    payment_reference_generator = providers.Singleton(PaymentReferenceGenerator)

    # Reservation lifecycle
    reservation_lifecycle = providers.Singleton(
        ReservationLifecycle,
        allocator=seat_allocator,
        grids=seat_grid_registry,
        ledger=inventory_ledger,
        payment_window_minutes=config_service.provided.PAYMENT_WINDOW_MINUTES,
        max_quantity=config_service.provided.MAX_TICKETS_PER_RESERVATION,
        clock=clock,
    )
    reservation_directory = providers.Singleton(
        ReservationDirectory,
        repo=reservation_repo,
        lifecycle=reservation_lifecycle,
        code_prefix=config_service.provided.RESERVATION_CODE_PREFIX,
        code_length=config_service.provided.RESERVATION_CODE_LENGTH,
    )
    unit_of_work = providers.Singleton(
        SnapshotUnitOfWork,
        directory=reservation_directory,
        ledger=inventory_ledger,
        catalog_repo=catalog_repo,
    )


container = Container()
