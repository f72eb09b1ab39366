"""
Test Configuration and Fixtures

This module provides:
- Environment setup (log dir, throwaway data dir) before any application import
- Test doubles: controllable clock, scripted seat picker, in-memory snapshot repos
- Wired-up domain objects (grids, allocator, ledger, lifecycle, directory, unit of work)
  built from those doubles, fresh for every test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (core_setting.settings)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Nothing under test may touch the real ./data snapshots
    os.environ['DATA_DIR'] = tempfile.mkdtemp(prefix='cinema_test_data_')
    os.environ.setdefault('DEBUG', 'false')


_early_setup_test_environment()

from collections.abc import Callable, Iterable  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import List, Mapping, Optional, Sequence, Tuple  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.unit_of_work import SnapshotUnitOfWork  # noqa: E402
from src.platform.exception.exceptions import (  # noqa: E402
    CustomBaseError,
    PersistenceUnavailableError,
)
from src.service.inventory.app.interface.i_catalog_repo import ICatalogRepo  # noqa: E402
from src.service.inventory.domain.entity.concession_item import ConcessionItem  # noqa: E402
from src.service.inventory.domain.inventory_ledger import InventoryLedger  # noqa: E402
from src.service.inventory.driven_adapter.repo.default_catalog import (  # noqa: E402
    build_default_catalog,
)
from src.service.reservation.app.interface.i_seat_picker import ISeatPicker  # noqa: E402
from src.service.reservation.domain.entity.seat_grid import SeatGrid  # noqa: E402
from src.service.reservation.domain.seat_allocator import SeatAllocator  # noqa: E402
from src.service.reservation.driven_adapter.state.seat_grid_registry import (  # noqa: E402
    SeatGridRegistry,
)
from src.service.shared_kernel.domain.value_object import ShowingKey  # noqa: E402
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo  # noqa: E402
from src.service.ticketing.app.reservation_directory import ReservationDirectory  # noqa: E402
from src.service.ticketing.domain.entity.reservation_entity import Reservation  # noqa: E402
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle  # noqa: E402
from src.service.ticketing.domain.showing_catalog import ShowingCatalog  # noqa: E402
from src.service.ticketing.domain.value_object import PaymentOutcome  # noqa: E402
from src.service.ticketing.driven_adapter.catalog.default_showings import (  # noqa: E402
    build_default_showing_catalog,
)
from src.service.ticketing.driven_adapter.payment.payment_reference_generator import (  # noqa: E402
    PaymentReferenceGenerator,
)


START_TIME = datetime(2026, 3, 14, 10, 0, tzinfo=timezone.utc)
HENERAL_LUNA_1230 = ShowingKey(movie_title='Heneral Luna', showtime_label='12:30 PM')
HENERAL_LUNA_1600 = ShowingKey(movie_title='Heneral Luna', showtime_label='4:00 PM')


# =============================================================================
# Test doubles
# =============================================================================
class MutableClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class ScriptedSeatPicker(ISeatPicker):
    """Answers seat prompts from a fixed script; records every rejection"""

    def __init__(self, labels: Iterable[str]) -> None:
        self.labels: List[str] = list(labels)
        self.prompts: List[Tuple[List[str], List[str]]] = []
        self.rejected: List[Tuple[str, CustomBaseError]] = []

    def next_label(
        self, *, grid: SeatGrid, selected: List[str], own_seats: List[str], quantity: int
    ) -> str:
        self.prompts.append((selected, own_seats))
        if not self.labels:
            raise RuntimeError('Seat picker script exhausted')
        return self.labels.pop(0)

    def on_rejected(self, *, label: str, error: CustomBaseError) -> None:
        self.rejected.append((label, error))


class InMemoryReservationRepo(IReservationRepo):
    def __init__(self, reservations: Optional[List[Reservation]] = None) -> None:
        self.reservations: List[Reservation] = list(reservations or [])
        self.saved: List[List[Reservation]] = []
        self.fail_on_save = False

    def load_reservations(self) -> List[Reservation]:
        return list(self.reservations)

    def save_reservations(self, reservations: List[Reservation]) -> None:
        if self.fail_on_save:
            raise PersistenceUnavailableError('Cannot save bookings.json: disk full')
        self.saved.append(list(reservations))


class InMemoryCatalogRepo(ICatalogRepo):
    def __init__(self, items: List[ConcessionItem]) -> None:
        self.items = items
        self.saved: List[List[ConcessionItem]] = []
        self.fail_on_save = False

    def load_catalog(self) -> List[ConcessionItem]:
        return self.items

    def save_catalog(self, items: List[ConcessionItem]) -> None:
        if self.fail_on_save:
            raise PersistenceUnavailableError('Cannot save inventory.json: disk full')
        self.saved.append(list(items))


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(START_TIME)


@pytest.fixture
def make_picker() -> Callable[..., ScriptedSeatPicker]:
    def _make(*labels: str) -> ScriptedSeatPicker:
        return ScriptedSeatPicker(labels)

    return _make


@pytest.fixture
def grids() -> SeatGridRegistry:
    return SeatGridRegistry(rows=5, cols=8)


@pytest.fixture
def allocator() -> SeatAllocator:
    return SeatAllocator()


@pytest.fixture
def catalog_repo() -> InMemoryCatalogRepo:
    return InMemoryCatalogRepo(build_default_catalog(stock=100, reorder_level=20))


@pytest.fixture
def ledger(catalog_repo: InMemoryCatalogRepo) -> InventoryLedger:
    return InventoryLedger(catalog_repo.load_catalog())


@pytest.fixture
def lifecycle(
    allocator: SeatAllocator,
    grids: SeatGridRegistry,
    ledger: InventoryLedger,
    clock: MutableClock,
) -> ReservationLifecycle:
    return ReservationLifecycle(
        allocator=allocator,
        grids=grids,
        ledger=ledger,
        payment_window_minutes=15,
        max_quantity=5,
        clock=clock,
    )


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def directory(
    reservation_repo: InMemoryReservationRepo, lifecycle: ReservationLifecycle
) -> ReservationDirectory:
    return ReservationDirectory(repo=reservation_repo, lifecycle=lifecycle)


@pytest.fixture
def uow(
    directory: ReservationDirectory,
    ledger: InventoryLedger,
    catalog_repo: InMemoryCatalogRepo,
) -> SnapshotUnitOfWork:
    return SnapshotUnitOfWork(directory=directory, ledger=ledger, catalog_repo=catalog_repo)


@pytest.fixture
def showing_catalog() -> ShowingCatalog:
    return build_default_showing_catalog()


@pytest.fixture
def reference_generator() -> PaymentReferenceGenerator:
    return PaymentReferenceGenerator()


@pytest.fixture
def make_reservation(
    lifecycle: ReservationLifecycle,
    allocator: SeatAllocator,
    grids: SeatGridRegistry,
    directory: ReservationDirectory,
    ledger: InventoryLedger,
) -> Callable[..., Reservation]:
    """Pending reservation with its seats held, already added to the directory"""

    def _make(
        *,
        seats: Sequence[str] = ('A1', 'A2'),
        passkey: str = '1234',
        showing: ShowingKey = HENERAL_LUNA_1230,
        price: int = 250,
        concessions: Optional[Mapping[str, int]] = None,
    ) -> Reservation:
        grid = grids.get_or_create(showing)
        allocator.hold_seats(grid=grid, seat_labels=seats)
        reservation = lifecycle.create(
            code=directory.generate_code(),
            showing=showing,
            price=price,
            seats=list(seats),
            passkey=passkey,
            quote=ledger.quote(concessions or {}),
        )
        directory.add(reservation)
        return reservation

    return _make


@pytest.fixture
def card_outcome(clock: MutableClock) -> Callable[..., PaymentOutcome]:
    def _make(amount: float, reference: str = 'CARD-100001') -> PaymentOutcome:
        return PaymentOutcome(
            success=True, method='Card', reference=reference, amount_paid=amount, timestamp=clock()
        )

    return _make
