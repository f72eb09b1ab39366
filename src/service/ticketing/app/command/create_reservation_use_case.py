from typing import Mapping, Optional, Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.domain.inventory_ledger import InventoryLedger
from src.service.reservation.app.interface.i_seat_picker import ISeatPicker
from src.service.reservation.domain.seat_allocator import SeatAllocator
from src.service.ticketing.app.dto.reservation_draft import ReservationDraft
from src.service.ticketing.app.dto.reservation_result import CreateReservationResult
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle
from src.service.ticketing.domain.showing_catalog import ShowingCatalog


class CreateReservationUseCase:
    """
    New reservation in two steps, mirroring the booking flow:

    1. prepare(): resolve the showing, price the concessions, pick and hold seats
    2. confirm(): check the passkey, create the pending reservation, save it
       (or discard(): the customer backed out, seats are released)
    """

    def __init__(
        self,
        *,
        catalog: ShowingCatalog,
        ledger: InventoryLedger,
        allocator: SeatAllocator,
        lifecycle: ReservationLifecycle,
        directory: ReservationDirectory,
        uow: AbstractUnitOfWork,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.allocator = allocator
        self.lifecycle = lifecycle
        self.directory = directory
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        catalog: ShowingCatalog = Provide[Container.showing_catalog],
        ledger: InventoryLedger = Provide[Container.inventory_ledger],
        allocator: SeatAllocator = Provide[Container.seat_allocator],
        lifecycle: ReservationLifecycle = Provide[Container.reservation_lifecycle],
        directory: ReservationDirectory = Provide[Container.reservation_directory],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(
            catalog=catalog,
            ledger=ledger,
            allocator=allocator,
            lifecycle=lifecycle,
            directory=directory,
            uow=uow,
        )

    @Logger.io
    def prepare(
        self,
        *,
        movie_title: str,
        showtime_label: str,
        quantity: int,
        picker: ISeatPicker,
        concession_items: Optional[Mapping[str, int]] = None,
    ) -> ReservationDraft:
        """
        Raises:
            NotFoundError: Unknown movie, showtime or concession item
            DomainError: Quantity out of range, concession count above the stock cap
        """
        showing, showtime = self.catalog.resolve(
            movie_title=movie_title, showtime_label=showtime_label
        )
        max_quantity = self.lifecycle.max_quantity
        if not 1 <= quantity <= max_quantity:
            raise DomainError(f'Quantity must be between 1 and {max_quantity}')
        quote = self.ledger.quote(concession_items or {})

        grid = self.lifecycle.grids.get_or_create(showing)
        seats = self.allocator.select_seats(grid=grid, quantity=quantity, picker=picker)
        return ReservationDraft(showing=showing, price=showtime.price, seats=seats, quote=quote)

    @Logger.io
    def confirm(
        self, draft: ReservationDraft, *, passkey: str, passkey_confirmation: str
    ) -> CreateReservationResult:
        """
        Raises:
            DomainError: Empty passkey or confirmation mismatch; the draft keeps its seats
        """
        if not passkey:
            raise DomainError('Passkey cannot be empty')
        if passkey != passkey_confirmation:
            raise DomainError('Passkeys do not match')

        reservation = self.lifecycle.create(
            code=self.directory.generate_code(),
            showing=draft.showing,
            price=draft.price,
            seats=draft.seats,
            passkey=passkey,
            quote=draft.quote,
        )
        self.directory.add(reservation)
        persisted = self.uow.commit()
        return CreateReservationResult(reservation=reservation, persisted=persisted)

    @Logger.io
    def discard(self, draft: ReservationDraft) -> None:
        grid = self.lifecycle.grids.get_or_create(draft.showing)
        self.allocator.release_seats(grid=grid, seat_labels=draft.seats)
        Logger.base.info(f'↩️ [RESERVATION] Draft for {draft.showing} discarded, seats released')

    @Logger.io
    def execute(
        self,
        *,
        movie_title: str,
        showtime_label: str,
        quantity: int,
        picker: ISeatPicker,
        passkey: str,
        passkey_confirmation: str,
        concession_items: Optional[Mapping[str, int]] = None,
    ) -> CreateReservationResult:
        """prepare + confirm in one call; a failed confirm gives the seats back"""
        if not passkey:
            raise DomainError('Passkey cannot be empty')
        if passkey != passkey_confirmation:
            raise DomainError('Passkeys do not match')

        draft = self.prepare(
            movie_title=movie_title,
            showtime_label=showtime_label,
            quantity=quantity,
            picker=picker,
            concession_items=concession_items,
        )
        try:
            return self.confirm(draft, passkey=passkey, passkey_confirmation=passkey_confirmation)
        except Exception:
            self.discard(draft)
            raise
