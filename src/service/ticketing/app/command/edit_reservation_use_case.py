from typing import Mapping, Optional, Sequence, Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_seat_picker import ISeatPicker
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.dto.reservation_result import EditResult
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle
from src.service.ticketing.domain.showing_catalog import ShowingCatalog


class EditReservationUseCase:
    """
    Customer edits on a reservation already looked up by code + passkey.

    Pending reservations can change showing, seats, quantity and concessions. Paid ones
    can only change concessions; the lifecycle rejects everything else.
    """

    def __init__(
        self,
        *,
        catalog: ShowingCatalog,
        lifecycle: ReservationLifecycle,
        uow: AbstractUnitOfWork,
    ) -> None:
        self.catalog = catalog
        self.lifecycle = lifecycle
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        catalog: ShowingCatalog = Provide[Container.showing_catalog],
        lifecycle: ReservationLifecycle = Provide[Container.reservation_lifecycle],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(catalog=catalog, lifecycle=lifecycle, uow=uow)

    @Logger.io
    def change_showing(
        self,
        reservation: Reservation,
        *,
        movie_title: str,
        showtime_label: str,
        picker: ISeatPicker,
    ) -> EditResult:
        self._expire_if_due(reservation)
        target, showtime = self.catalog.resolve(
            movie_title=movie_title, showtime_label=showtime_label
        )
        changed = self.lifecycle.change_showing(
            reservation, target=target, price=showtime.price, picker=picker
        )
        return self._result(reservation, changed)

    @Logger.io
    def change_showtime(
        self, reservation: Reservation, *, showtime_label: str, picker: ISeatPicker
    ) -> EditResult:
        """Same movie, different showtime"""
        return self.change_showing(
            reservation,
            movie_title=reservation.movie_title,
            showtime_label=showtime_label,
            picker=picker,
        )

    @Logger.io
    def change_seats(self, reservation: Reservation, *, picker: ISeatPicker) -> EditResult:
        self._expire_if_due(reservation)
        changed = self.lifecycle.change_seats(reservation, picker=picker)
        return self._result(reservation, changed)

    @Logger.io
    def change_quantity(
        self,
        reservation: Reservation,
        *,
        new_quantity: int,
        picker: Optional[ISeatPicker] = None,
        seats_to_release: Sequence[str] = (),
    ) -> EditResult:
        self._expire_if_due(reservation)
        changed = self.lifecycle.change_quantity(
            reservation,
            new_quantity=new_quantity,
            picker=picker,
            seats_to_release=seats_to_release,
        )
        return self._result(reservation, changed)

    @Logger.io
    def change_concessions(
        self, reservation: Reservation, *, items: Mapping[str, int]
    ) -> EditResult:
        self._expire_if_due(reservation)
        self.lifecycle.change_concessions(reservation, items=items)
        persisted = self.uow.commit(catalog=reservation.status == PaymentStatus.PAID)
        return EditResult(reservation=reservation, changed=True, persisted=persisted)

    def _expire_if_due(self, reservation: Reservation) -> None:
        if self.lifecycle.expire_if_due(reservation):
            self.uow.commit()

    def _result(self, reservation: Reservation, changed: bool) -> EditResult:
        persisted = self.uow.commit() if changed else True
        return EditResult(reservation=reservation, changed=changed, persisted=persisted)
