from typing import List, Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import AuthorizationFailedError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle


class FindReservationUseCase:
    """
    Reservation lookups. A pending reservation found past its deadline is expired on
    the spot (and saved) before it is returned.
    """

    def __init__(
        self,
        *,
        directory: ReservationDirectory,
        lifecycle: ReservationLifecycle,
        uow: AbstractUnitOfWork,
    ) -> None:
        self.directory = directory
        self.lifecycle = lifecycle
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        directory: ReservationDirectory = Provide[Container.reservation_directory],
        lifecycle: ReservationLifecycle = Provide[Container.reservation_lifecycle],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(directory=directory, lifecycle=lifecycle, uow=uow)

    @Logger.io
    def by_code_and_passkey(
        self, *, code: str, passkey: str, pending_only: bool = False
    ) -> Reservation:
        """
        Raises:
            AuthorizationFailedError: Unknown code, wrong passkey, or not pending when
                `pending_only` is set
        """
        reservation = self.directory.find_by_id_and_passkey(code, passkey)
        if reservation is None:
            raise AuthorizationFailedError()
        if pending_only and reservation.status != PaymentStatus.PENDING:
            raise AuthorizationFailedError('Pending reservation not found or passkey incorrect')

        self._expire_if_due(reservation)
        return reservation

    @Logger.io
    def by_code(self, *, code: str) -> Reservation:
        reservation = self.directory.find_by_id(code)
        if reservation is None:
            raise NotFoundError(f'Reservation not found: {code}')
        return reservation

    def list_pending(self) -> List[Reservation]:
        """Pending reservations still inside their payment window"""
        if self.directory.sweep_expired():
            self.uow.commit()
        return self.directory.pending()

    def list_all(self) -> List[Reservation]:
        return self.directory.all()

    def _expire_if_due(self, reservation: Reservation) -> None:
        if self.lifecycle.expire_if_due(reservation):
            self.uow.commit()
