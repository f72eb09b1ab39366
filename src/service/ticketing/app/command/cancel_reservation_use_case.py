from typing import Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.reservation_result import CancelResult
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum import LifecycleAction
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle


class CancelReservationUseCase:
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
    def execute(self, *, reservation: Reservation, confirmed: bool) -> CancelResult:
        """
        Cancel and drop the reservation. Nothing happens unless `confirmed` is set.

        Raises:
            InvalidTransitionError: Reservation is expired or already cancelled
        """
        if self.lifecycle.expire_if_due(reservation):
            self.uow.commit()
        self.lifecycle.ensure_allowed(reservation, LifecycleAction.CANCEL)

        if not confirmed:
            Logger.base.info(f'🚫 [CANCEL] {reservation.code} cancellation not confirmed')
            return CancelResult(
                reservation=reservation, cancelled=False, refund=None, persisted=True
            )

        had_concessions = reservation.has_concessions
        refund = self.lifecycle.cancel(reservation)
        self.directory.remove(reservation)

        persisted = self.uow.commit(catalog=refund is not None and had_concessions)
        if refund is not None:
            Logger.base.info(
                f'💸 [CANCEL] Refund {refund.amount:.2f} due for {refund.reservation_code} '
                f'({refund.method} {refund.reference})'
            )
        return CancelResult(
            reservation=reservation, cancelled=True, refund=refund, persisted=persisted
        )
