from typing import Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.restore_state_result import RestoreStateResult
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle
from src.service.ticketing.driven_adapter.payment.payment_reference_generator import (
    PaymentReferenceGenerator,
)


class RestoreStateUseCase:
    """
    Startup: load saved reservations, re-mark their seats, expire overdue ones.

    Only pending and paid reservations hold seats. The snapshot is written back only
    when the expiry sweep changed something.
    """

    def __init__(
        self,
        *,
        directory: ReservationDirectory,
        lifecycle: ReservationLifecycle,
        reference_generator: PaymentReferenceGenerator,
        uow: AbstractUnitOfWork,
    ) -> None:
        self.directory = directory
        self.lifecycle = lifecycle
        self.reference_generator = reference_generator
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        directory: ReservationDirectory = Provide[Container.reservation_directory],
        lifecycle: ReservationLifecycle = Provide[Container.reservation_lifecycle],
        reference_generator: PaymentReferenceGenerator = Provide[
            Container.payment_reference_generator
        ],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(
            directory=directory,
            lifecycle=lifecycle,
            reference_generator=reference_generator,
            uow=uow,
        )

    @Logger.io
    def execute(self) -> RestoreStateResult:
        reservations = self.directory.load_all()
        for reservation in reservations:
            self.reference_generator.remember(reservation.payment_reference)

        rehydrated = self.lifecycle.rehydrate(reservations)
        swept = self.directory.sweep_expired()
        persisted = self.uow.commit() if swept else True

        Logger.base.info(
            f'🚀 [STARTUP] {len(reservations)} reservation(s) loaded, '
            f'{rehydrated} holding seats, sweep changed={swept}'
        )
        return RestoreStateResult(
            loaded=len(reservations), rehydrated=rehydrated, swept=swept, persisted=persisted
        )
