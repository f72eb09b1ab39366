from typing import Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.dto.reservation_result import PaymentResult
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum import LifecycleAction
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle


class CompletePaymentUseCase:
    def __init__(self, *, lifecycle: ReservationLifecycle, uow: AbstractUnitOfWork) -> None:
        self.lifecycle = lifecycle
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        lifecycle: ReservationLifecycle = Provide[Container.reservation_lifecycle],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(lifecycle=lifecycle, uow=uow)

    @Logger.io
    def execute(self, *, reservation: Reservation, gateway: IPaymentGateway) -> PaymentResult:
        """
        Charge the grand total through `gateway`.

        A reservation past its deadline is expired instead of charged, and one the lookup
        already expired is reported the same way. A declined charge leaves it pending with
        its deadline unchanged.

        Raises:
            InvalidTransitionError: Reservation is already paid or cancelled
        """
        just_expired = self.lifecycle.expire_if_due(reservation)
        if reservation.status == PaymentStatus.EXPIRED:
            persisted = self.uow.commit() if just_expired else True
            Logger.base.info(f'⌛ [PAYMENT] {reservation.code} expired before payment')
            return PaymentResult(
                reservation=reservation, outcome=None, expired=True, persisted=persisted
            )

        self.lifecycle.ensure_allowed(reservation, LifecycleAction.PAY)
        outcome = gateway.charge(reservation=reservation, amount=reservation.grand_total)
        paid = self.lifecycle.pay(reservation, outcome)

        persisted = self.uow.commit(catalog=reservation.has_concessions) if paid else True
        return PaymentResult(
            reservation=reservation, outcome=outcome, expired=False, persisted=persisted
        )
