"""
Admin Override Use Case

Staff-side changes to any reservation by code alone (no passkey). Every action
writes an audit line tagged [ADMIN] through the logger.
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import ExtraField
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.dto.reservation_result import AdminOverrideResult, CancelResult
from src.service.ticketing.app.reservation_directory import ReservationDirectory
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum import LifecycleAction
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle
from src.service.ticketing.domain.value_object import RefundNotice
from src.service.ticketing.driven_adapter.payment.payment_reference_generator import (
    PaymentReferenceGenerator,
)


class AdminOverrideUseCase:
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
    def set_status(
        self, *, code: str, status: PaymentStatus, method: str = ''
    ) -> AdminOverrideResult:
        """
        Raises:
            NotFoundError: Unknown reservation code
            InvalidTransitionError: Status change not allowed from the current status
            SeatUnavailableError: Reviving an expired reservation whose seat was taken
        """
        reservation = self._require(code)
        previous = reservation.status
        refund: Optional[RefundNotice] = None

        if status == PaymentStatus.PAID:
            self.lifecycle.admin_set_paid(
                reservation, reference_factory=self.reference_generator.generate, method=method
            )
        elif status == PaymentStatus.PENDING:
            self.lifecycle.admin_set_pending(reservation)
        elif status == PaymentStatus.EXPIRED:
            refund = self.lifecycle.admin_set_expired(reservation)
        else:
            raise DomainError(f'Use cancel to remove a reservation, not status {status}')

        stock_moved = PaymentStatus.PAID in (previous, status) and reservation.has_concessions
        persisted = self.uow.commit(catalog=stock_moved)
        self._audit(reservation, f'status {previous} -> {status}')
        return AdminOverrideResult(reservation=reservation, refund=refund, persisted=persisted)

    @Logger.io
    def set_paid(self, *, code: str, method: str = '') -> AdminOverrideResult:
        return self.set_status(code=code, status=PaymentStatus.PAID, method=method)

    @Logger.io
    def set_pending(self, *, code: str) -> AdminOverrideResult:
        return self.set_status(code=code, status=PaymentStatus.PENDING)

    @Logger.io
    def set_expired(self, *, code: str) -> AdminOverrideResult:
        return self.set_status(code=code, status=PaymentStatus.EXPIRED)

    @Logger.io
    def apply_discount(self, *, code: str, amount: float) -> AdminOverrideResult:
        reservation = self._require(code)
        applied = self.lifecycle.apply_discount(reservation, amount=amount)
        persisted = self.uow.commit()
        self._audit(reservation, f'discount {applied:.2f} (requested {amount:.2f})')
        return AdminOverrideResult(reservation=reservation, refund=None, persisted=persisted)

    @Logger.io
    def update_notes(self, *, code: str, note: str) -> AdminOverrideResult:
        reservation = self._require(code)
        self.lifecycle.update_note(reservation, note=note)
        persisted = self.uow.commit()
        self._audit(reservation, 'note cleared' if not reservation.admin_note else 'note updated')
        return AdminOverrideResult(reservation=reservation, refund=None, persisted=persisted)

    @Logger.io
    def cancel(self, *, code: str, confirmed: bool) -> CancelResult:
        reservation = self._require(code)
        self.lifecycle.ensure_allowed(reservation, LifecycleAction.CANCEL)
        if not confirmed:
            return CancelResult(
                reservation=reservation, cancelled=False, refund=None, persisted=True
            )

        had_concessions = reservation.has_concessions
        refund = self.lifecycle.cancel(reservation)
        self.directory.remove(reservation)
        persisted = self.uow.commit(catalog=refund is not None and had_concessions)
        self._audit(reservation, 'cancelled')
        return CancelResult(
            reservation=reservation, cancelled=True, refund=refund, persisted=persisted
        )

    def _require(self, code: str) -> Reservation:
        reservation = self.directory.find_by_id(code)
        if reservation is None:
            raise NotFoundError(f'Reservation not found: {code}')
        return reservation

    @staticmethod
    def _audit(reservation: Reservation, action: str) -> None:
        Logger.base.bind(**{ExtraField.AUDIT: True}).info(
            f'🛡️ [ADMIN] {reservation.code}: {action}'
        )
