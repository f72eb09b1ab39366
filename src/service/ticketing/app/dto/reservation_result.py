from typing import Optional

import attrs

from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.value_object import PaymentOutcome, RefundNotice


@attrs.define(frozen=True)
class CreateReservationResult:
    reservation: Reservation
    persisted: bool


@attrs.define(frozen=True)
class PaymentResult:
    reservation: Reservation
    outcome: Optional[PaymentOutcome]
    # Deadline had already passed when payment was attempted
    expired: bool
    persisted: bool

    @property
    def paid(self) -> bool:
        return self.outcome is not None and self.outcome.success and not self.expired


@attrs.define(frozen=True)
class EditResult:
    reservation: Reservation
    changed: bool
    persisted: bool


@attrs.define(frozen=True)
class CancelResult:
    reservation: Reservation
    cancelled: bool
    refund: Optional[RefundNotice]
    persisted: bool


@attrs.define(frozen=True)
class AdminOverrideResult:
    reservation: Reservation
    refund: Optional[RefundNotice]
    persisted: bool
