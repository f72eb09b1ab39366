"""
Mock Payment Gateway

Simulated payment methods for the console front-end. No money moves; each method just
decides approve/decline and issues a reference.

- Cash: approved when the tendered amount covers the total; change is reported
- GCash / PayMaya: approved when the customer confirmed and gave a wallet reference
- Card: always approved
- Pay Later: always declined, the reservation stays pending
"""

from datetime import datetime
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum import PaymentMethod
from src.service.ticketing.domain.value_object import PaymentOutcome
from src.service.ticketing.driven_adapter.payment.payment_reference_generator import (
    PaymentReferenceGenerator,
)


class MockPaymentGatewayImpl(IPaymentGateway):
    def __init__(
        self,
        *,
        method: PaymentMethod,
        reference_generator: PaymentReferenceGenerator,
        cash_tendered: Optional[float] = None,
        wallet_reference: str = '',
        wallet_confirmed: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        self.method = PaymentMethod(method)
        self.reference_generator = reference_generator
        self.cash_tendered = cash_tendered
        self.wallet_reference = wallet_reference.strip()
        self.wallet_confirmed = wallet_confirmed
        self.clock = clock

    @Logger.io
    def charge(self, *, reservation: Reservation, amount: float) -> PaymentOutcome:
        now = self.clock()
        amount = round(amount, 2)

        if self.method == PaymentMethod.CASH:
            return self._charge_cash(amount=amount, now=now)

        if self.method.is_wallet:
            if not (self.wallet_confirmed and self.wallet_reference):
                Logger.base.info(f'💳 [PAYMENT] {self.method} not confirmed for {reservation.code}')
                return PaymentOutcome.declined(method=self.method.value, timestamp=now)
            reference = self.reference_generator.ensure_unique(
                f'{self.method.upper()}-{self.wallet_reference.upper()}'
            )
            return PaymentOutcome(
                success=True,
                method=self.method.value,
                reference=reference,
                amount_paid=amount,
                timestamp=now,
            )

        if self.method == PaymentMethod.CARD:
            return PaymentOutcome(
                success=True,
                method=self.method.value,
                reference=self.reference_generator.generate('CARD'),
                amount_paid=amount,
                timestamp=now,
            )

        return PaymentOutcome.declined(method=self.method.value, timestamp=now)

    def _charge_cash(self, *, amount: float, now: datetime) -> PaymentOutcome:
        tendered = self.cash_tendered
        if tendered is None or tendered < amount:
            Logger.base.info(f'💵 [PAYMENT] Cash short: tendered {tendered}, due {amount:.2f}')
            return PaymentOutcome.declined(method=self.method.value, timestamp=now)

        return PaymentOutcome(
            success=True,
            method=self.method.value,
            reference=self.reference_generator.generate('CASH'),
            amount_paid=amount,
            timestamp=now,
            cash_tendered=tendered,
            change=round(tendered - amount, 2),
        )
