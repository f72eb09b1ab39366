"""Payment Method Enum"""

from enum import StrEnum


class PaymentMethod(StrEnum):
    CASH = 'Cash'
    GCASH = 'GCash'
    PAYMAYA = 'PayMaya'
    CARD = 'Card'
    PAY_LATER = 'Pay Later'

    @property
    def is_wallet(self) -> bool:
        return self in (PaymentMethod.GCASH, PaymentMethod.PAYMAYA)
