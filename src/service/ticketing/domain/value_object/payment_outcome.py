from datetime import datetime
from typing import Optional

import attrs


@attrs.define(frozen=True)
class PaymentOutcome:
    """Result of one charge attempt - a decline is an outcome, not an error"""

    success: bool
    method: str
    reference: str = ''
    amount_paid: float = 0.0
    timestamp: Optional[datetime] = None
    cash_tendered: Optional[float] = None
    change: Optional[float] = None

    @classmethod
    def declined(cls, *, method: str, timestamp: Optional[datetime] = None) -> 'PaymentOutcome':
        return cls(success=False, method=method, timestamp=timestamp)
