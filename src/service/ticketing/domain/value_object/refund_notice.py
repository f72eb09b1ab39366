import attrs


@attrs.define(frozen=True)
class RefundNotice:
    """Emitted when a paid reservation is cancelled; the refund itself is handled manually"""

    reservation_code: str
    amount: float
    method: str
    reference: str
