"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.payment_outcome import PaymentOutcome
from src.service.ticketing.domain.value_object.refund_notice import RefundNotice

__all__ = ['PaymentOutcome', 'RefundNotice']
