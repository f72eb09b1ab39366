"""Payment Status Enum"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'
    EXPIRED = 'expired'
    CANCELLED = 'cancelled'
