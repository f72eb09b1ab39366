"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.payment_status import PaymentStatus

__all__ = ['PaymentStatus']
