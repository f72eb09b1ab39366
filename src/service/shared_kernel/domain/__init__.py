"""Shared Kernel Domain Layer"""

from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.shared_kernel.domain.value_object import SeatLabel, ShowingKey

__all__ = ['PaymentStatus', 'SeatLabel', 'ShowingKey']
