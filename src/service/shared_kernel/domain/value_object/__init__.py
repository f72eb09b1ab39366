"""Shared Kernel Value Objects"""

from src.service.shared_kernel.domain.value_object.seat_label import SeatLabel
from src.service.shared_kernel.domain.value_object.showing_key import ShowingKey

__all__ = ['SeatLabel', 'ShowingKey']
