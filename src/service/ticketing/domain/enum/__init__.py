"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.lifecycle_action import LifecycleAction
from src.service.ticketing.domain.enum.payment_method import PaymentMethod

__all__ = ['LifecycleAction', 'PaymentMethod']
