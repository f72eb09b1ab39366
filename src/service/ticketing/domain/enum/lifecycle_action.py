"""Lifecycle Action Enum"""

from enum import StrEnum


class LifecycleAction(StrEnum):
    PAY = 'pay'
    EXPIRE = 'expire'
    CANCEL = 'cancel'
    EDIT_SHOWING = 'edit_showing'
    EDIT_SEATS = 'edit_seats'
    EDIT_QUANTITY = 'edit_quantity'
    EDIT_CONCESSIONS = 'edit_concessions'
    ADMIN_SET_PAID = 'admin_set_paid'
    ADMIN_SET_PENDING = 'admin_set_pending'
    ADMIN_SET_EXPIRED = 'admin_set_expired'
    ADMIN_ADJUST = 'admin_adjust'
