"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.inventory.app.command import manage_inventory_use_case
from src.service.ticketing.app.command import (
    admin_override_use_case,
    cancel_reservation_use_case,
    complete_payment_use_case,
    create_reservation_use_case,
    edit_reservation_use_case,
    restore_state_use_case,
)
from src.service.ticketing.app.query import (
    dashboard_summary_use_case,
    find_reservation_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    complete_payment_use_case,
    edit_reservation_use_case,
    cancel_reservation_use_case,
    admin_override_use_case,
    restore_state_use_case,
    find_reservation_use_case,
    dashboard_summary_use_case,
    manage_inventory_use_case,
]
