"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ordering.app.query import get_order_use_case, list_orders_use_case
from src.service.ordering.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    get_order_use_case,
    list_orders_use_case,
    role_auth,
]
