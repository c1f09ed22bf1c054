"""
Order status lifecycle

    pending ──> accepted ──> delivered
       │           │
       └───────────┴──────> canceled

delivered and canceled are terminal.
"""

from types import MappingProxyType
from typing import Mapping

from src.platform.exception.exceptions import InvalidTransitionError
from src.service.ordering.domain.enum.order_status import OrderStatus


ORDER_STATUS_TRANSITIONS: Mapping[OrderStatus, tuple[OrderStatus, ...]] = MappingProxyType(
    {
        OrderStatus.PENDING: (OrderStatus.ACCEPTED, OrderStatus.CANCELED),
        OrderStatus.ACCEPTED: (OrderStatus.DELIVERED, OrderStatus.CANCELED),
        OrderStatus.DELIVERED: (),
        OrderStatus.CANCELED: (),
    }
)


def allowed_transitions(status: OrderStatus) -> tuple[OrderStatus, ...]:
    return ORDER_STATUS_TRANSITIONS[OrderStatus(status)]


def is_terminal(status: OrderStatus) -> bool:
    return not allowed_transitions(status)


def validate_transition(current: OrderStatus, requested: OrderStatus) -> None:
    allowed = allowed_transitions(current)
    if requested not in allowed:
        raise InvalidTransitionError(
            current=OrderStatus(current).value,
            requested=str(requested),
            allowed=[status.value for status in allowed],
        )
