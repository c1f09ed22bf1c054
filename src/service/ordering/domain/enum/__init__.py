"""Ordering Domain Enums"""

from src.service.ordering.domain.enum.order_status import OrderStatus

__all__ = ['OrderStatus']
