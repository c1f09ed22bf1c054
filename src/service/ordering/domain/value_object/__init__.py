"""Ordering Domain Value Objects"""

from src.service.ordering.domain.value_object.order_line import OrderLine
from src.service.ordering.domain.value_object.price_snapshot import PriceSnapshot

__all__ = ['OrderLine', 'PriceSnapshot']
