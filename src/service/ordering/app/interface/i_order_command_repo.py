from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.ordering.domain.entity.order_entity import Order


class IOrderCommandRepo(ABC):
    """Repository interface for order write operations (runs inside a unit of work)"""

    @abstractmethod
    async def create(self, *, order: Order) -> Order:
        """Persist order and all its items in the current transaction"""
        pass

    @abstractmethod
    async def get_for_update(self, *, order_id: UUID) -> Optional[Order]:
        """Load order with items and products, locking the order row"""
        pass

    @abstractmethod
    async def update_status(self, *, order: Order) -> Order:
        """Persist order.status and order.updated_at"""
        pass
