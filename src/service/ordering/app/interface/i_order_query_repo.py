from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.ordering.domain.entity.order_entity import Order


class IOrderQueryRepo(ABC):
    """Repository interface for order read operations"""

    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        """Fully loaded order: buyer, items, product and product seller"""
        pass

    @abstractmethod
    async def list_orders(
        self,
        *,
        buyer_id: Optional[int] = None,
        seller_id: Optional[int] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Order]:
        """Newest first. seller_id matches orders with at least one item sold by that seller."""
        pass

    @abstractmethod
    async def count_orders(
        self, *, buyer_id: Optional[int] = None, seller_id: Optional[int] = None
    ) -> int:
        pass
