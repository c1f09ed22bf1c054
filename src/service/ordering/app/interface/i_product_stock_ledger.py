from abc import ABC, abstractmethod
from typing import Optional

from src.service.ordering.domain.entity.product_entity import Product


class IProductStockLedger(ABC):
    """
    Stock access inside the caller's transaction.

    Every method locks the product row and only flushes; the unit of work
    decides whether the change is committed.
    """

    @abstractmethod
    async def get_for_update(self, *, product_id: int) -> Optional[Product]:
        """Load product (with seller) and lock its row"""
        pass

    @abstractmethod
    async def reserve_stock(self, *, product_id: int, quantity: int) -> Product:
        """
        Raises:
            NotFoundError: Product does not exist
            InsufficientStockError: stock < quantity
        """
        pass

    @abstractmethod
    async def restore_stock(self, *, product_id: int, quantity: int) -> Product:
        """Inverse of reserve_stock; a missing product is an infrastructure failure"""
        pass
