from decimal import Decimal
from typing import Optional

import attrs

from src.service.ordering.domain.entity.user_entity import UserEntity


@attrs.define
class Product:
    id: int
    name: str
    price: Decimal
    stock: int
    seller_id: int
    description: str = ''
    seller: Optional[UserEntity] = None

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def is_sold_by(self, user_id: int) -> bool:
        return self.seller_id == user_id
