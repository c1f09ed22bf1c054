from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import InvalidArgumentError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.ordering.domain.entity.product_entity import Product
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.enum.order_status import OrderStatus
from src.service.ordering.domain.order_status_state_machine import validate_transition
from src.service.ordering.domain.value_object.price_snapshot import PriceSnapshot, to_money


@attrs.define
class OrderItem:
    id: UUID
    product_id: int
    quantity: int
    price: Decimal  # unit price captured at purchase
    product: Optional[Product] = None

    @classmethod
    def create(
        cls, *, product_id: int, quantity: int, price_snapshot: PriceSnapshot
    ) -> 'OrderItem':
        if quantity < 1:
            raise InvalidArgumentError(f'Quantity for product {product_id} must be at least 1')
        return cls(
            id=uuid7(),
            product_id=product_id,
            quantity=quantity,
            price=price_snapshot.unit_price,
        )

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price * self.quantity)


@attrs.define
class Order:
    id: UUID
    buyer_id: int
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    items: List[OrderItem] = attrs.field(factory=list)
    buyer: Optional[UserEntity] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, buyer_id: int, items: List[OrderItem]) -> 'Order':
        if not items:
            raise InvalidArgumentError('Order must contain at least one item')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            buyer_id=buyer_id,
            total=to_money(sum((item.line_total for item in items), Decimal('0'))),
            status=OrderStatus.PENDING,
            items=list(items),
            created_at=now,
            updated_at=now,
        )

    @property
    def seller_ids(self) -> set[int]:
        return {item.product.seller_id for item in self.items if item.product is not None}

    def is_bought_by(self, user_id: int) -> bool:
        return self.buyer_id == user_id

    @Logger.io
    def transition_to(self, new_status: OrderStatus) -> 'Order':
        """
        Move to new_status along the lifecycle table

        Raises:
            InvalidTransitionError: When new_status is not reachable from the current status
        """
        validate_transition(self.status, new_status)
        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=OrderStatus(new_status), updated_at=now)

    @Logger.io
    def cancel(self) -> 'Order':
        """
        Buyer-side cancellation; stock restoration is the caller's job

        Raises:
            InvalidStateError: When the order is no longer pending
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f'Cannot cancel order with status "{self.status.value}". '
                'Only pending orders can be canceled'
            )
        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=OrderStatus.CANCELED, updated_at=now)
