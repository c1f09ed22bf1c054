from typing import Dict, Self, Sequence

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.error_boundary import guard_internal_errors
from src.platform.exception.exceptions import (
    CustomBaseError,
    InsufficientStockError,
    InvalidArgumentError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.order_metrics import metrics
from src.service.ordering.domain.entity.order_entity import Order, OrderItem
from src.service.ordering.domain.value_object.order_line import OrderLine
from src.service.ordering.domain.value_object.price_snapshot import PriceSnapshot


class CreateOrderUseCase:
    """
    Create an order and deduct stock in one transaction

    Flow (per requested line, in ascending product id so row locks never cycle):
    1. Lock and load the product            -> NotFoundError
    2. Check stock covers the quantity      -> InsufficientStockError
    3. Reject buying your own product       -> InvalidArgumentError
    4. Deduct stock, snapshot the unit price
    Then persist order + items and commit. Any failure rolls back every
    stock deduction made so far.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    @guard_internal_errors
    async def create_order(self, *, buyer_id: int, items: Sequence[OrderLine]) -> Order:
        with self.tracer.start_as_current_span(
            'use_case.create_order',
            attributes={'buyer.id': buyer_id, 'order.requested_lines': len(items)},
        ) as span:
            try:
                order = await self._create_order(buyer_id=buyer_id, items=items)
            except CustomBaseError as e:
                metrics.record_creation_rejected(reason=type(e).__name__)
                raise

            span.set_attribute('order.id', str(order.id))
            metrics.record_order_created(item_count=len(order.items), total=float(order.total))
            Logger.base.info(
                f'🛒 [CREATE] Order {order.id} created for buyer {buyer_id}, total {order.total}'
            )
            return order

    async def _create_order(self, *, buyer_id: int, items: Sequence[OrderLine]) -> Order:
        if not items:
            raise InvalidArgumentError('Order must contain at least one item')

        lines = OrderLine.merge(items)
        async with self.uow:
            # Lock rows in ascending product id; items keep request order
            snapshots: Dict[int, PriceSnapshot] = {}
            for line in sorted(lines, key=lambda line: line.product_id):
                product = await self.uow.product_stock_ledger.get_for_update(
                    product_id=line.product_id
                )
                if product is None:
                    raise NotFoundError(f'Product with id {line.product_id} not found')
                if not product.has_stock_for(line.quantity):
                    raise InsufficientStockError(
                        product_name=product.name,
                        available=product.stock,
                        requested=line.quantity,
                    )
                if product.is_sold_by(buyer_id):
                    raise InvalidArgumentError(
                        f'You cannot purchase your own product: "{product.name}"'
                    )

                product = await self.uow.product_stock_ledger.reserve_stock(
                    product_id=line.product_id, quantity=line.quantity
                )
                snapshots[line.product_id] = PriceSnapshot.from_product(product)

            order = Order.create(
                buyer_id=buyer_id,
                items=[
                    OrderItem.create(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price_snapshot=snapshots[line.product_id],
                    )
                    for line in lines
                ],
            )
            await self.uow.order_command_repo.create(order=order)
            await self.uow.commit()

            created = await self.uow.order_query_repo.get_by_id(order_id=order.id)
            if created is None:
                raise RuntimeError(f'Order {order.id} missing right after commit')
            return created
