from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.driven_adapter.model.order_model import OrderItemModel, OrderModel
from src.service.ordering.driven_adapter.repo.entity_mapper import (
    full_order_load_options,
    to_order_entity,
)


class OrderCommandRepoImpl(IOrderCommandRepo):
    """Order writes on the unit of work session; never commits on its own"""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, order: Order) -> Order:
        db_order = OrderModel(
            id=order.id,
            buyer_id=order.buyer_id,
            status=order.status.value,
            total=order.total,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemModel(
                    id=item.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
        )
        self.session.add(db_order)
        await self.session.flush()
        return order

    @Logger.io
    async def get_for_update(self, *, order_id: UUID) -> Optional[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .options(*full_order_load_options())
            .where(OrderModel.id == order_id)
            .with_for_update(of=OrderModel)
            .execution_options(populate_existing=True)
        )
        db_order = result.scalar_one_or_none()
        return to_order_entity(db_order) if db_order else None

    @Logger.io
    async def update_status(self, *, order: Order) -> Order:
        await self.session.execute(
            update(OrderModel)
            .where(OrderModel.id == order.id)
            .values(status=order.status.value, updated_at=order.updated_at)
        )
        await self.session.flush()
        return order
