from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.driven_adapter.model.order_model import OrderItemModel, OrderModel
from src.service.ordering.driven_adapter.model.product_model import ProductModel
from src.service.ordering.driven_adapter.repo.entity_mapper import (
    full_order_load_options,
    to_order_entity,
)


class OrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _apply_filters(
        stmt: Select, *, buyer_id: Optional[int], seller_id: Optional[int]
    ) -> Select:
        if buyer_id is not None:
            stmt = stmt.where(OrderModel.buyer_id == buyer_id)
        if seller_id is not None:
            stmt = stmt.where(
                OrderModel.items.any(
                    OrderItemModel.product.has(ProductModel.seller_id == seller_id)
                )
            )
        return stmt

    @Logger.io
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        async with self._get_session() as session:
            result = await session.execute(
                select(OrderModel)
                .options(*full_order_load_options())
                .where(OrderModel.id == order_id)
                .execution_options(populate_existing=True)
            )
            db_order = result.scalar_one_or_none()

            if not db_order:
                return None

            return to_order_entity(db_order)

    @Logger.io
    async def list_orders(
        self,
        *,
        buyer_id: Optional[int] = None,
        seller_id: Optional[int] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Order]:
        stmt = self._apply_filters(
            select(OrderModel)
            .options(*full_order_load_options())
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .execution_options(populate_existing=True),
            buyer_id=buyer_id,
            seller_id=seller_id,
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [to_order_entity(db_order) for db_order in result.scalars().all()]

    @Logger.io
    async def count_orders(
        self, *, buyer_id: Optional[int] = None, seller_id: Optional[int] = None
    ) -> int:
        stmt = self._apply_filters(
            select(func.count()).select_from(OrderModel),
            buyer_id=buyer_id,
            seller_id=seller_id,
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()
