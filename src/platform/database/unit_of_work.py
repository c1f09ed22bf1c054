"""
Unit of Work - owns the database session and transaction boundary

- UoW manages the session lifecycle and commit/rollback
- Repositories share the UoW session, so every write in one use case
  lands in a single transaction
- Leaving the context without commit() rolls everything back
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.ordering.app.interface.i_order_command_repo import IOrderCommandRepo
    from src.service.ordering.app.interface.i_order_query_repo import IOrderQueryRepo
    from src.service.ordering.app.interface.i_product_stock_ledger import IProductStockLedger


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            product = await uow.product_stock_ledger.reserve_stock(...)
            await uow.order_command_repo.create(order=...)
            await uow.commit()
    """

    order_command_repo: IOrderCommandRepo
    order_query_repo: IOrderQueryRepo
    product_stock_ledger: IProductStockLedger

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        from src.service.ordering.driven_adapter.repo.order_command_repo_impl import (
            OrderCommandRepoImpl,
        )
        from src.service.ordering.driven_adapter.repo.order_query_repo_impl import (
            OrderQueryRepoImpl,
        )
        from src.service.ordering.driven_adapter.repo.product_stock_ledger_impl import (
            ProductStockLedgerImpl,
        )

        self.order_command_repo = OrderCommandRepoImpl(session=self.session)
        self.order_query_repo = OrderQueryRepoImpl()
        self.order_query_repo.session = self.session  # Inject session for UoW mode
        self.product_stock_ledger = ProductStockLedgerImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self):
        await self.session.commit()

    async def rollback(self) -> None:
        # Rolling back after a successful commit is a no-op
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency: one UoW per request, bound to the request session"""
    return SqlAlchemyUnitOfWork(session)
