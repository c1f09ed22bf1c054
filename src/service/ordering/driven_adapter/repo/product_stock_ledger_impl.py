from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.platform.exception.exceptions import InsufficientStockError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.interface.i_product_stock_ledger import IProductStockLedger
from src.service.ordering.domain.entity.product_entity import Product
from src.service.ordering.driven_adapter.model.product_model import ProductModel
from src.service.ordering.driven_adapter.repo.entity_mapper import to_product_entity


class ProductStockLedgerImpl(IProductStockLedger):
    """
    Stock mutations on the unit of work session.

    Reads take SELECT ... FOR UPDATE (PostgreSQL row lock). The deduction
    itself is a single conditional UPDATE (stock >= quantity in the WHERE
    clause), so the check and the write stay atomic on dialects without
    row locks too: a concurrent writer that got there first leaves
    rowcount 0 instead of a lost update.
    """

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    async def _lock(self, product_id: int) -> Optional[ProductModel]:
        result = await self.session.execute(
            select(ProductModel)
            .options(selectinload(ProductModel.seller))
            .where(ProductModel.id == product_id)
            .with_for_update(of=ProductModel)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _adjust(self, *, product_id: int, delta: int, floor: int | None = None) -> bool:
        stmt = (
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + delta)
            .execution_options(synchronize_session=False)
        )
        if floor is not None:
            stmt = stmt.where(ProductModel.stock >= floor)
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    @Logger.io
    async def get_for_update(self, *, product_id: int) -> Optional[Product]:
        db_product = await self._lock(product_id)
        return to_product_entity(db_product) if db_product else None

    @Logger.io
    async def reserve_stock(self, *, product_id: int, quantity: int) -> Product:
        reserved = await self._adjust(product_id=product_id, delta=-quantity, floor=quantity)
        db_product = await self._lock(product_id)
        if db_product is None:
            raise NotFoundError(f'Product with id {product_id} not found')
        if not reserved:
            raise InsufficientStockError(
                product_name=db_product.name,
                available=db_product.stock,
                requested=quantity,
            )
        return to_product_entity(db_product)

    @Logger.io
    async def restore_stock(self, *, product_id: int, quantity: int) -> Product:
        restored = await self._adjust(product_id=product_id, delta=quantity)
        db_product = await self._lock(product_id)
        if not restored or db_product is None:
            # Items reference products by FK; a vanished row means broken storage
            raise LookupError(f'Product {product_id} vanished while restoring stock')
        return to_product_entity(db_product)
