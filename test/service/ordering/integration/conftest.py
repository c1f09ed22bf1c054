"""
Seed data for integration tests

Users and products are owned by other services; here they are inserted
directly so orders have something to reference.

    user 1  seller of Widget (id 10, 10.99, stock 10)
    user 3  seller of Gadget (id 11, 5.00, stock 3), also buys
    user 2  buyer
    user 99 admin
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.service.ordering.driven_adapter.model import ProductModel, UserModel
from test.service.ordering.builders import (
    ADMIN_ID,
    BUYER_ID,
    GADGET_ID,
    OTHER_BUYER_ID,
    SELLER_ID,
    WIDGET_ID,
)


@pytest.fixture
async def seeded(session_maker: async_sessionmaker[AsyncSession]) -> None:
    async with session_maker() as session:
        session.add_all(
            [
                UserModel(id=SELLER_ID, email='seller@example.com', name='Sam', role='user'),
                UserModel(id=BUYER_ID, email='buyer@example.com', name='Bob', role='user'),
                UserModel(
                    id=OTHER_BUYER_ID, email='other@example.com', name='Olive', role='user'
                ),
                UserModel(id=ADMIN_ID, email='admin@example.com', name='Ada', role='admin'),
            ]
        )
        await session.flush()
        session.add_all(
            [
                ProductModel(
                    id=WIDGET_ID,
                    name='Widget',
                    price=Decimal('10.99'),
                    stock=10,
                    seller_id=SELLER_ID,
                ),
                ProductModel(
                    id=GADGET_ID,
                    name='Gadget',
                    price=Decimal('5.00'),
                    stock=3,
                    seller_id=OTHER_BUYER_ID,
                ),
            ]
        )
        await session.commit()


@pytest.fixture
def stock_of(session_maker: async_sessionmaker[AsyncSession]):
    async def _stock_of(product_id: int) -> int:
        async with session_maker() as session:
            product = await session.get(ProductModel, product_id)
            assert product is not None
            return product.stock

    return _stock_of


@pytest.fixture
def set_price(session_maker: async_sessionmaker[AsyncSession]):
    async def _set_price(product_id: int, price: str) -> None:
        async with session_maker() as session:
            product = await session.get(ProductModel, product_id)
            assert product is not None
            product.price = Decimal(price)
            await session.commit()

    return _set_price
