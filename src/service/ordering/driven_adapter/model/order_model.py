from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.ordering.driven_adapter.model.product_model import ProductModel
    from src.service.ordering.driven_adapter.model.user_model import UserModel


class OrderModel(Base):
    __tablename__ = 'orders'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    buyer_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False, index=True)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    buyer: Mapped['UserModel'] = relationship('UserModel', lazy='raise')
    items: Mapped[List['OrderItemModel']] = relationship(
        'OrderItemModel',
        back_populates='order',
        cascade='all, delete-orphan',
        passive_deletes=True,
        order_by='OrderItemModel.id',
        lazy='raise',
    )


class OrderItemModel(Base):
    __tablename__ = 'order_item'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(ForeignKey('product.id'), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)  # unit price snapshot

    order: Mapped['OrderModel'] = relationship('OrderModel', back_populates='items', lazy='raise')
    product: Mapped['ProductModel'] = relationship('ProductModel', lazy='raise')
