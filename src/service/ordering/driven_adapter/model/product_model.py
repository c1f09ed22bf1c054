from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.ordering.driven_adapter.model.user_model import UserModel


class ProductModel(Base):
    __tablename__ = 'product'
    __table_args__ = (CheckConstraint('stock >= 0', name='ck_product_stock_non_negative'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default='')
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    seller_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    seller: Mapped['UserModel'] = relationship('UserModel', lazy='raise')
