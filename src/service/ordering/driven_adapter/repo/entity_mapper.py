"""ORM row -> domain entity conversion shared by the order repositories"""

from typing import Optional

from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from src.service.ordering.domain.entity.order_entity import Order, OrderItem
from src.service.ordering.domain.entity.product_entity import Product
from src.service.ordering.domain.entity.user_entity import UserEntity, UserRole
from src.service.ordering.domain.enum.order_status import OrderStatus
from src.service.ordering.driven_adapter.model.order_model import OrderItemModel, OrderModel
from src.service.ordering.driven_adapter.model.product_model import ProductModel
from src.service.ordering.driven_adapter.model.user_model import UserModel


def full_order_load_options() -> tuple[LoaderOption, ...]:
    """buyer + items -> product -> seller, loaded explicitly in batched SELECTs"""
    return (
        selectinload(OrderModel.buyer),
        selectinload(OrderModel.items)
        .selectinload(OrderItemModel.product)
        .selectinload(ProductModel.seller),
    )


def to_user_entity(db_user: Optional[UserModel]) -> Optional[UserEntity]:
    if db_user is None:
        return None
    return UserEntity(
        id=db_user.id,
        role=UserRole(db_user.role),
        email=db_user.email,
        name=db_user.name,
    )


def to_product_entity(db_product: ProductModel, *, with_seller: bool = True) -> Product:
    return Product(
        id=db_product.id,
        name=db_product.name,
        description=db_product.description,
        price=db_product.price,
        stock=db_product.stock,
        seller_id=db_product.seller_id,
        seller=to_user_entity(db_product.seller) if with_seller else None,
    )


def to_order_entity(db_order: OrderModel, *, with_buyer: bool = True) -> Order:
    return Order(
        id=db_order.id,
        buyer_id=db_order.buyer_id,
        total=db_order.total,
        status=OrderStatus(db_order.status),
        items=[
            OrderItem(
                id=db_item.id,
                product_id=db_item.product_id,
                quantity=db_item.quantity,
                price=db_item.price,
                product=to_product_entity(db_item.product),
            )
            for db_item in db_order.items
        ],
        buyer=to_user_entity(db_order.buyer) if with_buyer else None,
        created_at=db_order.created_at,
        updated_at=db_order.updated_at,
    )
