from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.ordering.app.dto.pagination import Page
from src.service.ordering.domain.entity.order_entity import Order, OrderItem
from src.service.ordering.domain.entity.product_entity import Product
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.enum.order_status import OrderStatus


class OrderItemCreateRequest(BaseModel):
    product_id: int
    quantity: int = Field(ge=1)


class OrderCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'items': [
                    {'product_id': 1, 'quantity': 2},
                    {'product_id': 3, 'quantity': 1},
                ]
            }
        },
    }

    items: List[OrderItemCreateRequest] = Field(min_length=1)


class OrderStatusUpdateRequest(BaseModel):
    model_config = {'json_schema_extra': {'example': {'status': 'accepted'}}}

    status: OrderStatus


class UserSummary(BaseModel):
    id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_entity(cls, user: Optional[UserEntity]) -> Optional['UserSummary']:
        if user is None:
            return None
        return cls(id=user.id, email=user.email, name=user.name, role=user.role.value)


class ProductSummary(BaseModel):
    id: int
    name: str
    price: Decimal
    stock: int
    seller: Optional[UserSummary] = None

    @classmethod
    def from_entity(cls, product: Optional[Product]) -> Optional['ProductSummary']:
        if product is None:
            return None
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            seller=UserSummary.from_entity(product.seller),
        )


class OrderItemResponse(BaseModel):
    id: UUID
    quantity: int
    price: Decimal
    product: Optional[ProductSummary] = None

    @classmethod
    def from_entity(cls, item: OrderItem) -> 'OrderItemResponse':
        return cls(
            id=item.id,
            quantity=item.quantity,
            price=item.price,
            product=ProductSummary.from_entity(item.product),
        )


class OrderResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'status': 'pending',
                'total': '21.98',
                'created_at': '2025-01-10T10:30:00Z',
                'updated_at': '2025-01-10T10:30:00Z',
                'buyer': {'id': 2, 'email': 'b@example.com', 'name': 'Bob', 'role': 'user'},
                'items': [
                    {
                        'id': '01936d8f-5e74-7000-8000-000000000001',
                        'quantity': 2,
                        'price': '10.99',
                        'product': {
                            'id': 1,
                            'name': 'Widget',
                            'price': '10.99',
                            'stock': 8,
                            'seller': {
                                'id': 1,
                                'email': 's@example.com',
                                'name': 'Sam',
                                'role': 'user',
                            },
                        },
                    }
                ],
            }
        },
    }

    id: UUID
    status: OrderStatus
    total: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    buyer: Optional[UserSummary] = None
    items: List[OrderItemResponse] = []

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id,
            status=order.status,
            total=order.total,
            created_at=order.created_at,
            updated_at=order.updated_at,
            buyer=UserSummary.from_entity(order.buyer),
            items=[OrderItemResponse.from_entity(item) for item in order.items],
        )


class PaginationMetaResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class PaginatedOrderResponse(BaseModel):
    data: List[OrderResponse]
    meta: PaginationMetaResponse

    @classmethod
    def from_page(cls, page: Page[Order]) -> 'PaginatedOrderResponse':
        return cls(
            data=[OrderResponse.from_entity(order) for order in page.data],
            meta=PaginationMetaResponse(
                page=page.meta.page,
                limit=page.meta.limit,
                total=page.meta.total,
                total_pages=page.meta.total_pages,
                has_next_page=page.meta.has_next_page,
                has_previous_page=page.meta.has_previous_page,
            ),
        )
