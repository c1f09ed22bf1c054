"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ordering.driven_adapter.model.order_model import OrderItemModel, OrderModel
from src.service.ordering.driven_adapter.model.product_model import ProductModel
from src.service.ordering.driven_adapter.model.user_model import UserModel

__all__ = [
    'OrderItemModel',
    'OrderModel',
    'ProductModel',
    'UserModel',
]
