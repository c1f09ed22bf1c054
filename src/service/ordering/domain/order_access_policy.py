from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.domain.entity.user_entity import UserEntity


class OrderAccessPolicy:
    """Who may see, move or cancel an order. Pure functions of (order, caller)."""

    @staticmethod
    def is_seller(order: Order, caller: UserEntity) -> bool:
        return caller.id in order.seller_ids

    @staticmethod
    def can_access(order: Order, caller: UserEntity) -> bool:
        return (
            caller.is_admin
            or order.is_bought_by(caller.id)
            or OrderAccessPolicy.is_seller(order, caller)
        )

    @staticmethod
    def can_mutate_status(order: Order, caller: UserEntity) -> bool:
        return caller.is_admin or OrderAccessPolicy.is_seller(order, caller)

    @staticmethod
    def can_cancel(order: Order, caller: UserEntity) -> bool:
        return caller.is_admin or order.is_bought_by(caller.id)
