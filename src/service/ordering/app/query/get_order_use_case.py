from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.error_boundary import guard_internal_errors
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.order_access_policy import OrderAccessPolicy


class GetOrderUseCase:
    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    @guard_internal_errors
    async def get_order(self, *, order_id: UUID, caller: UserEntity) -> Order:
        order = await self.order_query_repo.get_by_id(order_id=order_id)

        if not order:
            raise NotFoundError(f'Order with id {order_id} not found')

        if not OrderAccessPolicy.can_access(order, caller):
            raise ForbiddenError('You do not have permission to access this order')

        return order
