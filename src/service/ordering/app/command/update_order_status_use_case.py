from typing import Self
from uuid import UUID

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.error_boundary import guard_internal_errors
from src.platform.exception.exceptions import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.order_metrics import metrics
from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.enum.order_status import OrderStatus
from src.service.ordering.domain.order_access_policy import OrderAccessPolicy


class UpdateOrderStatusUseCase:
    """
    Seller/admin moves an order along its lifecycle.

    Stock is never touched here; only the buyer-side cancel restores stock.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    @guard_internal_errors
    async def update_status(
        self, *, order_id: UUID, new_status: OrderStatus | str, caller: UserEntity
    ) -> Order:
        try:
            requested = OrderStatus(new_status)
        except ValueError:
            raise InvalidArgumentError(f'Invalid order status: "{new_status}"') from None

        with self.tracer.start_as_current_span(
            'use_case.update_order_status',
            attributes={
                'order.id': str(order_id),
                'order.requested_status': requested.value,
                'user.id': caller.id,
            },
        ):
            async with self.uow:
                order = await self.uow.order_command_repo.get_for_update(order_id=order_id)
                if order is None:
                    raise NotFoundError(f'Order with id {order_id} not found')

                if not OrderAccessPolicy.can_mutate_status(order, caller):
                    raise ForbiddenError(
                        'Only sellers of products in this order or admins can update its status'
                    )

                previous = order.status
                updated = order.transition_to(requested)
                await self.uow.order_command_repo.update_status(order=updated)
                await self.uow.commit()

                reloaded = await self.uow.order_query_repo.get_by_id(order_id=order_id)
                if reloaded is None:
                    raise RuntimeError(f'Order {order_id} missing right after status update')

            metrics.record_status_transition(
                from_status=previous.value, to_status=requested.value
            )
            Logger.base.info(
                f'🔁 [STATUS] Order {order_id}: {previous.value} -> {requested.value} '
                f'by user {caller.id}'
            )
            return reloaded
