from typing import Self
from uuid import UUID

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.error_boundary import guard_internal_errors
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.order_metrics import metrics
from src.service.ordering.domain.entity.order_entity import Order
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.order_access_policy import OrderAccessPolicy


class CancelOrderUseCase:
    """
    Buyer (or admin) cancels a pending order and gets the stock back.

    Flow, one transaction:
    1. Load order + items + products   -> NotFoundError
    2. Buyer or admin only             -> ForbiddenError
    3. Pending only                    -> InvalidStateError
    4. Restore every item's stock, mark canceled, commit
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    @guard_internal_errors
    async def cancel_order(self, *, order_id: UUID, caller: UserEntity) -> Order:
        with self.tracer.start_as_current_span(
            'use_case.cancel_order',
            attributes={'order.id': str(order_id), 'user.id': caller.id},
        ):
            async with self.uow:
                order = await self.uow.order_command_repo.get_for_update(order_id=order_id)
                if order is None:
                    raise NotFoundError(f'Order with id {order_id} not found')

                if not OrderAccessPolicy.can_cancel(order, caller):
                    raise ForbiddenError('You can only cancel your own orders')

                canceled = order.cancel()

                for item in sorted(order.items, key=lambda item: item.product_id):
                    await self.uow.product_stock_ledger.restore_stock(
                        product_id=item.product_id, quantity=item.quantity
                    )

                await self.uow.order_command_repo.update_status(order=canceled)
                await self.uow.commit()

                reloaded = await self.uow.order_query_repo.get_by_id(order_id=order_id)
                if reloaded is None:
                    raise RuntimeError(f'Order {order_id} missing right after cancel')

            metrics.record_order_canceled()
            Logger.base.info(
                f'🚫 [CANCEL] Order {order_id} canceled by user {caller.id}, '
                f'{len(order.items)} item(s) restocked'
            )
            return reloaded
