from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.command.cancel_order_use_case import CancelOrderUseCase
from src.service.ordering.app.command.create_order_use_case import CreateOrderUseCase
from src.service.ordering.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.ordering.app.dto.pagination import Page, PageRequest
from src.service.ordering.app.query.get_order_use_case import GetOrderUseCase
from src.service.ordering.app.query.list_orders_use_case import ListOrdersUseCase
from src.service.ordering.domain.entity.user_entity import UserEntity
from src.service.ordering.domain.value_object.order_line import OrderLine
from src.service.ordering.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.ordering.driving_adapter.http_controller.schema.order_schema import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
    PaginatedOrderResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def page_request(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
) -> PageRequest:
    return PageRequest(page=page, limit=limit)


def _paginated(result) -> PaginatedOrderResponse:
    if not isinstance(result, Page):
        raise TypeError('Paginated listing expected a Page result')
    return PaginatedOrderResponse.from_page(result)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.create_order') as span:
        span.set_attribute('buyer_id', current_user.id)
        order = await use_case.create_order(
            buyer_id=current_user.id,
            items=[
                OrderLine(product_id=item.product_id, quantity=item.quantity)
                for item in request.items
            ],
        )
        span.set_attribute('order.id', str(order.id))
        return OrderResponse.from_entity(order)


@router.get('')
@Logger.io
async def list_all_orders(
    page: PageRequest = Depends(page_request),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> PaginatedOrderResponse:
    return _paginated(await use_case.list_all(page=page))


@router.get('/my_orders')
@Logger.io
async def list_my_orders(
    page: PageRequest = Depends(page_request),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> PaginatedOrderResponse:
    """Orders the caller bought."""
    return _paginated(await use_case.list_buyer_orders(buyer_id=current_user.id, page=page))


@router.get('/my_sales')
@Logger.io
async def list_my_sales(
    page: PageRequest = Depends(page_request),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> PaginatedOrderResponse:
    """Orders containing at least one product the caller sells."""
    return _paginated(await use_case.list_seller_orders(seller_id=current_user.id, page=page))


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.get_order(order_id=order_id, caller=current_user)
    return OrderResponse.from_entity(order)


@router.put('/{order_id}/status')
@Logger.io
async def update_order_status(
    order_id: UUID,
    request: OrderStatusUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateOrderStatusUseCase = Depends(UpdateOrderStatusUseCase.depends),
) -> OrderResponse:
    order = await use_case.update_status(
        order_id=order_id, new_status=request.status, caller=current_user
    )
    return OrderResponse.from_entity(order)


@router.delete('/{order_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_order(
    order_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelOrderUseCase = Depends(CancelOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.cancel_order(order_id=order_id, caller=current_user)
    return OrderResponse.from_entity(order)
