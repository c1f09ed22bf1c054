from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.error_boundary import guard_internal_errors
from src.platform.logging.loguru_io import Logger
from src.service.ordering.app.dto.pagination import Page, PageRequest
from src.service.ordering.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ordering.domain.entity.order_entity import Order


class ListOrdersUseCase:
    """
    Read-only order listings, newest first.

    Without a PageRequest the full list is returned; with one, a Page
    carrying the slice plus total/page metadata.
    """

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
    async def list_all(self, *, page: Optional[PageRequest] = None) -> List[Order] | Page[Order]:
        return await self._list(page=page)

    @Logger.io
    @guard_internal_errors
    async def list_buyer_orders(
        self, *, buyer_id: int, page: Optional[PageRequest] = None
    ) -> List[Order] | Page[Order]:
        return await self._list(buyer_id=buyer_id, page=page)

    @Logger.io
    @guard_internal_errors
    async def list_seller_orders(
        self, *, seller_id: int, page: Optional[PageRequest] = None
    ) -> List[Order] | Page[Order]:
        return await self._list(seller_id=seller_id, page=page)

    async def _list(
        self,
        *,
        buyer_id: Optional[int] = None,
        seller_id: Optional[int] = None,
        page: Optional[PageRequest] = None,
    ) -> List[Order] | Page[Order]:
        if page is None:
            return await self.order_query_repo.list_orders(buyer_id=buyer_id, seller_id=seller_id)

        orders = await self.order_query_repo.list_orders(
            buyer_id=buyer_id, seller_id=seller_id, offset=page.offset, limit=page.limit
        )
        total = await self.order_query_repo.count_orders(buyer_id=buyer_id, seller_id=seller_id)
        return Page.build(data=orders, total=total, request=page)
