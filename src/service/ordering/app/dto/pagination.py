"""Pagination DTOs shared by the order listings."""

import math
from typing import Generic, List, TypeVar

import attrs

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import InvalidArgumentError


_T = TypeVar('_T')


@attrs.define(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = attrs.field(factory=lambda: settings.DEFAULT_PAGE_LIMIT)

    def __attrs_post_init__(self) -> None:
        if self.page < 1:
            raise InvalidArgumentError('page must be at least 1')
        if not 1 <= self.limit <= settings.MAX_PAGE_LIMIT:
            raise InvalidArgumentError(f'limit must be between 1 and {settings.MAX_PAGE_LIMIT}')

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@attrs.define(frozen=True)
class PageMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


@attrs.define(frozen=True)
class Page(Generic[_T]):
    data: List[_T]
    meta: PageMeta

    @classmethod
    def build(cls, *, data: List[_T], total: int, request: PageRequest) -> 'Page[_T]':
        total_pages = math.ceil(total / request.limit) if total else 0
        return cls(
            data=data,
            meta=PageMeta(
                page=request.page,
                limit=request.limit,
                total=total,
                total_pages=total_pages,
                has_next_page=request.page < total_pages,
                has_previous_page=request.page > 1,
            ),
        )
