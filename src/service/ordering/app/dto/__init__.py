"""Application layer DTOs"""

from src.service.ordering.app.dto.pagination import Page, PageMeta, PageRequest

__all__ = [
    'Page',
    'PageMeta',
    'PageRequest',
]
