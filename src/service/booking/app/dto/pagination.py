from typing import Generic, List, Optional, TypeVar

import attrs

from src.platform.config.core_setting import settings


_T = TypeVar('_T')


@attrs.define(frozen=True)
class Pagination:
    page: int
    limit: int

    @classmethod
    def of(cls, *, page: Optional[int] = None, limit: Optional[int] = None) -> 'Pagination':
        """Invalid values fall back to defaults instead of failing the request"""
        if page is None or page < 1:
            page = 1
        if limit is None or limit < 1:
            limit = settings.DEFAULT_PAGE_LIMIT
        return cls(page=page, limit=min(limit, settings.MAX_PAGE_LIMIT))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@attrs.define(frozen=True)
class Page(Generic[_T]):
    items: List[_T]
    total: int
    page: int
    limit: int
