# src/twitter_api_core/paginators/__init__.py
"""Cursor pagination: accumulator, paginators and endpoint presets."""

from .accumulator import PageView, PaginatedAccumulator, read_page
from .endpoints import (
    USER_BLOCKING,
    USER_FOLLOWERS,
    USER_FOLLOWING,
    user_blocking,
    user_followers,
    user_following,
)
from .paginator import AsyncPaginator, BasePaginator, Paginator, PaginatorEndpoint

__all__ = [
    "PageView",
    "PaginatedAccumulator",
    "read_page",
    "PaginatorEndpoint",
    "BasePaginator",
    "Paginator",
    "AsyncPaginator",
    "USER_BLOCKING",
    "USER_FOLLOWERS",
    "USER_FOLLOWING",
    "user_blocking",
    "user_followers",
    "user_following",
]
