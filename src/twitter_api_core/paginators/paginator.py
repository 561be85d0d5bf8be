# src/twitter_api_core/paginators/paginator.py
"""
Cursor paginators driving the blocking request path.

Endpoint variants are configuration values (PaginatorEndpoint), not
subclasses: every variant shares the same merge logic.
"""

import asyncio
import math
import re
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any, Dict, Generic, Iterator, List, Mapping, Optional, Tuple, TypeVar, TYPE_CHECKING,
)
from urllib.parse import quote

from ..core.exceptions import ConfigurationError
from ..core.models import RateLimitSnapshot, ResolvedResponse
from .accumulator import NEXT_TOKEN, PREVIOUS_TOKEN, PaginatedAccumulator, read_page

if TYPE_CHECKING:
    from ..core.api_client import ApiClient
    from ..async_client import AsyncApiClient

TItem = TypeVar('TItem')

_PLACEHOLDER = re.compile(r':([A-Za-z_][A-Za-z0-9_]*)')


@dataclass(frozen=True)
class PaginatorEndpoint:
    """
    URL template plus the values shared by every page request.

    Example:
        >>> PaginatorEndpoint("users/:id/followers", {"id": "2244994945"}).path()
        'users/2244994945/followers'
    """
    template: str
    shared_params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if isinstance(self.shared_params, dict):
            object.__setattr__(self, 'shared_params', MappingProxyType(dict(self.shared_params)))

    def path(self) -> str:
        """
        Substitute every ``:name`` placeholder.

        Raises:
            ConfigurationError: A placeholder has no shared value
        """
        def substitute(match: 're.Match[str]') -> str:
            name = match.group(1)
            if name not in self.shared_params:
                raise ConfigurationError(
                    f"Endpoint '{self.template}' needs shared parameter '{name}'"
                )
            return quote(str(self.shared_params[name]), safe='')

        return _PLACEHOLDER.sub(substitute, self.template)


class BasePaginator(Generic[TItem]):
    """
    Merge logic shared by the sync and async paginators.

    Subclasses perform the request and call ``_prepare`` / ``_apply``
    while holding their lock, so only one fetch per paginator is in flight.
    """

    def __init__(
        self,
        client: Any,
        endpoint: PaginatorEndpoint,
        first_page: Optional[ResolvedResponse] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ):
        self._client = client
        self._endpoint = endpoint
        self._query_params: Dict[str, Any] = dict(query_params or {})
        self._rate_limit: Optional[RateLimitSnapshot] = None
        self._last_page_length = 0
        self._forward_exhausted = False
        self._backward_exhausted = False

        if first_page is None:
            # Nothing fetched yet: the first forward fetch carries no token
            self._real_data: PaginatedAccumulator[TItem] = PaginatedAccumulator()
            self._started = False
        else:
            self._real_data = PaginatedAccumulator.from_page(first_page.data)
            self._rate_limit = first_page.rate_limit
            self._last_page_length = self.page_length(first_page)
            self._forward_exhausted = self.is_fetch_last_over(first_page)
            self._started = True

    # ==================== Query parameters ====================

    def _page_query(self, token: Optional[str], max_results: Optional[int]) -> Dict[str, Any]:
        params = dict(self._query_params)
        params['pagination_token'] = token
        if max_results:
            params['max_results'] = max_results
        return params

    def next_query_params(self, max_results: Optional[int] = None) -> Dict[str, Any]:
        """Shared query ∪ {pagination_token: next_token} ∪ optional max_results."""
        return self._page_query(self._real_data.next_token, max_results)

    def previous_query_params(self, max_results: Optional[int] = None) -> Dict[str, Any]:
        return self._page_query(self._real_data.previous_token, max_results)

    def _prepare(self, forward: bool, max_results: Optional[int]) -> Optional[Tuple[str, Dict[str, Any]]]:
        """Path and query for the next request, or None when there is no cursor to follow."""
        if not forward and not self._started:
            return None

        if self._started:
            token = self._real_data.next_token if forward else self._real_data.previous_token
            if not token:
                return None

        params = self.next_query_params(max_results) if forward else self.previous_query_params(max_results)
        return self._endpoint.path(), params

    def _apply(self, response: ResolvedResponse, forward: bool) -> None:
        self._real_data.merge(response.data, forward=forward)
        self._started = True
        if response.rate_limit is not None:
            self._rate_limit = response.rate_limit
        self._last_page_length = self.page_length(response)
        if forward:
            self._forward_exhausted = self.is_fetch_last_over(response)
        else:
            self._backward_exhausted = self.is_fetch_previous_over(response)

    # ==================== Exhaustion predicates ====================

    @staticmethod
    def page_length(response: ResolvedResponse) -> int:
        """Number of items in the page's raw ``data`` array (0 if absent)."""
        return len(read_page(response.data).items)

    @staticmethod
    def is_fetch_last_over(response: ResolvedResponse) -> bool:
        """Forward direction exhausted: empty page or no next_token."""
        view = read_page(response.data)
        return not view.items or not view.next_token

    @staticmethod
    def is_fetch_previous_over(response: ResolvedResponse) -> bool:
        """Backward direction exhausted: empty page or no previous_token."""
        view = read_page(response.data)
        return not view.items or not view.previous_token

    # ==================== Accessors ====================

    @property
    def items(self) -> List[TItem]:
        return self._real_data.data

    @property
    def users(self) -> List[TItem]:
        """Users returned by a user timeline paginator."""
        return self.items

    @property
    def meta(self) -> Dict[str, Any]:
        return self._real_data.meta

    @property
    def includes(self) -> Dict[str, List[Any]]:
        return self._real_data.includes

    @property
    def rate_limit(self) -> Optional[RateLimitSnapshot]:
        return self._rate_limit

    @property
    def last_page_length(self) -> int:
        return self._last_page_length

    @property
    def done(self) -> bool:
        """True once no further forward page exists."""
        if not self._started:
            return False
        return self._forward_exhausted or not self._real_data.meta.get(NEXT_TOKEN)

    @property
    def done_backward(self) -> bool:
        if not self._started:
            return True
        return self._backward_exhausted or not self._real_data.meta.get(PREVIOUS_TOKEN)

    @property
    def endpoint(self) -> PaginatorEndpoint:
        return self._endpoint

    @property
    def accumulator(self) -> PaginatedAccumulator[TItem]:
        return self._real_data

    def __len__(self) -> int:
        return len(self._real_data)

    def __iter__(self) -> Iterator[TItem]:
        return iter(list(self._real_data.data))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint={self._endpoint.template!r}, "
            f"items={len(self)}, done={self.done})"
        )


class Paginator(BasePaginator[TItem]):
    """
    Synchronous paginator over an ApiClient.

    Example:
        >>> paginator = Paginator.create(client, user_followers("12"), {"max_results": 1000})
        >>> while not paginator.done:
        ...     paginator.fetch_next()
        >>> len(paginator.users), paginator.meta["result_count"]
    """

    def __init__(
        self,
        client: 'ApiClient',
        endpoint: PaginatorEndpoint,
        first_page: Optional[ResolvedResponse] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(client, endpoint, first_page=first_page, query_params=query_params)
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        client: 'ApiClient',
        endpoint: PaginatorEndpoint,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> 'Paginator':
        """Fetch the first page and build a paginator around it."""
        first_page = client.get(endpoint.path(), query=query_params)
        return cls(client, endpoint, first_page=first_page, query_params=query_params)

    def _fetch(self, forward: bool, max_results: Optional[int]) -> Optional[ResolvedResponse]:
        prepared = self._prepare(forward, max_results)
        if prepared is None:
            return None
        path, params = prepared
        response = self._client.get(path, query=params)
        self._apply(response, forward)
        return response

    def fetch_next(self, max_results: Optional[int] = None) -> Optional[ResolvedResponse]:
        """
        Fetch and append the next page.

        Returns:
            The fetched page, or None when there is no next_token

        Raises:
            ApiRequestError / ApiResponseError: the paginator state is left untouched
        """
        with self._lock:
            return self._fetch(True, max_results)

    def fetch_previous(self, max_results: Optional[int] = None) -> Optional[ResolvedResponse]:
        """Fetch and prepend the previous page, or None when there is no previous_token."""
        with self._lock:
            return self._fetch(False, max_results)

    def fetch_last(self, count: float = math.inf, max_results: Optional[int] = None) -> 'Paginator':
        """
        Keep fetching forward until ``count`` more items arrived or the
        forward direction is exhausted.
        """
        with self._lock:
            fetched = 0
            while fetched < count:
                response = self._fetch(True, max_results)
                if response is None:
                    break
                fetched += self.page_length(response)
                if self.is_fetch_last_over(response):
                    break
        return self


class AsyncPaginator(BasePaginator[TItem]):
    """
    Asynchronous paginator over an AsyncApiClient.

    Concurrent ``fetch_next`` / ``fetch_previous`` calls on one paginator
    are serialised by an asyncio.Lock.

    Example:
        >>> paginator = await AsyncPaginator.create(client, user_following("12"))
        >>> await paginator.fetch_last(500)
    """

    def __init__(
        self,
        client: 'AsyncApiClient',
        endpoint: PaginatorEndpoint,
        first_page: Optional[ResolvedResponse] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(client, endpoint, first_page=first_page, query_params=query_params)
        self._async_lock: Optional[asyncio.Lock] = None

    @property
    def _lock(self) -> asyncio.Lock:
        # Bound to the loop of the first fetch, not the one current at construction
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        return self._async_lock

    @classmethod
    async def create(
        cls,
        client: 'AsyncApiClient',
        endpoint: PaginatorEndpoint,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> 'AsyncPaginator':
        first_page = await client.get(endpoint.path(), query=query_params)
        return cls(client, endpoint, first_page=first_page, query_params=query_params)

    async def _fetch(self, forward: bool, max_results: Optional[int]) -> Optional[ResolvedResponse]:
        prepared = self._prepare(forward, max_results)
        if prepared is None:
            return None
        path, params = prepared
        response = await self._client.get(path, query=params)
        self._apply(response, forward)
        return response

    async def fetch_next(self, max_results: Optional[int] = None) -> Optional[ResolvedResponse]:
        async with self._lock:
            return await self._fetch(True, max_results)

    async def fetch_previous(self, max_results: Optional[int] = None) -> Optional[ResolvedResponse]:
        async with self._lock:
            return await self._fetch(False, max_results)

    async def fetch_last(self, count: float = math.inf, max_results: Optional[int] = None) -> 'AsyncPaginator':
        async with self._lock:
            fetched = 0
            while fetched < count:
                response = await self._fetch(True, max_results)
                if response is None:
                    break
                fetched += self.page_length(response)
                if self.is_fetch_last_over(response):
                    break
        return self
