"""Value types shared by the request handlers and paginators."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, List, Mapping, Optional, Tuple, TypeVar, Union
from urllib.parse import parse_qsl, urlparse

T = TypeVar('T')

RATE_LIMIT_LIMIT_HEADER = 'x-rate-limit-limit'
RATE_LIMIT_REMAINING_HEADER = 'x-rate-limit-remaining'
RATE_LIMIT_RESET_HEADER = 'x-rate-limit-reset'


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that works for plain dicts too."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RequestState(str, Enum):
    """States of a single request handler."""
    BUILT = "built"
    SENT = "sent"
    ERRORED = "errored"
    RESPONSE_RECEIVING = "response_receiving"
    HEADERS_RECEIVED = "headers_received"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset({
    RequestState.ERRORED,
    RequestState.HEADERS_RECEIVED,
    RequestState.COMPLETED,
})

# Allowed edges; anything else raises InvalidStateTransition
REQUEST_TRANSITIONS = MappingProxyType({
    RequestState.BUILT: frozenset({RequestState.SENT}),
    RequestState.SENT: frozenset({
        RequestState.ERRORED,
        RequestState.RESPONSE_RECEIVING,
        RequestState.HEADERS_RECEIVED,
    }),
    RequestState.RESPONSE_RECEIVING: frozenset({
        RequestState.COMPLETED,
        RequestState.ERRORED,
    }),
    RequestState.ERRORED: frozenset(),
    RequestState.HEADERS_RECEIVED: frozenset(),
    RequestState.COMPLETED: frozenset(),
})


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Immutable description of one HTTP request.

    Attributes:
        url: Full target URL, query string included
        method: HTTP method
        headers: Request headers
        body: Optional request body
        options: Extra transport options (timeout, ...)

    Example:
        >>> req = RequestDescriptor("https://api.twitter.com/2/users/12/followers?max_results=10")
        >>> req.href_pathname
        'api.twitter.com/2/users/12/followers'
    """
    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: Optional[Union[bytes, str]] = None
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))
        if isinstance(self.options, dict):
            object.__setattr__(self, 'options', MappingProxyType(dict(self.options)))

    @property
    def href_pathname(self) -> str:
        """Host and path, without scheme or query."""
        parsed = urlparse(self.url)
        return parsed.netloc + parsed.path

    @property
    def query_items(self) -> List[Tuple[str, str]]:
        return parse_qsl(urlparse(self.url).query, keep_blank_values=True)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate limit state reported by the API for the endpoint just called."""
    limit: Optional[int]
    remaining: Optional[int]
    reset: Optional[int]

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> Optional['RateLimitSnapshot']:
        """
        Build a snapshot from response headers.

        Returns None unless ``x-rate-limit-limit`` is present.
        """
        limit = _header(headers, RATE_LIMIT_LIMIT_HEADER)
        if not limit:
            return None

        return cls(
            limit=_to_int(limit),
            remaining=_to_int(_header(headers, RATE_LIMIT_REMAINING_HEADER)),
            reset=_to_int(_header(headers, RATE_LIMIT_RESET_HEADER)),
        )


@dataclass(frozen=True)
class ResolvedResponse(Generic[T]):
    """Terminal result of a blocking request."""
    data: T
    headers: Mapping[str, str]
    rate_limit: Optional[RateLimitSnapshot] = None


@dataclass(frozen=True)
class StreamHandle:
    """
    Live response whose headers arrived with a success status.

    The body has not been read. Whoever receives the handle owns body
    consumption and closing the response.
    """
    request: Any
    response: Any
    request_data: RequestDescriptor
