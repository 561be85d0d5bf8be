"""Twitter API core - request lifecycle engine and cursor pagination."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.api_client import ApiClient
from .async_client import AsyncApiClient
from .core.config import (
    ClientConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
)
from .core.env_config import load_from_env
from .core.exceptions import (
    ApiException,
    ApiRequestError,
    ApiResponseError,
    ParseError,
    ConfigurationError,
    InvalidStateTransition,
)
from .core.logging import LoggingConfig
from .core.models import (
    RequestDescriptor,
    RateLimitSnapshot,
    ResolvedResponse,
    StreamHandle,
)
from .paginators import (
    PaginatedAccumulator,
    PaginatorEndpoint,
    Paginator,
    AsyncPaginator,
    user_blocking,
    user_followers,
    user_following,
)

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('twitter_api_core')
logging.getLogger('twitter_api_core').addHandler(logging.NullHandler())

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("twitter-api-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "ApiClient",
    "AsyncApiClient",

    # Config
    "ClientConfig",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "LoggingConfig",
    "load_from_env",

    # Models
    "RequestDescriptor",
    "RateLimitSnapshot",
    "ResolvedResponse",
    "StreamHandle",

    # Pagination
    "PaginatedAccumulator",
    "PaginatorEndpoint",
    "Paginator",
    "AsyncPaginator",
    "user_blocking",
    "user_followers",
    "user_following",

    # Exceptions
    "ApiException",
    "ApiRequestError",
    "ApiResponseError",
    "ParseError",
    "ConfigurationError",
    "InvalidStateTransition",

    # Version
    "__version__",
]
