"""Core Twitter API client модули: request lifecycle, decoding, errors."""

from .config import (
    TimeoutConfig,
    ConnectionPoolConfig,
    ClientConfig,
    DEFAULT_BASE_URL,
    FORM_ENCODED_ENDPOINTS,
)
from .exceptions import (
    ApiException,
    ApiRequestError,
    ApiResponseError,
    ParseError,
    ConfigurationError,
    InvalidStateTransition,
)
from .models import (
    RequestState,
    REQUEST_TRANSITIONS,
    RequestDescriptor,
    RateLimitSnapshot,
    ResolvedResponse,
    StreamHandle,
)
from .decoder import ResponseDecoder
from .error_classifier import ErrorClassifier
from .request_builder import RequestBuilder, encode_query
from .request_handler import BaseRequestHandler, RequestHandler
from .async_request_handler import AsyncRequestHandler
from .api_client import ApiClient

__all__ = [
    # Config
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "FORM_ENCODED_ENDPOINTS",
    # Models
    "RequestState",
    "REQUEST_TRANSITIONS",
    "RequestDescriptor",
    "RateLimitSnapshot",
    "ResolvedResponse",
    "StreamHandle",
    # Core
    "ResponseDecoder",
    "ErrorClassifier",
    "RequestBuilder",
    "encode_query",
    "BaseRequestHandler",
    "RequestHandler",
    "AsyncRequestHandler",
    "ApiClient",
    # Exceptions
    "ApiException",
    "ApiRequestError",
    "ApiResponseError",
    "ParseError",
    "ConfigurationError",
    "InvalidStateTransition",
]
