"""
Logging system for the Twitter API client.

Example:
    >>> from twitter_api_core.core.logging import ApiLogger, LoggingConfig
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="json")
    >>> logger = ApiLogger(config)
    >>> logger.debug("Request succeeded", method="GET", status_code=200)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ApiLogger, build_logger, ROOT_LOGGER_NAME
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    RequestIdFilter,
    ExtraFieldsFilter,
    new_request_id,
    set_request_id,
    get_request_id,
    clear_request_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ApiLogger",
    "build_logger",
    "ROOT_LOGGER_NAME",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "RequestIdFilter",
    "ExtraFieldsFilter",
    "new_request_id",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
