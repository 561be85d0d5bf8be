"""
Log filters for request ids and static extra fields.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Dict, Any, Optional


# Context-local so that concurrent asyncio tasks keep separate ids
_request_id: ContextVar[Optional[str]] = ContextVar('twitter_api_request_id', default=None)


def new_request_id() -> str:
    """Generate and install a fresh request id for the current context."""
    request_id = uuid.uuid4().hex[:12]
    set_request_id(request_id)
    return request_id


def set_request_id(request_id: str) -> None:
    """
    Set request id for the current context.

    Example:
        >>> set_request_id("req-12345")
        >>> get_request_id()
        'req-12345'
    """
    _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    """Request id for the current context, or None."""
    return _request_id.get()


def clear_request_id() -> None:
    _request_id.set(None)


class RequestIdFilter(logging.Filter):
    """Adds ``request_id`` to every record emitted while a request is running."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = get_request_id()
        if request_id:
            record.request_id = request_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Filter that adds extra static fields to all log records.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "timeline-sync"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
