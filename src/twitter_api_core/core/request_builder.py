# src/twitter_api_core/core/request_builder.py
"""Builds RequestDescriptor values from an endpoint, query and body."""

import json
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

from .config import ClientConfig
from .models import RequestDescriptor

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def _query_value(value: Any) -> str:
    """Twitter expects comma-separated lists and lowercase booleans."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple, set)):
        return ','.join(str(v) for v in value)
    return str(value)


def encode_query(query: Optional[Mapping[str, Any]]) -> str:
    """
    Encode query parameters, dropping None values.

    Example:
        >>> encode_query({"pagination_token": None, "max_results": 100, "user.fields": ["id", "name"]})
        'max_results=100&user.fields=id%2Cname'
    """
    if not query:
        return ''
    return urlencode([
        (key, _query_value(value))
        for key, value in query.items()
        if value is not None
    ])


class RequestBuilder:
    """
    Joins the configured base URL with endpoints and encodes payloads.

    Example:
        >>> builder = RequestBuilder(ClientConfig())
        >>> builder.build("GET", "users/12/followers", query={"max_results": 10}).url
        'https://api.twitter.com/2/users/12/followers?max_results=10'
    """

    def __init__(self, config: ClientConfig):
        self._config = config

    def build_url(self, endpoint: str, query: Optional[Mapping[str, Any]] = None) -> str:
        # Absolute URLs are used as-is
        if endpoint.startswith(("http://", "https://")):
            url = endpoint
        else:
            endpoint = endpoint.lstrip("/")
            base = self._config.base_url
            url = f"{base}/{endpoint}" if base else endpoint

        encoded = encode_query(query)
        if encoded:
            url += ('&' if '?' in url else '?') + encoded
        return url

    def build(
        self,
        method: str,
        endpoint: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Union[bytes, str, Mapping[str, Any]]] = None,
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> RequestDescriptor:
        """
        Build a descriptor.

        Mapping bodies are encoded as JSON unless the headers ask for
        ``application/x-www-form-urlencoded``.
        """
        merged: Dict[str, str] = dict(self._config.headers)
        if headers:
            merged.update(headers)

        if isinstance(body, Mapping):
            content_type = next(
                (value for key, value in merged.items() if key.lower() == 'content-type'),
                None,
            )
            if content_type and FORM_CONTENT_TYPE in content_type:
                body = encode_query(body)
            else:
                body = json.dumps(body)
                if content_type is None:
                    merged['Content-Type'] = 'application/json'

        return RequestDescriptor(
            url=self.build_url(endpoint, query),
            method=method,
            headers=merged,
            body=body,
            options=options,
        )
