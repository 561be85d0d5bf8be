"""
Response body decoding.

The decoder trusts the Content-Type header and the endpoint URL only; it
never sniffs the body.
"""

import json
from typing import Any, Iterable, Optional
from urllib.parse import parse_qsl

from .config import FORM_ENCODED_ENDPOINTS

JSON_CONTENT_TYPE = 'application/json'


class ResponseDecoder:
    """
    Turns accumulated response text into a structured value.

    Priority:
        1. non-empty body + ``application/json`` content type -> ``json.loads``
        2. OAuth token endpoint (URL prefix match) -> flat dict of form pairs
        3. anything else -> raw text

    Example:
        >>> decoder = ResponseDecoder()
        >>> decoder.decode('{"data": []}', 'application/json; charset=utf-8', 'https://api.twitter.com/2/tweets')
        {'data': []}
        >>> decoder.decode('oauth_token=a&oauth_token_secret=b', None, 'https://api.twitter.com/oauth/request_token')
        {'oauth_token': 'a', 'oauth_token_secret': 'b'}
    """

    def __init__(self, form_encoded_prefix: str = FORM_ENCODED_ENDPOINTS):
        self.form_encoded_prefix = form_encoded_prefix

    def is_form_encoded_endpoint(self, url: str) -> bool:
        return url.startswith(self.form_encoded_prefix)

    def decode(self, text: str, content_type: Optional[str], url: str) -> Any:
        """
        Decode a response body.

        Raises:
            ParseError: JSON content type with a malformed body
        """
        if text and content_type and JSON_CONTENT_TYPE in content_type:
            return json.loads(text)

        if self.is_form_encoded_endpoint(url):
            # Duplicate keys: last one wins
            return dict(parse_qsl(text, keep_blank_values=True))

        return text

    def decode_bytes(self, chunks: Iterable[bytes], content_type: Optional[str], url: str) -> Any:
        """Join raw body chunks, decode them as UTF-8 and run :meth:`decode`."""
        return self.decode(join_chunks(chunks), content_type, url)


def join_chunks(chunks: Iterable[bytes]) -> str:
    return b''.join(chunks).decode('utf-8', errors='replace')
