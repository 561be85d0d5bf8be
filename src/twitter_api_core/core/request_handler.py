# src/twitter_api_core/core/request_handler.py
"""
Request execution state machine.

One handler runs exactly one request:

    blocking:  BUILT -> SENT -> ERRORED
                             -> RESPONSE_RECEIVING -> COMPLETED (resolve or ApiResponseError)
    streaming: BUILT -> SENT -> ERRORED
                             -> HEADERS_RECEIVED (StreamHandle, body unread)
                             -> RESPONSE_RECEIVING -> COMPLETED (status >= 400, always raises)

Every transition goes through ``_transition``; a second terminal transition
or a reused handler raises InvalidStateTransition.
"""

from typing import Any, Callable, List, Mapping, Optional, TypeVar, TYPE_CHECKING

import requests

from .config import ClientConfig
from .decoder import ResponseDecoder, join_chunks
from .error_classifier import ErrorClassifier
from .exceptions import ApiRequestError, ApiResponseError, InvalidStateTransition, ParseError
from .logging.filters import clear_request_id, new_request_id
from .models import (
    REQUEST_TRANSITIONS,
    RateLimitSnapshot,
    RequestDescriptor,
    RequestState,
    ResolvedResponse,
    StreamHandle,
)
from ..utils.sanitizer import mask_headers

if TYPE_CHECKING:
    from .logging import ApiLogger

S = TypeVar('S')


class BaseRequestHandler:
    """
    Transport-independent part of the state machine.

    Subclasses own the I/O: they send the request, feed body chunks to
    ``_on_data`` and call the ``_on_*`` hooks in order.
    """

    def __init__(
        self,
        request_data: RequestDescriptor,
        config: Optional[ClientConfig] = None,
        logger: Optional['ApiLogger'] = None,
    ):
        self.request_data = request_data
        self._config = config or ClientConfig()
        self._logger = logger
        self._debug = self._config.debug
        self._decoder = ResponseDecoder(self._config.form_encoded_prefix)
        self._classifier = ErrorClassifier(logger=logger, debug=self._debug)
        self._state = RequestState.BUILT
        self._chunks: List[bytes] = []
        # Transport request object, available once sent
        self.req: Any = None

    # ==================== State ====================

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def href(self) -> str:
        return self.request_data.url

    @property
    def href_pathname(self) -> str:
        return self.request_data.href_pathname

    def _transition(self, target: RequestState) -> None:
        if target not in REQUEST_TRANSITIONS[self._state]:
            raise InvalidStateTransition(self._state, target)
        self._state = target

    # ==================== Diagnostics ====================

    def _debug_log(self, message: str, **fields: Any) -> None:
        """Best-effort debug output; never raises."""
        if not (self._debug and self._logger):
            return
        try:
            self._logger.debug(message, **fields)
        except Exception:
            pass

    def _begin(self) -> None:
        if self._logger:
            new_request_id()

    def _end(self) -> None:
        if self._logger:
            clear_request_id()

    def _debug_request(self) -> None:
        request = self.request_data
        self._debug_log(
            f"[{request.method} {self.href_pathname}]",
            headers=mask_headers(request.headers),
            options=dict(request.options),
        )
        params = request.query_items
        if params:
            self._debug_log("Request parameters", params=dict(params))
        if request.body:
            self._debug_log("Request body", body=request.body)

    # ==================== Lifecycle hooks ====================

    def _on_sent(self) -> None:
        self._transition(RequestState.SENT)
        self._debug_request()

    def _on_request_error(self, error: BaseException) -> ApiRequestError:
        self._transition(RequestState.ERRORED)
        return self._classifier.create_request_error(self.request_data, error)

    def _on_response(self, headers: Mapping[str, str]) -> Optional[RateLimitSnapshot]:
        self._transition(RequestState.RESPONSE_RECEIVING)
        return RateLimitSnapshot.from_headers(headers)

    def _on_data(self, chunk: bytes) -> None:
        if chunk:
            self._chunks.append(chunk)

    def _on_end(self, headers: Mapping[str, str], code: int) -> Any:
        """
        Body complete: terminal state, then decode.

        ParseError propagates for successful statuses only; a failure status
        with an undecodable body keeps the raw text so ApiResponseError is
        still raised.
        """
        self._transition(RequestState.COMPLETED)
        content_type = headers.get('content-type')
        try:
            return self._decoder.decode_bytes(self._chunks, content_type, self.href)
        except ParseError:
            if code < 400:
                raise
            return join_chunks(self._chunks)

    def _response_error(
        self,
        response: Any,
        code: int,
        headers: Mapping[str, str],
        data: Any,
        rate_limit: Optional[RateLimitSnapshot],
    ) -> ApiResponseError:
        return self._classifier.create_response_error(
            request=self.request_data,
            response=response,
            data=data,
            headers=headers,
            rate_limit=rate_limit,
            code=code,
        )

    def _resolve(
        self,
        response: Any,
        code: int,
        headers: Mapping[str, str],
        data: Any,
        rate_limit: Optional[RateLimitSnapshot],
    ) -> ResolvedResponse:
        if code >= 400:
            raise self._response_error(response, code, headers, data, rate_limit)

        self._debug_log(
            f"[{self.request_data.method} {self.href_pathname}]: Request succeeds with code {code}",
            status_code=code,
        )
        self._debug_log("Response body", body=data)

        return ResolvedResponse(data=data, headers=headers, rate_limit=rate_limit)

    def _on_stream_ready(self, response: Any, code: int) -> StreamHandle:
        self._transition(RequestState.HEADERS_RECEIVED)
        self._debug_log(
            f"[{self.request_data.method} {self.href_pathname}]: "
            f"Request succeeds with code {code} (starting stream)",
            status_code=code,
        )
        return StreamHandle(request=self.req, response=response, request_data=self.request_data)


class RequestHandler(BaseRequestHandler):
    """
    Runs one request over a ``requests.Session``.

    Example:
        >>> handler = RequestHandler(RequestDescriptor(url), session, config)
        >>> result = handler.execute()
        >>> result.data, result.rate_limit
    """

    def __init__(
        self,
        request_data: RequestDescriptor,
        session: requests.Session,
        config: Optional[ClientConfig] = None,
        logger: Optional['ApiLogger'] = None,
    ):
        super().__init__(request_data, config=config, logger=logger)
        self._session = session

    def _send(self) -> requests.Response:
        self._on_sent()
        request = self.request_data
        timeout = request.options.get('timeout', self._config.timeout.as_tuple())

        try:
            # stream=True: headers only, the body is read chunk by chunk below
            response = self._session.request(
                method=request.method,
                url=request.url,
                headers=dict(request.headers),
                data=request.body,
                timeout=timeout,
                verify=self._config.verify_ssl,
                stream=True,
            )
        except requests.RequestException as e:
            raise self._on_request_error(e) from e

        self.req = response.request
        return response

    def _read_body(self, response: requests.Response) -> None:
        try:
            for chunk in response.iter_content(chunk_size=self._config.chunk_size):
                self._on_data(chunk)
        except requests.RequestException as e:
            raise self._on_request_error(e) from e
        finally:
            response.close()

    def _handle_response(self, response: requests.Response) -> ResolvedResponse:
        rate_limit = self._on_response(response.headers)
        self._read_body(response)
        data = self._on_end(response.headers, response.status_code)
        return self._resolve(response, response.status_code, response.headers, data, rate_limit)

    def execute(self) -> ResolvedResponse:
        """
        Blocking mode: send, read the whole body, decode.

        Returns:
            ResolvedResponse with decoded data, headers and rate limit

        Raises:
            ApiRequestError: Transport failure
            ApiResponseError: Status >= 400
            ParseError: Malformed JSON body on a status < 400
        """
        self._begin()
        try:
            response = self._send()
            return self._handle_response(response)
        finally:
            self._end()

    def execute_for_stream(self) -> StreamHandle:
        """
        Streaming mode: resolve as soon as headers arrive with status < 400.

        The returned handle's response body is unread; the caller owns it
        (and must close it). Failure statuses go through the blocking path
        and raise ApiResponseError.
        """
        self._begin()
        try:
            response = self._send()
            code = response.status_code
            if code < 400:
                return self._on_stream_ready(response, code)

            rate_limit = self._on_response(response.headers)
            self._read_body(response)
            data = self._on_end(response.headers, response.status_code)
            raise self._response_error(response, code, response.headers, data, rate_limit)
        finally:
            self._end()

    def execute_as_stream(self, stream_factory: Callable[[StreamHandle], S]) -> S:
        """Hand the live response to an external stream consumer."""
        return stream_factory(self.execute_for_stream())
