# src/twitter_api_core/core/async_request_handler.py
"""
Асинхронный вариант state machine запроса на базе httpx.

Переходы те же, что и у RequestHandler; меняется только транспорт.
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar, Union, TYPE_CHECKING

import httpx

from .config import ClientConfig
from .models import RequestDescriptor, ResolvedResponse, StreamHandle
from .request_handler import BaseRequestHandler

if TYPE_CHECKING:
    from .logging import ApiLogger

S = TypeVar('S')


class AsyncRequestHandler(BaseRequestHandler):
    """
    Runs one request over an ``httpx.AsyncClient``.

    Example:
        >>> async with httpx.AsyncClient() as client:
        ...     handler = AsyncRequestHandler(RequestDescriptor(url), client, config)
        ...     result = await handler.execute()
    """

    def __init__(
        self,
        request_data: RequestDescriptor,
        client: httpx.AsyncClient,
        config: Optional[ClientConfig] = None,
        logger: Optional['ApiLogger'] = None,
    ):
        super().__init__(request_data, config=config, logger=logger)
        self._client = client

    async def _send(self) -> httpx.Response:
        self._on_sent()
        request = self.request_data

        build_kwargs: Dict[str, Any] = {}
        if 'timeout' in request.options:
            build_kwargs['timeout'] = request.options['timeout']

        try:
            self.req = self._client.build_request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
                **build_kwargs,
            )
            # stream=True: headers only, the body stays on the socket
            return await self._client.send(self.req, stream=True)
        except httpx.HTTPError as e:
            raise self._on_request_error(e) from e

    async def _read_body(self, response: httpx.Response) -> None:
        try:
            async for chunk in response.aiter_bytes(chunk_size=self._config.chunk_size):
                self._on_data(chunk)
        except httpx.HTTPError as e:
            raise self._on_request_error(e) from e
        finally:
            await response.aclose()

    async def execute(self) -> ResolvedResponse:
        """
        Blocking mode: send, read the whole body, decode.

        Raises:
            ApiRequestError: Transport failure
            ApiResponseError: Status >= 400
            ParseError: Malformed JSON body on a status < 400
        """
        self._begin()
        try:
            response = await self._send()
            rate_limit = self._on_response(response.headers)
            await self._read_body(response)
            data = self._on_end(response.headers, response.status_code)
            return self._resolve(response, response.status_code, response.headers, data, rate_limit)
        finally:
            self._end()

    async def execute_for_stream(self) -> StreamHandle:
        """
        Streaming mode: resolve on headers with status < 400.

        The handle's ``httpx.Response`` is unread; the consumer must
        ``aclose()`` it.
        """
        self._begin()
        try:
            response = await self._send()
            code = response.status_code
            if code < 400:
                return self._on_stream_ready(response, code)

            rate_limit = self._on_response(response.headers)
            await self._read_body(response)
            data = self._on_end(response.headers, response.status_code)
            raise self._response_error(response, code, response.headers, data, rate_limit)
        finally:
            self._end()

    async def execute_as_stream(
        self,
        stream_factory: Callable[[StreamHandle], Union[S, Awaitable[S]]],
    ) -> S:
        """Hand the live response to an external (sync or async) stream consumer."""
        handle = await self.execute_for_stream()
        result = stream_factory(handle)
        if inspect.isawaitable(result):
            result = await result
        return result
