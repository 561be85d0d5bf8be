# src/twitter_api_core/async_client.py
"""
Асинхронный клиент Twitter API на базе httpx.

Предоставляет async/await API для asyncio приложений.
"""

from typing import Any, Mapping, Optional

import httpx

from .core.config import ClientConfig
from .core.api_client import Body
from .core.async_request_handler import AsyncRequestHandler
from .core.logging import build_logger
from .core.models import RequestDescriptor, ResolvedResponse, StreamHandle
from .core.request_builder import RequestBuilder


class AsyncApiClient:
    """
    Асинхронный клиент: те же режимы, что и у ApiClient.

    Example:
        >>> async with AsyncApiClient(headers={"Authorization": "Bearer ..."}) as client:
        ...     result = await client.get("users/12/following")
        ...     print(result.data["meta"])

    Несколько запросов одного клиента могут выполняться параллельно:
    у каждого свой handler и свой буфер тела.
    """

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs):
        if config is None:
            config = ClientConfig.create(**kwargs)

        self._config = config
        self._logger = build_logger(config.debug, config.logging)
        self._builder = RequestBuilder(config)

        timeout = config.timeout
        self._timeout = httpx.Timeout(
            connect=timeout.connect,
            read=timeout.read,
            write=timeout.read,
            pool=timeout.total,
        )

        # Клиент создаётся лениво или при входе в context manager
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                verify=self._config.verify_ssl,
                limits=httpx.Limits(
                    max_connections=self._config.pool.pool_maxsize,
                    max_keepalive_connections=self._config.pool.pool_connections,
                ),
            )
        return self._client

    async def __aenter__(self) -> "AsyncApiClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._logger is not None:
            self._logger.close()

    # ==================== HTTP методы ====================

    def build_request(
        self,
        method: str,
        endpoint: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> RequestDescriptor:
        return self._builder.build(method, endpoint, query=query, body=body, headers=headers, **options)

    async def _handler(self, request_data: RequestDescriptor) -> AsyncRequestHandler:
        return AsyncRequestHandler(
            request_data,
            client=await self._get_client(),
            config=self._config,
            logger=self._logger,
        )

    async def execute(self, request_data: RequestDescriptor) -> ResolvedResponse:
        handler = await self._handler(request_data)
        return await handler.execute()

    async def execute_for_stream(self, request_data: RequestDescriptor) -> StreamHandle:
        handler = await self._handler(request_data)
        return await handler.execute_for_stream()

    async def request(self, method: str, endpoint: str, **kwargs: Any) -> ResolvedResponse:
        """
        Выполнить запрос в blocking режиме.

        Raises:
            ApiRequestError: Сетевая ошибка
            ApiResponseError: Статус >= 400
        """
        return await self.execute(self.build_request(method, endpoint, **kwargs))

    async def get(self, endpoint: str, query: Optional[Mapping[str, Any]] = None, **kwargs) -> ResolvedResponse:
        """GET запрос."""
        return await self.request("GET", endpoint, query=query, **kwargs)

    async def post(self, endpoint: str, body: Body = None, **kwargs) -> ResolvedResponse:
        """POST запрос."""
        return await self.request("POST", endpoint, body=body, **kwargs)

    async def put(self, endpoint: str, body: Body = None, **kwargs) -> ResolvedResponse:
        """PUT запрос."""
        return await self.request("PUT", endpoint, body=body, **kwargs)

    async def patch(self, endpoint: str, body: Body = None, **kwargs) -> ResolvedResponse:
        """PATCH запрос."""
        return await self.request("PATCH", endpoint, body=body, **kwargs)

    async def delete(self, endpoint: str, **kwargs) -> ResolvedResponse:
        """DELETE запрос."""
        return await self.request("DELETE", endpoint, **kwargs)

    async def stream(self, method: str, endpoint: str, **kwargs: Any) -> StreamHandle:
        """
        Streaming режим: handle.response не прочитан, вызывающий код
        обязан вызвать ``await handle.response.aclose()``.
        """
        return await self.execute_for_stream(self.build_request(method, endpoint, **kwargs))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url
