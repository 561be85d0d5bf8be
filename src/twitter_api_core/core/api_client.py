# src/twitter_api_core/core/api_client.py
from typing import Any, Mapping, Optional, Union

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .logging import build_logger
from .models import RequestDescriptor, ResolvedResponse, StreamHandle
from .request_builder import RequestBuilder
from .request_handler import RequestHandler
from .session_manager import ThreadSafeSessionManager

Body = Optional[Union[bytes, str, Mapping[str, Any]]]


class ApiClient:
    """
    Синхронный клиент Twitter API.

    Строит RequestDescriptor и прогоняет его через RequestHandler.

    Features:
        - Blocking (execute) и streaming (execute_for_stream) режимы
        - Thread-safe: каждый поток получает собственную сессию
        - Контекстный менеджер для освобождения ресурсов
        - Диагностическое логирование через config.debug

    Example:
        >>> with ApiClient(headers={"Authorization": "Bearer ..."}) as client:
        ...     result = client.get("users/12/followers", query={"max_results": 100})
        ...     print(result.data["meta"]["result_count"], result.rate_limit)
    """

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs):
        """
        Args:
            config: ClientConfig instance
            **kwargs: Параметры ClientConfig.create (если config не передан)
        """
        if config is None:
            config = ClientConfig.create(**kwargs)

        self._config = config
        self._logger = build_logger(config.debug, config.logging)
        self._builder = RequestBuilder(config)
        self._session_manager = ThreadSafeSessionManager(session_factory=self._create_session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        # Retries are not this layer's job
        adapter = HTTPAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            max_retries=0,
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session

    def close(self):
        """Закрывает все сессии и logger handlers."""
        if self._logger is not None:
            self._logger.close()
        self._session_manager.close_all()

    # ==================== Запросы ====================

    def build_request(
        self,
        method: str,
        endpoint: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> RequestDescriptor:
        """Строит RequestDescriptor (base_url + endpoint + query)."""
        return self._builder.build(method, endpoint, query=query, body=body, headers=headers, **options)

    def _handler(self, request_data: RequestDescriptor) -> RequestHandler:
        return RequestHandler(
            request_data,
            session=self.session,
            config=self._config,
            logger=self._logger,
        )

    def execute(self, request_data: RequestDescriptor) -> ResolvedResponse:
        """Blocking режим для готового дескриптора."""
        return self._handler(request_data).execute()

    def execute_for_stream(self, request_data: RequestDescriptor) -> StreamHandle:
        """Streaming режим для готового дескриптора."""
        return self._handler(request_data).execute_for_stream()

    def request(self, method: str, endpoint: str, **kwargs: Any) -> ResolvedResponse:
        """
        Выполняет запрос в blocking режиме.

        Args:
            method: HTTP метод
            endpoint: Endpoint (относительно base_url) или полный URL
            **kwargs: query, body, headers, timeout

        Returns:
            ResolvedResponse

        Raises:
            ApiRequestError: Сетевая ошибка
            ApiResponseError: Статус >= 400
        """
        return self.execute(self.build_request(method, endpoint, **kwargs))

    def get(self, endpoint: str, query: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> ResolvedResponse:
        return self.request("GET", endpoint, query=query, **kwargs)

    def post(self, endpoint: str, body: Body = None, **kwargs: Any) -> ResolvedResponse:
        return self.request("POST", endpoint, body=body, **kwargs)

    def put(self, endpoint: str, body: Body = None, **kwargs: Any) -> ResolvedResponse:
        return self.request("PUT", endpoint, body=body, **kwargs)

    def patch(self, endpoint: str, body: Body = None, **kwargs: Any) -> ResolvedResponse:
        return self.request("PATCH", endpoint, body=body, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> ResolvedResponse:
        return self.request("DELETE", endpoint, **kwargs)

    def stream(self, method: str, endpoint: str, **kwargs: Any) -> StreamHandle:
        """
        Выполняет запрос в streaming режиме.

        Тело ответа не читается; вызывающий код владеет handle.response
        и обязан его закрыть.

        Example:
            >>> handle = client.stream("GET", "tweets/search/stream")
            >>> for line in handle.response.iter_lines():
            ...     print(line)
        """
        return self.execute_for_stream(self.build_request(method, endpoint, **kwargs))

    # ==================== Свойства ====================

    @property
    def session(self) -> requests.Session:
        """Thread-local сессия текущего потока."""
        return self._session_manager.get_session()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url
