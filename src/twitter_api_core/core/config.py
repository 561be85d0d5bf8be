"""
Система конфигурации Twitter API клиента.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Union, TYPE_CHECKING, Mapping
from types import MappingProxyType

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "https://api.twitter.com/2"
FORM_ENCODED_ENDPOINTS = "https://api.twitter.com/oauth/"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)
        total: Лимит на получение пула соединений в httpx (опционально)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30
    total: Optional[float] = None

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")
        if self.total is not None and self.total <= 0:
            raise ValueError("total timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ConnectionPoolConfig:
    """
    Конфигурация connection pool.

    Args:
        pool_connections: Количество connection pools для кеширования
        pool_maxsize: Максимум соединений в пуле
    """
    pool_connections: int = 10
    pool_maxsize: int = 10

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise ValueError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise ValueError("pool_maxsize must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация клиента.

    Args:
        base_url: Базовый URL API
        headers: Дефолтные заголовки (например, Authorization)
        timeout: Конфигурация таймаутов
        pool: Конфигурация connection pool
        debug: Диагностическое логирование запросов и ответов
        logging: Конфигурация логирования (None = без логов, если debug выключен)
        form_encoded_prefix: Префикс URL эндпоинтов, отвечающих form-encoded телом
        chunk_size: Размер чанка при чтении тела ответа
        verify_ssl: Проверять SSL сертификаты

    Examples:
        >>> config = ClientConfig(debug=True)
        >>> config = ClientConfig.create(timeout=60, headers={"Authorization": "Bearer ..."})
    """
    base_url: str = DEFAULT_BASE_URL
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    debug: bool = False
    logging: Optional['LoggingConfig'] = None
    form_encoded_prefix: str = FORM_ENCODED_ENDPOINTS
    chunk_size: int = 8192
    verify_ssl: bool = True

    def __post_init__(self):
        """Normalize base_url and freeze headers."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

        if self.base_url:
            normalized = self.base_url.rstrip('/')
            if normalized != self.base_url:
                object.__setattr__(self, 'base_url', normalized)

        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        headers: Optional[Dict[str, str]] = None,
        debug: bool = False,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            base_url: Базовый URL (по умолчанию Twitter API v2)
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            headers: Заголовки
            debug: Диагностический режим
            logging: Конфигурация логирования

        Examples:
            >>> config = ClientConfig.create(timeout=(5, 60), debug=True)
        """
        return cls(
            base_url=base_url or DEFAULT_BASE_URL,
            headers=headers or {},
            timeout=_timeout_config(timeout),
            debug=debug,
            logging=logging,
            **kwargs
        )

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'ClientConfig':
        """Создать новый конфиг с изменённым timeout."""
        return replace(self, timeout=_timeout_config(timeout))

    def with_headers(self, headers: Dict[str, str]) -> 'ClientConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"Authorization": "Bearer token"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_debug(self, debug: bool = True) -> 'ClientConfig':
        """Создать новый конфиг с включённым (или выключенным) debug."""
        return replace(self, debug=debug)


def _timeout_config(timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> TimeoutConfig:
    if isinstance(timeout, TimeoutConfig):
        return timeout
    if isinstance(timeout, tuple):
        return TimeoutConfig(connect=timeout[0], read=timeout[1])
    return TimeoutConfig(connect=5, read=timeout)
