"""
Иерархия исключений Twitter API клиента.

Классификация:
- ApiRequestError - ответа не было (DNS, connect, socket)
- ApiResponseError - ответ получен, но статус >= 400
- ParseError - тело объявлено как JSON, но не парсится
"""

import json
from typing import Any, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RateLimitSnapshot, RequestDescriptor

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ApiException(Exception):
    """Базовое исключение клиента."""

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ApiRequestError(ApiException):
    """
    Сетевая ошибка - HTTP ответа не существовало.

    Args:
        message: Сообщение об ошибке
        request: Исходный RequestDescriptor
        error: Исключение транспорта (requests / httpx)
    """

    def __init__(
        self,
        message: str,
        request: Optional['RequestDescriptor'] = None,
        error: Optional[BaseException] = None,
    ):
        self.request = request
        self.error = error
        super().__init__(message)

    @property
    def request_error(self) -> Optional[BaseException]:
        """Underlying transport error."""
        return self.error


# Twitter v1.1 error codes that denote authentication problems
AUTH_ERROR_CODES = frozenset({32, 89, 99, 135, 215})
RATE_LIMIT_ERROR_CODE = 88


class ApiResponseError(ApiException):
    """
    HTTP ошибка (статус >= 400).

    Args:
        message: Человекочитаемое сообщение
        code: HTTP статус код
        data: Декодированное тело ответа (best-effort)
        headers: Заголовки ответа
        request: Исходный RequestDescriptor
        response: Объект ответа транспорта
        rate_limit: Снимок rate limit (если заголовки были)
    """

    def __init__(
        self,
        message: str,
        code: int,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        request: Optional['RequestDescriptor'] = None,
        response: Any = None,
        rate_limit: Optional['RateLimitSnapshot'] = None,
    ):
        self.code = code
        self.data = data
        self.headers = headers if headers is not None else {}
        self.request = request
        self.response = response
        self.rate_limit = rate_limit
        super().__init__(message)

    @property
    def errors(self) -> List[dict]:
        """Error list from the response body, empty when the body has none."""
        if isinstance(self.data, dict):
            errors = self.data.get('errors')
            if isinstance(errors, list):
                return errors
        return []

    def _error_codes(self) -> set:
        return {e.get('code') for e in self.errors if isinstance(e, dict) and 'code' in e}

    @property
    def is_rate_limit_error(self) -> bool:
        """429 or Twitter code 88."""
        return self.code == 429 or RATE_LIMIT_ERROR_CODE in self._error_codes()

    @property
    def is_auth_error(self) -> bool:
        """401 or one of the Twitter authentication error codes."""
        if self.code == 401:
            return True
        return bool(AUTH_ERROR_CODES & self._error_codes())

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СПЕЦИАЛЬНЫЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# Битый JSON пробрасывается как есть, без обёртки
ParseError = json.JSONDecodeError


class ConfigurationError(ApiException):
    """Ошибка конфигурации."""


class InvalidStateTransition(ApiException):
    """
    Недопустимый переход state machine запроса.

    Args:
        current: Текущее состояние
        target: Запрошенное состояние
    """

    def __init__(self, current: Any, target: Any):
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition request from {current} to {target}")
