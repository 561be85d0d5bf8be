# src/twitter_api_core/core/error_classifier.py

from typing import Any, List, Mapping, Optional, TYPE_CHECKING

from .exceptions import ApiRequestError, ApiResponseError
from .models import RateLimitSnapshot, RequestDescriptor
from ..utils.sanitizer import mask_headers, mask_url

if TYPE_CHECKING:
    from .logging import ApiLogger


class ErrorClassifier:
    """Builds typed errors for failed requests and responses."""

    def __init__(self, logger: Optional['ApiLogger'] = None, debug: bool = False):
        self._logger = logger
        self._debug = debug

    def _log(self, message: str, **fields: Any) -> None:
        """Диагностика только в debug режиме, никогда не бросает исключений."""
        if not (self._debug and self._logger):
            return
        try:
            self._logger.debug(message, **fields)
        except Exception:
            pass

    def create_request_error(self, request: RequestDescriptor, error: BaseException) -> ApiRequestError:
        """Транспортная ошибка: ответа не было."""
        self._log(
            "Request network error",
            error=repr(error),
            error_type=type(error).__name__,
            method=request.method,
            url=mask_url(request.url),
        )

        return ApiRequestError('Request failed.', request=request, error=error)

    @staticmethod
    def format_v1_errors(errors: List[Mapping[str, Any]]) -> str:
        """
        Legacy error list.

        Example:
            >>> ErrorClassifier.format_v1_errors([{"code": 88, "message": "Rate limit exceeded"}])
            'Rate limit exceeded (Twitter code 88)'
        """
        return ', '.join(
            f"{error.get('message')} (Twitter code {error.get('code')})"
            for error in errors
        )

    @staticmethod
    def format_v2_error(error: Mapping[str, Any]) -> str:
        """
        Structured (problem-details style) error.

        Example:
            >>> ErrorClassifier.format_v2_error({"title": "Not Found", "detail": "User not found", "type": "https://x/404"})
            'Not Found: User not found (see https://x/404)'
        """
        return f"{error.get('title')}: {error.get('detail')} (see {error.get('type')})"

    def format_error_message(self, code: int, data: Any) -> str:
        """Человекочитаемое сообщение по телу ответа."""
        message = f"Request failed with code {code}"
        if not isinstance(data, Mapping):
            return message

        errors = data.get('errors')
        if isinstance(errors, list) and errors:
            first = errors[0]
            # The first element decides which of the two shapes is present
            if isinstance(first, Mapping) and 'code' in first:
                return message + ' - ' + self.format_v1_errors(errors)
            structured = data if 'title' in data or not isinstance(first, Mapping) else first
            return message + ' - ' + self.format_v2_error(structured)

        if 'title' in data:
            return message + ' - ' + self.format_v2_error(data)

        return message

    def create_response_error(
        self,
        request: RequestDescriptor,
        response: Any,
        data: Any,
        headers: Mapping[str, str],
        rate_limit: Optional[RateLimitSnapshot],
        code: int,
    ) -> ApiResponseError:
        """HTTP ошибка: статус >= 400."""
        self._log(
            "Request failed",
            status_code=code,
            body=data,
            headers=mask_headers(headers),
        )

        return ApiResponseError(
            self.format_error_message(code, data),
            code=code,
            data=data,
            headers=headers,
            request=request,
            response=response,
            rate_limit=rate_limit,
        )
