# src/twitter_api_core/utils/sanitizer.py
"""
Маскирование чувствительных данных в диагностических логах.

Защищает bearer токены, OAuth подписи и секреты приложения от попадания
в логи debug режима.
"""

import re
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

MASK = "***REDACTED***"

# Ключи сравниваются точно (case-insensitive). Подстроки не используются:
# pagination поля вроде next_token/previous_token должны оставаться видимыми.
SENSITIVE_KEYS = {
    # Заголовки
    'authorization', 'proxy-authorization', 'cookie', 'set-cookie',
    'x-csrf-token',
    # OAuth 1.0a
    'oauth_token', 'oauth_token_secret', 'oauth_signature', 'oauth_verifier',
    'oauth_consumer_key',
    # OAuth 2.0 / app credentials
    'access_token', 'refresh_token', 'bearer_token', 'access_token_secret',
    'consumer_key', 'consumer_secret', 'app_key', 'app_secret',
    'client_id', 'client_secret', 'code_verifier',
    # Прочее
    'password', 'secret',
}

# Регулярные выражения для значений, встречающихся внутри строк
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/%]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'(oauth_(?:token|signature|consumer_key|token_secret)=")([^"]*)(")'), r'\1' + MASK + r'\3'),
]


def _is_sensitive_key(key: Any) -> bool:
    return str(key).lower() in SENSITIVE_KEYS


def _mask_string(text: str, mask: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement.replace(MASK, mask), text)
    return text


def mask_sensitive_data(data: Any, mask: str = MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными полями

    Examples:
        >>> mask_sensitive_data({"oauth_token": "abc", "next_token": "7140dibdnow9c7btw"})
        {'oauth_token': '***REDACTED***', 'next_token': '7140dibdnow9c7btw'}
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return _mask_string(data, mask)

    if isinstance(data, Mapping):
        return {
            key: mask if _is_sensitive_key(key) else mask_sensitive_data(value, mask)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def mask_headers(headers: Mapping[str, str], mask: str = MASK) -> Dict[str, str]:
    """
    Маскирует чувствительные заголовки HTTP.

    Работает с dict, requests.CaseInsensitiveDict и httpx.Headers.
    """
    return {
        key: mask if _is_sensitive_key(key) else value
        for key, value in headers.items()
    }


def mask_url(url: str, mask: str = MASK) -> str:
    """
    Маскирует чувствительные query параметры в URL.

    Examples:
        >>> mask_url("https://api.twitter.com/oauth/authenticate?oauth_token=abc")
        'https://api.twitter.com/oauth/authenticate?oauth_token=***REDACTED***'
    """
    parsed = urlparse(url)
    if not parsed.query:
        return url

    pairs = [
        (key, mask if _is_sensitive_key(key) else value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
    ]
    return urlunparse(parsed._replace(query=urlencode(pairs, safe='*')))


def add_sensitive_keys(*keys: str) -> None:
    """
    Добавляет ключи в глобальный список SENSITIVE_KEYS.

    Examples:
        >>> add_sensitive_keys('x-internal-token')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
