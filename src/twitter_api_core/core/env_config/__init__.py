"""
Environment configuration for the Twitter API client.

Load configuration from .env files and environment variables.

Example:
    >>> from twitter_api_core.core.env_config import load_from_env
    >>>
    >>> # Load from ./.env and TWITTER_API_* variables
    >>> config = load_from_env()
    >>>
    >>> # Load with overrides
    >>> config = load_from_env(env_file="prod.env", debug=True)
"""

from .loader import load_from_env
from .validator import ClientSettings

__all__ = [
    "load_from_env",
    "ClientSettings",
]
