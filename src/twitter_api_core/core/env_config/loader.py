"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration.
"""

from typing import Optional

from ..config import ClientConfig, ConnectionPoolConfig, TimeoutConfig
from ..logging.config import LoggingConfig
from .validator import ClientSettings


def _logging_config(settings: ClientSettings) -> Optional[LoggingConfig]:
    if not settings.log_enabled and not settings.log_enable_file:
        return None

    return LoggingConfig.create(
        level=settings.log_level,
        format=settings.log_format,
        enable_console=settings.log_enable_console,
        enable_file=settings.log_enable_file,
        file_path=settings.log_file_path,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        enable_request_id=settings.log_enable_request_id,
    )


def load_from_env(env_file: Optional[str] = None, **overrides) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (ClientSettings field names)
    2. Environment variables (TWITTER_API_*)
    3. .env file (``env_file`` or ./.env)
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: Explicit config overrides

    Raises:
        pydantic.ValidationError: A value is out of range or malformed

    Example:
        >>> config = load_from_env(debug=True, timeout_read=60)
        >>> config.timeout.read
        60.0
    """
    if env_file is None:
        settings = ClientSettings(**overrides)
    else:
        settings = ClientSettings(_env_file=env_file, **overrides)

    return ClientConfig(
        base_url=settings.base_url,
        timeout=TimeoutConfig(
            connect=settings.timeout_connect,
            read=settings.timeout_read,
            total=settings.timeout_total,
        ),
        pool=ConnectionPoolConfig(
            pool_connections=settings.pool_connections,
            pool_maxsize=settings.pool_maxsize,
        ),
        debug=settings.debug,
        logging=_logging_config(settings),
        form_encoded_prefix=settings.form_encoded_prefix,
        chunk_size=settings.chunk_size,
        verify_ssl=settings.verify_ssl,
    )
