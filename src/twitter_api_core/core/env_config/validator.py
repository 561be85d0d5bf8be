"""
Pydantic validators for environment configuration.

Flat ``TWITTER_API_*`` variables, validated before they reach ClientConfig.
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import DEFAULT_BASE_URL, FORM_ENCODED_ENDPOINTS


class ClientSettings(BaseSettings):
    """
    Twitter API client configuration from environment variables.

    Reads from:
    1. Explicit keyword arguments
    2. Environment variables (TWITTER_API_*)
    3. .env file
    4. Defaults

    Example .env file:
        TWITTER_API_BASE_URL=https://api.twitter.com/2
        TWITTER_API_DEBUG=true
        TWITTER_API_TIMEOUT_READ=60
        TWITTER_API_LOG_ENABLED=true
        TWITTER_API_LOG_FORMAT=json

    Usage:
        >>> settings = ClientSettings()
        >>> settings.base_url
        'https://api.twitter.com/2'
    """

    model_config = SettingsConfigDict(
        env_prefix='TWITTER_API_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base URL for relative endpoints")
    debug: bool = Field(default=False, description="Diagnostic request/response logging")
    verify_ssl: bool = Field(default=True)
    chunk_size: int = Field(default=8192, gt=0, description="Body read chunk size in bytes")
    form_encoded_prefix: str = Field(default=FORM_ENCODED_ENDPOINTS)

    # Timeouts (flat structure for env vars)
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)
    timeout_total: Optional[float] = Field(default=None, gt=0)

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)

    # Logging
    log_enabled: bool = Field(default=False, description="Build a LoggingConfig from the log_* values")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_request_id: bool = Field(default=True)

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """file_path is required when file logging is on."""
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v
