"""
Pydantic settings for environment configuration.

All variables use the GITHUB_CLIENT_ prefix and may also come from a .env file.
"""

from typing import Optional, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from ...plugins.auth_plugin import AuthMethod


class GitHubClientSettings(BaseSettings):
    """
    GitHub Client configuration from environment variables.

    Reads from:
    1. Environment variables (GITHUB_CLIENT_*)
    2. .env file
    3. Defaults

    Example .env file:
        GITHUB_CLIENT_ENTERPRISE_URL=https://ghe.example.com
        GITHUB_CLIENT_TIMEOUT_READ=60
        GITHUB_CLIENT_CACHE_DIR=/var/cache/github-client
        GITHUB_CLIENT_LOG_ENABLED=true
        GITHUB_CLIENT_LOG_LEVEL=DEBUG
        GITHUB_CLIENT_TOKEN=ghp_xxxxxxxxxxxxxxxx
        GITHUB_CLIENT_AUTH_METHOD=http_token
    """

    model_config = SettingsConfigDict(
        env_prefix='GITHUB_CLIENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # API
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base URL of the API")
    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    enterprise_url: Optional[str] = Field(default=None, description="GitHub Enterprise installation URL")
    cache_dir: Optional[str] = Field(default=None, description="diskcache directory for responses")

    # Timeouts
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)
    max_redirects: int = Field(default=5, ge=0)

    # Security
    verify_ssl: bool = Field(default=True)
    max_response_size: int = Field(default=100 * 1024 * 1024, gt=0)

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_file_path: Optional[str] = None
    log_rate_limit: bool = Field(default=True, description="Log X-RateLimit-* headers of responses")

    # Credentials (masked in summaries and logs)
    token: Optional[str] = Field(default=None, description="Token, login or client ID")
    password: Optional[str] = Field(default=None, description="Password or client secret")
    auth_method: Optional[str] = Field(default=None, description="One of AuthMethod values")

    @field_validator('base_url', 'enterprise_url')
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError(f"must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator('auth_method')
    @classmethod
    def validate_auth_method(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not AuthMethod.is_method(v):
            raise ValueError(
                f"unknown auth method {v!r}, expected one of: "
                f"{', '.join(m.value for m in AuthMethod)}"
            )
        return v

    @model_validator(mode='after')
    def validate_credentials(self) -> 'GitHubClientSettings':
        """Метод, требующий секрет, без секрета - ошибка конфигурации."""
        needs_secret = self.auth_method in (AuthMethod.HTTP_PASSWORD.value, AuthMethod.URL_CLIENT_ID.value)
        if needs_secret and self.token and not self.password:
            raise ValueError(f"auth method {self.auth_method!r} requires GITHUB_CLIENT_PASSWORD")
        return self
