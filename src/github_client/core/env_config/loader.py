"""
Configuration loader from environment variables and .env files.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import (
    GitHubClientConfig,
    TimeoutConfig,
    SecurityConfig,
    ConnectionPoolConfig,
)
from ..logging.config import LoggingConfig
from .validator import GitHubClientSettings
from .secrets import mask_dict_secrets


@dataclass(frozen=True)
class GitHubCredentials:
    """
    Учетные данные для GitHubClient.authenticate().

    Attributes:
        token_or_login: Токен, логин или client ID
        password: Пароль или client secret
        auth_method: Метод аутентификации (None = выбирает authenticate())
    """
    token_or_login: str
    password: Optional[str] = None
    auth_method: Optional[str] = None

    def __repr__(self) -> str:
        masked = mask_dict_secrets({'token': self.token_or_login, 'password': self.password})
        return (
            f"GitHubCredentials(token_or_login={masked['token']!r}, "
            f"password={masked['password']!r}, auth_method={self.auth_method!r})"
        )


def _load_settings(env_file: Optional[str], overrides: dict) -> GitHubClientSettings:
    kwargs = dict(overrides)
    if env_file is not None:
        kwargs['_env_file'] = env_file
    return GitHubClientSettings(**kwargs)


def load_from_env(env_file: Optional[str] = None, **overrides) -> GitHubClientConfig:
    """
    Load GitHubClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (GitHubClientSettings field names)
    2. Environment variables (GITHUB_CLIENT_*)
    3. .env file (env_file or ./.env)
    4. Defaults

    Raises:
        pydantic.ValidationError: Invalid values

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.ci", timeout_read=120)
    """
    settings = _load_settings(env_file, overrides)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
            log_rate_limit=settings.log_rate_limit,
        )

    return GitHubClientConfig(
        base_url=settings.base_url,
        api_version=settings.api_version,
        user_agent=settings.user_agent,
        enterprise_url=settings.enterprise_url,
        cache_dir=settings.cache_dir,
        timeout=TimeoutConfig(
            connect=settings.timeout_connect,
            read=settings.timeout_read,
        ),
        pool=ConnectionPoolConfig(
            pool_connections=settings.pool_connections,
            pool_maxsize=settings.pool_maxsize,
            max_redirects=settings.max_redirects,
        ),
        security=SecurityConfig(
            max_response_size=settings.max_response_size,
            verify_ssl=settings.verify_ssl,
        ),
        logging=logging_config,
    )


def load_credentials(env_file: Optional[str] = None, **overrides) -> Optional[GitHubCredentials]:
    """
    Load credentials from GITHUB_CLIENT_TOKEN / _PASSWORD / _AUTH_METHOD.

    Returns:
        GitHubCredentials or None if no token is configured

    Example:
        >>> credentials = load_credentials()
        >>> if credentials:
        ...     client.authenticate(credentials.token_or_login, credentials.password,
        ...                         credentials.auth_method)
    """
    settings = _load_settings(env_file, overrides)
    if not settings.token:
        return None
    return GitHubCredentials(
        token_or_login=settings.token,
        password=settings.password,
        auth_method=settings.auth_method,
    )


def print_config_summary(config: GitHubClientConfig, credentials: Optional[GitHubCredentials] = None):
    """
    Print configuration summary with secrets masked.

    Example:
        >>> print_config_summary(load_from_env(), load_credentials())
        GitHubClientConfig:
          base_url: https://api.github.com/
          api_version: v3 (application/vnd.github.v3+json)
          ...
    """
    print("GitHubClientConfig:")
    print(f"  base_url: {config.base_url}")
    print(f"  api_version: {config.api_version} ({config.accept_header})")
    print(f"  user_agent: {config.user_agent}")
    if config.enterprise_url:
        print(f"  enterprise_url: {config.enterprise_url}")
    if config.cache_dir:
        print(f"  cache_dir: {config.cache_dir}")
    print(f"  timeout: connect={config.timeout.connect}s, read={config.timeout.read}s")
    print(f"  security: verify_ssl={config.security.verify_ssl}, max_size={config.security.max_response_size}")
    print(f"  pool: connections={config.pool.pool_connections}, maxsize={config.pool.pool_maxsize}, "
          f"max_redirects={config.pool.max_redirects}")
    if config.headers:
        print(f"  headers: {mask_dict_secrets(dict(config.headers))}")

    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
        if config.logging.enable_file:
            print(f"    file: {config.logging.file_path}")

    if credentials:
        masked = mask_dict_secrets({
            'token': credentials.token_or_login,
            'password': credentials.password,
        })
        print(f"  auth: method={credentials.auth_method or 'default'}, token={masked['token']}")
        if credentials.password:
            print(f"    password: {masked['password']}")
