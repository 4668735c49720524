"""
Система конфигурации для GitHub Client.

Все конфиги immutable (frozen dataclasses). Меняется только цепочка плагинов
клиента, но не его конфигурация.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Union, TYPE_CHECKING, Mapping
from types import MappingProxyType

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_API_VERSION = "v3"
DEFAULT_MEDIA_PRODUCT = "github"
DEFAULT_USER_AGENT = "github-client-core (python-requests)"

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

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise InvalidArgumentError("connect timeout must be positive")
        if self.read <= 0:
            raise InvalidArgumentError("read timeout must be positive")

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
        pool_block: Блокировать при достижении лимита
        max_redirects: Максимум редиректов для RedirectPlugin

    Examples:
        >>> ConnectionPoolConfig(pool_maxsize=20)
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False
    max_redirects: int = 5

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise InvalidArgumentError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise InvalidArgumentError("pool_maxsize must be positive")
        if self.max_redirects < 0:
            raise InvalidArgumentError("max_redirects must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    Конфигурация безопасности.

    Args:
        max_response_size: Максимальный размер ответа (байты)
        verify_ssl: Проверять SSL сертификаты

    Examples:
        >>> SecurityConfig(max_response_size=50*1024*1024)  # 50MB
        >>> SecurityConfig(verify_ssl=False)  # Для GitHub Enterprise с self-signed сертификатом
    """
    max_response_size: int = 100 * 1024 * 1024  # 100MB
    verify_ssl: bool = True

    def __post_init__(self):
        """Валидация."""
        if self.max_response_size <= 0:
            raise InvalidArgumentError("max_response_size must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Dict[str, str]]) -> Mapping[str, str]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-GitHub-Api-Version": "2022-11-28"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))

@dataclass(frozen=True)
class GitHubClientConfig:
    """
    Главная конфигурация GitHubClient.

    Args:
        base_url: Базовый URL API (по умолчанию https://api.github.com/)
        api_version: Версия API, определяет заголовок Accept
        media_product: Продукт в media type (application/vnd.<product>.<version>+json)
        user_agent: Значение User-Agent
        enterprise_url: URL инсталляции GitHub Enterprise (опционально)
        cache_dir: Директория для diskcache кэша ответов (опционально)
        headers: Дополнительные заголовки по умолчанию
        proxies: Прокси конфигурация для транспорта
        timeout: Конфигурация таймаутов
        pool: Конфигурация connection pool
        security: Конфигурация безопасности
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = GitHubClientConfig()
        >>> config = GitHubClientConfig(enterprise_url="https://ghe.example.com")
        >>> config = GitHubClientConfig.create(api_version="v3", timeout=60)
    """
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    media_product: str = DEFAULT_MEDIA_PRODUCT
    user_agent: str = DEFAULT_USER_AGENT
    enterprise_url: Optional[str] = None
    cache_dir: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    proxies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и заморозка mutable словарей."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))
        if isinstance(self.proxies, dict):
            object.__setattr__(self, 'proxies', _freeze_dict(self.proxies))

        if not self.base_url or not self.base_url.startswith(("http://", "https://")):
            raise InvalidArgumentError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        if not self.api_version:
            raise InvalidArgumentError("api_version must not be empty")
        if self.enterprise_url is not None and not self.enterprise_url.startswith(("http://", "https://")):
            raise InvalidArgumentError(f"enterprise_url must be an absolute http(s) URL, got {self.enterprise_url!r}")

    @property
    def accept_header(self) -> str:
        """Значение Accept для текущей версии API."""
        return f"application/vnd.{self.media_product}.{self.api_version}+json"

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        enterprise_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        verify_ssl: bool = True,
        max_redirects: Optional[int] = None,
        cache_dir: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        proxies: Optional[Dict[str, str]] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'GitHubClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            base_url: Базовый URL
            api_version: Версия API
            enterprise_url: URL GitHub Enterprise
            user_agent: User-Agent
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            verify_ssl: Проверять SSL
            max_redirects: Максимальное количество редиректов
            cache_dir: Директория для кэша ответов
            headers: Заголовки
            proxies: Прокси
            logging: Конфигурация логирования

        Returns:
            GitHubClientConfig instance

        Examples:
            >>> config = GitHubClientConfig.create(timeout=60)
            >>> config = GitHubClientConfig.create(timeout=(5, 60), enterprise_url="https://ghe.local")
        """
        if isinstance(timeout, TimeoutConfig):
            timeout_cfg = timeout
        elif isinstance(timeout, tuple):
            timeout_cfg = TimeoutConfig(connect=timeout[0], read=timeout[1])
        else:
            timeout_cfg = TimeoutConfig(connect=5, read=timeout)

        pool_cfg = (
            ConnectionPoolConfig(max_redirects=max_redirects)
            if max_redirects is not None else ConnectionPoolConfig()
        )

        return cls(
            base_url=base_url or DEFAULT_BASE_URL,
            api_version=api_version or DEFAULT_API_VERSION,
            user_agent=user_agent or DEFAULT_USER_AGENT,
            enterprise_url=enterprise_url,
            cache_dir=cache_dir,
            headers=headers or {},
            proxies=proxies or {},
            timeout=timeout_cfg,
            pool=pool_cfg,
            security=SecurityConfig(verify_ssl=verify_ssl),
            logging=logging,
        )

    def with_overrides(self, **changes) -> 'GitHubClientConfig':
        """
        Создать новый конфиг с изменёнными полями.

        Example:
            >>> new_config = config.with_overrides(api_version="v4")
        """
        return replace(self, **changes)
