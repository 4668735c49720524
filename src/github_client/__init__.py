"""GitHub Client - GitHub v3 REST API client built on a plugin chain."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.github_client import GitHubClient
from .core.builder import PluginChainBuilder, PluginClient
from .core.config import (
    GitHubClientConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
    SecurityConfig,
)
from .core.context import RequestContext
from .core.transport import Transport, RequestsTransport
from .core.exceptions import (
    GitHubClientException,
    InvalidArgumentError,
    UndefinedMethodError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    ResponseTooLargeError,
    TooManyRedirectsError,
    CircularRedirectionError,
    HTTPError,
    BadRequestError,
    UnauthorizedError,
    TwoFactorAuthenticationRequiredError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
    ApiLimitExceedError,
    ServerError,
)
from .plugins.plugin import Plugin as BasePlugin
from .plugins.auth_plugin import AuthMethod, AuthenticationPlugin
from .plugins.cache_plugin import CachePlugin, MemoryCachePool

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('github_client')
logging.getLogger('github_client').addHandler(logging.NullHandler())

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("github-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "GitHubClient",
    "PluginChainBuilder",
    "PluginClient",
    "RequestContext",
    "Transport",
    "RequestsTransport",

    # Config
    "GitHubClientConfig",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",

    # Exceptions
    "GitHubClientException",
    "InvalidArgumentError",
    "UndefinedMethodError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "ResponseTooLargeError",
    "TooManyRedirectsError",
    "CircularRedirectionError",
    "HTTPError",
    "BadRequestError",
    "UnauthorizedError",
    "TwoFactorAuthenticationRequiredError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationFailedError",
    "ApiLimitExceedError",
    "ServerError",

    # Plugins
    "BasePlugin",
    "AuthMethod",
    "AuthenticationPlugin",
    "CachePlugin",
    "MemoryCachePool",

    # Version
    "__version__",
]
