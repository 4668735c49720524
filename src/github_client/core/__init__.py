"""Core GitHub Client модули."""

from .config import (
    TimeoutConfig,
    ConnectionPoolConfig,
    SecurityConfig,
    GitHubClientConfig,
)
from .exceptions import (
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
    classify_requests_exception,
)
from .context import RequestContext
from .history import ResponseHistory
from .transport import Transport, RequestsTransport

# builder и github_client зависят от plugins и импортируются напрямую:
#   from github_client.core.builder import PluginChainBuilder

__all__ = [
    # Config
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",
    "GitHubClientConfig",
    # Core
    "RequestContext",
    "ResponseHistory",
    "Transport",
    "RequestsTransport",
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
    "classify_requests_exception",
]
