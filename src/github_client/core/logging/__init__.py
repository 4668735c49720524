"""
Структурированные логи запросов GitHubClient.

Example:
    >>> from github_client.core.logging import LoggingConfig
    >>> from github_client import GitHubClient, GitHubClientConfig
    >>>
    >>> config = GitHubClientConfig.create(
    ...     logging=LoggingConfig.create(level="DEBUG", format="json")
    ... )
    >>> client = GitHubClient(config=config)
    >>> client.get("/rate_limit")
    {"message": "Request started", "method": "GET", "correlation_id": "...", ...}
    {"message": "Request completed", "status_code": 200, "rate_limit_remaining": "4999", ...}
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import GitHubClientLogger, LOGGER_NAME, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter, set_correlation_id, clear_correlation_id

__all__ = [
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    "GitHubClientLogger",
    "LOGGER_NAME",
    "get_logger",
    "configure_logging",
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "clear_correlation_id",
]
