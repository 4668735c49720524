"""
Structured logger for GitHub Client.

Wraps a stdlib logger under the "github_client" namespace with handlers,
formatters and filters built from LoggingConfig. Keyword fields are masked
with mask_sensitive_data before they reach any handler.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data

LOGGER_NAME = "github_client"


class GitHubClientLogger:
    """
    Structured logger for GitHub Client.

    Example:
        >>> logger = GitHubClientLogger(LoggingConfig.create(level="INFO", format="colored"))
        >>> logger.info("Request started", method="GET", url="https://api.github.com/user")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = LOGGER_NAME):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self._get_level(self.config.level)
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Reinitialization replaces previous handlers
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(
                level=level,
                formatter=formatter,
                filters=filters
            ))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    def _log(self, level: int, message: str, fields: dict, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """
        Log error message.

        Example:
            >>> logger.error("Request failed", error_type="NotFoundError", status_code=404)
        """
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error with traceback. Call from an exception handler."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            try:
                handler.flush()
                handler.close()
            except (OSError, ValueError):
                # Stream already closed by the owner
                pass
            self._logger.removeHandler(handler)

        # Логгер библиотеки снова отдает записи корневому логгеру
        self._logger.propagate = True
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_logger: Optional[GitHubClientLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> GitHubClientLogger:
    """
    Global logger instance.

    config is only used on the first call; use configure_logging() to
    replace an existing logger.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = GitHubClientLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> GitHubClientLogger:
    """
    Replace the global logger with a newly configured one.

    Example:
        >>> logger = configure_logging(LoggingConfig.create(level="DEBUG", format="json"))
    """
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = GitHubClientLogger(config)
    return _default_logger
