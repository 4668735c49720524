"""
Конфигурация логирования GitHub Client.

Структурированное логирование включается явно: GitHubClient создает
GitHubClientLogger только если задан GitHubClientConfig.logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional, Dict, Any, Mapping

from ..exceptions import InvalidArgumentError


class LogLevel(str, Enum):
    """Уровни логирования."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Форматы вывода."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Конфигурация логирования запросов к GitHub.

    Args:
        level: Уровень (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Формат вывода (json, text, colored)
        enable_console: Писать в stdout
        enable_file: Писать в файл с ротацией
        file_path: Путь к файлу (обязателен при enable_file=True)
        max_bytes: Размер файла до ротации
        backup_count: Сколько старых файлов хранить
        enable_correlation_id: Добавлять request_id текущего запроса
        log_rate_limit: Добавлять X-RateLimit-Remaining/Reset в "Request completed"
        extra_fields: Постоянные поля каждой записи (только для чтения)

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json",
        ...                               extra_fields={"installation": "ghe-prod"})
        >>> client = GitHubClient(config=GitHubClientConfig.create(logging=config))
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_correlation_id: bool = True
    log_rate_limit: bool = True
    extra_fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        """Валидация и заморозка extra_fields."""
        if isinstance(self.extra_fields, dict):
            object.__setattr__(self, 'extra_fields', MappingProxyType(dict(self.extra_fields)))

        if self.enable_file and not self.file_path:
            raise InvalidArgumentError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise InvalidArgumentError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise InvalidArgumentError(f"backup_count must be non-negative, got {self.backup_count}")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_correlation_id: bool = True,
        log_rate_limit: bool = True,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Конфигурация из строковых значений (env, YAML).

        Raises:
            InvalidArgumentError: Неизвестный уровень или формат
        """
        try:
            log_level = LogLevel(level.upper())
            log_format = LogFormat(format.lower())
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid logging option: {e}") from e

        return cls(
            level=log_level,
            format=log_format,
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            enable_correlation_id=enable_correlation_id,
            log_rate_limit=log_rate_limit,
            extra_fields=extra_fields or {}
        )
