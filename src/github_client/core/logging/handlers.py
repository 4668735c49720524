"""
Обработчики логов GitHubClientLogger: консоль и файл с ротацией.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import IO, Optional, Sequence


def _configure(handler: logging.Handler, level: int, formatter: logging.Formatter,
               filters: Optional[Sequence[logging.Filter]]) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    for log_filter in filters or ():
        handler.addFilter(log_filter)
    return handler


def create_console_handler(
    level: int,
    formatter: logging.Formatter,
    filters: Optional[Sequence[logging.Filter]] = None,
    stream: Optional[IO[str]] = None
) -> logging.StreamHandler:
    """
    Обработчик для консоли.

    Args:
        stream: Поток вывода (по умолчанию sys.stdout)

    Example:
        >>> create_console_handler(logging.INFO, ColoredFormatter(), stream=sys.stderr)
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    _configure(handler, level, formatter, filters)
    return handler


def create_file_handler(
    file_path: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    filters: Optional[Sequence[logging.Filter]] = None
) -> RotatingFileHandler:
    """
    Файл с ротацией по размеру, родительская директория создается.

    Example:
        >>> create_file_handler("/var/log/github-client/requests.log", logging.INFO, JSONFormatter())
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    _configure(handler, level, formatter, filters)
    return handler
