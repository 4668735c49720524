"""
Фильтры логов: correlation id запроса и постоянные поля.

GitHubClient.request() выставляет correlation id равным
RequestContext.request_id на время вызова, поэтому все записи одного
запроса (включая редиректы и пересборку цепочки) имеют общий id.
"""

import logging
import threading
from typing import Any, Mapping, Optional


# request_id текущего вызова, свой для каждого потока
_current_request = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """
    Привязывает записи текущего потока к запросу.

    Example:
        >>> set_correlation_id(ctx.request_id)
    """
    _current_request.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_current_request, 'correlation_id', None)


def clear_correlation_id() -> None:
    """Снимает привязку после завершения запроса."""
    _current_request.__dict__.pop('correlation_id', None)


class CorrelationIdFilter(logging.Filter):
    """Добавляет correlation_id, если поток сейчас выполняет запрос."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Постоянные поля LoggingConfig.extra_fields.

    Поля записи (method, url, status_code, ...) не перезаписываются.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"installation": "ghe-prod"}))
    """

    def __init__(self, extra_fields: Mapping[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
