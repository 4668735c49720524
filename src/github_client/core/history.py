# src/github_client/core/history.py

from typing import Optional

import requests

from .context import RequestContext


class ResponseHistory:
    """
    Хранит последний обмен запрос/ответ.

    Заполняется HistoryPlugin, каждая новая запись перезаписывает предыдущую.
    """

    def __init__(self):
        self._last_request: Optional[RequestContext] = None
        self._last_response: Optional[requests.Response] = None
        self._last_error: Optional[Exception] = None

    def add_success(self, ctx: RequestContext, response: requests.Response) -> None:
        """Записывает успешный обмен (любой полученный ответ, в т.ч. 4xx/5xx)."""
        self._last_request = ctx
        self._last_response = response
        self._last_error = None

    def add_failure(self, ctx: RequestContext, error: Exception) -> None:
        """Записывает запрос, на который ответ не был получен."""
        self._last_request = ctx
        self._last_response = None
        self._last_error = error

    def clear(self) -> None:
        """Очищает историю"""
        self._last_request = None
        self._last_response = None
        self._last_error = None

    @property
    def last_request(self) -> Optional[RequestContext]:
        return self._last_request

    @property
    def last_response(self) -> Optional[requests.Response]:
        return self._last_response

    @property
    def last_error(self) -> Optional[Exception]:
        return self._last_error

    def get_last_response(self) -> Optional[requests.Response]:
        """Последний полученный ответ или None."""
        return self._last_response
