# src/github_client/api/base.py

import json
from typing import Any, Dict, Optional, TYPE_CHECKING

import requests

from ..plugins.exception_thrower import get_content

if TYPE_CHECKING:
    from ..core.github_client import GitHubClient


class AbstractApi:
    """
    Базовый класс обёрток над группами эндпоинтов.

    Обёртка - тонкая прослойка над GitHubClient.get/post/put/patch/delete:
    тело запроса кодируется в JSON, JSON ответ декодируется.

    Example:
        >>> class Emojis(AbstractApi):
        ...     def all(self):
        ...         return self.get('/emojis')
    """

    def __init__(self, client: 'GitHubClient'):
        self.client = client

    @staticmethod
    def _encode(body: Any) -> Optional[str]:
        if body is None:
            return None
        return json.dumps(body)

    @staticmethod
    def _json_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {'Content-Type': 'application/json'}
        merged.update(headers or {})
        return merged

    def get(self, path: str, params: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None) -> Any:
        response = self.client.get(path, params=params, headers=headers)
        return get_content(response)

    def head(self, path: str, params: Optional[Dict[str, Any]] = None,
             headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """HEAD запрос, возвращает сырой ответ (тела нет)."""
        return self.client.request(path, method='HEAD', params=params, headers=headers)

    def post(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        response = self.client.post(path, self._encode(body), self._json_headers(headers))
        return get_content(response)

    def put(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        response = self.client.put(path, self._encode(body), self._json_headers(headers))
        return get_content(response)

    def patch(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        response = self.client.patch(path, self._encode(body), self._json_headers(headers))
        return get_content(response)

    def delete(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        response = self.client.delete(path, self._encode(body), self._json_headers(headers))
        return get_content(response)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
