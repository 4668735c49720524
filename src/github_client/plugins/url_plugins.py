# src/github_client/plugins/url_plugins.py

from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from .plugin import Plugin
from ..core.context import RequestContext
from ..core.exceptions import InvalidArgumentError


class AddHostPlugin(Plugin):
    """
    Плагин подставляет схему и хост в URL запроса.

    Example:
        # Только для запросов без хоста
        plugin = AddHostPlugin("https://api.github.com")

        # Переписать хост у всех запросов, в том числе абсолютных
        plugin = AddHostPlugin("https://ghe.example.com", replace=True)
    """

    def __init__(self, host: str, replace: bool = False):
        """
        Args:
            host: URL вида http(s)://hostname[:port], путь игнорируется
            replace: Заменять хост даже если он уже указан в запросе

        Raises:
            InvalidArgumentError: Если в host нет схемы или хоста
        """
        parts = urlsplit(host)
        if not parts.scheme or not parts.netloc:
            raise InvalidArgumentError(f'Host "{host}" must contain a scheme and a hostname')

        self.host = host
        self.replace = replace
        self._scheme = parts.scheme
        self._netloc = parts.netloc

    @property
    def origin(self) -> str:
        """scheme://host[:port]/ без пути"""
        return f"{self._scheme}://{self._netloc}/"

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """Переписывает схему и хост"""
        parts = urlsplit(ctx.url)
        if self.replace or not parts.netloc:
            path = parts.path if parts.path.startswith('/') else '/' + parts.path
            ctx.url = urlunsplit((self._scheme, self._netloc, path, parts.query, parts.fragment))
        return None

    def __repr__(self) -> str:
        return f"AddHostPlugin(host={self.host!r}, replace={self.replace})"


class PathPrependPlugin(Plugin):
    """
    Плагин добавляет префикс к пути запроса.

    Префикс не добавляется повторно, если путь уже с него начинается.
    С host префикс добавляется только к запросам на этот хост.

    Example:
        >>> plugin = PathPrependPlugin("/api/v3/", host="https://ghe.example.com")
        >>> # https://ghe.example.com/user -> https://ghe.example.com/api/v3/user
        >>> # https://storage.example.net/a.zip не меняется
    """

    def __init__(self, path: str, host: Optional[str] = None):
        """
        Args:
            path: Префикс пути, слеши по краям нормализуются
            host: Ограничить префикс запросами на этот хост (None - все запросы)
        """
        self.path = path
        self.host = host
        self._prefix = '/' + path.strip('/')
        self._netloc = urlsplit(host).netloc.lower() if host else None

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """Добавляет префикс к пути"""
        if self._prefix == '/':
            return None

        parts = urlsplit(ctx.url)
        if self._netloc is not None and parts.netloc.lower() != self._netloc:
            return None

        current = parts.path or '/'
        if current == self._prefix or current.startswith(self._prefix + '/'):
            return None

        new_path = f"{self._prefix}/{current.lstrip('/')}"
        ctx.url = urlunsplit((parts.scheme, parts.netloc, new_path, parts.query, parts.fragment))
        return None

    def __repr__(self) -> str:
        return f"PathPrependPlugin(path={self.path!r}, host={self.host!r})"
