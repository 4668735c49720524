# src/github_client/plugins/auth_plugin.py

import base64
from enum import Enum
from typing import Optional, Union

import requests

from .plugin import Plugin
from .redirect_plugin import STRIP_CREDENTIALS
from ..core.context import RequestContext
from ..core.exceptions import InvalidArgumentError


class AuthMethod(str, Enum):
    """Поддерживаемые методы аутентификации GitHub."""

    # Устаревший вход с токеном в query string (?access_token=)
    URL_TOKEN = "url_token"
    # Не вход, а повышенный лимит для неаутентифицированных запросов приложения
    URL_CLIENT_ID = "url_client_id"
    # HTTP Basic с логином и паролем
    HTTP_PASSWORD = "http_password"
    # Заголовок Authorization: token <token>
    HTTP_TOKEN = "http_token"

    @classmethod
    def parse(cls, value: Union[str, "AuthMethod"]) -> "AuthMethod":
        """
        Приводит строку к AuthMethod.

        Raises:
            InvalidArgumentError: Если метод неизвестен
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(
                f'Authentication method "{value}" not implemented. '
                f"Must be one of: {', '.join(m.value for m in cls)}"
            ) from None

    @classmethod
    def is_method(cls, value: object) -> bool:
        return isinstance(value, str) and value in {m.value for m in cls}


class AuthenticationPlugin(Plugin):
    """
    Плагин аутентификации запросов к GitHub.

    Example:
        # Personal access token
        plugin = AuthenticationPlugin("ghp_xxx", None, AuthMethod.HTTP_TOKEN)

        # Логин и пароль
        plugin = AuthenticationPlugin("octocat", "secret", AuthMethod.HTTP_PASSWORD)

        # client_id + client_secret OAuth приложения
        plugin = AuthenticationPlugin("client-id", "client-secret", AuthMethod.URL_CLIENT_ID)
    """

    def __init__(
        self,
        token_or_login: str,
        password: Optional[str],
        method: Union[str, AuthMethod],
    ):
        """
        Args:
            token_or_login: Токен, логин или client ID
            password: Пароль или client secret (для методов, которым он нужен)
            method: Метод аутентификации

        Raises:
            InvalidArgumentError: Неизвестный метод или не указан секрет
        """
        self.method = AuthMethod.parse(method)

        if not token_or_login:
            raise InvalidArgumentError("Token or login must not be empty")
        if self.method in (AuthMethod.HTTP_PASSWORD, AuthMethod.URL_CLIENT_ID) and password is None:
            raise InvalidArgumentError(
                f'Authentication method "{self.method.value}" requires a password or secret'
            )

        self.token_or_login = token_or_login
        self.password = password

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """Добавляет учетные данные в заголовки или query string"""
        if ctx.metadata.get(STRIP_CREDENTIALS):
            return None

        if self.method is AuthMethod.HTTP_PASSWORD:
            credentials = f"{self.token_or_login}:{self.password}".encode("utf-8")
            ctx.headers['Authorization'] = "Basic " + base64.b64encode(credentials).decode("ascii")

        elif self.method is AuthMethod.HTTP_TOKEN:
            ctx.headers['Authorization'] = f"token {self.token_or_login}"

        elif self.method is AuthMethod.URL_CLIENT_ID:
            ctx.params['client_id'] = self.token_or_login
            ctx.params['client_secret'] = self.password

        elif self.method is AuthMethod.URL_TOKEN:
            ctx.params['access_token'] = self.token_or_login

        return None

    def __repr__(self) -> str:
        return f"AuthenticationPlugin(method={self.method.value!r})"
