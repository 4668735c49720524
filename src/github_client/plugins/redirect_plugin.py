# src/github_client/plugins/redirect_plugin.py

import logging
from typing import List, Set
from urllib.parse import urljoin, urlsplit

import requests

from .plugin import Plugin, NextCall
from ..core.context import RequestContext
from ..core.exceptions import CircularRedirectionError, InvalidArgumentError, TooManyRedirectsError

logger = logging.getLogger(__name__)

REDIRECT_STATUS_CODES = {301, 302, 303, 307, 308}

# Ключ metadata: запрос ушел на другой хост после редиректа
STRIP_CREDENTIALS = 'strip_credentials'

# Заголовки тела запроса, которые теряют смысл при смене метода на GET
BODY_HEADERS = ('Content-Type', 'Content-Length')


class RedirectPlugin(Plugin):
    """
    Плагин следует по редиректам (Location).

    Правила:
    - 303, а также 301/302 для не-GET/HEAD запросов -> GET без тела
    - 307/308 сохраняют метод и тело
    - при смене хоста заголовок Authorization удаляется
    - повторный визит того же URL -> CircularRedirectionError
    - больше max_redirects переходов -> TooManyRedirectsError

    Промежуточные ответы доступны в response.history итогового ответа.
    """

    def __init__(self, max_redirects: int = 5):
        """
        Args:
            max_redirects: Максимальное количество переходов
        """
        if max_redirects < 0:
            raise InvalidArgumentError("max_redirects must be non-negative")
        self.max_redirects = max_redirects

    def handle_request(self, ctx: RequestContext, next_call: NextCall) -> requests.Response:
        visited: Set[str] = {ctx.url}
        chain: List[requests.Response] = []
        current = ctx

        while True:
            response = next_call(current)

            location = response.headers.get('Location')
            if response.status_code not in REDIRECT_STATUS_CODES or not location:
                if chain:
                    response.history = chain
                return response

            if len(chain) >= self.max_redirects:
                raise TooManyRedirectsError(ctx.url, self.max_redirects)

            chain.append(response)
            current = self._build_redirect(current, response.status_code, location)

            if current.url in visited:
                raise CircularRedirectionError(current.url, self.max_redirects)
            visited.add(current.url)

            logger.debug(f"Redirect {response.status_code} -> {current.url}")

    def _build_redirect(self, ctx: RequestContext, status_code: int, location: str) -> RequestContext:
        """Строит запрос для следующего перехода"""
        redirected = ctx.copy()
        redirected.url = urljoin(ctx.url, location)
        # Query уже входит в Location
        redirected.params = {}

        if status_code == 303 or (status_code in (301, 302) and ctx.method not in ('GET', 'HEAD')):
            redirected.method = 'GET'
            redirected.body = None
            for name in BODY_HEADERS:
                redirected.headers.pop(name, None)

        if urlsplit(redirected.url).netloc != urlsplit(ctx.url).netloc:
            redirected.headers.pop('Authorization', None)
            # AuthenticationPlugin не добавляет учетные данные для чужого хоста
            redirected.metadata[STRIP_CREDENTIALS] = True

        return redirected
