# src/github_client/core/transport.py
from abc import ABC, abstractmethod
from typing import Optional
import logging

import requests
from requests.adapters import HTTPAdapter

from .config import GitHubClientConfig
from .context import RequestContext
from .exceptions import classify_requests_exception, ResponseTooLargeError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """
    Сырой HTTP транспорт, который оборачивает цепочка плагинов.

    Транспорт только отправляет запрос и возвращает ответ: редиректы,
    аутентификация и классификация статус кодов - задача плагинов.
    """

    @abstractmethod
    def send(self, ctx: RequestContext) -> requests.Response:
        """Отправляет запрос и возвращает ответ."""
        pass

    def close(self) -> None:
        """Освобождает ресурсы транспорта."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RequestsTransport(Transport):
    """
    Транспорт поверх requests.Session.

    Features:
        - Connection pooling через HTTPAdapter
        - Таймауты (connect, read)
        - Проверка SSL и прокси из конфига
        - Защита от слишком больших ответов
        - Редиректы отключены (их обрабатывает RedirectPlugin)

    Может разделяться между несколькими GitHubClient.
    """

    def __init__(
        self,
        config: Optional[GitHubClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            config: Конфигурация клиента (таймауты, пул, безопасность)
            session: Готовая сессия (если не указана, создается новая)
        """
        self._config = config or GitHubClientConfig()
        self._session = session or self._create_session()
        self._closed = False

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            pool_block=self._config.pool.pool_block,
            max_retries=0  # Ретраи не делаются на этом уровне
        )

        session.mount('http://', adapter)
        session.mount('https://', adapter)

        if self._config.proxies:
            session.proxies.update(self._config.proxies)

        return session

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(self, ctx: RequestContext) -> requests.Response:
        """
        Выполняет запрос.

        Raises:
            NetworkError: Ошибка сети или таймаут (уже классифицированная)
            ResponseTooLargeError: Ответ превышает security.max_response_size
        """
        try:
            response = self._session.request(
                method=ctx.method,
                url=ctx.url,
                headers=dict(ctx.headers),
                params=ctx.params or None,
                data=ctx.body,
                timeout=self._config.timeout.as_tuple(),
                verify=self._config.security.verify_ssl,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, ctx.url) from e

        max_size = self._config.security.max_response_size
        content_length = response.headers.get('Content-Length')
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            response.close()
            raise ResponseTooLargeError(int(content_length), max_size, ctx.url)

        if len(response.content) > max_size:
            raise ResponseTooLargeError(len(response.content), max_size, ctx.url)

        logger.debug(f"{ctx.method} {ctx.url} -> {response.status_code}")
        return response

    def close(self) -> None:
        """Закрывает сессию. Идемпотентно."""
        if self._closed:
            return
        self._session.close()
        self._closed = True
