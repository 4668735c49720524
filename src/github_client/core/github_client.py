# src/github_client/core/github_client.py
from typing import Any, Dict, Mapping, Optional
import logging
import time

import diskcache
import requests
from requests.structures import CaseInsensitiveDict

from ..api import API_REGISTRY, AbstractApi
from ..plugins.auth_plugin import AuthMethod, AuthenticationPlugin
from ..plugins.cache_plugin import CachePlugin
from ..plugins.exception_thrower import ExceptionThrowerPlugin
from ..plugins.header_plugins import HeaderDefaultsPlugin
from ..plugins.history_plugin import HistoryPlugin
from ..plugins.plugin import Plugin
from ..plugins.redirect_plugin import RedirectPlugin
from ..plugins.url_plugins import AddHostPlugin, PathPrependPlugin
from ..plugins.user_agent_plugin import UserAgentPlugin
from .builder import PluginChainBuilder, PluginClient
from .config import GitHubClientConfig
from .context import RequestContext
from .exceptions import GitHubClientException, InvalidArgumentError, UndefinedMethodError
from .history import ResponseHistory
from .logging import GitHubClientLogger
from .logging.filters import set_correlation_id, clear_correlation_id
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Клиент GitHub v3 REST API.

    Запросы проходят через упорядоченную цепочку плагинов поверх
    транспорта. Цепочка по умолчанию (от внешнего слоя к внутреннему):

        ExceptionThrower -> History -> Redirect -> AddHost -> UserAgent -> HeaderDefaults

    Методы конфигурации (authenticate, add_headers, add_cache,
    set_enterprise_url, ...) меняют цепочку; собранный клиент
    пересобирается лениво, при первом запросе после изменения.

    Example:
        >>> client = GitHubClient()
        >>> client.authenticate("ghp_xxx", None, GitHubClient.AUTH_HTTP_TOKEN)
        >>> client.get("/user").json()["login"]
        'octocat'
        >>> client.api("repo").show("octocat", "Hello-World")

        >>> # GitHub Enterprise
        >>> client = GitHubClient(enterprise_url="https://ghe.example.com")
        >>> client.get("/user")  # https://ghe.example.com/api/v3/user
    """

    # Токены методов аутентификации
    AUTH_URL_TOKEN = AuthMethod.URL_TOKEN.value
    AUTH_URL_CLIENT_ID = AuthMethod.URL_CLIENT_ID.value
    AUTH_HTTP_PASSWORD = AuthMethod.HTTP_PASSWORD.value
    AUTH_HTTP_TOKEN = AuthMethod.HTTP_TOKEN.value

    def __init__(
        self,
        transport: Optional[Transport] = None,
        api_version: Optional[str] = None,
        enterprise_url: Optional[str] = None,
        config: Optional[GitHubClientConfig] = None,
    ):
        """
        Args:
            transport: Сырой транспорт (по умолчанию RequestsTransport из config).
                       Переданный транспорт не закрывается в close().
            api_version: Версия API (переопределяет config.api_version)
            enterprise_url: URL GitHub Enterprise (переопределяет config.enterprise_url)
            config: Конфигурация клиента
        """
        config = config or GitHubClientConfig()
        if api_version:
            config = config.with_overrides(api_version=api_version)
        self._config = config

        self._owns_transport = transport is None
        if transport is None:
            transport = RequestsTransport(config)

        self._history = ResponseHistory()
        self._api_url = config.base_url
        self._headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self._builder = PluginChainBuilder(transport)
        self._http_client: Optional[PluginClient] = None
        self._disk_cache: Optional[diskcache.Cache] = None
        self._logger: Optional[GitHubClientLogger] = (
            GitHubClientLogger(config.logging) if config.logging else None
        )

        self._builder.add_plugin(ExceptionThrowerPlugin())
        self._builder.add_plugin(HistoryPlugin(self._history))
        self._builder.add_plugin(RedirectPlugin(config.pool.max_redirects))
        self._builder.add_plugin(AddHostPlugin(config.base_url))
        self._builder.add_plugin(UserAgentPlugin(config.user_agent))

        self.clear_headers()
        if config.headers:
            self.add_headers(config.headers)

        enterprise_url = enterprise_url or config.enterprise_url
        if enterprise_url:
            self.set_enterprise_url(enterprise_url)

        if config.cache_dir:
            self._disk_cache = diskcache.Cache(config.cache_dir)
            self.add_cache(self._disk_cache)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides) -> 'GitHubClient':
        """
        Клиент из переменных окружения GITHUB_CLIENT_* (и .env файла).

        Если задан GITHUB_CLIENT_TOKEN, клиент сразу аутентифицируется.

        Example:
            >>> # GITHUB_CLIENT_TOKEN=ghp_xxx GITHUB_CLIENT_AUTH_METHOD=http_token
            >>> client = GitHubClient.from_env()
        """
        from .env_config import load_from_env, load_credentials

        client = cls(config=load_from_env(env_file, **overrides))
        credentials = load_credentials(env_file, **overrides)
        if credentials:
            client.authenticate(credentials.token_or_login, credentials.password, credentials.auth_method)
        return client

    # ==================== Жизненный цикл ====================

    def close(self) -> None:
        """
        Освобождает ресурсы, созданные клиентом.

        Закрываются логгер, кэш из config.cache_dir и транспорт, если клиент
        создал его сам. Переданный снаружи транспорт остается открытым.
        """
        if self._logger is not None:
            self._logger.close()
        if self._disk_cache is not None:
            self._disk_cache.close()
        if self._owns_transport:
            self._builder.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ==================== Запросы ====================

    def _build_url(self, path: str) -> str:
        """
        Адрес API (base_url или enterprise_url) без завершающего слеша
        + '/' + path без начального слеша.

        Абсолютные http(s) URL используются как есть.
        """
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._api_url.rstrip('/')}/{path.lstrip('/')}"

    def get(self, path: str, params: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Выполняет GET запрос."""
        return self.request(path, method="GET", headers=headers, params=params)

    def post(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Выполняет POST запрос."""
        return self.request(path, body, "POST", headers)

    def put(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Выполняет PUT запрос."""
        return self.request(path, body, "PUT", headers)

    def patch(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Выполняет PATCH запрос."""
        return self.request(path, body, "PATCH", headers)

    def delete(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Выполняет DELETE запрос."""
        return self.request(path, body, "DELETE", headers)

    def request(
        self,
        path: str,
        body: Any = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Отправляет запрос через текущую цепочку плагинов.

        Args:
            path: Путь относительно base_url или абсолютный URL
            body: Тело запроса (str/bytes, уже закодированное)
            method: HTTP метод
            headers: Заголовки запроса (приоритетнее заголовков по умолчанию)
            params: Query параметры

        Returns:
            Ответ (успешный, с кодом < 400)

        Raises:
            HTTPError: Ответ с кодом ошибки (подкласс по статусу)
            NetworkError: Ошибка сети
        """
        ctx = RequestContext(
            method=method,
            url=self._build_url(path),
            headers=headers or {},
            params=dict(params or {}),
            body=body,
        )
        http_client = self.get_http_client()

        if self._logger:
            set_correlation_id(ctx.request_id)
            self._logger.info("Request started", method=ctx.method, url=ctx.url)

        start_time = time.time()
        try:
            response = http_client.send(ctx)
        except GitHubClientException as e:
            if self._logger:
                self._logger.error(
                    "Request failed",
                    method=ctx.method,
                    url=ctx.url,
                    error_type=type(e).__name__,
                    status_code=getattr(e, 'status_code', None),
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )
            raise
        else:
            if self._logger:
                fields: Dict[str, Any] = {}
                if self._logger.config.log_rate_limit:
                    fields = self._rate_limit_fields(response)
                self._logger.info(
                    "Request completed",
                    method=ctx.method,
                    url=ctx.url,
                    status_code=response.status_code,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                    cache=response.headers.get('X-Cache'),
                    **fields,
                )
            return response
        finally:
            if self._logger:
                clear_correlation_id()

    @staticmethod
    def _rate_limit_fields(response: requests.Response) -> Dict[str, Any]:
        """Остаток лимита GitHub из заголовков ответа (если они есть)"""
        fields = {}
        for header, name in (('X-RateLimit-Remaining', 'rate_limit_remaining'),
                             ('X-RateLimit-Reset', 'rate_limit_reset')):
            value = response.headers.get(header)
            if value is not None:
                fields[name] = value
        return fields

    # ==================== Конфигурация цепочки ====================

    def authenticate(
        self,
        token_or_login: str,
        password: Optional[str] = None,
        auth_method: Optional[str] = None,
    ) -> None:
        """
        Устанавливает аутентификацию для всех последующих запросов.

        Если auth_method не указан, а password - один из токенов методов,
        password считается методом. Без метода используется http_password.

        Args:
            token_or_login: Токен, логин или client ID
            password: Пароль, client secret или токен метода
            auth_method: Метод (GitHubClient.AUTH_*)

        Raises:
            InvalidArgumentError: Не указаны ни password, ни метод; метод
                неизвестен; методу нужен секрет, а он не передан

        Examples:
            >>> client.authenticate("ghp_xxx", GitHubClient.AUTH_HTTP_TOKEN)
            >>> client.authenticate("octocat", "secret")  # HTTP Basic
            >>> client.authenticate("client-id", "client-secret", GitHubClient.AUTH_URL_CLIENT_ID)
        """
        if password is None and auth_method is None:
            raise InvalidArgumentError("You need to specify authentication method!")

        if auth_method is None and AuthMethod.is_method(password):
            auth_method = password
            password = None

        if auth_method is None:
            auth_method = AuthMethod.HTTP_PASSWORD

        plugin = AuthenticationPlugin(token_or_login, password, auth_method)

        cache_index = self._cache_index()
        if self._builder.has_plugin(AuthenticationPlugin) or cache_index is None:
            self._builder.replace_plugin(plugin)
        else:
            # Учетные данные должны попасть в ключ кэша
            plugins = list(self._builder.plugins)
            plugins.insert(cache_index, plugin)
            self._builder.set_plugins(plugins)

    def _cache_index(self) -> Optional[int]:
        for index, plugin in enumerate(self._builder.plugins):
            if isinstance(plugin, CachePlugin):
                return index
        return None

    def set_enterprise_url(self, enterprise_url: str) -> None:
        """
        Направляет все запросы на инсталляцию GitHub Enterprise.

        Относительные пути строятся от enterprise_url, к пути запросов на
        этот хост добавляется /api/<version>/. Редиректы на другие хосты
        (например, хранилище архивов) уходят по исходному адресу.

        Raises:
            InvalidArgumentError: URL без схемы или хоста
        """
        add_host = AddHostPlugin(enterprise_url)
        self._builder.replace_plugin(add_host)
        self._builder.replace_plugin(PathPrependPlugin(f"/api/{self._config.api_version}/", host=enterprise_url))
        self._api_url = add_host.origin

    def add_cache(self, pool: Any = None, **options: Any) -> None:
        """
        Включает кэширование ответов.

        Args:
            pool: MemoryCachePool (по умолчанию), diskcache.Cache или любой
                  объект с get/set(expire=)/delete
            **options: Параметры CachePlugin (default_ttl, respect_cache_headers, ...)

        Example:
            >>> client.add_cache(diskcache.Cache("/tmp/github-cache"), default_ttl=60)
        """
        self._builder.replace_plugin(CachePlugin(pool, **options))

    def remove_cache(self) -> None:
        """Отключает кэширование ответов."""
        self._builder.remove_plugin(CachePlugin)

    def clear_headers(self) -> None:
        """Сбрасывает заголовки по умолчанию до одного Accept."""
        self._headers = CaseInsensitiveDict({'Accept': self._config.accept_header})
        self._builder.replace_plugin(HeaderDefaultsPlugin(self._headers))

    def add_headers(self, headers: Mapping[str, str]) -> None:
        """
        Добавляет заголовки по умолчанию.

        Имена сравниваются без учета регистра: X-Foo заменяет x-foo. Accept всегда соответствует версии API клиента.
        """
        self._headers.update(headers)
        self._headers['Accept'] = self._config.accept_header
        self._builder.replace_plugin(HeaderDefaultsPlugin(self._headers))

    @property
    def headers(self) -> Dict[str, str]:
        """Копия заголовков по умолчанию."""
        return dict(self._headers)

    @property
    def api_version(self) -> str:
        return self._config.api_version

    @property
    def config(self) -> GitHubClientConfig:
        return self._config

    # ==================== Собранный клиент ====================

    def get_http_client(self) -> PluginClient:
        """
        Текущий собранный клиент.

        Пересобирается только если цепочка изменилась после последней сборки.
        """
        if self._http_client is None or self._builder.is_modified():
            logger.debug(f"Rebuilding plugin chain at revision {self._builder.revision}")
            self._http_client = self._builder.build_client()
        return self._http_client

    def set_transport(self, transport: Transport) -> None:
        """Подменяет сырой транспорт (например, для тестов)."""
        if self._owns_transport:
            self._builder.transport.close()
            self._owns_transport = False
        self._builder.set_transport(transport)

    @property
    def plugin_builder(self) -> PluginChainBuilder:
        return self._builder

    def set_plugin_builder(self, builder: PluginChainBuilder) -> None:
        """
        Заменяет билдер цепочки целиком.

        Цепочка по умолчанию при этом не переносится: HistoryPlugin и
        ExceptionThrowerPlugin нужно добавить в новый билдер самостоятельно.
        """
        self._builder = builder
        self._http_client = None

    def add_plugin(self, plugin: Plugin) -> None:
        """Добавляет плагин в конец цепочки (внутренний слой)."""
        self._builder.add_plugin(plugin)

    # ==================== История ====================

    def get_last_response(self) -> Optional[requests.Response]:
        """Последний полученный ответ (включая ответы с кодом ошибки)."""
        return self._history.get_last_response()

    @property
    def last_request(self) -> Optional[RequestContext]:
        return self._history.last_request

    @property
    def history(self) -> ResponseHistory:
        return self._history

    # ==================== API ресурсы ====================

    def api(self, name: str) -> AbstractApi:
        """
        Обёртка над группой эндпоинтов по имени или алиасу.

        Raises:
            InvalidArgumentError: Неизвестное имя

        Examples:
            >>> client.api("repo").show("octocat", "Hello-World")
            >>> client.api("pull_requests").all("octocat", "Hello-World")
        """
        api_class = API_REGISTRY.get(name)
        if api_class is None:
            raise InvalidArgumentError(f'Undefined api instance called: "{name}"')
        return api_class(self)

    def __getattr__(self, name: str):
        """
        client.repo(), client.issues() и т.д. - то же, что client.api(name).

        Raises:
            UndefinedMethodError: Имя не найдено в реестре API
        """
        if name.startswith('_') or name not in API_REGISTRY:
            raise UndefinedMethodError(name)
        return lambda: self.api(name)

    def __repr__(self) -> str:
        return f"GitHubClient(api_version={self._config.api_version!r}, base_url={self._api_url!r})"
