# src/github_client/core/builder.py
from typing import Iterable, List, Optional, Tuple, Type
import logging

import requests

from ..plugins.plugin import Plugin, compose
from .context import RequestContext
from .transport import Transport

logger = logging.getLogger(__name__)


class PluginClient:
    """
    Транспорт, обернутый упорядоченной цепочкой плагинов.

    Неизменяемый снимок состояния PluginChainBuilder на момент сборки:
    последующие изменения билдера на него не влияют.

    Attributes:
        revision: Ревизия билдера, из которой собран клиент
    """

    def __init__(self, transport: Transport, plugins: Iterable[Plugin], revision: int = 0):
        self._transport = transport
        self._plugins: Tuple[Plugin, ...] = tuple(plugins)
        self.revision = revision
        self._pipeline = compose(self._plugins, transport.send)

    def send(self, ctx: RequestContext) -> requests.Response:
        """Пропускает запрос через всю цепочку."""
        return self._pipeline(ctx)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def plugins(self) -> Tuple[Plugin, ...]:
        return self._plugins

    def __repr__(self) -> str:
        names = ", ".join(p.__class__.__name__ for p in self._plugins)
        return f"PluginClient(revision={self.revision}, plugins=[{names}])"


class PluginChainBuilder:
    """
    Упорядоченный набор плагинов и ссылка на сырой транспорт.

    Порядок плагинов определяет порядок перехвата: первый добавленный плагин -
    внешний слой. Билдер ничего не сортирует, правильное наслоение
    (например, ExceptionThrower снаружи, AddHost раньше PathPrepend) -
    ответственность вызывающего кода.

    Любая мутация увеличивает ревизию. is_modified() сравнивает текущую
    ревизию с ревизией последней сборки.

    Example:
        >>> builder = PluginChainBuilder(RequestsTransport())
        >>> builder.add_plugin(ExceptionThrowerPlugin())
        >>> builder.replace_plugin(AuthenticationPlugin("token", None, "http_token"))
        >>> builder.is_modified()
        True
        >>> client = builder.build_client()
        >>> builder.is_modified()
        False
    """

    def __init__(self, transport: Transport, plugins: Optional[Iterable[Plugin]] = None):
        self._transport = transport
        self._plugins: List[Plugin] = list(plugins) if plugins else []
        self._revision = 0
        self._built_revision: Optional[int] = None

    def _touch(self) -> None:
        self._revision += 1

    # ==================== Транспорт ====================

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_transport(self, transport: Transport) -> None:
        """Подменяет сырой транспорт. Транспорт не принадлежит билдеру."""
        self._transport = transport
        self._touch()

    # ==================== Управление плагинами ====================

    @property
    def plugins(self) -> Tuple[Plugin, ...]:
        """Снимок текущей последовательности плагинов."""
        return tuple(self._plugins)

    def set_plugins(self, plugins: Iterable[Plugin]) -> None:
        """Заменяет всю последовательность плагинов."""
        self._plugins = list(plugins)
        self._touch()

    def add_plugin(self, plugin: Plugin) -> None:
        """
        Добавляет плагин в конец цепочки.

        Проверки уникальности нет: плагины одного вида могут сосуществовать.
        Для stateful переконфигурации используйте replace_plugin.
        """
        self._plugins.append(plugin)
        self._touch()

    def replace_plugin(self, plugin: Plugin) -> None:
        """
        Заменяет плагин того же вида на его месте или добавляет в конец.

        Если плагинов этого вида несколько (после add_plugin), новый плагин
        встает на место первого, остальные удаляются.
        """
        kind = plugin.kind
        positions = [i for i, existing in enumerate(self._plugins) if existing.kind is kind]

        if positions:
            self._plugins[positions[0]] = plugin
            for index in reversed(positions[1:]):
                del self._plugins[index]
        else:
            self._plugins.append(plugin)

        self._touch()

    def remove_plugin(self, kind: Type[Plugin]) -> None:
        """
        Удаляет плагины указанного вида.

        Отсутствие плагина не ошибка; ревизия меняется только если
        что-то было удалено.
        """
        remaining = [p for p in self._plugins if p.kind is not kind]
        if len(remaining) != len(self._plugins):
            self._plugins = remaining
            self._touch()

    def has_plugin(self, kind: Type[Plugin]) -> bool:
        return any(p.kind is kind for p in self._plugins)

    def get_plugin(self, kind: Type[Plugin]) -> Optional[Plugin]:
        """Первый плагин указанного вида или None."""
        for plugin in self._plugins:
            if plugin.kind is kind:
                return plugin
        return None

    # ==================== Сборка ====================

    @property
    def revision(self) -> int:
        return self._revision

    def is_modified(self) -> bool:
        """Были ли мутации после последней сборки."""
        return self._built_revision != self._revision

    def build_client(self) -> PluginClient:
        """Сворачивает транспорт через текущую цепочку плагинов."""
        client = PluginClient(self._transport, self._plugins, revision=self._revision)
        self._built_revision = self._revision
        logger.debug(f"Plugin chain built: {client!r}")
        return client
