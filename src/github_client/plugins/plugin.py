# src/github_client/plugins/plugin.py

from abc import ABC
from typing import Callable, Optional, Sequence

import requests

from ..core.context import RequestContext

# Следующий слой цепочки: остальные плагины + транспорт
NextCall = Callable[[RequestContext], requests.Response]


class Plugin(ABC):
    """
    Базовый класс для всех плагинов цепочки.

    Плагин - это декоратор вокруг следующего слоя цепочки. Единственная точка
    входа - handle_request(ctx, next_call). Реализация по умолчанию вызывает
    хуки в порядке:

        before_request -> next_call -> after_response
                                   \\-> on_error (и исключение пробрасывается дальше)

    Простым плагинам достаточно переопределить хуки, плагинам которым нужен
    контроль над вызовом (редиректы, кэш, история) - handle_request.

    Идентичность плагина в PluginChainBuilder - его точный класс (kind).

    Example:
        >>> class TraceHeaderPlugin(Plugin):
        ...     def before_request(self, ctx):
        ...         ctx.headers['X-Trace-Id'] = ctx.request_id
        ...         return None
    """

    @property
    def kind(self) -> type:
        """Вид плагина (его точный класс)."""
        return type(self)

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """
        Вызывается перед передачей запроса следующему слою.

        Returns:
            - None: продолжить выполнение цепочки
            - Response: прервать цепочку и вернуть этот ответ
        """
        return None

    def after_response(self, ctx: RequestContext, response: requests.Response) -> requests.Response:
        """Вызывается после получения ответа от следующего слоя."""
        return response

    def on_error(self, ctx: RequestContext, error: Exception) -> None:
        """Вызывается при ошибке внутреннего слоя. Ошибка пробрасывается дальше."""
        pass

    def handle_request(self, ctx: RequestContext, next_call: NextCall) -> requests.Response:
        short_circuit = self.before_request(ctx)
        if short_circuit is not None:
            return short_circuit

        try:
            response = next_call(ctx)
        except Exception as error:
            self.on_error(ctx, error)
            raise

        return self.after_response(ctx, response)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def compose(plugins: Sequence[Plugin], terminal: NextCall) -> NextCall:
    """
    Сворачивает плагины вокруг терминального вызова справа налево.

    Первый плагин последовательности становится внешним слоем: он первым
    видит запрос и последним - ответ.
    """
    pipeline = terminal
    for plugin in reversed(plugins):
        next_pipeline = pipeline

        def _wrapped(
            ctx: RequestContext, *, _plugin: Plugin = plugin, _next: NextCall = next_pipeline
        ) -> requests.Response:
            return _plugin.handle_request(ctx, _next)

        pipeline = _wrapped
    return pipeline
