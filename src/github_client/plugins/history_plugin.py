# src/github_client/plugins/history_plugin.py

import requests

from .plugin import Plugin, NextCall
from ..core.context import RequestContext
from ..core.history import ResponseHistory


class HistoryPlugin(Plugin):
    """
    Плагин записывает каждый обмен запрос/ответ в ResponseHistory.

    Записывается любой полученный ответ, включая 4xx/5xx: ExceptionThrower
    стоит снаружи, поэтому ответ успевает попасть в историю до того, как
    превратится в исключение.
    """

    def __init__(self, history: ResponseHistory):
        self.history = history

    def handle_request(self, ctx: RequestContext, next_call: NextCall) -> requests.Response:
        try:
            response = next_call(ctx)
        except Exception as error:
            self.history.add_failure(ctx, error)
            raise

        self.history.add_success(ctx, response)
        return response
