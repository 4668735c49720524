"""
Тесты HistoryPlugin
"""

import pytest

from github_client.core.context import RequestContext
from github_client.core.exceptions import ConnectionError, NotFoundError
from github_client.core.history import ResponseHistory
from github_client.plugins.exception_thrower import ExceptionThrowerPlugin
from github_client.plugins.history_plugin import HistoryPlugin
from github_client.plugins.plugin import compose


class TestHistoryPlugin:
    """Запись обменов в историю"""

    def test_success_recorded(self, transport, make_response):
        history = ResponseHistory()
        response = make_response(200)
        transport.queue(response)
        call = compose([HistoryPlugin(history)], transport.send)

        ctx = RequestContext("GET", "https://api.github.com/user")
        call(ctx)

        assert history.get_last_response() is response
        assert history.last_request is ctx

    def test_error_response_recorded_before_exception(self, transport, make_response):
        history = ResponseHistory()
        response = make_response(404, json_data={"message": "Not Found"})
        transport.queue(response)
        call = compose([ExceptionThrowerPlugin(), HistoryPlugin(history)], transport.send)

        with pytest.raises(NotFoundError):
            call(RequestContext("GET", "https://api.github.com/repos/o/missing"))

        assert history.get_last_response() is response

    def test_transport_failure_recorded(self, transport):
        history = ResponseHistory()
        error = ConnectionError("refused", "https://api.github.com/user")
        transport.queue(error)
        call = compose([HistoryPlugin(history)], transport.send)

        with pytest.raises(ConnectionError):
            call(RequestContext("GET", "https://api.github.com/user"))

        assert history.get_last_response() is None
        assert history.last_error is error

    def test_last_exchange_wins(self, transport, make_response):
        history = ResponseHistory()
        first, second = make_response(200), make_response(201)
        transport.queue(first, second)
        call = compose([HistoryPlugin(history)], transport.send)

        call(RequestContext("GET", "https://api.github.com/a"))
        call(RequestContext("POST", "https://api.github.com/b"))

        assert history.get_last_response() is second
