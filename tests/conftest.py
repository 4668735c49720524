"""
Pytest configuration and fixtures for github-client-core tests.
"""

import json
from typing import Any, Dict, List, Optional, Union

import pytest
import requests
import responses as responses_lib
from requests.structures import CaseInsensitiveDict

from github_client.core.context import RequestContext
from github_client.core.github_client import GitHubClient
from github_client.core.logging.config import LoggingConfig
from github_client.core.transport import Transport


def build_response(
    status_code: int = 200,
    json_data: Any = None,
    content: Union[bytes, str] = b"",
    headers: Optional[Dict[str, str]] = None,
    url: str = "https://api.github.com/",
) -> requests.Response:
    """Собирает requests.Response без сети."""
    response_headers = dict(headers or {})
    if json_data is not None:
        content = json.dumps(json_data)
        response_headers.setdefault("Content-Type", "application/json; charset=utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = content.encode() if isinstance(content, str) else content
    response.headers = CaseInsensitiveDict(response_headers)
    response.url = url
    response.encoding = "utf-8"
    return response


class FakeTransport(Transport):
    """
    Транспорт без сети.

    Записывает копию каждого запроса и отвечает из очереди; пустая очередь -
    ответ 200 с телом {}. Исключение в очереди выбрасывается.
    """

    def __init__(self, *queued: Union[requests.Response, Exception]):
        self.requests: List[RequestContext] = []
        self._queue: List[Union[requests.Response, Exception]] = list(queued)
        self.closed = False

    def queue(self, *items: Union[requests.Response, Exception]) -> None:
        self._queue.extend(items)

    def send(self, ctx: RequestContext) -> requests.Response:
        self.requests.append(ctx.copy())
        if self._queue:
            item = self._queue.pop(0)
            if isinstance(item, Exception):
                raise item
            if not item.url:
                item.url = ctx.url
            return item
        return build_response(200, json_data={}, url=ctx.url)

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> RequestContext:
        return self.requests[-1]

    @property
    def send_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_response():
    """Фабрика ответов: make_response(404, json_data={...}, headers={...})."""
    return build_response


@pytest.fixture
def transport():
    """Fake transport for the plugin chain."""
    return FakeTransport()


@pytest.fixture
def transport_factory():
    """FakeTransport class for tests that need several transports."""
    return FakeTransport


@pytest.fixture
def github(transport):
    """GitHubClient over the fake transport."""
    client = GitHubClient(transport=transport)
    yield client
    client.close()


@pytest.fixture
def ctx():
    """Request context for a plain GET /user."""
    return RequestContext("GET", "https://api.github.com/user")


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def logging_config():
    """JSON logging to stdout, read back with capsys."""
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "github-client.log"
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
