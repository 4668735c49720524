"""
Tests for GitHubClientLogger.

Tests GitHubClientLogger, get_logger, and configure_logging.
"""

import json
import logging

import pytest

import github_client.core.logging.logger as logger_module
from github_client.core.logging.config import LogFormat, LoggingConfig, LogLevel
from github_client.core.logging.filters import clear_correlation_id, set_correlation_id
from github_client.core.logging.logger import (
    LOGGER_NAME,
    GitHubClientLogger,
    configure_logging,
    get_logger,
)


@pytest.fixture
def make_logger():
    """Creates loggers and closes them after the test."""
    created = []

    def _make(config=None, **kwargs):
        logger = GitHubClientLogger(config, **kwargs)
        created.append(logger)
        return logger

    yield _make
    for logger in created:
        logger.close()
    clear_correlation_id()


@pytest.fixture
def reset_global_logger():
    logger_module._default_logger = None
    yield
    if logger_module._default_logger is not None:
        logger_module._default_logger.close()
    logger_module._default_logger = None


def json_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]


class TestGitHubClientLogger:
    """Tests for GitHubClientLogger class."""

    def test_defaults(self, make_logger):
        """Logger can be created with defaults."""
        logger = make_logger()

        assert logger.name == LOGGER_NAME == "github_client"
        assert logger.config.level == LogLevel.INFO
        assert logger.config.format == LogFormat.TEXT
        assert logger.logger.propagate is False

    def test_level_set(self, make_logger):
        """Logger level follows config."""
        logger = make_logger(LoggingConfig.create(level="ERROR"))
        assert logger.logger.level == logging.ERROR

    def test_null_handler_without_outputs(self, make_logger):
        """Without console and file a NullHandler is installed."""
        logger = make_logger(LoggingConfig.create(enable_console=False))
        assert len(logger.logger.handlers) == 1
        assert isinstance(logger.logger.handlers[0], logging.NullHandler)

    def test_reinit_replaces_handlers(self, make_logger):
        """A second logger with the same name does not duplicate handlers."""
        make_logger()
        logger = make_logger()
        assert len(logger.logger.handlers) == 1

    def test_json_output_with_fields(self, make_logger, capsys, logging_config):
        """Keyword fields appear in JSON output."""
        logger = make_logger(logging_config)

        logger.info("Request completed", method="GET", status_code=200)

        line = json_lines(capsys)[-1]
        assert line["message"] == "Request completed"
        assert line["method"] == "GET"
        assert line["status_code"] == 200

    def test_sensitive_fields_masked(self, make_logger, capsys, logging_config):
        """Secrets passed as fields never reach the output."""
        logger = make_logger(logging_config)

        logger.info("Authenticated", token="ghp_secretvalue", url="https://api.github.com/user?access_token=abc123")

        output = capsys.readouterr().out
        assert "ghp_secretvalue" not in output
        assert "abc123" not in output

    def test_level_filtering(self, make_logger, capsys):
        """Messages below configured level are dropped."""
        logger = make_logger(LoggingConfig.create(level="WARNING", format="json"))

        logger.info("hidden")
        logger.warning("shown")

        messages = [line["message"] for line in json_lines(capsys)]
        assert messages == ["shown"]

    @pytest.mark.parametrize("method, level", [
        ("debug", "DEBUG"),
        ("info", "INFO"),
        ("warning", "WARNING"),
        ("error", "ERROR"),
        ("critical", "CRITICAL"),
    ])
    def test_level_methods(self, make_logger, capsys, logging_config, method, level):
        """Each method logs at its level."""
        logger = make_logger(logging_config)
        getattr(logger, method)("message")
        assert json_lines(capsys)[-1]["level"] == level

    def test_exception_includes_traceback(self, make_logger, capsys, logging_config):
        """exception() logs at ERROR with traceback."""
        logger = make_logger(logging_config)
        try:
            raise ValueError("boom")
        except ValueError:
            logger.exception("Request failed")

        line = json_lines(capsys)[-1]
        assert line["level"] == "ERROR"
        assert "ValueError: boom" in line["exception"]

    def test_correlation_id(self, make_logger, capsys, logging_config):
        """Correlation id from the current thread is added."""
        logger = make_logger(logging_config)
        set_correlation_id("req-7")

        logger.info("Request started")

        assert json_lines(capsys)[-1]["correlation_id"] == "req-7"

    def test_extra_fields(self, make_logger, capsys):
        """Static extra fields are added to each record."""
        logger = make_logger(LoggingConfig.create(format="json", extra_fields={"service": "release-bot"}))
        logger.info("hello")
        assert json_lines(capsys)[-1]["service"] == "release-bot"

    def test_writes_to_file(self, make_logger, logging_config_with_file):
        """File handler writes log lines."""
        logger = make_logger(logging_config_with_file)

        logger.info("Written to file", status_code=201)
        logger.close()

        with open(logging_config_with_file.file_path, encoding="utf-8") as f:
            content = f.read()
        assert "Written to file" in content
        assert "status_code=201" in content

    def test_close_idempotent_and_restores_propagation(self, make_logger):
        """close() removes handlers and can be called twice."""
        logger = make_logger()

        logger.close()
        logger.close()

        assert logger.logger.handlers == []
        assert logger.logger.propagate is True

    def test_context_manager(self, logging_config):
        """Logger closes on context exit."""
        with GitHubClientLogger(logging_config) as logger:
            assert logger.logger.handlers
        assert logger.logger.handlers == []


class TestGlobalLogger:
    """Tests for get_logger and configure_logging."""

    def test_get_logger_same_instance(self, reset_global_logger):
        """get_logger returns a singleton."""
        assert get_logger() is get_logger()

    def test_get_logger_config_used_once(self, reset_global_logger):
        """config is only applied on the first call."""
        first = get_logger(LoggingConfig.create(level="DEBUG"))
        second = get_logger(LoggingConfig.create(level="ERROR"))
        assert second is first
        assert second.config.level == LogLevel.DEBUG

    def test_configure_logging_replaces(self, reset_global_logger):
        """configure_logging replaces the global logger."""
        old = get_logger()
        new = configure_logging(LoggingConfig.create(level="ERROR"))

        assert new is not old
        assert get_logger() is new
        assert old._closed is True
