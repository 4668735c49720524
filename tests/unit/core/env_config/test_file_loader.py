"""
Tests for ConfigFileLoader (YAML and JSON).
"""

import json

import pytest

from github_client.core.config import GitHubClientConfig
from github_client.core.env_config.file_loader import (
    CONFIG_FILE_ENV,
    ConfigFileLoader,
    ConfigValidationError,
)
from github_client.core.logging.config import LogFormat, LogLevel

FULL_YAML = """
github_client:
  api_version: v3
  user_agent: release-bot/1.0
  enterprise_url: https://ghe.example.com
  cache_dir: /var/cache/github
  timeout:
    connect: 3
    read: 60
  pool:
    connections: 4
    maxsize: 8
    max_redirects: 2
  security:
    verify_ssl: false
  headers:
    X-GitHub-Api-Version: "2022-11-28"
  logging:
    level: DEBUG
    format: json
"""


class TestYamlLoader:
    """Tests for YAML files."""

    def test_load_valid_yaml(self, tmp_path):
        """Full YAML config is mapped to GitHubClientConfig."""
        path = tmp_path / "github.yaml"
        path.write_text(FULL_YAML)

        config = ConfigFileLoader.from_yaml(path)

        assert isinstance(config, GitHubClientConfig)
        assert config.user_agent == "release-bot/1.0"
        assert config.enterprise_url == "https://ghe.example.com"
        assert config.cache_dir == "/var/cache/github"
        assert config.timeout.as_tuple() == (3, 60)
        assert config.pool.pool_connections == 4
        assert config.pool.pool_maxsize == 8
        assert config.pool.max_redirects == 2
        assert config.security.verify_ssl is False
        assert config.headers["X-GitHub-Api-Version"] == "2022-11-28"
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON

    def test_without_section(self, tmp_path):
        """Fields may be given at top level."""
        path = tmp_path / "github.yml"
        path.write_text("api_version: beta\n")

        assert ConfigFileLoader.from_yaml(path).api_version == "beta"

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigFileLoader.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_syntax(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("github_client: [unclosed\n")

        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            ConfigFileLoader.from_yaml(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigValidationError, match="Empty"):
            ConfigFileLoader.from_yaml(path)

    def test_section_must_be_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("timeout: 30\n")

        with pytest.raises(ConfigValidationError, match="timeout must be a dictionary"):
            ConfigFileLoader.from_yaml(path)

    def test_invalid_values_wrapped(self, tmp_path):
        """ValueError from config validation becomes ConfigValidationError."""
        path = tmp_path / "bad.yaml"
        path.write_text("enterprise_url: ghe.example.com\n")

        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigFileLoader.from_yaml(path)

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestJsonLoader:
    """Tests for JSON files."""

    def test_load_valid_json(self, tmp_path):
        path = tmp_path / "github.json"
        path.write_text(json.dumps({"github_client": {"timeout": {"read": 45}, "pool": {"max_redirects": 0}}}))

        config = ConfigFileLoader.from_json(path)

        assert config.timeout.read == 45
        assert config.pool.max_redirects == 0

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            ConfigFileLoader.from_json(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigValidationError, match="must be a dictionary"):
            ConfigFileLoader.from_json(path)


class TestAutoDetect:
    """Tests for from_file and from_env_path."""

    @pytest.mark.parametrize("name, content", [
        ("config.yaml", "api_version: beta\n"),
        ("config.YML", "api_version: beta\n"),
        ("config.json", '{"api_version": "beta"}'),
    ])
    def test_from_file(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content)
        assert ConfigFileLoader.from_file(path).api_version == "beta"

    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported config file format"):
            ConfigFileLoader.from_file(tmp_path / "config.toml")

    def test_from_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("user_agent: from-env-path\n")
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))

        assert ConfigFileLoader.from_env_path().user_agent == "from-env-path"

    def test_from_env_path_unset(self):
        assert ConfigFileLoader.from_env_path() is None
