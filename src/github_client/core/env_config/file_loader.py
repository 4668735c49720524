"""
Configuration file loader for YAML and JSON files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..config import (
    GitHubClientConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
    SecurityConfig,
)
from ..logging import LoggingConfig

CONFIG_FILE_ENV = "GITHUB_CLIENT_CONFIG_FILE"


class ConfigValidationError(Exception):
    """Raised when configuration file is invalid."""


def _section(config_data: Dict[str, Any], name: str, source: str) -> Optional[Dict[str, Any]]:
    if name not in config_data:
        return None
    value = config_data[name]
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{name} must be a dictionary in {source}")
    return value


class ConfigFileLoader:
    """
    Загрузчик конфигурации из файлов.

    Файл может содержать секцию github_client или сразу поля конфига:

        github_client:
          api_version: v3
          enterprise_url: https://ghe.example.com
          timeout:
            connect: 5
            read: 60
          pool:
            max_redirects: 3
          logging:
            level: DEBUG
            format: json

    Examples:
        >>> config = ConfigFileLoader.from_yaml("github.yaml")
        >>> config = ConfigFileLoader.from_file("github.json")  # Auto-detect
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> GitHubClientConfig:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}") from e

        if not data:
            raise ConfigValidationError(f"Empty config file: {path}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> GitHubClientConfig:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}") from e

        if not data:
            raise ConfigValidationError(f"Empty config file: {path}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> GitHubClientConfig:
        """
        Автоопределение формата по расширению (.yaml, .yml, .json).

        Raises:
            ValueError: Если формат не поддерживается
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        elif suffix == ".json":
            return ConfigFileLoader.from_json(path)
        raise ValueError(
            f"Unsupported config file format: {suffix}. "
            f"Supported formats: .yaml, .yml, .json"
        )

    @staticmethod
    def from_env_path() -> Optional[GitHubClientConfig]:
        """
        Загрузить из пути в переменной GITHUB_CLIENT_CONFIG_FILE.

        Returns:
            GitHubClientConfig или None, если переменная не задана
        """
        config_path = os.environ.get(CONFIG_FILE_ENV)
        if not config_path:
            return None
        return ConfigFileLoader.from_file(config_path)

    @staticmethod
    def _build_config(data: Dict[str, Any], source: str) -> GitHubClientConfig:
        config_data = data.get("github_client", data) if isinstance(data, dict) else data

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Config must be a dictionary, got {type(config_data).__name__} in {source}"
            )

        try:
            kwargs: Dict[str, Any] = {}
            for name in ("base_url", "api_version", "media_product", "user_agent",
                         "enterprise_url", "cache_dir"):
                if name in config_data:
                    kwargs[name] = config_data[name]

            timeout_data = _section(config_data, "timeout", source)
            if timeout_data is not None:
                kwargs["timeout"] = TimeoutConfig(
                    connect=timeout_data.get("connect", 5),
                    read=timeout_data.get("read", 30),
                )

            pool_data = _section(config_data, "pool", source)
            if pool_data is not None:
                kwargs["pool"] = ConnectionPoolConfig(
                    pool_connections=pool_data.get("connections", 10),
                    pool_maxsize=pool_data.get("maxsize", 10),
                    pool_block=pool_data.get("block", False),
                    max_redirects=pool_data.get("max_redirects", 5),
                )

            security_data = _section(config_data, "security", source)
            if security_data is not None:
                kwargs["security"] = SecurityConfig(
                    max_response_size=security_data.get("max_response_size", 100 * 1024 * 1024),
                    verify_ssl=security_data.get("verify_ssl", True),
                )

            logging_data = _section(config_data, "logging", source)
            if logging_data is not None:
                kwargs["logging"] = LoggingConfig.create(
                    level=logging_data.get("level", "INFO"),
                    format=logging_data.get("format", "text"),
                    enable_console=logging_data.get("enable_console", True),
                    enable_file=logging_data.get("enable_file", False),
                    file_path=logging_data.get("file_path"),
                    enable_correlation_id=logging_data.get("enable_correlation_id", True),
                    log_rate_limit=logging_data.get("log_rate_limit", True),
                )

            for name in ("headers", "proxies"):
                section = _section(config_data, name, source)
                if section is not None:
                    kwargs[name] = section

            return GitHubClientConfig(**kwargs)

        except (ValueError, TypeError) as e:
            raise ConfigValidationError(f"Invalid config in {source}: {e}") from e
