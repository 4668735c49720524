"""
Configuration sources and structured logging.
"""

import os
import tempfile

from github_client import GitHubClient, GitHubClientConfig
from github_client.core.logging import LoggingConfig
from github_client.core.env_config import ConfigFileLoader, load_credentials, load_from_env, print_config_summary


def json_logging():
    """Each request logs start and completion with a shared correlation_id."""
    print("\n=== JSON logging ===")

    config = GitHubClientConfig.create(
        logging=LoggingConfig.create(level="INFO", format="json", extra_fields={"service": "example"})
    )
    with GitHubClient(config=config) as client:
        client.get("/zen")


def config_from_env():
    """GITHUB_CLIENT_* variables and .env files."""
    print("\n=== Environment ===")

    os.environ.setdefault("GITHUB_CLIENT_TIMEOUT_READ", "60")
    os.environ.setdefault("GITHUB_CLIENT_USER_AGENT", "examples/1.0")

    config = load_from_env()
    print_config_summary(config, load_credentials())

    with GitHubClient.from_env() as client:
        print(f"Client: {client!r}")


def config_from_yaml():
    """YAML configuration file."""
    print("\n=== YAML file ===")

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "github.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(
                "github_client:\n"
                "  user_agent: yaml-example/1.0\n"
                "  cache_dir: " + os.path.join(tmp, "cache") + "\n"
                "  timeout:\n"
                "    read: 45\n"
                "  logging:\n"
                "    level: INFO\n"
                "    format: colored\n"
            )

        config = ConfigFileLoader.from_file(path)
        print_config_summary(config)

        with GitHubClient(config=config) as client:
            client.get("/zen")
            response = client.get("/zen")
            print(f"X-Cache: {response.headers.get('X-Cache')}")


if __name__ == "__main__":
    json_logging()
    config_from_env()
    config_from_yaml()
