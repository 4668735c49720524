"""
Environment and file configuration for GitHub Client.

Example:
    >>> from github_client.core.env_config import load_from_env, load_credentials
    >>>
    >>> config = load_from_env()                       # GITHUB_CLIENT_* + .env
    >>> config = load_from_env(env_file=".env.ci", timeout_read=120)
    >>> credentials = load_credentials()               # None if no token set
"""

from .loader import GitHubCredentials, load_from_env, load_credentials, print_config_summary
from .validator import GitHubClientSettings
from .file_loader import ConfigFileLoader, ConfigValidationError
from .secrets import mask_secret, mask_dict_secrets

__all__ = [
    # Loaders
    "GitHubCredentials",
    "load_from_env",
    "load_credentials",
    "print_config_summary",
    "ConfigFileLoader",
    "ConfigValidationError",
    # Settings
    "GitHubClientSettings",
    # Secrets
    "mask_secret",
    "mask_dict_secrets",
]
