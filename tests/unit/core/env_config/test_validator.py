"""
Tests for GitHubClientSettings.
"""

import pytest
from pydantic import ValidationError

from github_client.core.env_config.validator import GitHubClientSettings


class TestGitHubClientSettings:
    """Test pydantic settings validation."""

    def test_defaults(self):
        """Defaults match GitHubClientConfig defaults."""
        settings = GitHubClientSettings()
        assert settings.base_url == "https://api.github.com/"
        assert settings.api_version == "v3"
        assert settings.max_redirects == 5
        assert settings.log_enabled is False
        assert settings.token is None

    def test_case_insensitive_env(self, monkeypatch):
        """Variable names are case-insensitive."""
        monkeypatch.setenv("github_client_api_version", "beta")
        assert GitHubClientSettings().api_version == "beta"

    def test_unknown_variables_ignored(self, monkeypatch):
        """Extra GITHUB_CLIENT_* variables are ignored."""
        monkeypatch.setenv("GITHUB_CLIENT_SOMETHING_ELSE", "1")
        GitHubClientSettings()

    @pytest.mark.parametrize("field", ["base_url", "enterprise_url"])
    def test_url_validation(self, field):
        """URLs must be absolute http(s)."""
        with pytest.raises(ValidationError, match="absolute http"):
            GitHubClientSettings(**{field: "ftp://example.com"})

    @pytest.mark.parametrize("method", ["url_token", "url_client_id", "http_password", "http_token"])
    def test_known_auth_methods(self, method):
        """All auth methods are accepted."""
        settings = GitHubClientSettings(auth_method=method, token="t", password="p")
        assert settings.auth_method == method

    def test_client_id_requires_secret(self):
        """url_client_id needs a client secret."""
        with pytest.raises(ValidationError):
            GitHubClientSettings(auth_method="url_client_id", token="client-id")

    def test_method_without_token_allowed(self):
        """Method without token is not an error (no credentials configured)."""
        assert GitHubClientSettings(auth_method="http_password").token is None

    @pytest.mark.parametrize("field, value", [
        ("pool_connections", 0),
        ("pool_maxsize", 0),
        ("max_response_size", 0),
        ("timeout_connect", -1),
        ("log_format", "xml"),
    ])
    def test_range_validation(self, field, value):
        """Out of range values are rejected."""
        with pytest.raises(ValidationError):
            GitHubClientSettings(**{field: value})
