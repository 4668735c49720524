"""
Fixtures for environment configuration tests.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from GITHUB_CLIENT_* variables and a local .env file."""
    for name in list(os.environ):
        if name.upper().startswith("GITHUB_CLIENT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
