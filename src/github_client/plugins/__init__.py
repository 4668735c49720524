# src/github_client/plugins/__init__.py
from .plugin import Plugin, NextCall, compose
from .auth_plugin import AuthMethod, AuthenticationPlugin
from .cache_plugin import CachePlugin, MemoryCachePool
from .exception_thrower import ExceptionThrowerPlugin
from .header_plugins import HeaderAppendPlugin, HeaderDefaultsPlugin
from .history_plugin import HistoryPlugin
from .redirect_plugin import RedirectPlugin
from .url_plugins import AddHostPlugin, PathPrependPlugin
from .user_agent_plugin import UserAgentPlugin

__all__ = [
    "Plugin",
    "NextCall",
    "compose",
    "AuthMethod",
    "AuthenticationPlugin",
    "CachePlugin",
    "MemoryCachePool",
    "ExceptionThrowerPlugin",
    "HeaderAppendPlugin",
    "HeaderDefaultsPlugin",
    "HistoryPlugin",
    "RedirectPlugin",
    "AddHostPlugin",
    "PathPrependPlugin",
    "UserAgentPlugin",
]
