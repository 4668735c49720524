"""
Resource wrappers and the name/alias registry used by GitHubClient.api().
"""

from typing import Dict, Tuple, Type

from .base import AbstractApi
from .resources import (
    Authorizations,
    CurrentUser,
    Deployment,
    Enterprise,
    Gists,
    GitData,
    Issue,
    Markdown,
    Meta,
    Notification,
    Organization,
    PullRequest,
    RateLimit,
    Repo,
    Search,
    Teams,
    User,
)

_ALIASES: Tuple[Tuple[Type[AbstractApi], Tuple[str, ...]], ...] = (
    (CurrentUser, ('me', 'current_user', 'currentUser')),
    (Deployment, ('deployment', 'deployments')),
    (Enterprise, ('ent', 'enterprise')),
    (GitData, ('git', 'git_data', 'gitData')),
    (Gists, ('gist', 'gists')),
    (Issue, ('issue', 'issues')),
    (Markdown, ('markdown',)),
    (Notification, ('notification', 'notifications')),
    (Organization, ('organization', 'organizations')),
    (PullRequest, ('pr', 'pullRequest', 'pull_request', 'pullRequests', 'pull_requests')),
    (RateLimit, ('rateLimit', 'rate_limit')),
    (Repo, ('repo', 'repos', 'repository', 'repositories')),
    (Search, ('search',)),
    (Teams, ('team', 'teams')),
    (User, ('user', 'users')),
    (Authorizations, ('authorization', 'authorizations')),
    (Meta, ('meta',)),
)

# Имя или алиас -> класс обёртки
API_REGISTRY: Dict[str, Type[AbstractApi]] = {
    alias: api_class
    for api_class, aliases in _ALIASES
    for alias in aliases
}

__all__ = [
    'API_REGISTRY',
    'AbstractApi',
    'Authorizations',
    'CurrentUser',
    'Deployment',
    'Enterprise',
    'Gists',
    'GitData',
    'Issue',
    'Markdown',
    'Meta',
    'Notification',
    'Organization',
    'PullRequest',
    'RateLimit',
    'Repo',
    'Search',
    'Teams',
    'User',
]
