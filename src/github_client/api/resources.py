# src/github_client/api/resources.py
"""
Обёртки над группами эндпоинтов GitHub v3.

Каждая обёртка покрывает несколько типовых вызовов. Для остальных
эндпоинтов используйте get/post/... напрямую.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from .base import AbstractApi


def _seg(value: Any) -> str:
    """Экранирует сегмент пути."""
    return quote(str(value), safe='')


class CurrentUser(AbstractApi):
    def show(self) -> Any:
        return self.get('/user')

    def update(self, params: Dict[str, Any]) -> Any:
        return self.patch('/user', params)

    def repositories(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get('/user/repos', params)


class Deployment(AbstractApi):
    def all(self, username: str, repository: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/deployments', params)

    def create(self, username: str, repository: str, params: Dict[str, Any]) -> Any:
        return self.post(f'/repos/{_seg(username)}/{_seg(repository)}/deployments', params)


class Enterprise(AbstractApi):
    def stats(self, type_: str = 'all') -> Any:
        return self.get(f'/enterprise/stats/{_seg(type_)}')


class GitData(AbstractApi):
    def blob(self, username: str, repository: str, sha: str) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/git/blobs/{_seg(sha)}')

    def reference(self, username: str, repository: str, ref: str) -> Any:
        # ref содержит слеши (heads/main)
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/git/refs/{quote(ref)}')


class Gists(AbstractApi):
    def all(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get('/gists', params)

    def show(self, gist_id: str) -> Any:
        return self.get(f'/gists/{_seg(gist_id)}')

    def create(self, params: Dict[str, Any]) -> Any:
        return self.post('/gists', params)

    def remove(self, gist_id: str) -> Any:
        return self.delete(f'/gists/{_seg(gist_id)}')


class Issue(AbstractApi):
    def all(self, username: str, repository: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/issues', params)

    def show(self, username: str, repository: str, number: int) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/issues/{_seg(number)}')

    def create(self, username: str, repository: str, params: Dict[str, Any]) -> Any:
        return self.post(f'/repos/{_seg(username)}/{_seg(repository)}/issues', params)

    def update(self, username: str, repository: str, number: int, params: Dict[str, Any]) -> Any:
        return self.patch(f'/repos/{_seg(username)}/{_seg(repository)}/issues/{_seg(number)}', params)


class Markdown(AbstractApi):
    def render(self, text: str, mode: str = 'markdown', context: Optional[str] = None) -> Any:
        body = {'text': text, 'mode': mode}
        if context is not None:
            body['context'] = context
        return self.post('/markdown', body)


class Notification(AbstractApi):
    def all(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get('/notifications', params)

    def mark_read(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.put('/notifications', params or {})


class Organization(AbstractApi):
    def show(self, organization: str) -> Any:
        return self.get(f'/orgs/{_seg(organization)}')

    def repositories(self, organization: str, type_: str = 'all') -> Any:
        return self.get(f'/orgs/{_seg(organization)}/repos', {'type': type_})


class PullRequest(AbstractApi):
    def all(self, username: str, repository: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/pulls', params)

    def show(self, username: str, repository: str, number: int) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/pulls/{_seg(number)}')

    def create(self, username: str, repository: str, params: Dict[str, Any]) -> Any:
        return self.post(f'/repos/{_seg(username)}/{_seg(repository)}/pulls', params)

    def merge(self, username: str, repository: str, number: int, message: Optional[str] = None) -> Any:
        body = {'commit_message': message} if message else {}
        return self.put(f'/repos/{_seg(username)}/{_seg(repository)}/pulls/{_seg(number)}/merge', body)


class RateLimit(AbstractApi):
    def get_rate_limits(self) -> Any:
        return self.get('/rate_limit')

    def core_limit(self) -> Optional[int]:
        limits = self.get_rate_limits()
        if isinstance(limits, dict):
            return limits.get('resources', {}).get('core', {}).get('limit')
        return None


class Repo(AbstractApi):
    def show(self, username: str, repository: str) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}')

    def create(self, name: str, description: str = '', private: bool = False,
               organization: Optional[str] = None) -> Any:
        path = f'/orgs/{_seg(organization)}/repos' if organization else '/user/repos'
        return self.post(path, {'name': name, 'description': description, 'private': private})

    def remove(self, username: str, repository: str) -> Any:
        return self.delete(f'/repos/{_seg(username)}/{_seg(repository)}')

    def contributors(self, username: str, repository: str) -> Any:
        return self.get(f'/repos/{_seg(username)}/{_seg(repository)}/contributors')


class Search(AbstractApi):
    def repositories(self, q: str, sort: str = 'updated', order: str = 'desc') -> Any:
        return self.get('/search/repositories', {'q': q, 'sort': sort, 'order': order})

    def issues(self, q: str, sort: str = 'updated', order: str = 'desc') -> Any:
        return self.get('/search/issues', {'q': q, 'sort': sort, 'order': order})

    def users(self, q: str, sort: str = 'updated', order: str = 'desc') -> Any:
        return self.get('/search/users', {'q': q, 'sort': sort, 'order': order})


class Teams(AbstractApi):
    def all(self, organization: str) -> Any:
        return self.get(f'/orgs/{_seg(organization)}/teams')

    def show(self, team_id: int) -> Any:
        return self.get(f'/teams/{_seg(team_id)}')


class User(AbstractApi):
    def show(self, username: str) -> Any:
        return self.get(f'/users/{_seg(username)}')

    def repositories(self, username: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get(f'/users/{_seg(username)}/repos', params)

    def organizations(self, username: str) -> Any:
        return self.get(f'/users/{_seg(username)}/orgs')


class Authorizations(AbstractApi):
    def all(self) -> Any:
        return self.get('/authorizations')

    def show(self, authorization_id: int) -> Any:
        return self.get(f'/authorizations/{_seg(authorization_id)}')

    def create(self, params: Dict[str, Any], otp_code: Optional[str] = None) -> Any:
        headers = {'X-GitHub-OTP': otp_code} if otp_code else None
        return self.post('/authorizations', params, headers)

    def remove(self, authorization_id: int) -> Any:
        return self.delete(f'/authorizations/{_seg(authorization_id)}')


class Meta(AbstractApi):
    def service(self) -> Any:
        return self.get('/meta')
