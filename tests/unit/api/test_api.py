"""
Тесты обёрток API
"""

import json

import pytest

from github_client.api import API_REGISTRY, AbstractApi, Issue, PullRequest, Repo


def sent_json(transport):
    return json.loads(transport.last.body)


class TestAbstractApi:
    """Кодирование тела и декодирование ответа"""

    def test_get_decodes_json(self, github, transport, make_response):
        transport.queue(make_response(200, json_data={"login": "octocat"}))

        result = github.api("me").show()

        assert result == {"login": "octocat"}
        assert transport.last.method == "GET"
        assert transport.last.url == "https://api.github.com/user"

    def test_text_response(self, github, transport, make_response):
        transport.queue(make_response(200, content="<p>Hi</p>", headers={"Content-Type": "text/html"}))

        assert github.api("markdown").render("Hi") == "<p>Hi</p>"

    def test_post_encodes_body(self, github, transport):
        github.api("markdown").render("**bold**", mode="gfm", context="octocat/hello")

        assert transport.last.method == "POST"
        assert transport.last.headers["Content-Type"] == "application/json"
        assert sent_json(transport) == {"text": "**bold**", "mode": "gfm", "context": "octocat/hello"}

    def test_explicit_headers_merged(self, github, transport):
        github.api("authorizations").create({"note": "ci"}, otp_code="123456")

        assert transport.last.headers["X-GitHub-OTP"] == "123456"
        assert transport.last.headers["Content-Type"] == "application/json"

    def test_delete_without_body(self, github, transport, make_response):
        transport.queue(make_response(204))

        github.api("gists").remove("abc")

        assert transport.last.method == "DELETE"
        assert transport.last.body is None

    def test_head_returns_response(self, github, transport, make_response):
        transport.queue(make_response(200, headers={"ETag": '"x"'}))

        response = AbstractApi(github).head("/repos/o/r")

        assert response.headers["ETag"] == '"x"'
        assert transport.last.method == "HEAD"


class TestResources:
    """Пути и параметры эндпоинтов"""

    def test_repo_show(self, github, transport):
        github.api("repo").show("octocat", "Hello-World")
        assert transport.last.url == "https://api.github.com/repos/octocat/Hello-World"

    def test_path_segments_quoted(self, github, transport):
        github.api("user").show("a b/c")
        assert transport.last.url == "https://api.github.com/users/a%20b%2Fc"

    def test_git_reference_keeps_slashes(self, github, transport):
        github.api("git").reference("o", "r", "heads/main")
        assert transport.last.url == "https://api.github.com/repos/o/r/git/refs/heads/main"

    def test_issue_create(self, github, transport, make_response):
        transport.queue(make_response(201, json_data={"number": 1}))

        result = github.api("issues").create("o", "r", {"title": "Bug"})

        assert result == {"number": 1}
        assert transport.last.url == "https://api.github.com/repos/o/r/issues"
        assert sent_json(transport) == {"title": "Bug"}

    def test_issue_update(self, github, transport):
        github.api("issue").update("o", "r", 7, {"state": "closed"})
        assert transport.last.method == "PATCH"
        assert transport.last.url.endswith("/repos/o/r/issues/7")

    def test_pull_request_merge(self, github, transport):
        github.api("pr").merge("o", "r", 3, message="Ship it")
        assert transport.last.method == "PUT"
        assert transport.last.url.endswith("/repos/o/r/pulls/3/merge")
        assert sent_json(transport) == {"commit_message": "Ship it"}

    def test_search_params(self, github, transport):
        github.api("search").repositories("language:python")
        assert transport.last.url == "https://api.github.com/search/repositories"
        assert transport.last.params == {"q": "language:python", "sort": "updated", "order": "desc"}

    def test_repo_create_in_org(self, github, transport):
        github.api("repos").create("tool", organization="acme", private=True)
        assert transport.last.url.endswith("/orgs/acme/repos")
        assert sent_json(transport) == {"name": "tool", "description": "", "private": True}

    def test_rate_limit_core(self, github, transport, make_response):
        transport.queue(make_response(200, json_data={"resources": {"core": {"limit": 5000}}}))
        assert github.api("rate_limit").core_limit() == 5000

    def test_enterprise_stats(self, github, transport):
        github.api("ent").stats("repos")
        assert transport.last.url.endswith("/enterprise/stats/repos")


class TestRegistry:
    """Алиасы реестра"""

    @pytest.mark.parametrize("alias, api_class", [
        ("repo", Repo),
        ("repositories", Repo),
        ("pr", PullRequest),
        ("pullRequests", PullRequest),
        ("pull_requests", PullRequest),
        ("issues", Issue),
    ])
    def test_aliases(self, alias, api_class):
        assert API_REGISTRY[alias] is api_class

    def test_all_wrappers_are_apis(self):
        assert all(issubclass(cls, AbstractApi) for cls in API_REGISTRY.values())
