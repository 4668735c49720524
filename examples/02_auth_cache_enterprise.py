"""
Authentication, response caching and GitHub Enterprise.

Set GITHUB_TOKEN before running the authenticated examples.
"""

import os

from github_client import GitHubClient
from github_client.plugins import HeaderAppendPlugin, MemoryCachePool


def authenticated_requests():
    """Token authentication via the Authorization header."""
    print("\n=== Authentication ===")

    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        print("GITHUB_TOKEN is not set, skipping")
        return

    with GitHubClient() as client:
        client.authenticate(token, GitHubClient.AUTH_HTTP_TOKEN)
        me = client.api("me").show()
        print(f"Authenticated as {me['login']}")
        print(f"Core rate limit: {client.api('rate_limit').core_limit()}")


def cached_requests():
    """Second request is served from cache or revalidated with ETag."""
    print("\n=== Cache ===")

    with GitHubClient() as client:
        client.add_cache(MemoryCachePool(max_size=100), default_ttl=60)

        for attempt in range(2):
            response = client.get("/repos/octocat/Hello-World")
            print(f"Attempt {attempt + 1}: X-Cache={response.headers['X-Cache']}")

        client.remove_cache()


def custom_headers_and_plugins():
    """Default headers and extra plugins mark the chain for rebuild."""
    print("\n=== Headers and plugins ===")

    with GitHubClient() as client:
        client.add_headers({"X-GitHub-Api-Version": "2022-11-28"})
        client.add_plugin(HeaderAppendPlugin({"Accept": "application/vnd.github.mercy-preview+json"}))

        print(f"Default headers: {client.headers}")
        print(f"Chain: {client.plugin_builder.plugins}")


def enterprise():
    """All requests go to https://<host>/api/v3/."""
    print("\n=== Enterprise ===")

    client = GitHubClient(enterprise_url="https://ghe.example.com")
    print(f"Chain: {client.plugin_builder.plugins}")
    client.close()


if __name__ == "__main__":
    authenticated_requests()
    cached_requests()
    custom_headers_and_plugins()
    enterprise()
