"""
Basic GitHubClient usage.

Demonstrates raw requests, resource wrappers and error handling.
"""

from github_client import GitHubClient
from github_client.core.exceptions import ApiLimitExceedError, NotFoundError


def raw_requests():
    """GET through the plugin chain, response is requests.Response."""
    print("\n=== Raw GET ===")

    with GitHubClient() as client:
        response = client.get("/repos/octocat/Hello-World")
        print(f"Status: {response.status_code}")
        print(f"Stars: {response.json()['stargazers_count']}")
        print(f"Rate limit left: {response.headers.get('X-RateLimit-Remaining')}")


def resource_wrappers():
    """Wrappers decode JSON and encode request bodies."""
    print("\n=== Resource wrappers ===")

    with GitHubClient() as client:
        user = client.api("user").show("octocat")
        print(f"User: {user['login']} ({user['public_repos']} public repos)")

        # Attribute access goes through the same registry
        for contributor in client.repo().contributors("octocat", "Hello-World")[:3]:
            print(f"  contributor: {contributor['login']}")


def error_handling():
    """HTTP errors become typed exceptions, the response stays in history."""
    print("\n=== Errors ===")

    with GitHubClient() as client:
        try:
            client.api("repo").show("octocat", "this-repo-does-not-exist")
        except NotFoundError as e:
            print(f"NotFoundError: {e.detail}")
            print(f"Last response status: {client.get_last_response().status_code}")
        except ApiLimitExceedError as e:
            print(f"Rate limited until {e.reset}")


if __name__ == "__main__":
    raw_requests()
    resource_wrappers()
    error_handling()
