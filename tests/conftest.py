"""Shared fixtures: provider payloads and a GitHub client backed by a fake transport."""

from typing import Any, Callable, Dict, List

import httpx
import pytest

from portfolio.clients import GitHubClient
from portfolio.viewer import PortfolioViewer


def user_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "login": "octocat",
        "id": 583231,
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "bio": "Mascot",
        "location": "San Francisco",
        "created_at": "2011-01-25T18:44:36Z",
        "public_repos": 8,
        "followers": 9000,
        "following": 9,
        "html_url": "https://github.com/octocat",
    }
    payload.update(overrides)
    return payload


def repo_payload(name: str, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": name,
        "description": f"{name} description",
        "language": "Python",
        "html_url": f"https://github.com/octocat/{name}",
        "stargazers_count": 3,
        "forks_count": 1,
        "updated_at": "2023-03-05T10:00:00Z",
        "private": False,
    }
    payload.update(overrides)
    return payload


def repos_payload(count: int) -> List[Dict[str, Any]]:
    return [repo_payload(f"repo-{i}") for i in range(count)]


class FakeGitHub:
    """Routes /users/{name} and /users/{name}/repos to canned responses and records every request."""

    def __init__(self) -> None:
        self.users: Dict[str, Any] = {}
        self.repos: Dict[str, Any] = {}
        self.status: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        status = self.status.get(path)
        if status is not None:
            return httpx.Response(status, json={"message": "Not Found"})
        parts = path.strip("/").split("/")
        if len(parts) == 2 and parts[1] in self.users:
            return httpx.Response(200, json=self.users[parts[1]])
        if len(parts) == 3 and parts[2] == "repos" and parts[1] in self.repos:
            return httpx.Response(200, json=self.repos[parts[1]])
        return httpx.Response(404, json={"message": "Not Found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_github() -> FakeGitHub:
    fake = FakeGitHub()
    fake.users["octocat"] = user_payload()
    fake.repos["octocat"] = repos_payload(8)
    return fake


@pytest.fixture
def client(fake_github: FakeGitHub) -> GitHubClient:
    return GitHubClient(transport=fake_github.transport())


@pytest.fixture
def viewer(client: GitHubClient) -> PortfolioViewer:
    return PortfolioViewer(client)


@pytest.fixture
def make_viewer() -> Callable[[Callable[[httpx.Request], httpx.Response]], PortfolioViewer]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> PortfolioViewer:
        return PortfolioViewer(GitHubClient(transport=httpx.MockTransport(handler)))

    return _make
