"""Shared fixtures: an in-memory GitHub API behind httpx.MockTransport."""

import json
from typing import Any

import httpx
import pytest

from quiet_issues.github import GitHubClient, RepoContext

ENV_VARS = [
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "SUPPRESSION_STRATEGY",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
]


class FakeGitHub:
    """Records requests and answers them from registered responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {}
        self.graphql_queue: list[Any] = []

    def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = httpx.Response(status, json=json)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def add_graphql(self, data: Any = None, errors: list[dict] | None = None) -> None:
        payload: dict[str, Any] = {"data": data}
        if errors:
            payload["errors"] = errors
        self.graphql_queue.append(httpx.Response(200, json=payload))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/graphql":
            if not self.graphql_queue:
                return httpx.Response(500, json={"message": "unexpected graphql call"})
            response = self.graphql_queue.pop(0)
        else:
            response = self.routes.get((request.method, request.url.path))
            if response is None:
                return httpx.Response(404, json={"message": "Not Found"})

        if isinstance(response, Exception):
            raise response
        return response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def graphql_bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.calls("POST", "/graphql")]

    @property
    def mutations(self) -> list[dict[str, Any]]:
        return [b for b in self.graphql_bodies() if b["query"].lstrip().startswith("mutation")]

    @property
    def thread_deletes(self) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == "DELETE" and r.url.path.startswith("/notifications/threads/")
        ]


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def github_client(fake_github: FakeGitHub) -> GitHubClient:
    """GitHub client wired to the fake API."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_github.handler))
    return GitHubClient(token="ghp_test123", http_client=http_client)


@pytest.fixture
def context() -> RepoContext:
    return RepoContext("octo", "widgets")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Remove settings variables inherited from the host (e.g. a CI runner)."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    from quiet_issues.config import get_settings

    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
