"""GitHub REST and GraphQL API access."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubAPIError(Exception):
    """A GitHub API call returned an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotModifiedError(GitHubAPIError):
    """GitHub answered 304: the requested change was already in effect."""


class GraphQLError(GitHubAPIError):
    """A GraphQL response carried an ``errors`` list."""

    def __init__(self, errors: list[dict[str, Any]], status_code: int | None = None):
        message = "; ".join(str(e.get("message", e)) for e in errors) or "GraphQL request failed"
        super().__init__(message, status_code)
        self.errors = errors


class GitHubClient:
    """
    Minimal async GitHub client covering issues, comments and subscriptions.

    Example:
        >>> async with GitHubClient(token="ghp_...") as client:
        ...     await client.create_comment("owner", "repo", 12, "Hello!")
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: GitHub token used for every request
            api_url: REST API base URL; GraphQL is served at ``<api_url>/graphql``
            timeout: Request timeout in seconds (ignored when http_client is given)
            http_client: Pre-built httpx client, mainly for tests
        """
        self.api_url = api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.api_url}{path}"
        logger.debug(f"{method} {url}")
        response = await self._http.request(method, url, headers=self._headers, **kwargs)

        if response.status_code == 304:
            raise NotModifiedError("Not modified", status_code=304)
        if response.is_error:
            raise GitHubAPIError(_error_message(response), status_code=response.status_code)
        return response

    async def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a comment on an issue or pull request."""
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return response.json()

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: list[str],
    ) -> dict[str, Any]:
        """Create an issue."""
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            json={"title": title, "body": body, "labels": labels},
        )
        return response.json()

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        """Fetch a single issue."""
        response = await self._request("GET", f"/repos/{owner}/{repo}/issues/{issue_number}")
        return response.json()

    async def delete_thread_subscription(self, thread_id: int) -> None:
        """
        Stop notifications for a thread.

        Raises:
            NotModifiedError: The viewer was not subscribed to the thread
        """
        await self._request("DELETE", f"/notifications/threads/{thread_id}/subscription")

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Run a GraphQL query or mutation.

        Returns:
            The ``data`` member of the response

        Raises:
            GraphQLError: The response contained errors
        """
        response = await self._request(
            "POST",
            "/graphql",
            json={"query": query, "variables": variables or {}},
        )
        payload = response.json()
        if payload.get("errors"):
            raise GraphQLError(payload["errors"], status_code=response.status_code)
        return payload.get("data") or {}


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("message"):
        return f"{payload['message']} (HTTP {response.status_code})"
    return f"HTTP {response.status_code}: {response.reason_phrase}"
