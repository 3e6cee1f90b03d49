"""Strategies for unsubscribing the viewer from an issue thread."""

import logging
from enum import Enum
from typing import Protocol

from quiet_issues.github.client import GitHubAPIError, GitHubClient, NotModifiedError
from quiet_issues.github.models import CreationResult, IssueReference, SubscriptionState

logger = logging.getLogger(__name__)


class SuppressionOutcome(str, Enum):
    UNSUBSCRIBED = "unsubscribed"
    ALREADY_UNSUBSCRIBED = "already_unsubscribed"


class Suppressor(Protocol):
    async def unsubscribe(
        self, issue: IssueReference, created: CreationResult | None = None
    ) -> SuppressionOutcome: ...


def _created_issue(issue: IssueReference, created: CreationResult | None) -> CreationResult | None:
    """Return ``created`` when it is the payload of the issue itself."""
    if created is not None and created.number == issue.number:
        return created
    return None


class RestThreadSuppressor:
    """Delete the thread subscription keyed by the issue's numeric id."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def unsubscribe(
        self, issue: IssueReference, created: CreationResult | None = None
    ) -> SuppressionOutcome:
        known = _created_issue(issue, created)
        if known is not None and known.id is not None:
            thread_id = known.id
        else:
            data = await self.client.get_issue(issue.owner, issue.repository, issue.number)
            thread_id = data["id"]

        try:
            await self.client.delete_thread_subscription(thread_id)
        except NotModifiedError:
            return SuppressionOutcome.ALREADY_UNSUBSCRIBED
        return SuppressionOutcome.UNSUBSCRIBED


SUBSCRIPTION_BY_NUMBER_QUERY = """
query($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issueOrPullRequest(number: $number) {
      ... on Issue {
        id
        viewerSubscription
      }
      ... on PullRequest {
        id
        viewerSubscription
      }
    }
  }
}
"""

SUBSCRIPTION_BY_ID_QUERY = """
query($id: ID!) {
  node(id: $id) {
    ... on Issue {
      id
      viewerSubscription
    }
    ... on PullRequest {
      id
      viewerSubscription
    }
  }
}
"""

UNSUBSCRIBE_MUTATION = """
mutation($id: ID!) {
  updateSubscription(input: {subscribableId: $id, state: UNSUBSCRIBED}) {
    subscribable {
      viewerSubscription
    }
  }
}
"""


class GraphQLSubscriptionSuppressor:
    """
    Read the viewer's subscription, then unsubscribe only if needed.

    Exactly one mutation is sent when the viewer is subscribed (or ignoring)
    and none when the state already reads UNSUBSCRIBED.
    """

    def __init__(self, client: GitHubClient):
        self.client = client

    async def read_subscription(
        self, issue: IssueReference, node_id: str | None = None
    ) -> tuple[str, SubscriptionState]:
        """Get the issue's node id and the viewer's current subscription state."""
        if node_id:
            data = await self.client.graphql(SUBSCRIPTION_BY_ID_QUERY, {"id": node_id})
            node = data.get("node")
        else:
            data = await self.client.graphql(
                SUBSCRIPTION_BY_NUMBER_QUERY,
                {"owner": issue.owner, "name": issue.repository, "number": issue.number},
            )
            node = (data.get("repository") or {}).get("issueOrPullRequest")

        if not node or not node.get("id"):
            raise GitHubAPIError(f"Issue {issue} not found")
        return node["id"], SubscriptionState(node["viewerSubscription"])

    async def write_unsubscribed(self, node_id: str) -> SubscriptionState | None:
        """
        Set the viewer's subscription to UNSUBSCRIBED.

        Returns:
            The state GitHub reports afterwards, or None when the payload omits it
        """
        data = await self.client.graphql(UNSUBSCRIBE_MUTATION, {"id": node_id})
        subscribable = (data.get("updateSubscription") or {}).get("subscribable") or {}
        state = subscribable.get("viewerSubscription")
        return SubscriptionState(state) if state else None

    async def unsubscribe(
        self, issue: IssueReference, created: CreationResult | None = None
    ) -> SuppressionOutcome:
        known = _created_issue(issue, created)
        node_id, state = await self.read_subscription(issue, known.node_id if known else None)
        logger.debug(f"Subscription state for {issue}: {state.value}")

        if state is SubscriptionState.UNSUBSCRIBED:
            return SuppressionOutcome.ALREADY_UNSUBSCRIBED

        new_state = await self.write_unsubscribed(node_id)
        reported = new_state.value if new_state else "unknown"
        logger.info(f"Subscription state for {issue} is now {reported}")
        return SuppressionOutcome.UNSUBSCRIBED


def build_suppressor(strategy: str, client: GitHubClient) -> Suppressor:
    """Create the suppression strategy named in settings."""
    strategies = {
        "graphql": GraphQLSubscriptionSuppressor,
        "rest": RestThreadSuppressor,
    }
    try:
        factory = strategies[strategy.lower()]
    except KeyError:
        raise ValueError(f"Unknown suppression strategy: {strategy!r}") from None
    return factory(client)
