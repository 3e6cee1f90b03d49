"""GitHub API interactions."""

from quiet_issues.github.client import GitHubAPIError, GitHubClient, GraphQLError, NotModifiedError
from quiet_issues.github.models import (
    CreationResult,
    IssueReference,
    RepoContext,
    SubscriptionState,
)
from quiet_issues.github.subscriptions import (
    GraphQLSubscriptionSuppressor,
    RestThreadSuppressor,
    SuppressionOutcome,
    build_suppressor,
)

__all__ = [
    "GitHubClient",
    "GitHubAPIError",
    "GraphQLError",
    "NotModifiedError",
    "CreationResult",
    "IssueReference",
    "RepoContext",
    "SubscriptionState",
    "GraphQLSubscriptionSuppressor",
    "RestThreadSuppressor",
    "SuppressionOutcome",
    "build_suppressor",
]
