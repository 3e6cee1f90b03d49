"""Create GitHub issues and comments without collecting notifications."""

from quiet_issues.github import CreationResult, GitHubClient, IssueReference, RepoContext
from quiet_issues.issues import NotificationSuppressingIssueClient

__version__ = "0.1.0"

__all__ = [
    "CreationResult",
    "GitHubClient",
    "IssueReference",
    "NotificationSuppressingIssueClient",
    "RepoContext",
]
