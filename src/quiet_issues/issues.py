"""Create issues and comments without subscribing the bot to them."""

import logging

from quiet_issues.github.client import GitHubClient, NotModifiedError
from quiet_issues.github.models import CreationResult, IssueReference, RepoContext
from quiet_issues.github.subscriptions import (
    GraphQLSubscriptionSuppressor,
    SuppressionOutcome,
    Suppressor,
)

logger = logging.getLogger(__name__)


class NotificationSuppressingIssueClient:
    """
    Post comments and open issues, then unsubscribe from their threads.

    Creation errors propagate to the caller. Unsubscribing is best-effort:
    its failures are logged and never change the returned result.
    """

    def __init__(
        self,
        client: GitHubClient,
        context: RepoContext,
        suppressor: Suppressor | None = None,
    ) -> None:
        self.client = client
        self.context = context
        self.suppressor = suppressor or GraphQLSubscriptionSuppressor(client)

    async def create_comment(self, issue: IssueReference, body: str) -> CreationResult:
        """
        Comment on an issue and unsubscribe from it.

        Args:
            issue: The issue to comment on
            body: Comment text (must not be empty)

        Returns:
            The created comment
        """
        if not body or not body.strip():
            raise ValueError("Comment body must not be empty")

        data = await self.client.create_comment(issue.owner, issue.repository, issue.number, body)
        comment = CreationResult(data)

        outcome = await self._suppress(issue, None, "Comment posted")
        if outcome is SuppressionOutcome.UNSUBSCRIBED:
            logger.info(f"Comment posted and unsubscribed from issue #{issue.number}")
        elif outcome is SuppressionOutcome.ALREADY_UNSUBSCRIBED:
            logger.info(f"Comment posted, already unsubscribed from issue #{issue.number}")

        return comment

    async def create_issue(
        self,
        title: str,
        body: str,
        labels: list[str] | None = None,
    ) -> CreationResult:
        """
        Open an issue in the context repository and unsubscribe from it.

        Args:
            title: Issue title (must not be empty)
            body: Issue description
            labels: Labels to apply; defaults to none

        Returns:
            The created issue
        """
        if not title or not title.strip():
            raise ValueError("Issue title must not be empty")

        data = await self.client.create_issue(
            self.context.owner,
            self.context.repository,
            title,
            body,
            list(labels or []),
        )
        created = CreationResult(data)
        if created.number is None:
            logger.warning("Issue created but could not unsubscribe: response has no issue number")
            return created
        issue = self.context.issue(created.number)

        outcome = await self._suppress(issue, created, f"Issue #{issue.number} created")
        if outcome is SuppressionOutcome.UNSUBSCRIBED:
            logger.info(f"Issue #{issue.number} created and unsubscribed")
        elif outcome is SuppressionOutcome.ALREADY_UNSUBSCRIBED:
            logger.info(f"Issue #{issue.number} created, already unsubscribed")

        return created

    async def _suppress(
        self,
        issue: IssueReference,
        created: CreationResult | None,
        action: str,
    ) -> SuppressionOutcome | None:
        """Run the suppressor, absorbing every failure. Returns None on failure."""
        try:
            return await self.suppressor.unsubscribe(issue, created)
        except NotModifiedError:
            return SuppressionOutcome.ALREADY_UNSUBSCRIBED
        except Exception as e:
            # The created item stays in place whatever happens here
            logger.warning(f"{action} but could not unsubscribe: {e}")
            return None
