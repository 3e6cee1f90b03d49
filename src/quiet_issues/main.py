"""Command line entry point for use in CI workflow steps."""

import argparse
import asyncio
import logging
import sys
from typing import TextIO

import httpx
from pydantic import ValidationError

from quiet_issues.config import Settings, get_settings
from quiet_issues.github import GitHubAPIError, GitHubClient, RepoContext, build_suppressor
from quiet_issues.github.models import CreationResult
from quiet_issues.issues import NotificationSuppressingIssueClient

logger = logging.getLogger(__name__)


def setup_logging(level: str, stream: TextIO | None = None) -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
    )


def _read_body(args: argparse.Namespace) -> str:
    """Get the body text from the positional argument or --body-file."""
    if args.body_file is None:
        return args.body or ""
    if args.body_file == "-":
        return sys.stdin.read()
    with open(args.body_file, encoding="utf-8") as f:
        return f.read()


async def run(args: argparse.Namespace, settings: Settings) -> CreationResult:
    """Execute a parsed command against the GitHub API."""
    context = RepoContext.from_full_name(args.repo) if args.repo else settings.repo_context()
    body = _read_body(args)

    async with GitHubClient(
        token=settings.github_token,
        api_url=settings.github_api_url,
        timeout=settings.request_timeout,
    ) as client:
        helper = NotificationSuppressingIssueClient(
            client,
            context,
            suppressor=build_suppressor(settings.suppression_strategy, client),
        )
        if args.command == "comment":
            return await helper.create_comment(context.issue(args.number), body)
        return await helper.create_issue(args.title, body, args.labels)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiet-issues",
        description="Create GitHub issues and comments, then unsubscribe from them",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", help="Repository (owner/repo); defaults to GITHUB_REPOSITORY")
    common.add_argument("--body-file", help="Read the body from a file ('-' for stdin)")

    # Comment command
    comment_parser = subparsers.add_parser("comment", parents=[common], help="Comment on an issue")
    comment_parser.add_argument("number", type=int, help="Issue or pull request number")
    comment_parser.add_argument("body", nargs="?", help="Comment text")

    # Issue command
    issue_parser = subparsers.add_parser("issue", parents=[common], help="Open a new issue")
    issue_parser.add_argument("title", help="Issue title")
    issue_parser.add_argument("body", nargs="?", help="Issue description")
    issue_parser.add_argument(
        "--label",
        dest="labels",
        action="append",
        default=[],
        help="Label to apply (repeatable)",
    )

    return parser


def cli(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging("INFO", stream=sys.stderr)
        logger.error(f"Invalid configuration: {e}")
        return 1

    # stdout carries only the created item's URL
    setup_logging(settings.log_level, stream=sys.stderr)

    try:
        result = asyncio.run(run(args, settings))
    except (GitHubAPIError, httpx.HTTPError, ValueError, OSError) as e:
        logger.error(f"Failed to create {args.command}: {e}")
        return 1

    print(result.html_url or result.id)
    return 0


if __name__ == "__main__":
    sys.exit(cli())
