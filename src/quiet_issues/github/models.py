"""Value types shared by the GitHub client and the issue helper."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_SHORT_REF = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)#(?P<number>\d+)$")


class SubscriptionState(str, Enum):
    """Notification subscription of the viewer for an issue (GraphQL names)."""

    SUBSCRIBED = "SUBSCRIBED"
    UNSUBSCRIBED = "UNSUBSCRIBED"
    IGNORED = "IGNORED"


@dataclass(frozen=True)
class IssueReference:
    """Identifies a single GitHub issue."""

    owner: str
    repository: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"

    @classmethod
    def parse(cls, text: str) -> "IssueReference":
        """Build a reference from the ``owner/repo#123`` short form."""
        match = _SHORT_REF.match(text.strip())
        if not match:
            raise ValueError(f"Invalid issue reference: {text!r} (expected owner/repo#number)")
        return cls(match["owner"], match["repo"], int(match["number"]))

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"


@dataclass(frozen=True)
class RepoContext:
    """The repository an invocation acts on."""

    owner: str
    repository: str

    @classmethod
    def from_full_name(cls, full_name: str) -> "RepoContext":
        """Parse the ``owner/repo`` form used by GITHUB_REPOSITORY."""
        owner, sep, repository = full_name.strip().partition("/")
        if not sep or not owner or not repository or "/" in repository:
            raise ValueError(f"Invalid repository: {full_name!r} (expected owner/repo)")
        return cls(owner, repository)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"

    def issue(self, number: int) -> IssueReference:
        return IssueReference(self.owner, self.repository, number)


@dataclass
class CreationResult:
    """
    Payload returned by GitHub for a created comment or issue.

    Only the identifiers are interpreted; everything else is passed through
    untouched in ``data``.
    """

    data: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> int | None:
        return self.data.get("id")

    @property
    def node_id(self) -> str | None:
        return self.data.get("node_id")

    @property
    def number(self) -> int | None:
        """Issue number (only present when the created item is an issue)."""
        return self.data.get("number")

    @property
    def html_url(self) -> str | None:
        return self.data.get("html_url")

    def __getitem__(self, key: str) -> Any:
        return self.data[key]
