"""Typed webhook events.

Each supported (provider, event type) pair decodes into exactly one of these
variants; anything else becomes ``UnhandledEvent``. Handlers match on the
variant instead of poking at nested payload dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from borshook.domain.model import PrSnapshot, RemoteRepo, RemoteUser


@dataclass(frozen=True, slots=True)
class PingEvent:
    pass


@dataclass(frozen=True, slots=True)
class InstallationEvent:
    action: str
    installation_xref: int
    sender: RemoteUser


@dataclass(frozen=True, slots=True)
class InstallationRepositoriesEvent:
    action: str
    installation_xref: int
    sender: RemoteUser
    repositories_added: tuple[RemoteRepo, ...] = field(default_factory=tuple)
    repositories_removed: tuple[RemoteRepo, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PullRequestEvent:
    action: str
    repo_xref: int
    pull_request: PrSnapshot


@dataclass(frozen=True, slots=True)
class IssueCommentEvent:
    action: str
    repo_xref: int
    issue_number: int
    is_pull_request: bool
    commenter: RemoteUser
    body: str


@dataclass(frozen=True, slots=True)
class ReviewCommentEvent:
    action: str
    repo_xref: int
    pull_request: PrSnapshot
    commenter: RemoteUser
    body: str


@dataclass(frozen=True, slots=True)
class ReviewEvent:
    action: str
    repo_xref: int
    pull_request: PrSnapshot
    reviewer: RemoteUser
    body: str


@dataclass(frozen=True, slots=True)
class StatusEvent:
    repo_xref: int
    sha: str
    context: str
    state: str
    target_url: str | None
    commit_message: str


@dataclass(frozen=True, slots=True)
class UnhandledEvent:
    provider: str
    event_type: str


type WebhookEvent = (
    PingEvent
    | InstallationEvent
    | InstallationRepositoriesEvent
    | PullRequestEvent
    | IssueCommentEvent
    | ReviewCommentEvent
    | ReviewEvent
    | StatusEvent
    | UnhandledEvent
)
