"""Ports for the per-project batch and attempt state machines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from borshook.domain.model import StatusState


class ActorNotFoundError(LookupError):
    """Raised when no live actor is registered for a project."""

    def __init__(self, kind: str, project_id: UUID) -> None:
        super().__init__(f"No live {kind} actor registered for project {project_id}")
        self.kind = kind
        self.project_id = project_id


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    """One commit status, already mapped to the internal tri-state."""

    commit: str
    context: str
    state: StatusState
    target_url: str | None


@runtime_checkable
class AttemptActor(Protocol):
    """Handle to a project's single-commit test state machine."""

    def status(self, update: StatusUpdate) -> None: ...


@runtime_checkable
class BatchActor(AttemptActor, Protocol):
    """Handle to a project's batch test state machine."""

    def cancel(self, patch_id: UUID) -> None: ...


@runtime_checkable
class ActorLookup[TActor](Protocol):
    """Resolves the live actor of a project or raises ``ActorNotFoundError``."""

    def lookup(self, project_id: UUID) -> TActor: ...
