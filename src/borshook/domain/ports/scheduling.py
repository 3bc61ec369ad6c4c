"""Ports for scheduling background work."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class ProjectSyncScheduler(Protocol):
    """Fire-and-forget submission of a project synchronisation.

    Implementations must deliver each request at least once; the job itself is
    idempotent, so duplicates are harmless.
    """

    def start_synchronize_project(self, project_id: UUID) -> None: ...
