"""In-process registry of live per-project actors."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.ports.actors import ActorLookup, ActorNotFoundError, AttemptActor, BatchActor

if TYPE_CHECKING:
    from uuid import UUID

log = getLogger(__name__)


class InMemoryActorRegistry[TActor]:
    """Maps project ids to the live actor of one kind (``"batch"`` or ``"attempt"``)."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._actors: dict[UUID, TActor] = {}
        self._lock = threading.Lock()

    def register(self, project_id: UUID, actor: TActor) -> None:
        with self._lock:
            replaced = self._actors.get(project_id)
            self._actors[project_id] = actor
        if replaced is not None:
            log.info("Replaced %s actor for project %s", self.kind, project_id)

    def lookup(self, project_id: UUID) -> TActor:
        with self._lock:
            actor = self._actors.get(project_id)
        if actor is None:
            raise ActorNotFoundError(self.kind, project_id)
        return actor

    def unregister(self, project_id: UUID) -> None:
        with self._lock:
            self._actors.pop(project_id, None)

    def __contains__(self, project_id: object) -> bool:
        with self._lock:
            return project_id in self._actors

    def __len__(self) -> int:
        with self._lock:
            return len(self._actors)


def batch_registry() -> InMemoryActorRegistry[BatchActor]:
    return InMemoryActorRegistry[BatchActor]("batch")


def attempt_registry() -> InMemoryActorRegistry[AttemptActor]:
    return InMemoryActorRegistry[AttemptActor]("attempt")


if TYPE_CHECKING:
    _batch_check: ActorLookup[BatchActor] = batch_registry()
    _attempt_check: ActorLookup[AttemptActor] = attempt_registry()
