"""Pull-request lifecycle transitions of a patch."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.ports.actors import ActorNotFoundError

if TYPE_CHECKING:
    from borshook.domain.model import Patch, PrSnapshot, Project
    from borshook.domain.ports.actors import ActorLookup, BatchActor

log = getLogger(__name__)


@dataclass(slots=True)
class PatchLifecycleHandler:
    """Apply one ``pull_request`` action to an already resolved project and patch.

    The caller owns the unit of work and commits after ``apply`` returns.
    """

    batchers: ActorLookup[BatchActor]

    def apply(self, action: str, *, project: Project, patch: Patch, pr: PrSnapshot) -> None:
        match action:
            case "opened":
                project.ping()
            case "closed":
                project.ping()
                patch.open = False
            case "reopened":
                project.ping()
                patch.open = True
            case "synchronize":
                self._cancel_batch_entry(project, patch)
                patch.commit = pr.head_sha
            case "edited":
                patch.edit(title=pr.title, body=pr.body, into_branch=pr.base_ref)
            case _:
                log.info("Got unknown pull_request action: %s", action)

    def _cancel_batch_entry(self, project: Project, patch: Patch) -> None:
        try:
            batcher = self.batchers.lookup(project.id)
        except ActorNotFoundError:
            log.debug("No batcher for %s; nothing in flight for patch %s", project.name, patch.id)
            return
        batcher.cancel(patch.id)
