"""Upserts of provider state into the entity store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.model import Patch, User

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from borshook.domain.model import PrSnapshot, Project, RemoteUser
    from borshook.domain.ports.provider import ProviderClient
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork

log = getLogger(__name__)


def sync_user(uow: WebhookUnitOfWork, remote: RemoteUser) -> User:
    """Insert the user on first sight, otherwise refresh login and avatar."""

    users = uow.repositories.users
    user = users.get_by_xref(remote.xref)
    if user is None:
        user = User.from_remote(remote)
        users.add(user)
        log.debug("Created user %s (%s)", remote.login, remote.xref)
        return user
    user.refresh(remote)
    return user


def sync_patch(
    uow: WebhookUnitOfWork,
    project: Project,
    snapshot: PrSnapshot,
    *,
    refresh: bool = False,
) -> Patch:
    """Get or create the patch for ``snapshot`` within ``project``.

    An existing patch keeps its fields unless ``refresh`` is set; lifecycle
    events update those fields themselves, in a defined order. The author is
    always upserted.
    """

    author = sync_user(uow, snapshot.user)
    patches = uow.repositories.patches
    patch = patches.get_by_pr(project=project, pr_xref=snapshot.number)
    if patch is None:
        patch = Patch.from_snapshot(project, snapshot, author=author)
        patches.add(patch)
        log.debug("Created patch %s#%s", project.name, snapshot.number)
        return patch
    patch.author = author
    if refresh:
        patch.apply_snapshot(snapshot)
    return patch


@dataclass(slots=True)
class ProjectSyncResult:
    project_id: UUID
    synced: int
    closed: int


@dataclass(slots=True)
class ProjectSynchronizer:
    """Reconcile a project's patches against its open pull requests.

    Safe to run any number of times for the same project, including after the
    project has been deleted.
    """

    unit_of_work_factory: Callable[[], WebhookUnitOfWork]
    provider: ProviderClient

    def __call__(self, project_id: UUID) -> ProjectSyncResult | None:
        with self.unit_of_work_factory() as uow:
            project = uow.repositories.projects.get(project_id)
            if project is None:
                log.info("Skipping sync of project %s: it no longer exists", project_id)
                return None

            pulls = self.provider.get_open_pulls(project.installation_connection())
            seen: set[int] = set()
            for pull in pulls:
                sync_patch(uow, project, pull, refresh=True)
                seen.add(pull.number)

            closed = 0
            for patch in uow.repositories.patches.list_open(project):
                if patch.pr_xref not in seen:
                    patch.open = False
                    closed += 1

            uow.commit()

        log.info(
            f"Synced project {project.name}: open={len(seen)}, closed={closed}"
        )
        return ProjectSyncResult(project_id=project_id, synced=len(seen), closed=closed)
