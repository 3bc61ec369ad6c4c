"""Idempotent reconciliation of installations and their repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.model import Installation, LinkUserProject, Project
from borshook.domain.sync import sync_user

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from borshook.domain.model import RemoteRepo, RemoteUser, User
    from borshook.domain.ports.provider import ProviderClient
    from borshook.domain.ports.scheduling import ProjectSyncScheduler
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """What one reconciliation call changed."""

    created_project_ids: list[UUID] = field(default_factory=list)
    removed_repo_xrefs: list[int] = field(default_factory=list)
    skipped_private: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.created_project_ids or self.removed_repo_xrefs)


@dataclass(slots=True)
class Reconciler:
    """Keeps installations and projects consistent with what the provider reports.

    Every entry point checks for existence before inserting, so replaying an
    event, or receiving events out of order, never creates duplicates. Newly
    created projects are handed to the scheduler only after the unit of work
    has committed.
    """

    unit_of_work_factory: Callable[[], WebhookUnitOfWork]
    provider: ProviderClient
    scheduler: ProjectSyncScheduler
    allow_private_repos: bool = False

    def reconcile_installation(self, installation_xref: int, sender: RemoteUser) -> ReconcileResult:
        result = ReconcileResult()
        with self.unit_of_work_factory() as uow:
            user = sync_user(uow, sender)
            installation = self._get_or_create_installation(uow, installation_xref)
            self._reconcile(uow, installation, user, result)
            uow.commit()
        self._schedule(result.created_project_ids)
        return result

    def reconcile_repositories(
        self,
        installation_xref: int,
        sender: RemoteUser,
        added: Iterable[RemoteRepo] = (),
        removed: Iterable[RemoteRepo] = (),
    ) -> ReconcileResult:
        result = ReconcileResult()
        with self.unit_of_work_factory() as uow:
            user = sync_user(uow, sender)
            for repo in removed:
                project = uow.repositories.projects.get_by_repo_xref(repo.xref)
                if project is None:
                    continue
                uow.repositories.projects.remove(project)
                result.removed_repo_xrefs.append(repo.xref)
                log.info("Removed project %s (%s)", project.name, repo.xref)

            added_names = [repo.name for repo in added]
            if added_names:
                log.debug(
                    "Installation %s reports added repositories: %s",
                    installation_xref,
                    added_names,
                )

            installation = self._get_or_create_installation(uow, installation_xref)
            self._reconcile(uow, installation, user, result)
            uow.commit()
        self._schedule(result.created_project_ids)
        return result

    def delete_installation(self, installation_xref: int, sender: RemoteUser) -> int:
        """Delete every installation with this reference; returns how many went."""

        with self.unit_of_work_factory() as uow:
            sync_user(uow, sender)
            installations = uow.repositories.installations.list_by_xref(installation_xref)
            for installation in installations:
                uow.repositories.installations.remove(installation)
            uow.commit()
        log.info(f"Deleted {len(installations)} installation(s) for {installation_xref}")
        return len(installations)

    def sync_sender(self, sender: RemoteUser) -> None:
        """Record the sender of an installation event that needs no reconciling."""

        with self.unit_of_work_factory() as uow:
            sync_user(uow, sender)
            uow.commit()

    def _get_or_create_installation(
        self, uow: WebhookUnitOfWork, installation_xref: int
    ) -> Installation:
        installations = uow.repositories.installations
        installation = installations.get_by_xref(installation_xref)
        if installation is None:
            installation = Installation(installation_xref=installation_xref)
            installations.add(installation)
            log.info("Created installation %s", installation_xref)
        return installation

    def _reconcile(
        self,
        uow: WebhookUnitOfWork,
        installation: Installation,
        user: User,
        result: ReconcileResult,
    ) -> None:
        repos = self.provider.get_installation_repos(installation.installation_xref)
        for repo in repos:
            if repo.private and not self.allow_private_repos:
                result.skipped_private += 1
                log.debug("Skipping private repository %s", repo.name)
                continue
            if uow.repositories.projects.get_by_repo_xref(repo.xref) is not None:
                continue

            project = Project(repo_xref=repo.xref, name=repo.name, installation=installation)
            uow.repositories.projects.add(project)
            if not uow.repositories.links.exists(user=user, project=project):
                uow.repositories.links.add(LinkUserProject(user=user, project=project))
            result.created_project_ids.append(project.id)
            log.info("Created project %s (%s)", repo.name, repo.xref)

    def _schedule(self, project_ids: Iterable[UUID]) -> None:
        for project_id in project_ids:
            self.scheduler.start_synchronize_project(project_id)
