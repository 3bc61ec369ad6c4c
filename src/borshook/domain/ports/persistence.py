"""Ports for persisting installations, projects, users and patches."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from borshook.domain.model import Installation, LinkUserProject, Patch, Project, User

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class InstallationRepository(Repository[Installation], Protocol):
    """Persistence contract for installations."""

    def get_by_xref(self, installation_xref: int) -> Installation | None: ...

    def list_by_xref(self, installation_xref: int) -> Sequence[Installation]: ...

    def remove(self, entity: Installation) -> None: ...


@runtime_checkable
class ProjectRepository(Repository[Project], Protocol):
    """Persistence contract for projects."""

    def get(self, project_id: UUID) -> Project | None: ...

    def get_by_repo_xref(self, repo_xref: int) -> Project | None: ...

    def remove(self, entity: Project) -> None: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    """Persistence contract for users."""

    def get_by_xref(self, user_xref: int) -> User | None: ...


@runtime_checkable
class LinkUserProjectRepository(Repository[LinkUserProject], Protocol):
    """Persistence contract for user/project links."""

    def exists(self, *, user: User, project: Project) -> bool: ...


@runtime_checkable
class PatchRepository(Repository[Patch], Protocol):
    """Persistence contract for patches."""

    def get_by_pr(self, *, project: Project, pr_xref: int) -> Patch | None: ...

    def list_open(self, project: Project) -> Sequence[Patch]: ...
