"""Installations, the projects they own, and who may administer them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from borshook.domain.model.base import Entity
from borshook.domain.model.enums import EntityType

if TYPE_CHECKING:
    from borshook.domain.model.user import User


@dataclass(frozen=True, slots=True)
class InstallationConnection:
    """Everything a provider call needs to act on one repository."""

    installation_xref: int
    repo_xref: int


@dataclass(eq=False, kw_only=True)
class Installation(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.INSTALLATION

    installation_xref: int


@dataclass(eq=False, kw_only=True)
class Project(Entity):
    """Local mirror of one repository reachable through an installation."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PROJECT

    repo_xref: int
    name: str
    installation: Installation = field(repr=False)
    last_active_at: datetime | None = None

    def ping(self, *, now: datetime | None = None) -> None:
        """Mark the project as recently active."""
        self.last_active_at = now or datetime.now(tz=UTC)

    def installation_connection(self) -> InstallationConnection:
        return InstallationConnection(
            installation_xref=self.installation.installation_xref,
            repo_xref=self.repo_xref,
        )


@dataclass(eq=False, kw_only=True)
class LinkUserProject(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.LINK_USER_PROJECT

    user: User = field(repr=False)
    project: Project = field(repr=False)
