"""Pull requests tracked for a project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from borshook.domain.model.base import Entity
from borshook.domain.model.enums import EntityType

if TYPE_CHECKING:
    from borshook.domain.model.project import Project
    from borshook.domain.model.remote import PrSnapshot
    from borshook.domain.model.user import User


@dataclass(eq=False, kw_only=True)
class Patch(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PATCH

    project: Project = field(repr=False)
    pr_xref: int
    title: str = ""
    body: str = ""
    into_branch: str = ""
    commit: str = ""
    open: bool = True
    author: User | None = field(default=None, repr=False)

    @classmethod
    def from_snapshot(cls, project: Project, snapshot: PrSnapshot, *, author: User) -> Patch:
        patch = cls(project=project, pr_xref=snapshot.number, author=author)
        patch.apply_snapshot(snapshot)
        return patch

    def apply_snapshot(self, snapshot: PrSnapshot) -> None:
        if snapshot.number != self.pr_xref:
            raise ValueError("snapshot belongs to a different pull request")
        self.title = snapshot.title
        self.body = snapshot.body
        self.into_branch = snapshot.base_ref
        self.commit = snapshot.head_sha
        self.open = snapshot.is_open

    def edit(self, *, title: str, body: str, into_branch: str) -> None:
        self.title = title
        self.body = body
        self.into_branch = into_branch
