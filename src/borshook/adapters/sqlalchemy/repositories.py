"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from borshook.adapters.sqlalchemy.mappings import (
    installation_table,
    link_user_project_table,
    patch_table,
    project_table,
    user_table,
)
from borshook.domain.model import Installation, LinkUserProject, Patch, Project, User

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session


class SqlAlchemyRepository[TEntity]:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)


class SqlAlchemyInstallationRepository(SqlAlchemyRepository[Installation]):
    def get_by_xref(self, installation_xref: int) -> Installation | None:
        stmt = (
            select(Installation)
            .where(installation_table.c.installation_xref == installation_xref)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_by_xref(self, installation_xref: int) -> list[Installation]:
        stmt = select(Installation).where(
            installation_table.c.installation_xref == installation_xref
        )
        return list(self.session.execute(stmt).scalars())

    def remove(self, entity: Installation) -> None:
        self.session.delete(entity)


class SqlAlchemyProjectRepository(SqlAlchemyRepository[Project]):
    def get(self, project_id: uuid.UUID) -> Project | None:
        return self.session.get(Project, project_id)

    def get_by_repo_xref(self, repo_xref: int) -> Project | None:
        stmt = select(Project).where(project_table.c.repo_xref == repo_xref).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def remove(self, entity: Project) -> None:
        self.session.delete(entity)


class SqlAlchemyUserRepository(SqlAlchemyRepository[User]):
    def get_by_xref(self, user_xref: int) -> User | None:
        stmt = select(User).where(user_table.c.user_xref == user_xref).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyLinkUserProjectRepository(SqlAlchemyRepository[LinkUserProject]):
    def exists(self, *, user: User, project: Project) -> bool:
        stmt = (
            select(link_user_project_table.c.id)
            .where(link_user_project_table.c.user_id == user.id)
            .where(link_user_project_table.c.project_id == project.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None


class SqlAlchemyPatchRepository(SqlAlchemyRepository[Patch]):
    def get_by_pr(self, *, project: Project, pr_xref: int) -> Patch | None:
        stmt = (
            select(Patch)
            .where(patch_table.c.project_id == project.id)
            .where(patch_table.c.pr_xref == pr_xref)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_open(self, project: Project) -> list[Patch]:
        stmt = (
            select(Patch)
            .where(patch_table.c.project_id == project.id)
            .where(patch_table.c.open)
            .order_by(patch_table.c.pr_xref)
        )
        return list(self.session.execute(stmt).scalars())


if TYPE_CHECKING:
    from borshook.domain.ports.persistence import (
        InstallationRepository,
        LinkUserProjectRepository,
        PatchRepository,
        ProjectRepository,
        UserRepository,
    )

    def _check(session: Session) -> None:
        _installations: InstallationRepository = SqlAlchemyInstallationRepository(session)
        _projects: ProjectRepository = SqlAlchemyProjectRepository(session)
        _users: UserRepository = SqlAlchemyUserRepository(session)
        _links: LinkUserProjectRepository = SqlAlchemyLinkUserProjectRepository(session)
        _patches: PatchRepository = SqlAlchemyPatchRepository(session)
