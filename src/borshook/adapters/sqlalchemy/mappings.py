"""SQLAlchemy mapping metadata for installations, projects, users and patches."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from borshook.domain.model import Installation, LinkUserProject, Patch, Project, User

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

installation_table = Table(
    "installation",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("installation_xref", BigInteger, nullable=False),
    UniqueConstraint("installation_xref"),
)

project_table = Table(
    "project",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("repo_xref", BigInteger, nullable=False),
    Column("name", String(255), nullable=False),
    Column(
        "installation_id",
        UUIDColumnType,
        ForeignKey("installation.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("last_active_at", UTCDateTime(), nullable=True),
    UniqueConstraint("repo_xref"),
)

user_table = Table(
    "user",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_xref", BigInteger, nullable=False),
    Column("login", String(255), nullable=False),
    Column("avatar_url", String(1024), nullable=False, default=""),
    UniqueConstraint("user_xref"),
)

link_user_project_table = Table(
    "link_user_project",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, ForeignKey("user.id"), nullable=False),
    Column(
        "project_id",
        UUIDColumnType,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("user_id", "project_id"),
)

patch_table = Table(
    "patch",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "project_id",
        UUIDColumnType,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("pr_xref", BigInteger, nullable=False),
    Column("title", String(1024), nullable=False, default=""),
    Column("body", Text, nullable=False, default=""),
    Column("into_branch", String(255), nullable=False, default=""),
    Column("commit", String(64), nullable=False, default=""),
    Column("open", Boolean, nullable=False, default=True),
    Column("author_id", UUIDColumnType, ForeignKey("user.id"), nullable=True),
    UniqueConstraint("project_id", "pr_xref"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Installation,
        installation_table,
        properties={
            "_projects": relationship(
                Project,
                back_populates="installation",
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Project,
        project_table,
        properties={
            "installation": relationship(
                Installation,
                back_populates="_projects",
            ),
            "_patches": relationship(
                Patch,
                back_populates="project",
                cascade="all, delete-orphan",
            ),
            "_members": relationship(
                LinkUserProject,
                back_populates="project",
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(User, user_table)

    mapper_registry.map_imperatively(
        LinkUserProject,
        link_user_project_table,
        properties={
            "user": relationship(User),
            "project": relationship(
                Project,
                back_populates="_members",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Patch,
        patch_table,
        properties={
            "project": relationship(
                Project,
                back_populates="_patches",
            ),
            "author": relationship(User),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
