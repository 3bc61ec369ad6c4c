"""SQLAlchemy adapter package for borshook."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyInstallationRepository,
    SqlAlchemyLinkUserProjectRepository,
    SqlAlchemyPatchRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyUserRepository,
)
from .unit_of_work import (
    SqlAlchemyWebhookUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyInstallationRepository",
    "SqlAlchemyLinkUserProjectRepository",
    "SqlAlchemyPatchRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyWebhookUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
