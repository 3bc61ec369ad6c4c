"""Domain port definitions for adapters."""

from __future__ import annotations

from .actors import (
    ActorLookup,
    ActorNotFoundError,
    AttemptActor,
    BatchActor,
    StatusUpdate,
)
from .commands import Command, CommandInterpreter
from .persistence import (
    InstallationRepository,
    LinkUserProjectRepository,
    PatchRepository,
    ProjectRepository,
    Repository,
    UserRepository,
)
from .provider import ProviderClient
from .scheduling import ProjectSyncScheduler
from .unit_of_work import (
    RepositoryCollection,
    UnitOfWork,
    WebhookRepositories,
    WebhookUnitOfWork,
)

__all__ = [
    "ActorLookup",
    "ActorNotFoundError",
    "AttemptActor",
    "BatchActor",
    "Command",
    "CommandInterpreter",
    "InstallationRepository",
    "LinkUserProjectRepository",
    "PatchRepository",
    "ProjectRepository",
    "ProjectSyncScheduler",
    "ProviderClient",
    "Repository",
    "RepositoryCollection",
    "StatusUpdate",
    "UnitOfWork",
    "UserRepository",
    "WebhookRepositories",
    "WebhookUnitOfWork",
]
