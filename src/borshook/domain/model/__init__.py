"""Domain model for installations, projects, users and patches."""

from __future__ import annotations

from .base import Entity, HasEntityType, new_id
from .enums import CommitKind, EntityType, PrState, StatusState
from .patch import Patch
from .project import Installation, InstallationConnection, LinkUserProject, Project
from .remote import PrSnapshot, RemoteRepo, RemoteUser
from .user import User

__all__ = [
    "CommitKind",
    "Entity",
    "EntityType",
    "HasEntityType",
    "Installation",
    "InstallationConnection",
    "LinkUserProject",
    "Patch",
    "PrSnapshot",
    "PrState",
    "Project",
    "RemoteRepo",
    "RemoteUser",
    "StatusState",
    "User",
    "new_id",
]
