"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    INSTALLATION = "installation"
    PROJECT = "project"
    USER = "user"
    LINK_USER_PROJECT = "link_user_project"
    PATCH = "patch"


class StatusState(StrEnum):
    """Internal tri-state of a commit status as seen by the batch and attempt actors."""

    PENDING = "pending"
    OK = "ok"
    ERROR = "error"


class PrState(StrEnum):
    OPEN = "open"
    CLOSED = "closed"


class CommitKind(StrEnum):
    """What a commit status belongs to, judged from the commit message."""

    BATCH = "batch"
    ATTEMPT = "attempt"
    STAGING_TMP = "staging_tmp"
    UNMANAGED = "unmanaged"
