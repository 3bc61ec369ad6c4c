"""Webhook handling: dispatch, reconciliation, patch lifecycle, status routing and commands."""

from __future__ import annotations

from .commands import CommandExtractor
from .dispatcher import EventDecoder, WebhookDispatcher
from .lookup import require_project
from .patches import PatchLifecycleHandler
from .reconciler import ReconcileResult, Reconciler
from .status import (
    ATTEMPT_PREFIX,
    BATCH_PREFIX,
    STAGING_TMP_PREFIX,
    CommitClassification,
    StatusRouter,
    classify_commit_message,
    map_status_state,
    staging_tmp_message,
)

__all__ = [
    "ATTEMPT_PREFIX",
    "BATCH_PREFIX",
    "STAGING_TMP_PREFIX",
    "CommandExtractor",
    "CommitClassification",
    "EventDecoder",
    "PatchLifecycleHandler",
    "ReconcileResult",
    "Reconciler",
    "StatusRouter",
    "WebhookDispatcher",
    "classify_commit_message",
    "map_status_state",
    "require_project",
    "staging_tmp_message",
]
