"""Synchronization defaults for background project sync."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int

DEFAULT_SYNC_WORKERS = 4
DEFAULT_SYNC_ATTEMPTS = 3
DEFAULT_SYNC_RETRY_DELAY_SECONDS = 2.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_workers: int = DEFAULT_SYNC_WORKERS
    max_attempts: int = DEFAULT_SYNC_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_SYNC_RETRY_DELAY_SECONDS


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        max_workers=env_int("BORSHOOK_SYNC_WORKERS", default=DEFAULT_SYNC_WORKERS),
        max_attempts=env_int("BORSHOOK_SYNC_ATTEMPTS", default=DEFAULT_SYNC_ATTEMPTS),
    )
