"""Background project synchronisation on a thread pool."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.config.sync import SyncConfig
from borshook.domain.ports.scheduling import ProjectSyncScheduler

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

log = getLogger(__name__)


class ThreadedProjectSyncScheduler:
    """Runs ``job(project_id)`` in the background with at-least-once delivery.

    - a request for a project that is already queued is coalesced into it;
    - a request arriving while the project's job runs schedules one more run
      after it finishes, so the newest state is always picked up;
    - a failing run is retried up to ``max_attempts`` times in total.
    """

    def __init__(
        self,
        job: Callable[[UUID], object],
        *,
        config: SyncConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._job = job
        self._config = config or SyncConfig()
        self._sleep = sleep
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="borshook-sync"
        )
        self._queued: set[UUID] = set()
        self._running: set[UUID] = set()
        self._rerun: set[UUID] = set()
        self._closed = False
        self._idle = threading.Condition()

    def start_synchronize_project(self, project_id: UUID) -> None:
        with self._idle:
            if self._closed:
                log.warning("Scheduler is shut down; dropping sync of project %s", project_id)
                return
            if project_id in self._queued:
                log.debug("Sync of project %s already queued", project_id)
                return
            if project_id in self._running:
                self._rerun.add(project_id)
                return
            self._submit(project_id)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no job is queued or running; ``False`` on timeout."""

        with self._idle:
            return self._idle.wait_for(lambda: not (self._queued or self._running), timeout)

    def shutdown(self, *, wait: bool = True) -> None:
        with self._idle:
            self._closed = True
        self._executor.shutdown(wait=wait)

    def _submit(self, project_id: UUID) -> None:
        # caller holds self._idle
        self._queued.add(project_id)
        self._executor.submit(self._run, project_id)

    def _run(self, project_id: UUID) -> None:
        with self._idle:
            self._queued.discard(project_id)
            self._running.add(project_id)
        try:
            self._run_with_retries(project_id)
        finally:
            with self._idle:
                self._running.discard(project_id)
                if project_id in self._rerun and not self._closed:
                    self._rerun.discard(project_id)
                    self._submit(project_id)
                self._idle.notify_all()

    def _run_with_retries(self, project_id: UUID) -> None:
        attempts = self._config.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                self._job(project_id)
            except Exception:
                if attempt >= attempts:
                    log.exception(f"Sync of project {project_id} failed after {attempts} attempts")
                    return
                log.warning(
                    f"Sync of project {project_id} failed (attempt {attempt}/{attempts}); retrying"
                )
                self._sleep(self._config.retry_delay_seconds * attempt)
            else:
                return


if TYPE_CHECKING:
    _scheduler_check: ProjectSyncScheduler = ThreadedProjectSyncScheduler(lambda _pid: None)
