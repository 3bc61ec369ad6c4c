"""Routing of commit-status updates.

Which subsystem a status belongs to is read from the first tokens of the
associated commit's message. The prefixes are a wire contract with the batch
and attempt state machines, which write those commit messages:

- ``"Merge "``: a batch staging commit, routed to the project's batch actor.
- ``"Try "``: an ad-hoc trying commit, routed to the project's attempt actor.
- ``"[ci skip] -bors-staging-tmp-<pr>"``: the temporary commit used while
  building a staging branch. CI should never report on it; when it does, the
  pull request ``<pr>`` gets an explanatory comment.

Everything else is somebody else's commit and is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from borshook.domain.model import CommitKind, StatusState
from borshook.domain.ports.actors import ActorNotFoundError, StatusUpdate
from borshook.domain.webhooks.lookup import require_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from borshook.domain.events import StatusEvent
    from borshook.domain.ports.actors import ActorLookup, AttemptActor, BatchActor
    from borshook.domain.ports.provider import ProviderClient
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork

log = getLogger(__name__)

BATCH_PREFIX: Final[str] = "Merge "
ATTEMPT_PREFIX: Final[str] = "Try "
STAGING_TMP_PREFIX: Final[str] = "[ci skip] -bors-staging-tmp-"

_STATE_BY_PROVIDER_STATE: Final[dict[str, StatusState]] = {
    "pending": StatusState.PENDING,
    "success": StatusState.OK,
    "failure": StatusState.ERROR,
    "error": StatusState.ERROR,
}

_STAGING_TMP_ADVICE = (
    "The `staging.tmp` branch only exists while bors assembles a batch and is "
    "deleted right after. Exclude it from your CI configuration so it builds "
    "`staging` and `trying` only."
)

_STAGING_TMP_MESSAGES: Final[dict[str, str]] = {
    "continuous-integration/travis-ci/push": (
        "## Unexpected Travis CI build on staging.tmp\n\n"
        "Travis CI is building every pushed branch, including `staging.tmp`. "
        "Add a `branches.only` section to `.travis.yml` listing `staging` and "
        "`trying`.\n\n" + _STAGING_TMP_ADVICE
    ),
    "continuous-integration/appveyor/branch": (
        "## Unexpected AppVeyor build on staging.tmp\n\n"
        "AppVeyor is building every pushed branch, including `staging.tmp`. "
        "Add a `branches.only` section to `appveyor.yml` listing `staging` and "
        "`trying`.\n\n" + _STAGING_TMP_ADVICE
    ),
}


def map_status_state(raw_state: str) -> StatusState | None:
    """Map a provider status string onto the internal tri-state; ``None`` if unknown."""

    return _STATE_BY_PROVIDER_STATE.get(raw_state)


@dataclass(frozen=True, slots=True)
class CommitClassification:
    kind: CommitKind
    pr_xref: int | None = None


def classify_commit_message(message: str) -> CommitClassification:
    if message.startswith(BATCH_PREFIX):
        return CommitClassification(CommitKind.BATCH)
    if message.startswith(ATTEMPT_PREFIX):
        return CommitClassification(CommitKind.ATTEMPT)
    if message.startswith(STAGING_TMP_PREFIX):
        suffix = message.removeprefix(STAGING_TMP_PREFIX).strip()
        if suffix.isascii() and suffix.isdecimal():
            return CommitClassification(CommitKind.STAGING_TMP, pr_xref=int(suffix))
        log.info("Ignoring staging.tmp commit with malformed PR suffix: %r", message)
    return CommitClassification(CommitKind.UNMANAGED)


def staging_tmp_message(context: str) -> str | None:
    """Explanation to post when ``context`` reported on a staging.tmp commit."""

    return _STAGING_TMP_MESSAGES.get(context)


@dataclass(slots=True)
class StatusRouter:
    unit_of_work_factory: Callable[[], WebhookUnitOfWork]
    provider: ProviderClient
    batchers: ActorLookup[BatchActor]
    attemptors: ActorLookup[AttemptActor]

    def route(self, event: StatusEvent) -> None:
        self.route_status(
            repo_xref=event.repo_xref,
            commit=event.sha,
            context=event.context,
            state=event.state,
            target_url=event.target_url,
            commit_message=event.commit_message,
        )

    def route_status(
        self,
        *,
        repo_xref: int,
        commit: str,
        context: str,
        state: str,
        target_url: str | None,
        commit_message: str,
    ) -> None:
        classification = classify_commit_message(commit_message)
        match classification.kind:
            case CommitKind.BATCH | CommitKind.ATTEMPT:
                self._forward(
                    classification.kind,
                    repo_xref=repo_xref,
                    commit=commit,
                    context=context,
                    state=state,
                    target_url=target_url,
                )
            case CommitKind.STAGING_TMP if classification.pr_xref is not None:
                self._explain_staging_tmp(repo_xref, classification.pr_xref, context)
            case _:
                log.debug("Ignoring status %s for unmanaged commit %s", context, commit)

    def _forward(
        self,
        kind: CommitKind,
        *,
        repo_xref: int,
        commit: str,
        context: str,
        state: str,
        target_url: str | None,
    ) -> None:
        mapped = map_status_state(state)
        if mapped is None:
            log.warning("Dropping status %s for %s: unknown state %r", context, commit, state)
            return

        with self.unit_of_work_factory() as uow:
            project_id = require_project(uow, repo_xref).id
        update = StatusUpdate(commit=commit, context=context, state=mapped, target_url=target_url)
        try:
            if kind is CommitKind.BATCH:
                self.batchers.lookup(project_id).status(update)
            else:
                self.attemptors.lookup(project_id).status(update)
        except ActorNotFoundError as exc:
            log.warning(f"Dropping status {context} for {commit}: {exc}")

    def _explain_staging_tmp(self, repo_xref: int, pr_xref: int, context: str) -> None:
        message = staging_tmp_message(context)
        if message is None:
            return
        with self.unit_of_work_factory() as uow:
            connection = require_project(uow, repo_xref).installation_connection()
        self.provider.post_comment(connection, pr_xref, message)
        log.info("Posted staging.tmp advice on PR #%s (context %s)", pr_xref, context)

