"""Entry point for inbound webhook events."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from borshook.domain.events import (
    InstallationEvent,
    InstallationRepositoriesEvent,
    IssueCommentEvent,
    PingEvent,
    PullRequestEvent,
    ReviewCommentEvent,
    ReviewEvent,
    StatusEvent,
    UnhandledEvent,
)
from borshook.domain.sync import sync_patch
from borshook.domain.webhooks.lookup import require_project

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from borshook.domain.events import WebhookEvent
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork
    from borshook.domain.webhooks.commands import CommandExtractor
    from borshook.domain.webhooks.patches import PatchLifecycleHandler
    from borshook.domain.webhooks.reconciler import Reconciler
    from borshook.domain.webhooks.status import StatusRouter

log = getLogger(__name__)

type EventDecoder = Callable[[str, Mapping[str, Any]], WebhookEvent]


@dataclass(slots=True)
class WebhookDispatcher:
    """Decode one ``(provider, event_type, payload)`` triple and apply it.

    Total over its input: unknown providers and event types are logged and
    ignored. Failures that abort an event surface as ``DispatchError``.
    """

    unit_of_work_factory: Callable[[], WebhookUnitOfWork]
    reconciler: Reconciler
    patches: PatchLifecycleHandler
    commands: CommandExtractor
    status: StatusRouter
    decoders: Mapping[str, EventDecoder] = field(default_factory=dict)

    def handle(self, provider: str, event_type: str, payload: Mapping[str, Any]) -> None:
        decoder = self.decoders.get(provider)
        if decoder is None:
            event: WebhookEvent = UnhandledEvent(provider=provider, event_type=event_type)
        else:
            event = decoder(event_type, payload)
        self.dispatch(event)

    def dispatch(self, event: WebhookEvent) -> None:
        match event:
            case PingEvent():
                log.debug("Got ping")
            case InstallationEvent(action="created"):
                self.reconciler.reconcile_installation(event.installation_xref, event.sender)
            case InstallationEvent(action="deleted"):
                self.reconciler.delete_installation(event.installation_xref, event.sender)
            case InstallationEvent():
                self.reconciler.sync_sender(event.sender)
                log.info("Ignoring installation action %s", event.action)
            case InstallationRepositoriesEvent(action="added" | "removed"):
                self.reconciler.reconcile_repositories(
                    event.installation_xref,
                    event.sender,
                    added=event.repositories_added,
                    removed=event.repositories_removed,
                )
            case InstallationRepositoriesEvent():
                log.info("Ignoring installation_repositories action %s", event.action)
            case PullRequestEvent():
                self._pull_request(event)
            case IssueCommentEvent():
                self.commands.from_issue_comment(event)
            case ReviewCommentEvent():
                self.commands.from_review_comment(event)
            case ReviewEvent():
                self.commands.from_review(event)
            case StatusEvent():
                self.status.route(event)
            case UnhandledEvent():
                log.debug("Ignoring %s event %s", event.provider, event.event_type)

    def _pull_request(self, event: PullRequestEvent) -> None:
        with self.unit_of_work_factory() as uow:
            project = require_project(uow, event.repo_xref)
            # synchronize orders its own commit update after cancelling the batch entry
            patch = sync_patch(
                uow, project, event.pull_request, refresh=event.action != "synchronize"
            )
            self.patches.apply(event.action, project=project, patch=patch, pr=event.pull_request)
            uow.commit()
