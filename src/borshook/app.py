"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from borshook.adapters.actors import InMemoryActorRegistry, attempt_registry, batch_registry
from borshook.adapters.commands import LoggingCommandInterpreter
from borshook.adapters.github import GITHUB_PROVIDER, GitHubClient, decode_github_event
from borshook.adapters.scheduling import ThreadedProjectSyncScheduler
from borshook.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyWebhookUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    startup,
)
from borshook.config import get_sync_config, get_webhook_config
from borshook.domain.ports.unit_of_work import WebhookUnitOfWork
from borshook.domain.sync import ProjectSynchronizer
from borshook.domain.webhooks import (
    CommandExtractor,
    PatchLifecycleHandler,
    Reconciler,
    StatusRouter,
    WebhookDispatcher,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from borshook.config import SyncConfig, WebhookConfig
    from borshook.domain.ports.actors import ActorLookup, AttemptActor, BatchActor
    from borshook.domain.ports.commands import CommandInterpreter
    from borshook.domain.ports.provider import ProviderClient
    from borshook.domain.ports.scheduling import ProjectSyncScheduler

UnitOfWorkFactory = Callable[[], WebhookUnitOfWork]

log = getLogger(__name__)


def build_dispatcher(
    *,
    provider: ProviderClient,
    unit_of_work_factory: UnitOfWorkFactory,
    scheduler: ProjectSyncScheduler,
    batchers: ActorLookup[BatchActor],
    attemptors: ActorLookup[AttemptActor],
    interpreter: CommandInterpreter,
    allow_private_repos: bool = False,
) -> WebhookDispatcher:
    """Wire the webhook handlers around the given ports."""

    return WebhookDispatcher(
        unit_of_work_factory=unit_of_work_factory,
        reconciler=Reconciler(
            unit_of_work_factory=unit_of_work_factory,
            provider=provider,
            scheduler=scheduler,
            allow_private_repos=allow_private_repos,
        ),
        patches=PatchLifecycleHandler(batchers=batchers),
        commands=CommandExtractor(
            unit_of_work_factory=unit_of_work_factory,
            interpreter=interpreter,
        ),
        status=StatusRouter(
            unit_of_work_factory=unit_of_work_factory,
            provider=provider,
            batchers=batchers,
            attemptors=attemptors,
        ),
        decoders={GITHUB_PROVIDER: decode_github_event},
    )


@dataclass(slots=True)
class WebhookApp:
    """A running webhook core: the dispatcher plus what it owns."""

    dispatcher: WebhookDispatcher
    scheduler: ThreadedProjectSyncScheduler
    batchers: InMemoryActorRegistry[BatchActor]
    attemptors: InMemoryActorRegistry[AttemptActor]

    def handle(self, provider: str, event_type: str, payload: Mapping[str, Any]) -> None:
        self.dispatcher.handle(provider, event_type, payload)

    def close(self, *, wait: bool = True) -> None:
        self.scheduler.shutdown(wait=wait)


def build_app(
    *,
    provider: ProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    interpreter: CommandInterpreter | None = None,
    webhook_config: WebhookConfig | None = None,
    sync_config: SyncConfig | None = None,
) -> WebhookApp:
    """Build the webhook core from configuration, starting the database if needed."""

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyWebhookUnitOfWork
    effective_provider = provider or GitHubClient()
    webhooks = webhook_config or get_webhook_config()

    synchronizer = ProjectSynchronizer(
        unit_of_work_factory=effective_uow,
        provider=effective_provider,
    )
    scheduler = ThreadedProjectSyncScheduler(synchronizer, config=sync_config or get_sync_config())
    batchers = batch_registry()
    attemptors = attempt_registry()

    dispatcher = build_dispatcher(
        provider=effective_provider,
        unit_of_work_factory=effective_uow,
        scheduler=scheduler,
        batchers=batchers,
        attemptors=attemptors,
        interpreter=interpreter or LoggingCommandInterpreter(),
        allow_private_repos=webhooks.allow_private_repos,
    )
    log.info(f"Webhook core ready (allow_private_repos={webhooks.allow_private_repos})")
    return WebhookApp(
        dispatcher=dispatcher,
        scheduler=scheduler,
        batchers=batchers,
        attemptors=attemptors,
    )


def init_database(*, database_uri: str | None = None) -> str:
    """Create the schema in the configured database and return its URI."""

    if not is_started():
        startup(database_uri=database_uri)
    engine = configured_engine()
    if engine is None:
        raise StartupError("Database engine missing after startup")
    rendered = engine.url.render_as_string(hide_password=True)
    log.info("Database ready at %s", rendered)
    return rendered


def replay_event(
    event_type: str,
    payload: Mapping[str, Any],
    *,
    provider: str = GITHUB_PROVIDER,
    app: WebhookApp | None = None,
) -> None:
    """Run one stored delivery through the dispatcher and wait for follow-up syncs."""

    effective_app = app or build_app()
    try:
        effective_app.handle(provider, event_type, payload)
        effective_app.scheduler.wait_idle()
    finally:
        if app is None:
            effective_app.close()
