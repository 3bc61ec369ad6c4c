"""Extraction of bot commands from comments and reviews."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.ports.commands import Command
from borshook.domain.sync import sync_patch, sync_user
from borshook.domain.webhooks.lookup import require_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from borshook.domain.events import IssueCommentEvent, ReviewCommentEvent, ReviewEvent
    from borshook.domain.model import PrSnapshot, RemoteUser
    from borshook.domain.ports.commands import CommandInterpreter
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class CommandExtractor:
    unit_of_work_factory: Callable[[], WebhookUnitOfWork]
    interpreter: CommandInterpreter

    def from_issue_comment(self, event: IssueCommentEvent) -> Command | None:
        if event.action != "created" or not event.is_pull_request:
            return None
        return self._submit(
            repo_xref=event.repo_xref,
            author=event.commenter,
            body=event.body,
            pr_xref=event.issue_number,
        )

    def from_review_comment(self, event: ReviewCommentEvent) -> Command | None:
        if event.action != "created":
            return None
        return self._submit(
            repo_xref=event.repo_xref,
            author=event.commenter,
            body=event.body,
            pr_xref=event.pull_request.number,
            pr=event.pull_request,
        )

    def from_review(self, event: ReviewEvent) -> Command | None:
        if event.action != "submitted":
            return None
        return self._submit(
            repo_xref=event.repo_xref,
            author=event.reviewer,
            body=event.body,
            pr_xref=event.pull_request.number,
            pr=event.pull_request,
        )

    def _submit(
        self,
        *,
        repo_xref: int,
        author: RemoteUser,
        body: str,
        pr_xref: int,
        pr: PrSnapshot | None = None,
    ) -> Command:
        with self.unit_of_work_factory() as uow:
            project = require_project(uow, repo_xref)
            commenter = sync_user(uow, author)
            patch = sync_patch(uow, project, pr, refresh=True) if pr is not None else None
            uow.commit()

            command = Command(
                project=project,
                commenter=commenter,
                comment=body,
                pr_xref=pr_xref,
                pr=pr,
                patch=patch,
            )
            log.debug("Running command from %s on %s#%s", author.login, project.name, pr_xref)
            self.interpreter.run(command)
        return command
