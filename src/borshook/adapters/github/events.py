"""Decode GitHub webhook deliveries into typed domain events."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from borshook.domain.errors import InvalidPayloadError
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

from .schema import (
    InstallationPayload,
    InstallationRepositoriesPayload,
    IssueCommentEventPayload,
    PullRequestEventPayload,
    ReviewCommentEventPayload,
    ReviewEventPayload,
    StatusEventPayload,
)
from .translator import parse_pr, parse_repo, parse_user

if TYPE_CHECKING:
    from collections.abc import Mapping

    from borshook.domain.events import WebhookEvent

log = getLogger(__name__)

GITHUB_PROVIDER = "github"


def _validate[TModel: BaseModel](
    model: type[TModel], event_type: str, payload: Mapping[str, Any]
) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidPayloadError(event_type, str(exc)) from exc


def decode_github_event(event_type: str, payload: Mapping[str, Any]) -> WebhookEvent:
    """Validate ``payload`` for ``event_type`` (the ``X-GitHub-Event`` header)."""

    match event_type:
        case "ping":
            return PingEvent()
        case "installation":
            installation = _validate(InstallationPayload, event_type, payload)
            return InstallationEvent(
                action=installation.action,
                installation_xref=installation.installation.id,
                sender=parse_user(installation.sender),
            )
        case "installation_repositories":
            repos = _validate(InstallationRepositoriesPayload, event_type, payload)
            return InstallationRepositoriesEvent(
                action=repos.action,
                installation_xref=repos.installation.id,
                sender=parse_user(repos.sender),
                repositories_added=tuple(parse_repo(r) for r in repos.repositories_added),
                repositories_removed=tuple(parse_repo(r) for r in repos.repositories_removed),
            )
        case "pull_request":
            pull = _validate(PullRequestEventPayload, event_type, payload)
            return PullRequestEvent(
                action=pull.action,
                repo_xref=pull.repository.id,
                pull_request=parse_pr(pull.pull_request),
            )
        case "issue_comment":
            comment = _validate(IssueCommentEventPayload, event_type, payload)
            return IssueCommentEvent(
                action=comment.action,
                repo_xref=comment.repository.id,
                issue_number=comment.issue.number,
                is_pull_request=comment.issue.pull_request is not None,
                commenter=parse_user(comment.comment.user),
                body=comment.comment.body,
            )
        case "pull_request_review_comment":
            review_comment = _validate(ReviewCommentEventPayload, event_type, payload)
            return ReviewCommentEvent(
                action=review_comment.action,
                repo_xref=review_comment.repository.id,
                pull_request=parse_pr(review_comment.pull_request),
                commenter=parse_user(review_comment.comment.user),
                body=review_comment.comment.body,
            )
        case "pull_request_review":
            review = _validate(ReviewEventPayload, event_type, payload)
            return ReviewEvent(
                action=review.action,
                repo_xref=review.repository.id,
                pull_request=parse_pr(review.pull_request),
                reviewer=parse_user(review.review.user),
                body=review.review.body,
            )
        case "status":
            status = _validate(StatusEventPayload, event_type, payload)
            return StatusEvent(
                repo_xref=status.repository.id,
                sha=status.sha,
                context=status.context,
                state=status.state,
                target_url=status.target_url,
                commit_message=status.commit.commit.message,
            )
        case _:
            log.debug("Unhandled GitHub event type %s", event_type)
            return UnhandledEvent(provider=GITHUB_PROVIDER, event_type=event_type)
