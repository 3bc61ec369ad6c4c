"""Translate GitHub payloads into provider records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from borshook.domain.model import PrSnapshot, PrState, RemoteRepo, RemoteUser

from .schema import PullRequestPayload, RepositoryPayload, UserPayload

if TYPE_CHECKING:
    from collections.abc import Mapping


def parse_user(payload: UserPayload | Mapping[str, Any]) -> RemoteUser:
    user = payload if isinstance(payload, UserPayload) else UserPayload.model_validate(payload)
    return RemoteUser(xref=user.id, login=user.login, avatar_url=user.avatar_url)


def parse_pr(payload: PullRequestPayload | Mapping[str, Any]) -> PrSnapshot:
    """Normalise a pull request object; ``body`` and ``title`` may be null upstream."""

    pr = (
        payload
        if isinstance(payload, PullRequestPayload)
        else PullRequestPayload.model_validate(payload)
    )
    return PrSnapshot(
        number=pr.number,
        title=pr.title,
        body=pr.body,
        state=PrState.OPEN if pr.state == "open" else PrState.CLOSED,
        base_ref=pr.base.ref,
        head_sha=pr.head.sha,
        user=parse_user(pr.user),
    )


def parse_repo(payload: RepositoryPayload | Mapping[str, Any]) -> RemoteRepo:
    repo = (
        payload
        if isinstance(payload, RepositoryPayload)
        else RepositoryPayload.model_validate(payload)
    )
    return RemoteRepo(xref=repo.id, name=repo.full_name, private=repo.private)
