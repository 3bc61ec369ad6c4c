"""Required lookups shared by the webhook handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from borshook.domain.errors import NotFoundError

if TYPE_CHECKING:
    from borshook.domain.model import Project
    from borshook.domain.ports.unit_of_work import WebhookUnitOfWork


def require_project(uow: WebhookUnitOfWork, repo_xref: int) -> Project:
    project = uow.repositories.projects.get_by_repo_xref(repo_xref)
    if project is None:
        raise NotFoundError("project", repo_xref)
    return project
