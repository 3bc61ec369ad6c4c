"""Pydantic models describing the GitHub webhook and REST payloads we read."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserPayload(GitHubBaseModel):
    id: int
    login: str
    avatar_url: str = ""

    _normalize_avatar = field_validator("avatar_url", mode="before")(_none_to_blank)


class RepositoryPayload(GitHubBaseModel):
    id: int
    full_name: str
    private: bool = False


class RepositoryRef(GitHubBaseModel):
    id: int


class InstallationRef(GitHubBaseModel):
    id: int


class BranchRef(GitHubBaseModel):
    ref: str


class HeadRef(GitHubBaseModel):
    sha: str


class PullRequestPayload(GitHubBaseModel):
    number: int
    title: str = ""
    body: str = ""
    state: Literal["open", "closed"]
    base: BranchRef
    head: HeadRef
    user: UserPayload

    _normalize_text = field_validator("title", "body", mode="before")(_none_to_blank)


class IssuePullRequestLink(GitHubBaseModel):
    url: str | None = None


class IssuePayload(GitHubBaseModel):
    number: int
    pull_request: IssuePullRequestLink | None = None


class CommentPayload(GitHubBaseModel):
    user: UserPayload
    body: str = ""

    _normalize_body = field_validator("body", mode="before")(_none_to_blank)


class CommitDetail(GitHubBaseModel):
    message: str


class StatusCommit(GitHubBaseModel):
    commit: CommitDetail


class InstallationPayload(GitHubBaseModel):
    action: str
    installation: InstallationRef
    sender: UserPayload


class InstallationRepositoriesPayload(GitHubBaseModel):
    action: str
    installation: InstallationRef
    sender: UserPayload
    repositories_added: list[RepositoryPayload] = Field(default_factory=list["RepositoryPayload"])
    repositories_removed: list[RepositoryPayload] = Field(
        default_factory=list["RepositoryPayload"]
    )


class PullRequestEventPayload(GitHubBaseModel):
    action: str
    repository: RepositoryRef
    pull_request: PullRequestPayload


class IssueCommentEventPayload(GitHubBaseModel):
    action: str
    repository: RepositoryRef
    issue: IssuePayload
    comment: CommentPayload


class ReviewCommentEventPayload(GitHubBaseModel):
    action: str
    repository: RepositoryRef
    pull_request: PullRequestPayload
    comment: CommentPayload


class ReviewEventPayload(GitHubBaseModel):
    action: str
    repository: RepositoryRef
    pull_request: PullRequestPayload
    review: CommentPayload


class StatusEventPayload(GitHubBaseModel):
    sha: str
    context: str
    state: str
    target_url: str | None = None
    commit: StatusCommit
    repository: RepositoryRef


class InstallationRepositoriesPage(GitHubBaseModel):
    total_count: int = 0
    repositories: list[RepositoryPayload] = Field(default_factory=list["RepositoryPayload"])


class AccessTokenResponse(GitHubBaseModel):
    token: str
    expires_at: str
