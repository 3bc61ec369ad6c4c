"""Read-only records describing provider state (never persisted as-is)."""

from __future__ import annotations

from dataclasses import dataclass

from borshook.domain.model.enums import PrState


@dataclass(frozen=True, slots=True)
class RemoteUser:
    xref: int
    login: str
    avatar_url: str = ""


@dataclass(frozen=True, slots=True)
class RemoteRepo:
    xref: int
    name: str
    private: bool = False


@dataclass(frozen=True, slots=True)
class PrSnapshot:
    """A pull request as the provider reported it at one point in time."""

    number: int
    title: str
    body: str
    state: PrState
    base_ref: str
    head_sha: str
    user: RemoteUser

    @property
    def is_open(self) -> bool:
        return self.state is PrState.OPEN
