"""Port for the comment-command interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from borshook.domain.model import Patch, PrSnapshot, Project, User


@dataclass(slots=True)
class Command:
    """A comment or review body addressed to the merge bot, ready to interpret."""

    project: Project
    commenter: User
    comment: str
    pr_xref: int
    pr: PrSnapshot | None = None
    patch: Patch | None = None


@runtime_checkable
class CommandInterpreter(Protocol):
    def run(self, command: Command) -> None: ...
