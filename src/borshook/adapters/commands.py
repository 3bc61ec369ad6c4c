"""Command interpreter that only records what it was asked to do."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from borshook.domain.ports.commands import CommandInterpreter

if TYPE_CHECKING:
    from borshook.domain.ports.commands import Command

log = getLogger(__name__)


class LoggingCommandInterpreter:
    """Logs each command instead of running it; used for replays and dry runs."""

    def __init__(self) -> None:
        self.seen: list[Command] = []

    def run(self, command: Command) -> None:
        self.seen.append(command)
        first_line = command.comment.strip().splitlines()[0] if command.comment.strip() else ""
        log.info(
            f"Command from {command.commenter.login} on "
            f"{command.project.name}#{command.pr_xref}: {first_line!r}"
        )


if TYPE_CHECKING:
    _interpreter_check: CommandInterpreter = LoggingCommandInterpreter()
