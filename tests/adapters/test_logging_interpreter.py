from __future__ import annotations

import logging

import pytest

from borshook.adapters.commands import LoggingCommandInterpreter
from borshook.domain.model import Installation, Project, User
from borshook.domain.ports.commands import Command


def test_logging_interpreter_records_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    project = Project(
        repo_xref=14, name="org/repo", installation=Installation(installation_xref=91)
    )
    command = Command(
        project=project,
        commenter=User(user_xref=8, login="reviewer"),
        comment="bors r+\nthanks!",
        pr_xref=3,
    )
    interpreter = LoggingCommandInterpreter()

    with caplog.at_level(logging.INFO, logger="borshook.adapters.commands"):
        interpreter.run(command)

    assert interpreter.seen == [command]
    assert "reviewer on org/repo#3: 'bors r+'" in caplog.text
