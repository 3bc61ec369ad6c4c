from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from borshook.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, dict[str, Any]]]:
    recorded: list[tuple[str, dict[str, Any]]] = []

    def fake_init_database(**kwargs: Any) -> str:
        recorded.append(("init-db", kwargs))
        return "sqlite://"

    def fake_replay(event_type: str, payload: dict[str, Any], **kwargs: Any) -> None:
        recorded.append(("replay", {"event_type": event_type, "payload": payload, **kwargs}))

    monkeypatch.setattr(cli_module, "init_database", fake_init_database)
    monkeypatch.setattr(cli_module, "replay_event", fake_replay)
    return recorded


def test_init_db(calls: list[tuple[str, dict[str, Any]]]) -> None:
    cli_module.main(["init-db"])

    assert calls == [("init-db", {})]


def test_replay_reads_payload_file(
    calls: list[tuple[str, dict[str, Any]]], tmp_path: Path
) -> None:
    payload_file = tmp_path / "delivery.json"
    payload_file.write_text(json.dumps({"action": "created"}), encoding="utf-8")

    cli_module.main(["--verbose", "replay", "installation", str(payload_file)])

    assert calls[0][0] == "init-db"
    assert calls[1] == (
        "replay",
        {"event_type": "installation", "payload": {"action": "created"}, "provider": "github"},
    )


@pytest.mark.parametrize("content", ["not json", "[1, 2]"])
def test_replay_rejects_bad_payload(
    calls: list[tuple[str, dict[str, Any]]], tmp_path: Path, content: str
) -> None:
    payload_file = tmp_path / "delivery.json"
    payload_file.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["replay", "installation", str(payload_file)])

    assert excinfo.value.code == 2
    assert calls == []


def test_replay_missing_file(calls: list[tuple[str, dict[str, Any]]], tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["replay", "installation", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2


def test_fatal_error_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_init_database(**_: Any) -> str:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(cli_module, "init_database", failing_init_database)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["init-db"])

    assert excinfo.value.code == 1


def test_help_describes_the_tool(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--help"])

    assert excinfo.value.code == 0
    assert "GitHub webhook ingestion core" in capsys.readouterr().out
