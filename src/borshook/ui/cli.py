"""Command line entry point for the GitHub webhook ingestion core."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from borshook.adapters.github import GITHUB_PROVIDER
from borshook.app import init_database, replay_event
from borshook.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database schema")

    replay = subparsers.add_parser("replay", help="Run a stored webhook delivery")
    replay.add_argument(
        "event_type",
        type=str,
        help="Event type as sent in the X-GitHub-Event header (e.g. pull_request)",
    )
    replay.add_argument(
        "payload",
        type=Path,
        help="Path to the JSON body of the delivery",
    )
    replay.add_argument(
        "--provider",
        type=str,
        default=GITHUB_PROVIDER,
        help="Provider that sent the delivery (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _load_payload(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read payload file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Payload file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Payload file {path} must contain a JSON object")
    return payload  # pyright: ignore[reportUnknownVariableType]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    payload: dict[str, Any] | None = None
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        if parsed_args.command == "replay":
            payload = _load_payload(parsed_args.payload)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "init-db":
            init_database()
        elif parsed_args.command == "replay" and payload is not None:
            init_database()
            replay_event(parsed_args.event_type, payload, provider=parsed_args.provider)
            log.info("Replayed %s delivery from %s", parsed_args.event_type, parsed_args.payload)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
