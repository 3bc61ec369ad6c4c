"""Failures raised out of webhook dispatch."""

from __future__ import annotations


class DispatchError(RuntimeError):
    """Base class for errors that abort handling of one webhook event."""


class NotFoundError(DispatchError, LookupError):
    """A lookup the event cannot be applied without came back empty."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class InvalidPayloadError(DispatchError, ValueError):
    """The payload of a known event type does not have the expected shape."""

    def __init__(self, event_type: str, detail: str) -> None:
        super().__init__(f"Invalid {event_type} payload: {detail}")
        self.event_type = event_type
