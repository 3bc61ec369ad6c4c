"""Retry, throttling and quota settings for outbound API clients."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx
from httpx_retries import Retry

# POST is left out: creating a comment twice is visible to users.
IDEMPOTENT_METHODS = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "PUT"})
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    allowed_methods: frozenset[str] = IDEMPOTENT_METHODS
    status_forcelist: frozenset[int] = TRANSIENT_STATUSES

    def build(self) -> Retry:
        """Translate into an ``httpx_retries.Retry`` honouring ``Retry-After``."""

        return Retry(
            total=self.total,
            backoff_factor=self.backoff_factor,
            max_backoff_wait=self.max_backoff_wait,
            respect_retry_after_header=True,
            allowed_methods=tuple(sorted(self.allowed_methods)),
            status_forcelist=tuple(sorted(self.status_forcelist)),
            retry_on_exceptions=(
                httpx.TimeoutException,
                httpx.NetworkError,
                httpx.RemoteProtocolError,
            ),
        )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """How one API client talks to its upstream.

    ``quota_warning_below`` makes the client log a warning whenever a response
    reports fewer remaining calls in the current quota window than this.
    """

    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    quota_warning_below: int | None = None
    default_headers: Mapping[str, str] = field(default_factory=dict[str, str])
