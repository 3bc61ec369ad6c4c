"""GitHub App authentication: app JWTs and cached installation tokens."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from jose import jwt
from pydantic import ValidationError

from borshook.config.errors import ConfigurationError

from .errors import GitHubAPIError
from .schema import AccessTokenResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from borshook.adapters.http_resilience import ResilientClient

log = getLogger(__name__)

JWT_LIFETIME_SECONDS = 600
JWT_CLOCK_SKEW_SECONDS = 60
TOKEN_REFRESH_MARGIN = timedelta(seconds=60)


def load_private_key(raw: str) -> str:
    """Accept a PEM string (newlines may be escaped) or a path to a PEM file."""

    if "PRIVATE KEY-----" in raw:
        return raw.replace("\\n", "\n")
    path = Path(raw.strip().strip('"'))
    if path.is_file():
        return path.read_text()
    raise ConfigurationError(
        "GITHUB_APP_PRIVATE_KEY must be a PEM string or the path to a private key file"
    )


def generate_jwt(app_id: str, private_key: str, *, now: int | None = None) -> str:
    issued = int(time.time()) if now is None else now
    payload = {
        "iat": issued - JWT_CLOCK_SKEW_SECONDS,
        "exp": issued + JWT_LIFETIME_SECONDS,
        "iss": app_id,
    }
    return jwt.encode(payload, load_private_key(private_key), algorithm="RS256")


@dataclass(slots=True)
class _CachedToken:
    token: str
    expires_at: datetime


@dataclass(slots=True)
class GitHubAppAuth:
    """Hands out installation tokens, reusing each until shortly before it expires."""

    app_id: str
    private_key: str
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))
    _tokens: dict[int, _CachedToken] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    async def installation_token(self, client: ResilientClient, installation_xref: int) -> str:
        with self._lock:
            cached = self._tokens.get(installation_xref)
            if cached is not None and cached.expires_at - TOKEN_REFRESH_MARGIN > self.clock():
                return cached.token

        fresh = await self._request_token(client, installation_xref)
        with self._lock:
            self._tokens[installation_xref] = fresh
        return fresh.token

    def forget(self, installation_xref: int) -> None:
        with self._lock:
            self._tokens.pop(installation_xref, None)

    async def _request_token(
        self, client: ResilientClient, installation_xref: int
    ) -> _CachedToken:
        app_jwt = generate_jwt(self.app_id, self.private_key)
        response = await client.post(
            f"/app/installations/{installation_xref}/access_tokens",
            headers={"Authorization": f"Bearer {app_jwt}"},
        )
        if response.is_error:
            log.error(
                f"Installation token request for {installation_xref} failed: "
                f"{response.status_code}"
            )
            raise GitHubAPIError(
                f"Could not obtain a token for installation {installation_xref}",
                status_code=response.status_code,
            )
        try:
            payload = AccessTokenResponse.model_validate(response.json())
        except ValidationError as exc:
            raise GitHubAPIError("Unexpected access token response") from exc
        expires_at = datetime.fromisoformat(payload.expires_at.replace("Z", "+00:00"))
        log.debug("Obtained token for installation %s", installation_xref)
        return _CachedToken(token=payload.token, expires_at=expires_at)
