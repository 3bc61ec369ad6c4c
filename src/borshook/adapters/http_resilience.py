"""Rate-limited, retrying httpx client used by provider adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import RetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from borshook.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

QUOTA_REMAINING_HEADER = "X-RateLimit-Remaining"
QUOTA_RESET_HEADER = "X-RateLimit-Reset"


class ResilientClient:
    """``httpx.AsyncClient`` with retries and an optional client-side rate limit.

    ``transport`` replaces the network layer underneath the retry transport,
    which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers),
            transport=RetryTransport(transport=transport, retry=config.retry.build()),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        if self._limiter is None:
            response = await self._client.request(
                method, url, params=params, headers=headers, json=json
            )
        else:
            async with self._limiter:
                response = await self._client.request(
                    method, url, params=params, headers=headers, json=json
                )
        self._check_quota(response)
        return response

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        return await self.request("POST", url, headers=headers, json=json)

    def _check_quota(self, response: httpx.Response) -> None:
        threshold = self.config.quota_warning_below
        remaining = response.headers.get(QUOTA_REMAINING_HEADER)
        if threshold is None or remaining is None or not remaining.isdigit():
            return
        if int(remaining) < threshold:
            log.warning(
                f"API quota low: {remaining} calls left until "
                f"{response.headers.get(QUOTA_RESET_HEADER, 'unknown')}"
            )
