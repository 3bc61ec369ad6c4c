"""HTTP client for the GitHub REST API, acting as a GitHub App installation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from borshook.adapters.http_resilience import ResilientClient
from borshook.config.github import GitHubConfig, get_github_config
from borshook.domain.ports.provider import ProviderClient

from .auth import GitHubAppAuth
from .errors import GitHubAPIError
from .schema import InstallationRepositoriesPage, PullRequestPayload
from .translator import parse_pr, parse_repo

if TYPE_CHECKING:
    from collections.abc import Callable

    from borshook.config.http_resilience import ResilienceConfig
    from borshook.domain.model import InstallationConnection, PrSnapshot, RemoteRepo

log = getLogger(__name__)

PAGE_SIZE = 100


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _default_auth_factory(config: GitHubConfig) -> GitHubAppAuth:
    return GitHubAppAuth(app_id=config.app_id, private_key=config.private_key)


def _next_page(response: httpx.Response) -> str | None:
    return response.links.get("next", {}).get("url")


@dataclass(slots=True)
class GitHubClient:
    """Synchronous ``ProviderClient`` over an async resilient httpx client."""

    config: GitHubConfig = field(default_factory=get_github_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    auth_factory: Callable[[GitHubConfig], GitHubAppAuth] = field(default=_default_auth_factory)
    auth: GitHubAppAuth = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.auth = self.auth_factory(self.config)

    def get_installation_repos(self, installation_xref: int) -> list[RemoteRepo]:
        return asyncio.run(self._get_installation_repos(installation_xref))

    def get_open_pulls(self, connection: InstallationConnection) -> list[PrSnapshot]:
        return asyncio.run(self._get_open_pulls(connection))

    def post_comment(self, connection: InstallationConnection, pr_xref: int, body: str) -> None:
        asyncio.run(self._post_comment(connection, pr_xref, body))

    async def _get_installation_repos(self, installation_xref: int) -> list[RemoteRepo]:
        repos: list[RemoteRepo] = []
        async with self.client_factory(self.config.resilience) as client:
            headers = await self._headers(client, installation_xref)
            url: str | None = "/installation/repositories"
            params: dict[str, int] | None = {"per_page": PAGE_SIZE}
            while url is not None:
                response = await self._get(client, url, headers=headers, params=params)
                try:
                    page = InstallationRepositoriesPage.model_validate(response.json())
                except ValidationError as exc:
                    raise GitHubAPIError("Unexpected installation repositories payload") from exc
                repos.extend(parse_repo(repo) for repo in page.repositories)
                url, params = _next_page(response), None
        log.debug(f"Installation {installation_xref} can see {len(repos)} repositories")
        return repos

    async def _get_open_pulls(self, connection: InstallationConnection) -> list[PrSnapshot]:
        pulls: list[PrSnapshot] = []
        async with self.client_factory(self.config.resilience) as client:
            headers = await self._headers(client, connection.installation_xref)
            url: str | None = f"/repositories/{connection.repo_xref}/pulls"
            params: dict[str, str | int] | None = {"state": "open", "per_page": PAGE_SIZE}
            while url is not None:
                response = await self._get(client, url, headers=headers, params=params)
                payload: Any = response.json()
                if not isinstance(payload, list):
                    raise GitHubAPIError("Unexpected pull request list payload")
                try:
                    pulls.extend(
                        parse_pr(PullRequestPayload.model_validate(item)) for item in payload
                    )
                except ValidationError as exc:
                    raise GitHubAPIError("Unexpected pull request payload") from exc
                url, params = _next_page(response), None
        return pulls

    async def _post_comment(
        self, connection: InstallationConnection, pr_xref: int, body: str
    ) -> None:
        async with self.client_factory(self.config.resilience) as client:
            headers = await self._headers(client, connection.installation_xref)
            response = await client.post(
                f"/repositories/{connection.repo_xref}/issues/{pr_xref}/comments",
                headers=headers,
                json={"body": body},
            )
            _raise_for_status(response)

    async def _headers(self, client: ResilientClient, installation_xref: int) -> dict[str, str]:
        token = await self.auth.installation_token(client, installation_xref)
        return {"Authorization": f"token {token}"}

    async def _get(
        self,
        client: ResilientClient,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, int] | dict[str, str | int] | None,
    ) -> httpx.Response:
        response = await client.get(url, headers=headers, params=params)
        _raise_for_status(response)
        return response


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_error:
        log.error(f"GitHub API error {response.status_code} for {response.request.url}")
        raise GitHubAPIError(
            f"GitHub API returned {response.status_code} for {response.request.url.path}",
            status_code=response.status_code,
        )


if TYPE_CHECKING:
    _provider_check: ProviderClient = GitHubClient()
