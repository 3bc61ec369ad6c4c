"""Ports for talking to the source-control hosting provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from borshook.domain.model import InstallationConnection, PrSnapshot, RemoteRepo


@runtime_checkable
class ProviderClient(Protocol):
    """Calls the webhook core makes back into the hosting provider."""

    def get_installation_repos(self, installation_xref: int) -> Sequence[RemoteRepo]: ...

    def get_open_pulls(self, connection: InstallationConnection) -> Sequence[PrSnapshot]: ...

    def post_comment(self, connection: InstallationConnection, pr_xref: int, body: str) -> None: ...


__all__ = ["ProviderClient"]
