"""Accounts on the hosting provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from borshook.domain.model.base import Entity
from borshook.domain.model.enums import EntityType

if TYPE_CHECKING:
    from borshook.domain.model.remote import RemoteUser


@dataclass(eq=False, kw_only=True)
class User(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.USER

    user_xref: int
    login: str
    avatar_url: str = ""

    @classmethod
    def from_remote(cls, remote: RemoteUser) -> User:
        return cls(user_xref=remote.xref, login=remote.login, avatar_url=remote.avatar_url)

    def refresh(self, remote: RemoteUser) -> None:
        """Copy the mutable profile fields; the reference never changes."""
        if remote.xref != self.user_xref:
            raise ValueError("cannot refresh a user from a different account")
        self.login = remote.login
        self.avatar_url = remote.avatar_url
