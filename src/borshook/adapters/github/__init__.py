"""Public interface for the GitHub adapter."""

from __future__ import annotations

from .auth import GitHubAppAuth, generate_jwt, load_private_key
from .client import GitHubClient
from .errors import GitHubAPIError
from .events import GITHUB_PROVIDER, decode_github_event
from .translator import parse_pr, parse_repo, parse_user

__all__ = [
    "GITHUB_PROVIDER",
    "GitHubAPIError",
    "GitHubAppAuth",
    "GitHubClient",
    "decode_github_event",
    "generate_jwt",
    "load_private_key",
    "parse_pr",
    "parse_repo",
    "parse_user",
]
