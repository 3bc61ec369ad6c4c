from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API fails after retries or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
