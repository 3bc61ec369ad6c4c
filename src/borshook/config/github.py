"""GitHub App configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_TIMEOUT_SECONDS = 15.0
GITHUB_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_QUOTA_WARNING_BELOW = 100


@dataclass(frozen=True)
class GitHubConfig:
    """Holds the GitHub App identity and HTTP settings."""

    app_id: str
    private_key: str
    api_url: str
    resilience: ResilienceConfig


def github_resilience_config(api_url: str = DEFAULT_GITHUB_API_URL) -> ResilienceConfig:
    return ResilienceConfig(
        base_url=api_url.rstrip("/"),
        timeout_seconds=GITHUB_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        quota_warning_below=GITHUB_QUOTA_WARNING_BELOW,
        default_headers={
            "Accept": GITHUB_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        },
    )


def get_github_config(*, resilience: ResilienceConfig | None = None) -> GitHubConfig:
    values = require_env_vars(("GITHUB_APP_ID", "GITHUB_APP_PRIVATE_KEY"))
    api_url = os.getenv("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL
    return GitHubConfig(
        app_id=values["GITHUB_APP_ID"],
        private_key=values["GITHUB_APP_PRIVATE_KEY"],
        api_url=api_url,
        resilience=resilience or github_resilience_config(api_url),
    )
