"""Webhook handling policy."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    allow_private_repos: bool = False


def get_webhook_config() -> WebhookConfig:
    return WebhookConfig(allow_private_repos=env_flag("BORSHOOK_ALLOW_PRIVATE_REPOS"))
