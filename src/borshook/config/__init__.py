"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, get_github_config, github_resilience_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config
from .webhooks import WebhookConfig, get_webhook_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "WebhookConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_github_config",
    "get_storage_config",
    "get_sync_config",
    "get_webhook_config",
    "github_resilience_config",
    "require_env_var",
    "require_env_vars",
]
