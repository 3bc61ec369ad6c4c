from __future__ import annotations

from pathlib import Path

import pytest

from borshook.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_flag,
    env_int,
    get_database_config,
    get_github_config,
    get_sync_config,
    get_webhook_config,
    require_env_var,
    require_env_vars,
)
from borshook.config.github import DEFAULT_GITHUB_API_URL
from borshook.config.storage import DatabaseConfig, StorageConfig


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)
    assert isinstance(exc.value, ConfigurationError)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("yes", True), ("TRUE", True), ("off", False), ("0", False), ("", False)],
)
def test_env_flag(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("FLAG_VAR", raw)

    assert env_flag("FLAG_VAR") is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG_VAR", "maybe")

    with pytest.raises(ConfigurationError):
        env_flag("FLAG_VAR")


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INT_VAR", raising=False)
    assert env_int("INT_VAR", default=3) == 3

    monkeypatch.setenv("INT_VAR", "8")
    assert env_int("INT_VAR", default=3) == 8

    for bad in ("zero", "0", "-2"):
        monkeypatch.setenv("INT_VAR", bad)
        with pytest.raises(ConfigurationError):
            env_int("INT_VAR", default=3)


def test_github_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_APP_ID", "123")
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "/keys/app.pem")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)

    config = get_github_config()

    assert config.app_id == "123"
    assert config.api_url == DEFAULT_GITHUB_API_URL
    assert config.resilience.base_url == DEFAULT_GITHUB_API_URL
    assert "POST" not in config.resilience.retry.allowed_methods


def test_github_config_honours_enterprise_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_APP_ID", "123")
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "key")
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")

    config = get_github_config()

    assert config.resilience.base_url == "https://ghe.example.com/api/v3"


def test_github_config_requires_app_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_APP_ID", raising=False)
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "key")

    with pytest.raises(MissingConfigurationError, match="GITHUB_APP_ID"):
        get_github_config()


def test_webhook_and_sync_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BORSHOOK_ALLOW_PRIVATE_REPOS", "true")
    monkeypatch.setenv("BORSHOOK_SYNC_WORKERS", "2")
    monkeypatch.delenv("BORSHOOK_SYNC_ATTEMPTS", raising=False)

    assert get_webhook_config().allow_private_repos is True
    sync = get_sync_config()
    assert (sync.max_workers, sync.max_attempts) == (2, 3)


def test_database_config_prefers_database_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://db/borshook")

    assert get_database_config().uri == "postgresql+psycopg://db/borshook"


def test_database_config_falls_back_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("BORSHOOK_DATA_DIR", str(tmp_path))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'borshook.db'}"
    assert tmp_path.is_dir()


def test_storage_config_creates_data_dir(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "nested" / "data")

    path = config.database_path()

    assert path.parent.is_dir()
    assert path.name == "borshook.db"


def test_database_engine_options(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://db/borshook")
    monkeypatch.setenv("BORSHOOK_DATABASE_ECHO", "yes")

    config = get_database_config()

    assert not config.is_sqlite
    assert config.engine_options() == {"echo": True, "pool_pre_ping": True}
    assert DatabaseConfig(uri="sqlite://").engine_options() == {
        "echo": False,
        "pool_pre_ping": False,
    }
