"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from chronos.credentials.secret_store import SecretStoreError
from chronos.settings import ChronosSettings

_CHRONOS_ENV_VARS = (
    "CHRONOS_PASSWORD",
    "CHRONOS_CONFIG_FILE",
    "CHRONOS_CACHE_FILE",
    "CHRONOS_BASE_URL",
    "LOG_LEVEL",
)


class InMemorySecretStore:
    """Dictionary-backed stand-in for the OS keyring."""

    def __init__(self, passwords: dict[str, str] | None = None) -> None:
        self.passwords: dict[str, str] = dict(passwords or {})
        self.get_calls: list[str] = []
        self.fail_get: str | None = None
        self.fail_set: str | None = None

    def get_password(self, user_name: str) -> str | None:
        self.get_calls.append(user_name)
        if self.fail_get is not None:
            raise SecretStoreError(user_name=user_name, reason=self.fail_get)
        return self.passwords.get(user_name)

    def set_password(self, user_name: str, password: str) -> None:
        if self.fail_set is not None:
            raise SecretStoreError(user_name=user_name, reason=self.fail_set)
        self.passwords[user_name] = password


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test without CHRONOS_* variables and away from any real .env."""
    for name in _CHRONOS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    return InMemorySecretStore()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a config file and return its path."""

    def _write(data: dict[str, Any]) -> Path:
        path = tmp_path / "chronos" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> ChronosSettings:
    """Settings pointing at files under tmp_path."""
    return ChronosSettings(
        _env_file=None,
        CHRONOS_CONFIG_FILE=str(tmp_path / "chronos" / "config.json"),
        CHRONOS_CACHE_FILE=str(tmp_path / "chronos" / "projects.json"),
    )
