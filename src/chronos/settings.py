"""Process-level settings for chronos.

Settings are loaded from:
- environment variables
- and a local `.env` file (if present)

The user's own configuration (user name, favorites, optionally a password)
lives in a JSON file whose location is one of these settings; see
:mod:`chronos.credentials.config`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_FILE = Path("~/.chronos/config.json")
DEFAULT_CACHE_FILE = Path("~/.chronos/projects.json")


class ChronosSettings(BaseSettings):
    """Settings for the chronos CLI.

    Environment variables:
    - CHRONOS_PASSWORD     (optional, overrides every other password source)
    - CHRONOS_CONFIG_FILE  (optional)
    - CHRONOS_CACHE_FILE   (optional)
    - CHRONOS_BASE_URL     (optional)
    - LOG_LEVEL            (optional)

    Notes:
        An empty ``CHRONOS_PASSWORD`` still counts as set. Tests can point at a
        different env file via ``ChronosSettings(_env_file=path)``.
    """

    password: SecretStr | None = Field(
        default=None,
        validation_alias="CHRONOS_PASSWORD",
        description="CoffeeCup password; meant for CI and other ephemeral use",
    )

    config_file: Path = Field(
        default=DEFAULT_CONFIG_FILE,
        validation_alias="CHRONOS_CONFIG_FILE",
        description="Location of the user's JSON config file",
    )

    cache_file: Path = Field(
        default=DEFAULT_CACHE_FILE,
        validation_alias="CHRONOS_CACHE_FILE",
        description="Location of the synchronized project/task cache",
    )

    base_url: str = Field(
        default="https://api.coffeecup.app",
        validation_alias="CHRONOS_BASE_URL",
        description="CoffeeCup API base URL",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @property
    def config_path(self) -> Path:
        """Config file path with ``~`` expanded."""

        return self.config_file.expanduser()

    @property
    def cache_path(self) -> Path:
        """Cache file path with ``~`` expanded."""

        return self.cache_file.expanduser()
