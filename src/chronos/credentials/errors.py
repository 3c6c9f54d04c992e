"""Errors raised while loading configuration and resolving credentials."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Base class for configuration and credential failures."""


@dataclass(frozen=True, slots=True)
class ReadConfigFileError(ConfigError):
    """The config file could not be read."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Could not read config file {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ParseConfigFileError(ConfigError):
    """The config file is not valid JSON or doesn't match the expected schema."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Error parsing config file {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class NoPasswordError(ConfigError):
    """No password in the environment, the config file or the keyring.

    Expected on first use; callers should point the user at ``chronos login``.
    """

    user_name: str

    def __str__(self) -> str:
        return (
            f"No password provided for user {self.user_name}, please either set one via "
            "CHRONOS_PASSWORD, the config file, or use `chronos login` to store one in "
            "the system keyring."
        )


@dataclass(frozen=True, slots=True)
class GetPasswordError(ConfigError):
    """The keyring holds an entry but reading it failed."""

    user_name: str
    reason: str

    def __str__(self) -> str:
        return f"Error getting password for user {self.user_name} from keyring: {self.reason}"


@dataclass(frozen=True, slots=True)
class SetPasswordError(ConfigError):
    """Storing a password in the keyring failed."""

    user_name: str
    reason: str

    def __str__(self) -> str:
        return f"Error storing password for user {self.user_name} in keyring: {self.reason}"
