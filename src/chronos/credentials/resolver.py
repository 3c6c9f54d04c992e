"""Password resolution for the configured user.

Priority for the password is:
  1. the CHRONOS_PASSWORD env var (even when empty)
  2. the config file
  3. the keyring

The first source that answers wins; later sources are not consulted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import SecretStr

from chronos.credentials.config import ChronosConfig, ResolvedConfig, load_config
from chronos.credentials.errors import GetPasswordError, NoPasswordError, SetPasswordError
from chronos.credentials.secret_store import SecretStore, SecretStoreError
from chronos.settings import ChronosSettings

logger = logging.getLogger(__name__)

PasswordLookup = Callable[[ChronosConfig], SecretStr | None]


class CredentialResolver:
    """Builds a :class:`ResolvedConfig` from settings, config file and keyring."""

    def __init__(self, *, settings: ChronosSettings, secret_store: SecretStore) -> None:
        self._settings = settings
        self._secret_store = secret_store

    def load(self, config_path: Path | None = None) -> ChronosConfig:
        """Load the config file without resolving a password."""

        return load_config(config_path or self._settings.config_path)

    def resolve(self, config_path: Path | None = None) -> ResolvedConfig:
        """Load the config file and attach a password to it.

        Raises:
            ReadConfigFileError / ParseConfigFileError: the config file is unusable.
            NoPasswordError: no source provides a password.
            GetPasswordError: the keyring failed while looking one up.
        """

        config = self.load(config_path)

        lookups: tuple[tuple[str, PasswordLookup], ...] = (
            ("environment", self._from_environment),
            ("config file", self._from_config_file),
            ("keyring", self._from_secret_store),
        )
        for source, lookup in lookups:
            password = lookup(config)
            if password is not None:
                logger.debug(
                    "Password resolved", extra={"source": source, "user_name": config.user_name}
                )
                return ResolvedConfig(
                    user_name=config.user_name,
                    password=password,
                    favorites=config.favorites,
                )

        raise NoPasswordError(user_name=config.user_name)

    def persist_secret(self, config: ChronosConfig, new_secret: str) -> None:
        """Store ``new_secret`` in the keyring, then on ``config``.

        ``config`` is only updated once the keyring write succeeded.
        """

        try:
            self._secret_store.set_password(config.user_name, new_secret)
        except SecretStoreError as e:
            raise SetPasswordError(user_name=config.user_name, reason=e.reason) from e

        config.password = SecretStr(new_secret)

    def _from_environment(self, config: ChronosConfig) -> SecretStr | None:
        return self._settings.password

    def _from_config_file(self, config: ChronosConfig) -> SecretStr | None:
        return config.password

    def _from_secret_store(self, config: ChronosConfig) -> SecretStr | None:
        try:
            password = self._secret_store.get_password(config.user_name)
        except SecretStoreError as e:
            raise GetPasswordError(user_name=config.user_name, reason=e.reason) from e

        if password is None:
            return None
        return SecretStr(password)
