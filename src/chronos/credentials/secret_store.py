"""Access to the OS secret store.

The resolver only needs two operations, so the keyring is hidden behind a small
protocol that tests can satisfy with an in-memory dictionary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger(__name__)

APPLICATION_ID = "tech.stackable.chronos"


@dataclass(frozen=True, slots=True)
class SecretStoreError(Exception):
    """The secret store failed for a reason other than a missing entry."""

    user_name: str
    reason: str

    def __str__(self) -> str:
        return f"Secret store failure for user {self.user_name}: {self.reason}"


class SecretStore(Protocol):
    """Per-application, per-user password vault.

    ``get_password`` returns ``None`` when there is no entry and raises
    :class:`SecretStoreError` for every other failure.
    """

    def get_password(self, user_name: str) -> str | None: ...

    def set_password(self, user_name: str, password: str) -> None: ...


class KeyringSecretStore:
    """:class:`SecretStore` backed by the ``keyring`` package."""

    def __init__(self, *, service: str = APPLICATION_ID) -> None:
        self._service = service

    def get_password(self, user_name: str) -> str | None:
        try:
            password = keyring.get_password(self._service, user_name)
        except KeyringError as e:
            raise SecretStoreError(user_name=user_name, reason=str(e) or type(e).__name__) from e

        if password is None:
            logger.debug(
                "No keyring entry", extra={"service": self._service, "user_name": user_name}
            )
        return password

    def set_password(self, user_name: str, password: str) -> None:
        try:
            keyring.set_password(self._service, user_name, password)
        except KeyringError as e:
            raise SecretStoreError(user_name=user_name, reason=str(e) or type(e).__name__) from e

        logger.info(
            "Password stored in keyring", extra={"service": self._service, "user_name": user_name}
        )
