"""The user's JSON config file.

Example::

    {
      "user_name": "alice",
      "favorites": [
        {"name": "standup", "project": 2, "task": 200, "duration": 15, "comment": "Daily"}
      ]
    }

``password`` may also be set here, though the keyring is the preferred place.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from chronos.credentials.errors import ParseConfigFileError, ReadConfigFileError

logger = logging.getLogger(__name__)


class Favorite(BaseModel):
    """A recurring booking target with default values."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = Field(default=None, description="Optional name used with --template")
    project: int
    task: int
    duration: int | None = Field(default=None, ge=0, description="Duration in minutes")
    comment: str | None = None


class ChronosConfig(BaseModel):
    """Contents of the config file."""

    model_config = ConfigDict(extra="ignore")

    user_name: str = Field(min_length=1)
    password: SecretStr | None = None
    favorites: list[Favorite] | None = None


class ResolvedConfig(ChronosConfig):
    """A config whose password is known.

    Only :class:`chronos.credentials.resolver.CredentialResolver` builds these.
    """

    password: SecretStr


def load_config(path: Path) -> ChronosConfig:
    """Read and validate the config file at ``path``."""

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseConfigFileError(path=path, reason=f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise ReadConfigFileError(path=path, reason=e.strerror or str(e)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseConfigFileError(path=path, reason=str(e)) from e

    if not isinstance(data, dict):
        raise ParseConfigFileError(path=path, reason="expected a JSON object")

    try:
        config = ChronosConfig.model_validate(data)
    except ValidationError as e:
        raise ParseConfigFileError(path=path, reason=_summarize(e)) from e

    logger.debug(
        "Config file loaded",
        extra={
            "path": str(path),
            "user_name": config.user_name,
            "favorites": len(config.favorites or []),
        },
    )
    return config


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
