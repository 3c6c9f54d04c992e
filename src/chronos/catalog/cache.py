"""JSON-file backed cache of bookable project/task entries.

The file holds a JSON array of ``{"display", "project", "task"}`` objects. It is
always replaced as a whole: the new content goes to a sibling ``.tmp`` file that
is then renamed over the cache, so readers see either the old or the new list.

Not safe for concurrent writers.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    """One bookable (project, task) pair with its display label."""

    display: str
    project: int
    task: int

    def __str__(self) -> str:
        return self.display


class CacheError(Exception):
    """Base class for project cache failures."""


@dataclass(frozen=True, slots=True)
class CacheNotSynchronizedError(CacheError):
    """The cache file doesn't exist yet."""

    path: Path

    def __str__(self) -> str:
        return f"No project cache at {self.path}; run `chronos sync` first"


@dataclass(frozen=True, slots=True)
class CacheCorruptError(CacheError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Project cache {self.path} is unreadable: {self.reason}; run `chronos sync` again"


@dataclass(frozen=True, slots=True)
class CacheReadError(CacheError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to read project cache {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class CacheWriteError(CacheError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to write projects to file {self.path}: {self.reason}"


class ProjectCache:
    """Load and atomically replace the project cache file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[CacheEntry]:
        try:
            raw_text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CacheNotSynchronizedError(path=self._path) from e
        except UnicodeDecodeError as e:
            raise CacheCorruptError(path=self._path, reason=f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise CacheReadError(path=self._path, reason=e.strerror or str(e)) from e

        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise CacheCorruptError(path=self._path, reason=str(e)) from e

        if not isinstance(raw, list):
            raise CacheCorruptError(path=self._path, reason="expected a JSON array")

        try:
            return [CacheEntry.model_validate(item) for item in raw]
        except ValidationError as e:
            raise CacheCorruptError(
                path=self._path, reason=f"{e.error_count()} invalid entries"
            ) from e

    def save(self, entries: list[CacheEntry]) -> None:
        payload = [entry.model_dump(mode="json") for entry in entries]
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise CacheWriteError(path=self._path, reason=e.strerror or str(e)) from e

        logger.info("Project cache written", extra={"path": str(self._path), "entries": len(entries)})

    def search(self, text: str) -> list[CacheEntry]:
        """Entries whose display label contains ``text`` (case-insensitive)."""

        needle = text.strip().casefold()
        return [entry for entry in self.load() if needle in entry.display.casefold()]
