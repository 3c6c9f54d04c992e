"""Compose a time entry from a favorite, explicit values and the project cache."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, Field

from chronos.catalog.cache import CacheEntry
from chronos.credentials.config import Favorite


class BookingError(Exception):
    """Base class for booking failures."""


@dataclass(frozen=True, slots=True)
class UnknownFavoriteError(BookingError):
    template: str

    def __str__(self) -> str:
        return f"No favorite named or numbered {self.template!r} in the config file"


@dataclass(frozen=True, slots=True)
class UnknownTargetError(BookingError):
    target: str

    def __str__(self) -> str:
        return f"No cached project/task matches {self.target}; run `chronos sync` if it is new"


@dataclass(frozen=True, slots=True)
class AmbiguousTargetError(BookingError):
    match: str
    candidates: tuple[str, ...]

    def __str__(self) -> str:
        listed = "\n  ".join(self.candidates)
        return f"{len(self.candidates)} cached entries match {self.match!r}:\n  {listed}"


@dataclass(frozen=True, slots=True)
class IncompleteDraftError(BookingError):
    missing: tuple[str, ...]

    def __str__(self) -> str:
        return f"Booking is missing: {', '.join(self.missing)}"


class BookingDraft(BaseModel):
    """A time entry that may still be missing values."""

    project: int | None = None
    task: int | None = None
    duration: int | None = Field(default=None, description="Duration in minutes")
    day: date = Field(default_factory=date.today)
    comment: str | None = None
    reference: str | None = None

    def require_complete(self) -> None:
        missing = [name for name in ("project", "task", "duration") if getattr(self, name) is None]
        if self.duration is not None and self.duration <= 0:
            missing.append("a positive duration")
        if missing:
            raise IncompleteDraftError(missing=tuple(missing))


def find_favorite(favorites: Sequence[Favorite] | None, template: str) -> Favorite:
    """Look a favorite up by name, or by 1-based position when numeric."""

    favorites = favorites or []
    for favorite in favorites:
        if favorite.name is not None and favorite.name == template:
            return favorite

    if template.isdigit():
        index = int(template)
        if 1 <= index <= len(favorites):
            return favorites[index - 1]

    raise UnknownFavoriteError(template=template)


def merge_draft(
    favorite: Favorite | None = None,
    *,
    project: int | None = None,
    task: int | None = None,
    duration: int | None = None,
    comment: str | None = None,
    reference: str | None = None,
    day: date | None = None,
) -> BookingDraft:
    """Build a draft; explicit values win over the favorite's."""

    values: dict[str, object] = {}
    if favorite is not None:
        values.update(
            project=favorite.project,
            task=favorite.task,
            duration=favorite.duration,
            comment=favorite.comment,
        )

    overrides = {
        "project": project,
        "task": task,
        "duration": duration,
        "comment": comment,
        "reference": reference,
        "day": day,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return BookingDraft.model_validate(values)


def select_entry(
    entries: Sequence[CacheEntry], draft: BookingDraft, *, match: str | None = None
) -> CacheEntry:
    """Find the cache entry the draft books against.

    A draft with project and task must name a cached pair. Otherwise ``match``
    has to pick exactly one entry by its display label.
    """

    if draft.project is not None and draft.task is not None:
        for entry in entries:
            if entry.project == draft.project and entry.task == draft.task:
                return entry
        raise UnknownTargetError(target=f"project {draft.project} / task {draft.task}")

    if not match or not match.strip():
        raise IncompleteDraftError(missing=("project and task, or --match",))

    needle = match.strip().casefold()
    candidates = [entry for entry in entries if needle in entry.display.casefold()]
    if draft.project is not None:
        candidates = [entry for entry in candidates if entry.project == draft.project]
    if draft.task is not None:
        candidates = [entry for entry in candidates if entry.task == draft.task]

    if not candidates:
        raise UnknownTargetError(target=repr(match))
    if len(candidates) > 1:
        raise AmbiguousTargetError(
            match=match, candidates=tuple(entry.display for entry in candidates)
        )
    return candidates[0]
