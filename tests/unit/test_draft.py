"""Unit tests for booking drafts."""

from __future__ import annotations

from datetime import date

import pytest

from chronos.booking.draft import (
    AmbiguousTargetError,
    BookingDraft,
    IncompleteDraftError,
    UnknownFavoriteError,
    UnknownTargetError,
    find_favorite,
    merge_draft,
    select_entry,
)
from chronos.catalog.cache import CacheEntry
from chronos.credentials.config import Favorite

FAVORITES = [
    Favorite(project=1, task=100, duration=60),
    Favorite(name="standup", project=2, task=200, duration=15, comment="Daily"),
]

ENTRIES = [
    CacheEntry(display="Acme / Website / Design", project=1, task=100),
    CacheEntry(display="Acme / Website / Build", project=1, task=101),
    CacheEntry(display="Internal / Internal Ops / Meetings", project=2, task=200),
]


def test_find_favorite_by_name_or_position() -> None:
    assert find_favorite(FAVORITES, "standup") is FAVORITES[1]
    assert find_favorite(FAVORITES, "1") is FAVORITES[0]


@pytest.mark.parametrize("template", ["0", "3", "lunch"])
def test_unknown_favorite(template: str) -> None:
    with pytest.raises(UnknownFavoriteError):
        find_favorite(FAVORITES, template)


def test_unknown_favorite_without_favorites() -> None:
    with pytest.raises(UnknownFavoriteError):
        find_favorite(None, "1")


def test_merge_explicit_values_win() -> None:
    draft = merge_draft(FAVORITES[1], duration=30, reference="OPS-7", day=date(2026, 1, 2))

    assert draft == BookingDraft(
        project=2, task=200, duration=30, comment="Daily", reference="OPS-7", day=date(2026, 1, 2)
    )


def test_merge_without_favorite_defaults_to_today() -> None:
    draft = merge_draft(project=1, task=101)

    assert draft.day == date.today()
    assert draft.duration is None
    assert draft.comment is None


def test_select_by_ids() -> None:
    draft = BookingDraft(project=1, task=101, duration=30)

    assert select_entry(ENTRIES, draft) == ENTRIES[1]


def test_select_by_ids_must_be_cached() -> None:
    with pytest.raises(UnknownTargetError):
        select_entry(ENTRIES, BookingDraft(project=1, task=200))


def test_select_by_match() -> None:
    assert select_entry(ENTRIES, BookingDraft(), match="meetings") == ENTRIES[2]


def test_select_by_match_narrowed_by_project() -> None:
    entry = select_entry(ENTRIES, BookingDraft(project=1), match="design")

    assert entry == ENTRIES[0]


def test_ambiguous_match_lists_candidates() -> None:
    with pytest.raises(AmbiguousTargetError) as excinfo:
        select_entry(ENTRIES, BookingDraft(), match="website")

    assert excinfo.value.candidates == ("Acme / Website / Design", "Acme / Website / Build")


def test_no_target_at_all() -> None:
    with pytest.raises(IncompleteDraftError):
        select_entry(ENTRIES, BookingDraft())


def test_require_complete() -> None:
    BookingDraft(project=1, task=100, duration=5).require_complete()

    with pytest.raises(IncompleteDraftError) as excinfo:
        BookingDraft(project=1).require_complete()
    assert excinfo.value.missing == ("task", "duration")

    with pytest.raises(IncompleteDraftError):
        BookingDraft(project=1, task=100, duration=0).require_complete()
