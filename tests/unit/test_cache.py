"""Unit tests for the project cache file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chronos.catalog.cache import (
    CacheCorruptError,
    CacheEntry,
    CacheNotSynchronizedError,
    CacheWriteError,
    ProjectCache,
)

ENTRIES = [
    CacheEntry(display="Acme / Website / Design", project=1, task=100),
    CacheEntry(display="Internal / Internal Ops / Meetings", project=2, task=200),
    CacheEntry(display="Acme / Website / Build", project=1, task=101),
]


def test_cache_roundtrip_keeps_order(tmp_path: Path) -> None:
    store = ProjectCache(tmp_path / "state" / "projects.json")

    store.save(ENTRIES)

    assert store.load() == ENTRIES


def test_cache_file_format(tmp_path: Path) -> None:
    path = tmp_path / "projects.json"

    ProjectCache(path).save(ENTRIES[:1])

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"display": "Acme / Website / Design", "project": 1, "task": 100}
    ]
    assert not path.with_suffix(".json.tmp").exists()


def test_save_replaces_previous_content(tmp_path: Path) -> None:
    store = ProjectCache(tmp_path / "projects.json")
    store.save(ENTRIES)

    store.save([])

    assert store.load() == []


def test_load_before_sync_is_not_synchronized(tmp_path: Path) -> None:
    store = ProjectCache(tmp_path / "projects.json")

    with pytest.raises(CacheNotSynchronizedError) as excinfo:
        store.load()

    assert "chronos sync" in str(excinfo.value)


@pytest.mark.parametrize(
    "content",
    [
        b"{broken",
        b'{"display": "x"}',
        b'[{"display": "x", "project": "one", "task": 2}]',
        b'[{"display": "\xff", "project": 1, "task": 2}]',
    ],
)
def test_corrupt_cache_is_distinguished(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / "projects.json"
    path.write_bytes(content)

    with pytest.raises(CacheCorruptError):
        ProjectCache(path).load()


def test_save_failure_keeps_old_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "projects.json"
    store = ProjectCache(path)
    store.save(ENTRIES)

    def broken_replace(src: object, dst: object) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("chronos.catalog.cache.os.replace", broken_replace)

    with pytest.raises(CacheWriteError):
        store.save(ENTRIES[:1])

    assert store.load() == ENTRIES
    assert not path.with_suffix(".json.tmp").exists()


def test_search_is_case_insensitive(tmp_path: Path) -> None:
    store = ProjectCache(tmp_path / "projects.json")
    store.save(ENTRIES)

    assert store.search("website") == [ENTRIES[0], ENTRIES[2]]
    assert str(ENTRIES[1]) == "Internal / Internal Ops / Meetings"
