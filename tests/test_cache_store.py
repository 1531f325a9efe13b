"""Tests for the snapshot cache stores."""

import os
from datetime import datetime, timedelta, timezone

import pytest

from modrate.shared.adapters.cache_store import FileCacheStore, MemoryCacheStore
from modrate.shared.core.exceptions import CacheError

NOW = datetime(2025, 3, 22, 12, 0, 0, tzinfo=timezone.utc)


class TestFileCacheStore:
    def test_missing_file(self, tmp_path):
        cache = FileCacheStore(tmp_path / "mods_cache.json")

        assert not cache.exists()
        assert cache.last_modified() is None
        with pytest.raises(CacheError):
            cache.read()

    def test_write_then_read_returns_bytes_verbatim(self, tmp_path):
        cache = FileCacheStore(tmp_path / "mods_cache.json")
        payload = b'[{"name": "MoreSuits"}]\n'

        cache.write(payload)

        assert cache.exists()
        assert cache.read() == payload

    def test_write_creates_parent_directories(self, tmp_path):
        cache = FileCacheStore(tmp_path / "data" / "nested" / "mods_cache.json")

        cache.write(b"[]")

        assert cache.read() == b"[]"

    def test_write_replaces_whole_file(self, tmp_path):
        cache = FileCacheStore(tmp_path / "mods_cache.json")
        cache.write(b"[1, 2, 3, 4, 5, 6, 7, 8, 9]")

        cache.write(b"[]")

        assert cache.read() == b"[]"
        # no temporary files left next to the cache
        assert sorted(p.name for p in tmp_path.iterdir()) == ["mods_cache.json"]

    def test_last_modified_is_file_mtime(self, tmp_path):
        path = tmp_path / "mods_cache.json"
        cache = FileCacheStore(path)
        cache.write(b"[]")
        stamp = (NOW - timedelta(hours=23)).timestamp()
        os.utime(path, (stamp, stamp))

        modified = cache.last_modified()

        assert modified.tzinfo is not None
        assert modified == NOW - timedelta(hours=23)

    def test_write_into_unwritable_location_raises_cache_error(self, tmp_path):
        blocker = tmp_path / "not_a_directory"
        blocker.write_bytes(b"")
        cache = FileCacheStore(blocker / "mods_cache.json")

        with pytest.raises(CacheError):
            cache.write(b"[]")


class TestMemoryCacheStore:
    def test_empty(self):
        cache = MemoryCacheStore()

        assert not cache.exists()
        assert cache.last_modified() is None
        with pytest.raises(CacheError):
            cache.read()

    def test_initial_snapshot_timestamp(self):
        cache = MemoryCacheStore(b"[]", modified_at=NOW - timedelta(hours=5))

        assert cache.exists()
        assert cache.last_modified() == NOW - timedelta(hours=5)
        assert cache.writes == 0

    def test_write_uses_clock(self):
        cache = MemoryCacheStore(clock=lambda: NOW)

        cache.write(b"[1]")

        assert cache.read() == b"[1]"
        assert cache.last_modified() == NOW
        assert cache.writes == 1
