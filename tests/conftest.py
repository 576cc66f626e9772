"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import fnmatch
from typing import Any, Optional
from uuid import uuid4

import pytest

from redis_scan.config import get_redis_settings, get_scan_settings

DEFAULT_SCAN_COUNT = 10
FIXTURE_KEY_COUNT = 1000
KEY_PREFIX = "redis-scan-test"


class FakeRedis:
    """
    In-memory Redis mock for scan tests.

    Scans walk a sorted snapshot of the keyspace (or container) and treat the
    cursor as an offset. ``COUNT`` bounds how many entries one call examines, not
    how many match, so batches are often empty mid-scan like on a real server.
    """

    def __init__(self):
        self._data: dict[str, str] = {}
        self._sets: dict[str, set[str]] = {}
        self._hashes: dict[str, dict[str, str]] = {}
        self._sorted_sets: dict[str, dict[str, float]] = {}
        self.calls: list[tuple[str, tuple, dict]] = []

    def load_strings(self, mapping: dict[str, str]) -> None:
        """Seed string keys (test helper)."""
        self._data.update(mapping)

    def load_hash(self, key: str, mapping: dict[str, str]) -> None:
        """Seed a hash (test helper)."""
        self._hashes.setdefault(key, {}).update(mapping)

    def load_set(self, key: str, *members: str) -> None:
        """Seed a set (test helper)."""
        self._sets.setdefault(key, set()).update(members)

    def load_sorted_set(self, key: str, mapping: dict[str, float]) -> None:
        """Seed a sorted set (test helper)."""
        self._sorted_sets.setdefault(key, {}).update(mapping)

    def _key_type(self, key: str) -> str:
        if key in self._data:
            return "string"
        if key in self._hashes:
            return "hash"
        if key in self._sets:
            return "set"
        if key in self._sorted_sets:
            return "zset"
        return "none"

    @staticmethod
    def _page(entries: list[Any], cursor: Any, count: Optional[int]) -> tuple[int, list[Any]]:
        start = int(cursor)
        step = count or DEFAULT_SCAN_COUNT
        end = start + step
        next_cursor = end if end < len(entries) else 0
        return next_cursor, entries[start:end]

    async def scan(self, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None, _type: Optional[str] = None):
        self.calls.append(("scan", (cursor,), {"match": match, "count": count, "_type": _type}))
        keys = sorted(set(self._data) | set(self._hashes) | set(self._sets) | set(self._sorted_sets))
        next_cursor, page = self._page(keys, cursor, count)
        matches = [
            key
            for key in page
            if (match is None or fnmatch.fnmatchcase(key, match)) and (_type is None or self._key_type(key) == _type)
        ]
        return next_cursor, matches

    async def hscan(self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None):
        self.calls.append(("hscan", (name, cursor), {"match": match, "count": count}))
        fields = sorted(self._hashes.get(name, {}))
        next_cursor, page = self._page(fields, cursor, count)
        values = self._hashes.get(name, {})
        return next_cursor, {field: values[field] for field in page if match is None or fnmatch.fnmatchcase(field, match)}

    async def sscan(self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None):
        self.calls.append(("sscan", (name, cursor), {"match": match, "count": count}))
        members = sorted(self._sets.get(name, set()))
        next_cursor, page = self._page(members, cursor, count)
        return next_cursor, [member for member in page if match is None or fnmatch.fnmatchcase(member, match)]

    async def zscan(self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None):
        self.calls.append(("zscan", (name, cursor), {"match": match, "count": count}))
        scores = self._sorted_sets.get(name, {})
        next_cursor, page = self._page(sorted(scores), cursor, count)
        return next_cursor, [(member, scores[member]) for member in page if match is None or fnmatch.fnmatchcase(member, match)]

    def round_trips(self, method: Optional[str] = None) -> int:
        return sum(1 for name, _, _ in self.calls if method is None or name == method)


class ScanFixture:
    """Keys and containers written by ``populated_redis``."""

    def __init__(self, suffix: str):
        self.suffix = suffix
        self.keys = [f"{KEY_PREFIX}:{i}:{suffix}" for i in range(FIXTURE_KEY_COUNT)]
        self.values = [f"Test key {i}" for i in range(FIXTURE_KEY_COUNT)]
        self.hash_key = f"{KEY_PREFIX}:hash-test:{suffix}"
        self.set_key = f"{KEY_PREFIX}:set-test:{suffix}"
        self.sorted_set_key = f"{KEY_PREFIX}:sorted-set-test:{suffix}"

    def pattern(self, middle: str) -> str:
        return f"{KEY_PREFIX}:{middle}:{self.suffix}"


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Provide an empty fake Redis instance."""
    return FakeRedis()


@pytest.fixture
def populated_redis(fake_redis: FakeRedis) -> tuple[FakeRedis, ScanFixture]:
    """1000 string keys plus a hash, set and sorted set built from the same names."""
    fixture = ScanFixture(str(uuid4()))
    fake_redis.load_strings(dict(zip(fixture.keys, fixture.values)))
    fake_redis.load_hash(fixture.hash_key, dict(zip(fixture.keys, fixture.values)))
    fake_redis.load_set(fixture.set_key, *fixture.values)
    fake_redis.load_sorted_set(fixture.sorted_set_key, {value: 1.0 for value in fixture.values})
    return fake_redis, fixture


@pytest.fixture
def clear_settings_cache():
    """Reset cached env-backed settings around a test."""
    get_redis_settings.cache_clear()
    get_scan_settings.cache_clear()
    yield
    get_redis_settings.cache_clear()
    get_scan_settings.cache_clear()
