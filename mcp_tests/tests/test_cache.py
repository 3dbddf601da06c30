import pytest

import core.cache as cache_mod
from core.cache import TTLCache


@pytest.fixture
def clock(monkeypatch):
    t = {"now": 0.0}

    def fake_monotonic():
        return t["now"]

    monkeypatch.setattr(cache_mod.time, "monotonic", fake_monotonic)
    return t


def test_ttlcache_set_get_and_expire(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)

    c.set("k", "v")
    assert c.get("k") == "v"

    # Still valid exactly at the expiry instant
    clock["now"] = 10.0
    assert c.get("k") == "v"

    clock["now"] = 10.5
    assert c.get("k") is None
    assert len(c) == 0


def test_ttlcache_per_entry_ttl(clock):
    c = TTLCache(ttl_seconds=300.0, maxsize=10)

    c.set("k", "v", 0.1)
    assert c.get("k") == "v"

    clock["now"] = 0.15
    assert c.get("k") is None
    assert c.has("k") is False


def test_ttlcache_has_does_not_touch_stats(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    c.set("k", "v")

    assert c.has("k") is True
    assert c.has("missing") is False

    stats = c.get_stats()
    assert stats["hits"] == 0
    assert stats["misses"] == 0


def test_ttlcache_has_removes_expired(clock):
    c = TTLCache(ttl_seconds=1.0, maxsize=10)
    c.set("k", "v")

    clock["now"] = 2.0
    assert c.has("k") is False
    assert c.get_stats()["size"] == 0


def test_ttlcache_eviction_by_maxsize(clock):
    c = TTLCache(ttl_seconds=100.0, maxsize=2)

    c.set("a", 1)
    clock["now"] = 1.0
    c.set("b", 2)
    clock["now"] = 2.0
    c.set("c", 3)

    assert len(c) == 2
    assert c.has("a") is False
    assert c.get("b") == 2
    assert c.get("c") == 3


def test_ttlcache_lru_touch_protects_entry(clock):
    c = TTLCache(ttl_seconds=100.0, maxsize=2)

    c.set("a", 1)
    clock["now"] = 1.0
    c.set("b", 2)

    clock["now"] = 2.0
    assert c.get("a") == 1

    clock["now"] = 3.0
    c.set("c", 3)

    assert c.get("a") == 1
    assert c.get("b") is None
    assert c.get("c") == 3


def test_ttlcache_overwrite_at_capacity_keeps_other_keys(clock):
    c = TTLCache(ttl_seconds=100.0, maxsize=2)

    c.set("a", 1)
    c.set("b", 2)
    c.set("a", 10)

    assert c.get("a") == 10
    assert c.get("b") == 2


def test_ttlcache_set_max_size_shrinks_on_next_set(clock):
    c = TTLCache(ttl_seconds=100.0, maxsize=10)
    for i in range(5):
        clock["now"] = float(i)
        c.set(f"k{i}", i)

    c.set_max_size(2)
    c.set("new", "x")

    assert len(c) == 2
    assert c.get("new") == "x"
    assert c.get("k4") == 4


def test_ttlcache_delete(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    c.set("k", "v")

    assert c.delete("k") is True
    assert c.delete("k") is False
    assert c.get("k") is None
    assert c.get_stats()["deletes"] == 1


def test_ttlcache_cleanup_removes_only_expired(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    c.set("short", 1, 1.0)
    c.set("long", 2, 100.0)

    clock["now"] = 5.0
    assert c.cleanup() == 1
    assert c.has("short") is False
    assert c.get("long") == 2
    assert c.cleanup() == 0


def test_ttlcache_stats(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=1000)

    c.set("key1", "value1")
    c.set("key2", "value2")
    c.get("key1")
    c.get("non-existent")
    c.delete("key2")

    stats = c.get_stats()
    assert stats["sets"] == 2
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["deletes"] == 1
    assert stats["size"] == 1
    assert stats["total_requests"] == 2
    assert stats["hit_rate"] == "50.00%"
    assert stats["max_size"] == 1000
    assert stats["utilization"] == "0.10%"


def test_ttlcache_stats_before_any_request():
    c = TTLCache()
    stats = c.get_stats()
    assert stats["hit_rate"] == "0%"
    assert stats["utilization"] == "0.00%"
    assert stats["max_size"] == 1000


def test_ttlcache_hits_plus_misses_counts_every_get(clock):
    c = TTLCache(ttl_seconds=1.0, maxsize=10)
    c.set("a", 1)

    calls = 0
    for key in ["a", "b", "a", "c"]:
        c.get(key)
        calls += 1
    clock["now"] = 5.0
    c.get("a")
    calls += 1

    stats = c.get_stats()
    assert stats["hits"] + stats["misses"] == calls
    assert stats["hits"] == 2


def test_ttlcache_reset_stats_keeps_entries(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    c.set("a", 1)
    c.get("a")

    c.reset_stats()
    stats = c.get_stats()
    assert stats["hits"] == 0
    assert stats["sets"] == 0
    assert stats["size"] == 1


def test_ttlcache_clear(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    c.set("a", 1)
    c.set("b", 2)

    c.clear()
    assert c.get("a") is None
    assert c.get_stats()["size"] == 0


def test_ttlcache_ignores_non_positive_settings():
    c = TTLCache(ttl_seconds=10.0, maxsize=5)
    c.set_max_size(0)
    c.set_default_ttl(-1)
    assert c.max_size == 5
    assert c.default_ttl == 10.0

    c.set_default_ttl(2.5)
    assert c.default_ttl == 2.5


def test_ttlcache_swallows_internal_errors(clock):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)
    unhashable = ["not", "hashable"]

    c.set(unhashable, 1)
    assert c.get(unhashable) is None
    assert c.delete(unhashable) is False
    assert c.has(unhashable) is False
    assert len(c) == 0
