import asyncio

import pytest

import core.cache as cache_mod
import core.cleanup as cleanup_mod
from core.cache import TTLCache
from core.cleanup import PeriodicCleanup


@pytest.mark.asyncio
async def test_cleanup_run_sweeps_after_each_interval(monkeypatch):
    t = {"now": 0.0}
    sleeps = []

    async def fake_sleep(seconds: float):
        sleeps.append(seconds)
        t["now"] += seconds

    monkeypatch.setattr(cache_mod.time, "monotonic", lambda: t["now"])
    monkeypatch.setattr(cleanup_mod.asyncio, "sleep", fake_sleep)

    cache = TTLCache(ttl_seconds=100.0, maxsize=10)
    cache.set("soon", 1, 5.0)
    cache.set("later", 2, 15.0)
    cache.set("never", 3, 1000.0)

    janitor = PeriodicCleanup(cache, interval_seconds=10.0)
    removed = await janitor.run(iterations=2)

    assert sleeps == [10.0, 10.0]
    assert removed == 2
    assert len(cache) == 1
    assert cache.get("never") == 3


@pytest.mark.asyncio
async def test_cleanup_start_and_stop():
    cache = TTLCache(ttl_seconds=100.0, maxsize=10)
    janitor = PeriodicCleanup(cache, interval_seconds=3600.0)

    janitor.start()
    assert janitor.running is True

    # Starting twice keeps a single task
    janitor.start()

    await janitor.stop()
    assert janitor.running is False

    # Stopping again is a no-op
    await janitor.stop()


@pytest.mark.asyncio
async def test_cleanup_disabled_with_non_positive_interval():
    janitor = PeriodicCleanup(TTLCache(), interval_seconds=0)
    janitor.start()
    assert janitor.running is False
    await asyncio.sleep(0)
