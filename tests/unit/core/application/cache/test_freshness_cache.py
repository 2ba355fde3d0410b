from collections.abc import Iterable
from typing import Any

import pytest

from deepclean_cart.core.application.cache.freshness_cache import FreshnessCache
from deepclean_cart.core.domain.cache import CachedBlob
from deepclean_cart.infrastructure.repositories import InMemoryCacheStore


class BrokenStore(InMemoryCacheStore):
    async def get(self, key: str) -> CachedBlob | None:
        raise OSError("permission denied")

    async def put(self, key: str, payload: Any) -> None:
        raise OSError("read-only file system")

    async def invalidate(self, keys: Iterable[str]) -> None:
        raise OSError("read-only file system")


@pytest.mark.asyncio
async def test_fresh_entry_is_returned(cache, clock) -> None:
    fresh = FreshnessCache(cache, "k", window_ms=1000)
    await fresh.write({"a": 1})
    clock.advance(999)

    assert await fresh.read_fresh() == {"a": 1}


@pytest.mark.asyncio
async def test_entry_at_window_edge_is_stale(cache, clock) -> None:
    fresh = FreshnessCache(cache, "k", window_ms=1000)
    await fresh.write({"a": 1})
    clock.advance(1000)

    assert await fresh.read_fresh() is None
    assert await fresh.read_any() == {"a": 1}


@pytest.mark.asyncio
async def test_entry_from_the_future_is_stale(cache, clock) -> None:
    fresh = FreshnessCache(cache, "k", window_ms=1000)
    await fresh.write({"a": 1})
    clock.advance(-5000)

    assert await fresh.read_fresh() is None


@pytest.mark.asyncio
async def test_store_failures_are_logged_not_raised(clock) -> None:
    fresh = FreshnessCache(BrokenStore(clock=clock), "k")

    await fresh.write({"a": 1})
    assert await fresh.purge() is False
    assert await fresh.read_fresh() is None
    assert await fresh.read_any() is None
