import copy
import time
from collections.abc import Callable, Iterable
from typing import Any

from deepclean_cart.core.application.ports import CacheStorePort
from deepclean_cart.core.domain.cache import CachedBlob


def epoch_ms() -> float:
    return time.time() * 1000


class InMemoryCacheStore(CacheStorePort):
    """Process-local cache. Payloads are deep-copied on the way in and out."""

    def __init__(self, clock: Callable[[], float] = epoch_ms) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    async def get(self, key: str) -> CachedBlob | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, payload = entry
        return CachedBlob(
            payload=copy.deepcopy(payload),
            stored_at=stored_at,
            age_ms=self._clock() - stored_at,
        )

    async def put(self, key: str, payload: Any) -> None:
        self._entries[key] = (self._clock(), copy.deepcopy(payload))

    async def invalidate(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._entries.pop(key, None)
