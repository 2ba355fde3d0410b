"""Time-boxed view over a CacheStorePort entry.

The store is freshness-agnostic; this wrapper owns the window comparison and
the convention that cache failures are logged but never break the caller.
"""

from typing import Any

from deepclean_cart.core.application.ports import CacheStorePort
from deepclean_cart.core.domain.cache import CachedBlob
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.observability.metrics_service import CACHE_LOOKUPS_TOTAL

logger = get_logger("freshness_cache")

DEFAULT_FRESHNESS_WINDOW_MS = 5 * 60 * 1000


class FreshnessCache:
    def __init__(
        self,
        store: CacheStorePort,
        key: str,
        window_ms: float = DEFAULT_FRESHNESS_WINDOW_MS,
    ) -> None:
        self._store = store
        self._key = key
        self._window_ms = window_ms

    @property
    def key(self) -> str:
        return self._key

    async def read_fresh(self) -> Any | None:
        """Return the cached payload only if it is younger than the window."""
        blob = await self._get()
        if blob is None:
            CACHE_LOOKUPS_TOTAL.labels(key=self._key, outcome="miss").inc()
            logger.debug("Cache miss", cache_key=self._key)
            return None
        if not blob.is_fresh(self._window_ms):
            CACHE_LOOKUPS_TOTAL.labels(key=self._key, outcome="stale").inc()
            logger.debug("Cache stale", cache_key=self._key, age_ms=blob.age_ms)
            return None
        CACHE_LOOKUPS_TOTAL.labels(key=self._key, outcome="hit").inc()
        logger.debug("Cache hit", cache_key=self._key, age_ms=blob.age_ms)
        return blob.payload

    async def read_any(self) -> Any | None:
        """Return the cached payload regardless of age."""
        blob = await self._get()
        return blob.payload if blob is not None else None

    async def _get(self) -> CachedBlob | None:
        try:
            return await self._store.get(self._key)
        except OSError as exc:
            logger.warning(
                "Cache read failed",
                cache_key=self._key,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return None

    async def write(self, payload: Any) -> None:
        try:
            await self._store.put(self._key, payload)
        except OSError as exc:
            logger.warning(
                "Cache write failed",
                cache_key=self._key,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )

    async def purge(self) -> bool:
        """Drop the entry. Returns False (after logging) when the store fails."""
        try:
            await self._store.invalidate([self._key])
        except OSError as exc:
            logger.warning(
                "Cache purge failed",
                cache_key=self._key,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return False
        return True
