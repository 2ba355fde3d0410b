from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from deepclean_cart.core.domain.cache import CachedBlob


class CacheStorePort(ABC):
    """Key-value store that timestamps every write.

    The store has no notion of freshness; callers compare ``CachedBlob.age_ms``
    against their own window.
    """

    @abstractmethod
    async def get(self, key: str) -> CachedBlob | None:
        pass

    @abstractmethod
    async def put(self, key: str, payload: Any) -> None:
        pass

    @abstractmethod
    async def invalidate(self, keys: Iterable[str]) -> None:
        pass
