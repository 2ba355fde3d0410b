import asyncio
import json
import os
import re
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from deepclean_cart.core.application.ports import CacheStorePort
from deepclean_cart.core.domain.cache import CachedBlob
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.repositories.in_memory_cache_store import epoch_ms

logger = get_logger("file_cache_store")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileCacheStore(CacheStorePort):
    """One JSON file per key under ``cache_dir``.

    Each file holds ``{"stored_at": <epoch ms>, "payload": ...}``. Writes go to
    a temp file in the same directory and are renamed over the target, so a
    reader never sees a half-written entry. Unreadable entries count as misses.
    """

    def __init__(self, cache_dir: Path, clock: Callable[[], float] = epoch_ms) -> None:
        self.cache_dir = Path(cache_dir)
        self._clock = clock
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    async def get(self, key: str) -> CachedBlob | None:
        entry = await asyncio.to_thread(self._read_json, self.path_for(key))
        if entry is None:
            return None
        try:
            stored_at = float(entry.get("stored_at", 0))
        except (TypeError, ValueError):
            logger.warning("Cache entry has no usable timestamp", cache_key=key)
            return None
        return CachedBlob(
            payload=entry.get("payload"),
            stored_at=stored_at,
            age_ms=self._clock() - stored_at,
        )

    async def put(self, key: str, payload: Any) -> None:
        entry = {"stored_at": self._clock(), "payload": payload}
        await asyncio.to_thread(self._write_json, self.path_for(key), entry)

    async def invalidate(self, keys: Iterable[str]) -> None:
        for key in keys:
            await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)

    def _read_json(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            content = path.read_text(encoding="utf-8").strip()
            if not content:
                return None
            entry = json.loads(content)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Unreadable cache entry", cache_key=path.stem, error_details=str(exc))
            return None
        return entry if isinstance(entry, dict) else None

    def _write_json(self, path: Path, entry: dict[str, Any]) -> None:
        with tempfile.NamedTemporaryFile(
            "w", dir=self.cache_dir, delete=False, encoding="utf-8", suffix=".tmp"
        ) as tmp:
            json.dump(entry, tmp)
            tmp_path = tmp.name
        try:
            os.replace(tmp_path, path)
        except OSError:
            os.remove(tmp_path)
            raise
