from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CachedBlob:
    """A payload and the age it had when it was read back from the store."""

    payload: Any
    stored_at: float
    age_ms: float

    def is_fresh(self, window_ms: float) -> bool:
        return 0 <= self.age_ms < window_ms
