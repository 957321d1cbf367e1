"""In-memory TTL cache with lazy eviction.

Expired entries are only removed when they are read again; there is no
background sweep and no size bound. One instance is created per app and
shared by every request on the event loop, so no locking is done.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() > expires_at:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._store[key] = (self._clock() + ttl_seconds, value)

    def __len__(self) -> int:
        return len(self._store)
