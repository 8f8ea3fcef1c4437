"""
Timed in-process cache.

Holds ``key -> (value, expires_at)`` pairs. Entries are never evicted on
their own; ``get`` simply reports a miss once an entry has outlived its TTL,
while ``peek`` still hands back the stale value so callers can fall back to
it when the backing store is unavailable.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple


class TimedCache:
    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the fresh value for ``key`` or ``default``."""
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, expires_at = entry
        if self._clock() >= expires_at:
            return default
        return value

    def peek(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` even if it has expired."""
        entry = self._entries.get(key)
        return default if entry is None else entry[0]

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = self._clock() + (self.ttl if ttl is None else ttl)
        self._entries[key] = (value, expires_at)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)
