"""In-process ICacheStore with expiry, for local runs and tests."""

import threading
import time
from collections.abc import Callable

from sales_control.domain.interfaces.infrastructure import ICacheStore


class InMemoryCacheStore(ICacheStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> bool:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
