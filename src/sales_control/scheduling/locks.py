"""
Job Locks
A held lock means another run of the same job is in progress, on this
process or on any other scheduler sharing the lock store.
"""

import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable

import redis

from sales_control.core.logging import get_logger

logger = get_logger(__name__)

# Deletes the key only while it still holds our token
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class JobLock(ABC):
    @abstractmethod
    def acquire(self, name: str, ttl: int) -> str | None:
        """Token of the acquired lock, or None when it is already held."""
        pass

    @abstractmethod
    def release(self, name: str, token: str) -> bool:
        pass


class RedisJobLock(JobLock):
    """Lock shared by every scheduler pointing at the same Redis."""

    def __init__(self, client: redis.Redis, key_prefix: str = "sales_control:lock:"):
        self._client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "sales_control:lock:") -> "RedisJobLock":
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix)

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    def acquire(self, name: str, ttl: int) -> str | None:
        token = uuid.uuid4().hex
        if self._client.set(self._key(name), token, nx=True, ex=ttl):
            return token
        return None

    def release(self, name: str, token: str) -> bool:
        released = bool(self._client.eval(_RELEASE_SCRIPT, 1, self._key(name), token))
        if not released:
            logger.warning(f"Lock {name} expired or was taken over before release")
        return released


class LocalJobLock(JobLock):
    """In-process lock for a single scheduler without Redis."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._held: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def acquire(self, name: str, ttl: int) -> str | None:
        with self._lock:
            held = self._held.get(name)
            if held is not None and held[1] > self._clock():
                return None
            token = uuid.uuid4().hex
            self._held[name] = (token, self._clock() + ttl)
            return token

    def release(self, name: str, token: str) -> bool:
        with self._lock:
            held = self._held.get(name)
            if held is None or held[0] != token:
                return False
            del self._held[name]
            return True
