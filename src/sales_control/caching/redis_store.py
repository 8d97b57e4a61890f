"""
Redis Cache Store
String values with per-key expiry on a shared Redis instance.
"""

import redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from sales_control.core.logging import get_logger
from sales_control.domain.interfaces.infrastructure import ICacheStore

logger = get_logger(__name__)


class CacheStats:
    """Cache statistics tracking."""

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.errors = 0

    @property
    def operations(self) -> int:
        return self.hits + self.misses + self.errors

    @property
    def hit_rate(self) -> float:
        return self.hits / self.operations if self.operations > 0 else 0.0


class RedisCacheStore(ICacheStore):
    """
    ICacheStore backed by Redis.

    Redis failures degrade to cache misses (get) and skipped writes (set):
    callers then read through to the source of truth.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = ""):
        self._client = client
        self.key_prefix = key_prefix
        self.stats = CacheStats()

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "", socket_timeout: float = 5.0) -> "RedisCacheStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            retry=Retry(ExponentialBackoff(), retries=3),
            retry_on_timeout=True,
        )
        return cls(client, key_prefix)

    def _build_key(self, key: str) -> str:
        """Build full cache key with prefix."""
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(self._build_key(key))
        except redis.RedisError as e:
            self.stats.errors += 1
            logger.warning(f"Redis get failed for key {key}: {e}")
            return None

        if value is None:
            self.stats.misses += 1
            return None

        self.stats.hits += 1
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def set(self, key: str, value: str, ttl: int) -> bool:
        try:
            return bool(self._client.set(self._build_key(key), value, ex=ttl))
        except redis.RedisError as e:
            self.stats.errors += 1
            logger.warning(f"Redis set failed for key {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        try:
            return bool(self._client.delete(self._build_key(key)))
        except redis.RedisError as e:
            self.stats.errors += 1
            logger.warning(f"Redis delete failed for key {key}: {e}")
            return False

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False
