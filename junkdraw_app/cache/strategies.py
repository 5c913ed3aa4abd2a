"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional, Dict, Tuple

logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    Lets the listing cache run on Redis, process memory, or nothing at all
    without changing the service layer code.

    All methods are async because cache operations involve I/O (network for Redis).
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 60) -> bool:
        """
        Set value in cache with TTL (Time To Live).

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete key from cache; False if the key didn't exist"""
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all cache entries"""
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation.

    Shared between worker processes, so an invalidation in one worker is
    seen by all of them. Errors degrade to cache misses.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis cache.

        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
            return value.decode("utf-8") if value else None
        except Exception as e:
            logger.warning("Redis get error: %s", e)
            return None

    async def set(self, key: str, value: str, ttl: int = 60) -> bool:
        try:
            return bool(self.redis.setex(key, ttl, value))
        except Exception as e:
            logger.warning("Redis set error: %s", e)
            return False

    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(key))
        except Exception as e:
            logger.warning("Redis delete error: %s", e)
            return False

    async def clear(self) -> bool:
        """Clear all Redis keys (use with caution!)"""
        try:
            self.redis.flushdb()
            return True
        except Exception as e:
            logger.warning("Redis clear error: %s", e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.

    Pros:
    - Very fast (no network overhead)
    - No external dependencies

    Cons:
    - Per process: invalidation does not reach other workers
    - Lost on restart

    Expired entries are dropped lazily on read.
    """

    def __init__(self, clock=time.monotonic):
        self._cache: Dict[str, Tuple[str, float]] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._cache[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int = 60) -> bool:
        self._cache[key] = (value, self._clock() + ttl)
        return True

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    async def clear(self) -> bool:
        self._cache.clear()
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every read is a miss, so each listing goes straight to the backend.
    """

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = 60) -> bool:
        return True

    async def delete(self, key: str) -> bool:
        return True

    async def clear(self) -> bool:
        return True
