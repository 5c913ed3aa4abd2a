"""
Builds the cache behind the link-listing cache.

One instance per process; the app lifespan clears it on shutdown.
"""

import logging
from enum import Enum
from typing import Optional

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from junkdraw_app.config import settings

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Where listings are cached"""
    REDIS = "redis"    # shared by every worker
    MEMORY = "memory"  # per worker process
    NULL = "null"      # no caching, every listing hits the store


def _connect_redis(url: str):
    """Redis client that answered a ping, or None if the server is unreachable"""
    import redis

    client = redis.from_url(
        url,
        decode_responses=False,
        socket_connect_timeout=2,
        socket_timeout=2,
    )
    try:
        client.ping()
    except redis.RedisError as e:
        logger.warning("⚠️  Redis at %s unreachable: %s", url, e)
        return None
    return client


class CacheFactory:
    """
    Creates the listing cache backend once and hands out the same instance.

    Redis is optional infrastructure: when it cannot be reached at startup
    the app keeps serving with a per-process cache, and cross-worker
    invalidation is lost until the next restart.
    """

    _instance: Optional[CacheStrategy] = None

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        if cls._instance is not None:
            return cls._instance

        if backend == CacheBackend.REDIS:
            client = _connect_redis(settings.redis_url)
            if client is not None:
                cls._instance = RedisCache(client)
                logger.info("✅ Listings cached in Redis")
            else:
                cls._instance = InMemoryCache()
                logger.warning("⚠️  Listings cached per process; other workers will not see invalidations")

        elif backend == CacheBackend.MEMORY:
            cls._instance = InMemoryCache()
            logger.info("✅ Listings cached in process memory")

        elif backend == CacheBackend.NULL:
            cls._instance = NullCache()
            logger.info("✅ Listing cache disabled")

        else:
            raise ValueError(f"Unknown cache backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Forget the instance (shutdown and tests)"""
        cls._instance = None
