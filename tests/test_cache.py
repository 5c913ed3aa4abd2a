import asyncio

import pytest

from junkdraw_app.cache import CacheBackend, CacheFactory, InMemoryCache, ListingCache, NullCache
from junkdraw_app.config import settings
from junkdraw_app.schemas.link import LinkResponse


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestInMemoryCache:

    def test_get_set_delete(self):
        cache = InMemoryCache()
        assert asyncio.run(cache.get("missing")) is None

        asyncio.run(cache.set("key", "value"))
        assert asyncio.run(cache.get("key")) == "value"

        assert asyncio.run(cache.delete("key")) is True
        assert asyncio.run(cache.delete("key")) is False
        assert asyncio.run(cache.get("key")) is None

    def test_entries_expire(self):
        clock = FakeClock()
        cache = InMemoryCache(clock=clock)
        asyncio.run(cache.set("key", "value", ttl=10))

        clock.now += 9
        assert asyncio.run(cache.get("key")) == "value"

        clock.now += 1
        assert asyncio.run(cache.get("key")) is None

    def test_clear(self):
        cache = InMemoryCache()
        asyncio.run(cache.set("a", "1"))
        asyncio.run(cache.set("b", "2"))

        asyncio.run(cache.clear())

        assert asyncio.run(cache.get("a")) is None
        assert asyncio.run(cache.get("b")) is None


def test_null_cache_never_hits():
    cache = NullCache()
    assert asyncio.run(cache.set("key", "value")) is True
    assert asyncio.run(cache.get("key")) is None


class TestListingCache:

    @pytest.fixture
    def listing(self):
        return [LinkResponse(
            id="l1",
            url="https://example.com/",
            title="Example",
            source="example.com",
            created_at="2024-01-01T00:00:00Z",
        )]

    def store(self, cache, category_id, search, links):
        asyncio.run(cache.set(asyncio.run(cache.key(category_id, search)), links))

    def fetch(self, cache, category_id, search):
        return asyncio.run(cache.get(asyncio.run(cache.key(category_id, search))))

    def test_round_trip_by_filter(self, listing):
        cache = ListingCache(InMemoryCache())
        self.store(cache, "c1", "Essay", listing)

        assert self.fetch(cache, "c1", "essay") == listing
        assert self.fetch(cache, None, "essay") is None
        assert self.fetch(cache, "c1", None) is None

    def test_invalidate_drops_every_listing(self, listing):
        cache = ListingCache(InMemoryCache())
        self.store(cache, None, None, listing)
        self.store(cache, "c1", "x", listing)

        asyncio.run(cache.invalidate())

        assert self.fetch(cache, None, None) is None
        assert self.fetch(cache, "c1", "x") is None

    def test_key_built_before_invalidate_is_never_served(self, listing):
        cache = ListingCache(InMemoryCache())
        stale_key = asyncio.run(cache.key(None, None))

        asyncio.run(cache.invalidate())
        asyncio.run(cache.set(stale_key, listing))

        assert self.fetch(cache, None, None) is None

    def test_null_backend_is_always_a_miss(self, listing):
        cache = ListingCache(NullCache())
        self.store(cache, None, None, listing)
        assert self.fetch(cache, None, None) is None


class TestCacheFactory:

    @pytest.fixture(autouse=True)
    def reset(self):
        CacheFactory.clear_instance()
        yield
        CacheFactory.clear_instance()

    def test_memory_backend_is_singleton(self):
        first = CacheFactory.create(CacheBackend.MEMORY)
        assert isinstance(first, InMemoryCache)
        assert CacheFactory.create(CacheBackend.MEMORY) is first

    def test_null_backend(self):
        assert isinstance(CacheFactory.create(CacheBackend.NULL), NullCache)

    def test_clear_instance(self):
        first = CacheFactory.create(CacheBackend.MEMORY)
        CacheFactory.clear_instance()
        assert CacheFactory.create(CacheBackend.NULL) is not first

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            CacheFactory.create("memcached")

    def test_unreachable_redis_falls_back_to_memory(self, monkeypatch):
        monkeypatch.setattr(settings, "redis_url", "redis://127.0.0.1:1/0")

        assert isinstance(CacheFactory.create(CacheBackend.REDIS), InMemoryCache)
