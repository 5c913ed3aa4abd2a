"""
FastAPI dependencies for dependency injection.

This module provides the process-wide store and cache instances and builds
the services around them per request.

Pattern: Dependency Injection
- The persistence client is built once by its factory, never imported as a global
- Tests override get_link_store / get_cache with substitutes
"""

from functools import lru_cache

from fastapi import Depends

from junkdraw_app.cache.factory import CacheFactory, CacheBackend
from junkdraw_app.cache.listing import ListingCache
from junkdraw_app.cache.strategies import CacheStrategy
from junkdraw_app.config import settings
from junkdraw_app.services.category_service import CategoryService
from junkdraw_app.services.link_service import LinkService
from junkdraw_app.storage.factory import LinkStoreFactory, StorageBackend
from junkdraw_app.storage.strategies import LinkStoreStrategy


@lru_cache()
def get_link_store() -> LinkStoreStrategy:
    """
    Get link store instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = StorageBackend(settings.storage_backend)
    return LinkStoreFactory.create(backend)


@lru_cache()
def get_cache() -> CacheStrategy:
    """Get cache instance (singleton)."""
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


def get_listing_cache(cache: CacheStrategy = Depends(get_cache)) -> ListingCache:
    return ListingCache(cache, ttl=settings.listing_cache_ttl)


def get_category_service(
    store: LinkStoreStrategy = Depends(get_link_store),
    listing_cache: ListingCache = Depends(get_listing_cache)
) -> CategoryService:
    return CategoryService(store=store, listing_cache=listing_cache)


def get_link_service(
    store: LinkStoreStrategy = Depends(get_link_store),
    listing_cache: ListingCache = Depends(get_listing_cache)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Controller depends on service; service depends on infrastructure
    (store, cache).
    """
    return LinkService(store=store, listing_cache=listing_cache)


def reset_dependencies():
    """Teardown: drop cached store and cache so the next request rebuilds them."""
    get_link_store.cache_clear()
    get_cache.cache_clear()
    LinkStoreFactory.clear_instance()
    CacheFactory.clear_instance()
