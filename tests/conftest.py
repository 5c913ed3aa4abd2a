"""
Test configuration and fixtures for DigitalJunkDraw.
This centralizes all test setup, making individual tests clean.
"""

import os

# Settings are read at import time: point everything at local backends first
os.environ["STORAGE_BACKEND"] = "sqlalchemy"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["CACHE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from main import app
from junkdraw_app.cache.listing import ListingCache
from junkdraw_app.cache.strategies import InMemoryCache
from junkdraw_app.database.connection import Base, SessionLocal, engine
from junkdraw_app.dependencies import get_cache, get_link_store
from junkdraw_app.services.category_service import CategoryService
from junkdraw_app.services.link_service import LinkService
from junkdraw_app.storage.strategies import SQLAlchemyLinkStore


@pytest.fixture(scope="function")
def store():
    """
    Fresh tables for each test.
    This ensures tests are isolated and don't affect each other.
    """
    link_store = SQLAlchemyLinkStore(SessionLocal, engine)
    try:
        yield link_store
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def cache():
    return InMemoryCache()


@pytest.fixture(scope="function")
def listing_cache(cache):
    return ListingCache(cache, ttl=60)


@pytest.fixture(scope="function")
def category_service(store, listing_cache):
    return CategoryService(store=store, listing_cache=listing_cache)


@pytest.fixture(scope="function")
def link_service(store, listing_cache):
    return LinkService(store=store, listing_cache=listing_cache)


@pytest.fixture(scope="function")
def client(store, cache):
    """
    Test client with the store and cache dependencies overridden.
    This is the main fixture that HTTP tests will use.
    """
    app.dependency_overrides[get_link_store] = lambda: store
    app.dependency_overrides[get_cache] = lambda: cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
