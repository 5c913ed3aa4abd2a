"""
Persistence module for categories and links.

This module implements the Strategy Pattern for pluggable relational backends:
the hosted Supabase project in production, SQLAlchemy locally and in tests.
"""

from .strategies import LinkStoreStrategy, SupabaseLinkStore, SQLAlchemyLinkStore
from .factory import LinkStoreFactory, StorageBackend

__all__ = [
    "LinkStoreStrategy",
    "SupabaseLinkStore",
    "SQLAlchemyLinkStore",
    "LinkStoreFactory",
    "StorageBackend",
]
