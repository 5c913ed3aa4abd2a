"""
Factory for creating the persistence client.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum
from .strategies import LinkStoreStrategy, SupabaseLinkStore, SQLAlchemyLinkStore
from junkdraw_app.config import settings

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available persistence backends"""
    SUPABASE = "supabase"
    SQLALCHEMY = "sqlalchemy"


class LinkStoreFactory:
    """
    Simple factory for creating the link store.

    Gets configuration from settings (not passed as parameters).
    The instance is built once per process and torn down by the app lifespan.
    """

    _instance: LinkStoreStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: StorageBackend) -> LinkStoreStrategy:
        """
        Create or return cached link store instance.

        Args:
            backend: Type of storage backend (from enum)

        Returns:
            Singleton link store instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == StorageBackend.SUPABASE:
            from supabase import create_client

            client = create_client(settings.supabase_url, settings.supabase_anon_key)
            cls._instance = SupabaseLinkStore(client)
            logger.info("✅ Supabase link store initialized")

        elif backend == StorageBackend.SQLALCHEMY:
            from junkdraw_app.database.connection import SessionLocal, engine

            cls._instance = SQLAlchemyLinkStore(SessionLocal, engine)
            logger.info("✅ SQLAlchemy link store initialized")

        else:
            raise ValueError(f"Unknown storage backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (shutdown and tests)"""
        cls._instance = None
