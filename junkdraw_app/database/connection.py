"""
SQLAlchemy engine and session factory for the local relational backend.

Only used when `storage_backend` is "sqlalchemy" (development and tests);
production talks to Supabase over REST.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from junkdraw_app.config import settings


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """
    SQLite ships with foreign keys disabled per connection.

    Without this, `ON DELETE SET NULL` on links.category_id is never applied.
    """
    if target.dialect.name != "sqlite":
        return

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.database_url, connect_args=_connect_args(settings.database_url))
enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
