"""
Persistence strategies using Strategy Pattern.

Allows switching between relational backends without touching the services:
- Supabase: hosted Postgres behind the auto-generated PostgREST API (production)
- SQLAlchemy: local database, SQLite by default (development/testing)

Both return pydantic schemas, so callers never see backend row types.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import httpx
from fastapi.concurrency import run_in_threadpool
from postgrest.exceptions import APIError
from sqlalchemy import or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from junkdraw_app.database.connection import Base
from junkdraw_app.exceptions import BackendError
from junkdraw_app.models import Category, Link
from junkdraw_app.schemas.category import CategoryResponse
from junkdraw_app.schemas.link import LinkResponse

logger = logging.getLogger(__name__)

# Select clause that embeds the related category row as `category`
LINK_WITH_CATEGORY = "*, category:categories(*)"

# Postgres error raised when a filter value is not a valid uuid
INVALID_TEXT_REPRESENTATION = "22P02"


class LinkStoreStrategy(ABC):
    """
    Abstract base class for persistence strategies.

    Table-scoped operations over `categories` and `links`. Every link read
    embeds its category (or None). Implementations raise BackendError for
    any backend failure and return None/False when no row matched.

    All methods are async because the hosted backend is network I/O.
    """

    @abstractmethod
    async def list_categories(self) -> List[CategoryResponse]:
        """All categories ordered by name ascending"""
        pass

    @abstractmethod
    async def insert_category(self, values: Dict[str, Any]) -> CategoryResponse:
        """
        Insert one category row.

        Args:
            values: Column values (name, color)

        Returns:
            The created row with generated id and created_at
        """
        pass

    @abstractmethod
    async def update_category(self, category_id: str, values: Dict[str, Any]) -> Optional[CategoryResponse]:
        """Update one category row, None if it does not exist"""
        pass

    @abstractmethod
    async def delete_category(self, category_id: str) -> bool:
        """Delete one category row, False if it does not exist"""
        pass

    @abstractmethod
    async def detach_links_from_category(self, category_id: str) -> int:
        """Set category_id to NULL on every link of the category; returns the count"""
        pass

    @abstractmethod
    async def list_links(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[LinkResponse]:
        """
        Links ordered by created_at descending, each with its category.

        Args:
            category_id: Restrict to this category (None = all)
            search: Case-insensitive substring matched against title OR notes
        """
        pass

    @abstractmethod
    async def get_link(self, link_id: str) -> Optional[LinkResponse]:
        """One link with its category, None if it does not exist"""
        pass

    @abstractmethod
    async def insert_link(self, values: Dict[str, Any]) -> LinkResponse:
        """Insert one link row and return it with its category"""
        pass

    @abstractmethod
    async def update_link(self, link_id: str, values: Dict[str, Any]) -> Optional[LinkResponse]:
        """Update one link row, None if it does not exist"""
        pass

    @abstractmethod
    async def delete_link(self, link_id: str) -> bool:
        """Delete one link row, False if it does not exist"""
        pass


def escape_like(query: str) -> str:
    """Escape LIKE wildcards so the query matches literally (escape char: backslash)"""
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseLinkStore(LinkStoreStrategy):
    """
    Supabase implementation over the PostgREST query builder.

    Pros:
    - Hosted Postgres, nothing to run locally
    - Relational embedding via `category:categories(*)`

    Cons:
    - Every call is an HTTP round trip
    - No multi-statement transactions through REST

    The client is stateless between calls, so one instance is shared.
    Queries are built on the event loop; the blocking `execute()` runs in
    the threadpool.
    """

    def __init__(self, client):
        """
        Initialize Supabase store.

        Args:
            client: supabase.Client created with the project URL and anon key
        """
        self.client = client

    async def _execute(self, action: str, query, by_id: bool = False) -> List[Dict[str, Any]]:
        """
        Run a built query and return its rows.

        Args:
            action: Human-readable action for logs and error messages
            query: PostgREST request builder, ready to execute
            by_id: The query filters on a uuid column taken from user input;
                a malformed value then matches no row instead of failing
        """
        try:
            response = await run_in_threadpool(query.execute)
        except APIError as e:
            if by_id and e.code == INVALID_TEXT_REPRESENTATION:
                return []
            logger.error("Supabase %s failed: %s", action, e.message)
            raise BackendError(e.message or f"Failed to {action}") from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s failed: %s", action, e)
            raise BackendError(f"Failed to {action}: {e}") from e
        return response.data or []

    @staticmethod
    def _search_filter(search: str) -> str:
        """
        Build the PostgREST `or` filter for title/notes.

        Values are double-quoted so commas and parentheses in the query do not
        break the logic tree; quotes and backslashes are escaped inside.
        """
        pattern = escape_like(search).replace("\\", "\\\\").replace('"', '\\"')
        return f'title.ilike."%{pattern}%",notes.ilike."%{pattern}%"'

    async def list_categories(self) -> List[CategoryResponse]:
        rows = await self._execute(
            "list categories",
            self.client.table("categories").select("*").order("name"),
        )
        return [CategoryResponse.model_validate(row) for row in rows]

    async def insert_category(self, values: Dict[str, Any]) -> CategoryResponse:
        rows = await self._execute("create category", self.client.table("categories").insert(values))
        if not rows:
            raise BackendError("Failed to create category")
        return CategoryResponse.model_validate(rows[0])

    async def update_category(self, category_id: str, values: Dict[str, Any]) -> Optional[CategoryResponse]:
        rows = await self._execute(
            "update category",
            self.client.table("categories").update(values).eq("id", category_id),
            by_id=True,
        )
        if not rows:
            return None
        return CategoryResponse.model_validate(rows[0])

    async def delete_category(self, category_id: str) -> bool:
        rows = await self._execute(
            "delete category",
            self.client.table("categories").delete().eq("id", category_id),
            by_id=True,
        )
        return bool(rows)

    async def detach_links_from_category(self, category_id: str) -> int:
        rows = await self._execute(
            "detach links",
            self.client.table("links").update({"category_id": None}).eq("category_id", category_id),
            by_id=True,
        )
        return len(rows)

    async def list_links(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[LinkResponse]:
        query = (
            self.client.table("links")
            .select(LINK_WITH_CATEGORY)
            .order("created_at", desc=True)
        )
        if category_id:
            query = query.eq("category_id", category_id)
        if search:
            query = query.or_(self._search_filter(search))
        rows = await self._execute("list links", query, by_id=bool(category_id))
        return [LinkResponse.model_validate(row) for row in rows]

    async def get_link(self, link_id: str) -> Optional[LinkResponse]:
        # limit(1) instead of single(): a missing row is None, not an APIError
        rows = await self._execute(
            "fetch link",
            self.client.table("links").select(LINK_WITH_CATEGORY).eq("id", link_id).limit(1),
            by_id=True,
        )
        if not rows:
            return None
        return LinkResponse.model_validate(rows[0])

    async def insert_link(self, values: Dict[str, Any]) -> LinkResponse:
        rows = await self._execute("add link", self.client.table("links").insert(values))
        if not rows:
            raise BackendError("Failed to add link")

        # Re-read to embed the category row
        link = await self.get_link(rows[0]["id"])
        if link is None:
            raise BackendError("Failed to add link")
        return link

    async def update_link(self, link_id: str, values: Dict[str, Any]) -> Optional[LinkResponse]:
        rows = await self._execute(
            "update link",
            self.client.table("links").update(values).eq("id", link_id),
            by_id=True,
        )
        if not rows:
            return None
        return await self.get_link(link_id)

    async def delete_link(self, link_id: str) -> bool:
        rows = await self._execute(
            "delete link",
            self.client.table("links").delete().eq("id", link_id),
            by_id=True,
        )
        return bool(rows)


class SQLAlchemyLinkStore(LinkStoreStrategy):
    """
    SQLAlchemy implementation for a local relational database.

    Pros:
    - Zero configuration with SQLite
    - Same semantics as the hosted schema (FK with ON DELETE SET NULL)
    - Substitutable backend for tests

    Cons:
    - Not shared between devices

    Opens one session per operation, so the store itself holds no state.
    Note: Async for interface consistency, DB calls are sync (fast).
    """

    def __init__(self, session_factory: sessionmaker, engine: Optional[Engine] = None):
        """
        Initialize SQLAlchemy store.

        Args:
            session_factory: sessionmaker bound to the target database
            engine: Engine used to create tables (defaults to the factory's bind)
        """
        self.session_factory = session_factory
        self.engine = engine or session_factory.kw.get("bind")
        self._init_database()

    def _init_database(self):
        """Create tables if they don't exist"""
        Base.metadata.create_all(bind=self.engine)
        logger.info("SQLAlchemy tables ready on %s", self.engine.url)

    @contextmanager
    def _session(self, action: str):
        session: Session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.error("Database %s failed: %s", action, message)
            raise BackendError(message) from e
        finally:
            session.close()

    @staticmethod
    def _links_query(session: Session):
        return session.query(Link).options(joinedload(Link.category))

    async def list_categories(self) -> List[CategoryResponse]:
        with self._session("list categories") as session:
            rows = session.query(Category).order_by(Category.name.asc()).all()
            return [CategoryResponse.model_validate(row) for row in rows]

    async def insert_category(self, values: Dict[str, Any]) -> CategoryResponse:
        with self._session("create category") as session:
            category = Category(**values)
            session.add(category)
            session.commit()
            session.refresh(category)
            return CategoryResponse.model_validate(category)

    async def update_category(self, category_id: str, values: Dict[str, Any]) -> Optional[CategoryResponse]:
        with self._session("update category") as session:
            category = session.get(Category, category_id)
            if category is None:
                return None
            for key, value in values.items():
                setattr(category, key, value)
            session.commit()
            session.refresh(category)
            return CategoryResponse.model_validate(category)

    async def delete_category(self, category_id: str) -> bool:
        with self._session("delete category") as session:
            deleted = session.query(Category).filter(Category.id == category_id).delete(
                synchronize_session=False
            )
            session.commit()
            return deleted > 0

    async def detach_links_from_category(self, category_id: str) -> int:
        with self._session("detach links") as session:
            updated = session.query(Link).filter(Link.category_id == category_id).update(
                {Link.category_id: None}, synchronize_session=False
            )
            session.commit()
            return updated

    async def list_links(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[LinkResponse]:
        with self._session("list links") as session:
            query = self._links_query(session)
            if category_id:
                query = query.filter(Link.category_id == category_id)
            if search:
                pattern = f"%{escape_like(search)}%"
                query = query.filter(or_(
                    Link.title.ilike(pattern, escape="\\"),
                    Link.notes.ilike(pattern, escape="\\"),
                ))
            rows = query.order_by(Link.created_at.desc()).all()
            return [LinkResponse.model_validate(row) for row in rows]

    async def get_link(self, link_id: str) -> Optional[LinkResponse]:
        with self._session("fetch link") as session:
            link = self._links_query(session).filter(Link.id == link_id).first()
            if link is None:
                return None
            return LinkResponse.model_validate(link)

    async def insert_link(self, values: Dict[str, Any]) -> LinkResponse:
        with self._session("add link") as session:
            link = Link(**values)
            session.add(link)
            session.commit()
            link_id = link.id

        link = await self.get_link(link_id)
        if link is None:
            raise BackendError("Failed to add link")
        return link

    async def update_link(self, link_id: str, values: Dict[str, Any]) -> Optional[LinkResponse]:
        with self._session("update link") as session:
            link = session.get(Link, link_id)
            if link is None:
                return None
            for key, value in values.items():
                setattr(link, key, value)
            session.commit()

        return await self.get_link(link_id)

    async def delete_link(self, link_id: str) -> bool:
        with self._session("delete link") as session:
            deleted = session.query(Link).filter(Link.id == link_id).delete(synchronize_session=False)
            session.commit()
            return deleted > 0
