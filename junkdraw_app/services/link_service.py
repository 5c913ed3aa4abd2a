import logging
from typing import List, Optional

from junkdraw_app.cache.listing import ListingCache
from junkdraw_app.exceptions import InvalidInputError, NotFoundError
from junkdraw_app.schemas.link import LinkResponse
from junkdraw_app.services.source import MANUAL_SOURCE, derive_source
from junkdraw_app.storage.strategies import LinkStoreStrategy

logger = logging.getLogger(__name__)

# Category filter value meaning "no filter"
ALL_CATEGORIES = "all"

UNTITLED = "Untitled"


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a form value; blank becomes None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


class LinkService:
    """
    Link use cases with dependency injection for store and listing cache.

    - Store is injected (Supabase in production, SQLAlchemy in tests)
    - Listing cache is optional; every write invalidates it

    Category defaulting policy: a link saved without a category is
    uncategorized (category_id None). There is no fallback bucket.
    """

    def __init__(
        self,
        store: LinkStoreStrategy,
        listing_cache: Optional[ListingCache] = None
    ):
        """
        Initialize link service with dependencies.

        Args:
            store: Persistence strategy
            listing_cache: Cache of listings (optional, for performance)
        """
        self.store = store
        self.listing_cache = listing_cache

    async def _invalidate(self):
        if self.listing_cache:
            await self.listing_cache.invalidate()

    async def list_links(
        self,
        category_id: Optional[str] = None,
        search_query: Optional[str] = None
    ) -> List[LinkResponse]:
        """
        Links newest first, each with its category.

        Uses Cache-Aside: listing cache first, then the store.

        Args:
            category_id: Restrict to one category; None or "all" means every category
            search_query: Case-insensitive substring of title or notes
        """
        category_id = _clean(category_id)
        if category_id == ALL_CATEGORIES:
            category_id = None
        # Matched verbatim: surrounding spaces are part of the substring
        if search_query is not None and not search_query.strip():
            search_query = None

        cache_key = None
        if self.listing_cache:
            cache_key = await self.listing_cache.key(category_id, search_query)
            cached = await self.listing_cache.get(cache_key)
            if cached is not None:
                return cached

        links = await self.store.list_links(category_id=category_id, search=search_query)

        if cache_key is not None:
            await self.listing_cache.set(cache_key, links)

        return links

    async def get_link(self, link_id: str) -> LinkResponse:
        link = await self.store.get_link(link_id)
        if link is None:
            raise NotFoundError(f"Link {link_id} not found")
        return link

    async def add_link(
        self,
        url: Optional[str],
        title: Optional[str] = None,
        category_id: Optional[str] = None,
        notes: Optional[str] = None,
        description: Optional[str] = None
    ) -> LinkResponse:
        """
        Save a new link.

        Defaulting rules:
        - source: url hostname without "www.", or "Manual" if it can't be parsed
        - title: falls back to the url, then "Untitled"
        - notes: falls back to description; blank is None
        - category: blank is uncategorized

        Raises:
            InvalidInputError: url is blank (nothing is written)
        """
        url = _clean(url)
        if not url:
            raise InvalidInputError("URL is required")

        values = {
            "url": url,
            "title": _clean(title) or url or UNTITLED,
            "notes": _clean(notes) or _clean(description),
            "source": derive_source(url) or MANUAL_SOURCE,
            "category_id": _clean(category_id),
        }

        link = await self.store.insert_link(values)
        await self._invalidate()

        logger.info("Saved link %s (%s)", link.id, link.source)
        return link

    async def update_link(
        self,
        link_id: str,
        notes: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> LinkResponse:
        """Change notes and category; blank values clear the field."""
        values = {
            "notes": _clean(notes),
            "category_id": _clean(category_id),
        }

        link = await self.store.update_link(link_id, values)
        if link is None:
            raise NotFoundError(f"Link {link_id} not found")

        await self._invalidate()
        return link

    async def delete_link(self, link_id: str) -> bool:
        """Delete a link. Unconditional and irreversible."""
        if not await self.store.delete_link(link_id):
            raise NotFoundError(f"Link {link_id} not found")

        await self._invalidate()
        logger.info("Deleted link %s", link_id)
        return True
