import logging
import re
from typing import List, Optional

from junkdraw_app.cache.listing import ListingCache
from junkdraw_app.exceptions import InvalidInputError, NotFoundError
from junkdraw_app.schemas.category import CategoryResponse
from junkdraw_app.storage.strategies import LinkStoreStrategy

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DEFAULT_COLOR = "#40E0D0"

# Offered by the category overlay's color picker
PRESET_COLORS = [
    "#40E0D0",  # Turquoise
    "#1E40AF",  # Dark Blue
    "#F87171",  # Light Red
    "#8B5CF6",  # Amethyst
    "#FB7185",  # Soft Rose
    "#D97706",  # Muted Gold
    "#10B981",  # Green
    "#F59E0B",  # Amber
]


def _validated(name: Optional[str], color: Optional[str]) -> dict:
    name = (name or "").strip()
    color = (color or "").strip()
    if not name or not color:
        raise InvalidInputError("Name and color are required")
    if not HEX_COLOR.match(color):
        raise InvalidInputError(f"Invalid color '{color}', expected a hex code like {DEFAULT_COLOR}")
    return {"name": name, "color": color}


class CategoryService:
    """
    Category use cases on top of an injected link store.

    Category writes invalidate cached listings, since every listed link
    embeds its category's name and color.
    """

    def __init__(
        self,
        store: LinkStoreStrategy,
        listing_cache: Optional[ListingCache] = None
    ):
        self.store = store
        self.listing_cache = listing_cache

    async def _invalidate(self):
        if self.listing_cache:
            await self.listing_cache.invalidate()

    async def list_categories(self) -> List[CategoryResponse]:
        """All categories, ordered by name"""
        return await self.store.list_categories()

    async def create_category(self, name: Optional[str], color: Optional[str]) -> CategoryResponse:
        values = _validated(name, color)
        category = await self.store.insert_category(values)
        logger.info("Created category %s (%s)", category.id, category.name)
        return category

    async def update_category(
        self,
        category_id: str,
        name: Optional[str],
        color: Optional[str]
    ) -> CategoryResponse:
        values = _validated(name, color)
        category = await self.store.update_category(category_id, values)
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")

        await self._invalidate()
        logger.info("Updated category %s", category_id)
        return category

    async def delete_category(self, category_id: str) -> None:
        """
        Delete a category; its links become uncategorized.

        Links are detached explicitly before the delete so the outcome does not
        depend on the backend having ON DELETE SET NULL configured.
        """
        detached = await self.store.detach_links_from_category(category_id)

        if not await self.store.delete_category(category_id):
            raise NotFoundError(f"Category {category_id} not found")

        await self._invalidate()
        logger.info("Deleted category %s (%d links now uncategorized)", category_id, detached)
