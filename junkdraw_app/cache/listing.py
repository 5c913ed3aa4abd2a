"""
Cache of link listings keyed by (category, search).

Invalidation bumps a generation token instead of deleting keys: every listing
key embeds the token current when it was built, so old entries simply stop
being read and expire on their TTL. Works with any CacheStrategy (get/set only).

A reader builds the key once, before querying the store, and stores the
result under that same key. If a write invalidates in between, the result
lands under the retired generation and is never served.
"""

import logging
import uuid
from typing import List, Optional

from pydantic import TypeAdapter

from junkdraw_app.cache.strategies import CacheStrategy
from junkdraw_app.schemas.link import LinkResponse

logger = logging.getLogger(__name__)

GENERATION_KEY = "links:generation"

_listing_adapter = TypeAdapter(List[LinkResponse])


class ListingCache:
    def __init__(self, cache: CacheStrategy, ttl: int = 60):
        self.cache = cache
        self.ttl = ttl

    async def _generation(self) -> str:
        generation = await self.cache.get(GENERATION_KEY)
        if generation is None:
            generation = uuid.uuid4().hex
            # Outlives any listing so a missing token never resurrects stale entries
            await self.cache.set(GENERATION_KEY, generation, ttl=self.ttl * 10)
        return generation

    async def key(self, category_id: Optional[str], search: Optional[str]) -> str:
        """Listing key under the current generation"""
        generation = await self._generation()
        return f"links:{generation}:{category_id or 'all'}:{(search or '').lower()}"

    async def get(self, key: str) -> Optional[List[LinkResponse]]:
        raw = await self.cache.get(key)
        if raw is None:
            return None
        return _listing_adapter.validate_json(raw)

    async def set(self, key: str, links: List[LinkResponse]) -> None:
        await self.cache.set(key, _listing_adapter.dump_json(links).decode("utf-8"), ttl=self.ttl)

    async def invalidate(self) -> None:
        """Drop every cached listing (call after any write)"""
        await self.cache.set(GENERATION_KEY, uuid.uuid4().hex, ttl=self.ttl * 10)
        logger.debug("Listing cache invalidated")
