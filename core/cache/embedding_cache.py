"""Embedding Cache Service - In-process cache for text embeddings."""
import math
import time
import logging
from collections import OrderedDict
from typing import Callable, Dict, Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

# 24 hours in seconds
CACHE_TTL_SECONDS = 24 * 60 * 60
CACHE_MAX_ITEMS = 2000
# Share of max_items dropped when the cache overflows
EVICTION_FRACTION = 0.15


def make_cache_key(text: str) -> str:
    """Cache key for a text: trimmed and lowercased."""
    return str(text or "").strip().lower()


class EmbeddingCacheService:
    """
    Service for caching embeddings to avoid repeat provider calls.

    Entries expire after ttl_seconds. When the cache grows past max_items,
    the least recently used 15% of max_items are evicted.
    """

    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        max_items: int = CACHE_MAX_ITEMS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self.max_items = max_items
        self._clock = clock
        # key -> (embedding, expires_at); order is least -> most recently used
        self._entries: "OrderedDict[str, Tuple[List[float], float]]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str) -> Optional[List[float]]:
        """Get a cached embedding, or None on miss or expiry."""
        self.purge_expired()

        key = make_cache_key(text)
        entry = self._entries.get(key)
        if not entry or not entry[0]:
            self._misses += 1
            logger.debug(f"Embedding cache miss for '{key[:32]}'")
            return None

        self._entries.move_to_end(key)
        self._hits += 1
        return list(entry[0])

    def set(self, text: str, embedding: List[float], ttl_seconds: Optional[int] = None) -> bool:
        """Cache an embedding; empty keys or vectors are ignored."""
        key = make_cache_key(text)
        if not key or not embedding:
            return False

        ttl = ttl_seconds or self.ttl_seconds
        self._entries[key] = (list(embedding), self._clock() + ttl)
        self._entries.move_to_end(key)
        self._evict_if_needed()
        return True

    def delete(self, text: str) -> bool:
        """Remove an embedding from the cache."""
        return self._entries.pop(make_cache_key(text), None) is not None

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _evict_if_needed(self) -> None:
        if len(self._entries) <= self.max_items:
            return

        remove_count = math.ceil(self.max_items * EVICTION_FRACTION)
        for _ in range(min(remove_count, len(self._entries))):
            self._entries.popitem(last=False)
        logger.debug(f"Evicted {remove_count} embeddings from cache")

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "items": len(self._entries),
            "max_items": self.max_items,
            "hits": self._hits,
            "misses": self._misses,
            "ttl_seconds": self.ttl_seconds,
            "ttl_human": f"{self.ttl_seconds // 3600} hours"
        }

    def clear_all(self) -> None:
        """Clear all cached embeddings."""
        self._entries.clear()
        logger.info("Cleared embedding cache")
