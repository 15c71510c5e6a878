"""Cache Module - Caching services."""
from core.cache.embedding_cache import (
    EmbeddingCacheService,
    make_cache_key,
    CACHE_TTL_SECONDS,
    CACHE_MAX_ITEMS
)

__all__ = [
    'EmbeddingCacheService',
    'make_cache_key',
    'CACHE_TTL_SECONDS',
    'CACHE_MAX_ITEMS'
]
