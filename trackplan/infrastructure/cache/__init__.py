"""Analytics cache backends: in-process TTL map or Redis.

Both satisfy IAnalyticsCache; lifespan picks one from settings.redis_enabled.
"""

from trackplan.infrastructure.cache.keys import analytics_key, analytics_pattern
from trackplan.infrastructure.cache.memory_cache import MemoryAnalyticsCache
from trackplan.infrastructure.cache.redis_cache import CacheService, RedisAnalyticsCache

__all__ = [
    "CacheService",
    "MemoryAnalyticsCache",
    "RedisAnalyticsCache",
    "analytics_key",
    "analytics_pattern",
]
