"""Redis analytics cache: key namespace and degradation to cache misses."""

import json
from unittest.mock import AsyncMock

import redis.asyncio as redis

from trackplan.core.config import get_settings
from trackplan.infrastructure.cache import CacheService, RedisAnalyticsCache, analytics_key


def _cache(client) -> RedisAnalyticsCache:
    return RedisAnalyticsCache(CacheService(client, settings=get_settings()), ttl_seconds=60)


async def test_set_uses_namespaced_key_and_ttl() -> None:
    client = AsyncMock()
    cache = _cache(client)

    await cache.set("Checkout > @purchase:web:2026-03-01:2026-03-02", [{"nb_events": 3}])

    client.setex.assert_awaited_once_with(
        analytics_key("Checkout > @purchase:web:2026-03-01:2026-03-02"),
        60,
        json.dumps([{"nb_events": 3}]),
    )


async def test_get_decodes_json() -> None:
    client = AsyncMock()
    client.get.return_value = json.dumps([{"nb_events": 3}])

    assert await _cache(client).get("k") == [{"nb_events": 3}]
    client.get.assert_awaited_once_with(analytics_key("k"))


async def test_redis_errors_degrade_to_miss() -> None:
    client = AsyncMock()
    client.get.side_effect = redis.ConnectionError("down")
    client.setex.side_effect = redis.ConnectionError("down")
    cache = _cache(client)

    assert await cache.get("k") is None
    await cache.set("k", [1])


async def test_unconnected_service_is_a_no_op() -> None:
    cache = RedisAnalyticsCache(CacheService(settings=get_settings()), ttl_seconds=60)

    assert cache.backend_name == "redis"
    assert await cache.get("k") is None
    assert await cache.size() == 0
    assert await cache.clear() == 0
