"""Redis-backed analytics cache.

CacheService owns the connection (JSON values with TTL, SCAN-based pattern
operations). RedisAnalyticsCache adapts it to IAnalyticsCache under the
analytics key namespace. Enabled with REDIS_ENABLED=true; when Redis is
unreachable every call degrades to a cache miss.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from trackplan.core.config import Settings, get_settings
from trackplan.infrastructure.cache.keys import analytics_key, analytics_pattern

logger = logging.getLogger(__name__)

SCAN_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.setex(key, ttl, json.dumps(value))
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def count_pattern(self, pattern: str) -> int:
        """Count keys matching pattern (SCAN, non-blocking)."""
        if not self.is_available() or self.redis is None:
            return 0
        try:
            return sum([1 async for _ in self.redis.scan_iter(match=pattern)])
        except redis.RedisError:
            logger.exception("Cache count error for %s", pattern)
            return 0

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK.

        Returns:
            Number of keys deleted.
        """
        if not self.is_available() or self.redis is None:
            return 0
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= SCAN_CHUNK_SIZE:
                    deleted += await self._unlink(chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(chunk)
        except redis.RedisError:
            logger.exception("Cache delete_pattern error for %s", pattern)
            return deleted
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def _unlink(self, keys: list[str]) -> int:
        assert self.redis is not None
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)


class RedisAnalyticsCache:
    """IAnalyticsCache on top of CacheService (namespaced keys, fixed TTL)."""

    def __init__(self, service: CacheService, ttl_seconds: int) -> None:
        self.service = service
        self._ttl = ttl_seconds

    @property
    def backend_name(self) -> str:
        return "redis"

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    async def get(self, key: str) -> Any | None:
        return await self.service.get(analytics_key(key))

    async def set(self, key: str, value: Any) -> None:
        await self.service.set(analytics_key(key), value, ttl=self._ttl)

    async def size(self) -> int:
        return await self.service.count_pattern(analytics_pattern())

    async def clear(self) -> int:
        return await self.service.delete_pattern(analytics_pattern())
