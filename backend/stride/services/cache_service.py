"""
Redis Cache Service - read-through cache for catalogue lookups

Cache Strategy:
- Subject lists per (branch, semester, cycle): CACHE_TTL_SUBJECTS
- Holiday list: CACHE_TTL_HOLIDAYS
- Any subject write drops every subject key, any holiday write drops the
  holiday key
"""

import json
from typing import Optional, Any, List
import redis.asyncio as redis

from stride.core.config import settings
from stride.core.logging_config import logger


class CacheService:
    """
    Redis-based cache. Every failure is logged and treated as a miss, so
    the API keeps working without Redis.
    """

    PREFIX_SUBJECTS = "subjects:"
    KEY_HOLIDAYS = "holidays:all"

    def __init__(self, enabled: Optional[bool] = None):
        self._pool = None
        self._redis = None
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        return settings.CACHE_ENABLED

    async def _get_redis(self) -> redis.Redis:
        """Lazy initialization of Redis connection pool"""
        if self._redis is None:
            self._pool = redis.ConnectionPool.from_url(
                settings.REDIS_URL,
                db=settings.REDIS_CACHE_DB,
                max_connections=20,
                decode_responses=True,
            )
            self._redis = redis.Redis(connection_pool=self._pool)
            logger.info("Redis cache connection established")
        return self._redis

    async def close(self):
        """Close Redis connection"""
        if self._redis:
            await self._redis.close()
            self._redis = None
        if self._pool:
            await self._pool.disconnect()
            self._pool = None

    # ========== Generic helpers ==========

    async def _get_json(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            r = await self._get_redis()
            data = await r.get(key)
            if data:
                logger.debug(f"Cache HIT: {key}")
                return json.loads(data)
            logger.debug(f"Cache MISS: {key}")
            return None
        except Exception as e:
            logger.warning(f"Cache error (get {key}): {e}")
            return None

    async def _set_json(self, key: str, value: Any, ttl: int) -> bool:
        if not self.enabled:
            return False
        try:
            r = await self._get_redis()
            await r.setex(key, ttl, json.dumps(value, default=str))
            return True
        except Exception as e:
            logger.warning(f"Cache error (set {key}): {e}")
            return False

    # ========== Subjects ==========

    @classmethod
    def subjects_key(cls, branch: Optional[str], semester: Optional[int], cycle: Optional[str]) -> str:
        return f"{cls.PREFIX_SUBJECTS}{branch or '*'}:{semester or '*'}:{(cycle or '*').upper()}"

    async def get_subjects(self, branch: Optional[str], semester: Optional[int], cycle: Optional[str]) -> Optional[List[dict]]:
        return await self._get_json(self.subjects_key(branch, semester, cycle))

    async def set_subjects(self, branch: Optional[str], semester: Optional[int], cycle: Optional[str], subjects: List[dict]) -> bool:
        return await self._set_json(
            self.subjects_key(branch, semester, cycle), subjects, settings.CACHE_TTL_SUBJECTS
        )

    async def invalidate_subjects(self) -> bool:
        """Drop every cached subject list"""
        if not self.enabled:
            return False
        try:
            r = await self._get_redis()
            cursor = 0
            pattern = f"{self.PREFIX_SUBJECTS}*"
            while True:
                cursor, keys = await r.scan(cursor, match=pattern, count=100)
                if keys:
                    await r.delete(*keys)
                if cursor == 0:
                    break
            logger.debug("Invalidated subject cache")
            return True
        except Exception as e:
            logger.warning(f"Cache error (invalidate_subjects): {e}")
            return False

    # ========== Holidays ==========

    async def get_holidays(self) -> Optional[List[dict]]:
        return await self._get_json(self.KEY_HOLIDAYS)

    async def set_holidays(self, holidays: List[dict]) -> bool:
        return await self._set_json(self.KEY_HOLIDAYS, holidays, settings.CACHE_TTL_HOLIDAYS)

    async def invalidate_holidays(self) -> bool:
        if not self.enabled:
            return False
        try:
            r = await self._get_redis()
            await r.delete(self.KEY_HOLIDAYS)
            logger.debug("Invalidated holiday cache")
            return True
        except Exception as e:
            logger.warning(f"Cache error (invalidate_holidays): {e}")
            return False


# Singleton instance
cache_service = CacheService()
