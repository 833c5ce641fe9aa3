"""
Redis read-through cache keyed by entity id
Writers invalidate the affected keys explicitly
"""

import json
import logging
from typing import Any, Callable, Optional

from .config import CACHE_ENABLED, CACHE_TTL_SECONDS
from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self, enabled: bool = CACHE_ENABLED):
        self.enabled = enabled
        self.redis_client = None

    def _get_client(self):
        """Lazy load Redis client"""
        if not self.enabled:
            return None
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = CACHE_TTL_SECONDS) -> bool:
        """Set value in cache with TTL"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete value from cache"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False

    def read_through(self, key: str, loader: Callable[[], Any], ttl: int = CACHE_TTL_SECONDS) -> Any:
        """Return the cached value for key, loading and caching it on a miss"""
        cached_value = self.get(key)
        if cached_value is not None:
            return cached_value

        value = loader()
        if value is not None:
            self.set(key, value, ttl)
        return value


# Global cache instance
cache = Cache()


def profile_key(profile_id: str) -> str:
    return f"profile:{profile_id}"


def availability_key(mentor_id: str) -> str:
    return f"availability:{mentor_id}"


def invalidate_profile_cache(profile_id: str) -> bool:
    """Invalidate profile cache when updated"""
    return cache.delete(profile_key(profile_id))


def invalidate_availability_cache(mentor_id: str) -> bool:
    """Invalidate availability cache when a window is added or removed"""
    return cache.delete(availability_key(mentor_id))
