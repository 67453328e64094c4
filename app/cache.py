"""
Redis caching utilities for frequently read settings
Fails open: without Redis every lookup is a miss
"""
import json
import logging
import time
from typing import Any, Optional

import redis

from . import config

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None

THEME_CACHE_KEY = "theme:active"
SETTING_CACHE_PREFIX = "setting"

# Seconds to wait before trying to reconnect after a failed connection
RECONNECT_COOLDOWN = 30


def get_redis_client() -> redis.Redis:
    """Get or create the Redis client from REDIS_URL"""
    global redis_client

    if redis_client is None:
        if not config.REDIS_URL:
            raise RuntimeError("REDIS_URL is not configured")

        # Mask password in URL for logging
        if "@" in config.REDIS_URL:
            url_parts = config.REDIS_URL.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = "****"
        logger.info(f"📡 Using Redis URL connection: {masked_url}")

        client = redis.from_url(
            config.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=10,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        client.ping()
        redis_client = client
        logger.info("✅ Redis connected successfully")

    return redis_client


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None
        self._retry_after = 0.0

    def _get_client(self):
        """Lazy load Redis client, retrying the connection after a cooldown"""
        if self.redis_client is None:
            if time.monotonic() < self._retry_after:
                return None
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable, retrying in {RECONNECT_COOLDOWN}s: {e}")
                self._retry_after = time.monotonic() + RECONNECT_COOLDOWN
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

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
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

    def ping(self) -> bool:
        client = self._get_client()
        if not client:
            return False
        try:
            return bool(client.ping())
        except Exception as e:
            logger.error(f"❌ Cache ping error: {e}")
            return False


# Global cache instance
cache = Cache()


def setting_cache_key(setting_key: str) -> str:
    return f"{SETTING_CACHE_PREFIX}:{setting_key.upper()}"


def invalidate_setting_cache(setting_key: str) -> bool:
    """Invalidate a system setting when it is written"""
    return cache.delete(setting_cache_key(setting_key))


def invalidate_theme_cache() -> bool:
    return cache.delete(THEME_CACHE_KEY)
