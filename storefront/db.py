"""
Redis client for durable cart and wishlist storage.

Provides a singleton async Upstash Redis client plus the key and TTL
conventions shared by the storage adapters.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront.errors import ERROR_REDIS_NOT_CONFIGURED


UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError(ERROR_REDIS_NOT_CONFIGURED)
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    CART = "cart:"  # cart:{user_id}
    WISHLIST = "wishlist:"  # wishlist:{user_id}

    @staticmethod
    def cart_key(user_id: str) -> str:
        return f"{RedisKeys.CART}{user_id}"

    @staticmethod
    def wishlist_key(user_id: str) -> str:
        return f"{RedisKeys.WISHLIST}{user_id}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = 2592000  # 30 days
    WISHLIST = 7776000  # 90 days
