"""Tests for storage adapters"""
from unittest.mock import AsyncMock

import pytest

from storefront import db
from storefront.cart import MemoryStorage, RedisStorage
from storefront.db import TTL, RedisKeys


@pytest.fixture
def mock_redis():
    """Mock Upstash async Redis client"""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    return redis


@pytest.mark.asyncio
async def test_redis_set_uses_ttl(mock_redis):
    """Writes expire after the cart TTL."""
    storage = RedisStorage(redis=mock_redis)

    await storage.set("cart:1", "[]")

    mock_redis.set.assert_awaited_once_with("cart:1", "[]", ex=TTL.CART)


@pytest.mark.asyncio
async def test_redis_get_decodes_bytes(mock_redis):
    """Byte responses are decoded to str."""
    mock_redis.get.return_value = b'[{"id": "p1"}]'
    storage = RedisStorage(redis=mock_redis)

    assert await storage.get("cart:1") == '[{"id": "p1"}]'


@pytest.mark.asyncio
async def test_redis_get_missing(mock_redis):
    """A missing key reads as None."""
    assert await RedisStorage(redis=mock_redis).get("cart:1") is None


@pytest.mark.asyncio
async def test_redis_delete(mock_redis):
    """delete() removes the key."""
    await RedisStorage(redis=mock_redis).delete("cart:1")

    mock_redis.delete.assert_awaited_once_with("cart:1")


def test_redis_requires_configuration(monkeypatch):
    """get_redis() without credentials raises ValueError."""
    monkeypatch.setattr(db, "_redis_client", None)
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_URL", "")
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_TOKEN", "")

    with pytest.raises(ValueError, match="UPSTASH_REDIS_REST_URL"):
        RedisStorage().redis


def test_redis_keys():
    """Per-user key helpers."""
    assert RedisKeys.cart_key("42") == "cart:42"
    assert RedisKeys.wishlist_key("42") == "wishlist:42"


@pytest.mark.asyncio
async def test_memory_storage():
    """MemoryStorage counts writes."""
    storage = MemoryStorage({"a": "1"})

    assert await storage.get("a") == "1"
    await storage.set("b", "2")
    await storage.delete("a")
    await storage.delete("missing")

    assert storage.data == {"b": "2"}
    assert storage.writes == 1
