"""
Cache stores and the delivery-date cache.

CacheStore is the small key -> JSON value interface with TTL that caching
call sites depend on. InMemoryCacheStore keeps entries in the process;
RedisCacheStore shares them between workers. DeliveryDateCache sits on top
and never lets a store failure reach the caller.
"""

import json
import logging
import time
from typing import Any, Callable, Protocol

from redis.asyncio import Redis

import config

DELIVERY_DATES_KEY_PREFIX = "delivery-dates:"


class CacheStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...


class InMemoryCacheStore:
    """
    Process-local store. Expired entries are dropped when read.

    Args:
        clock: Returns the current time in seconds (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, blob = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return json.loads(blob)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        # Stored serialized so callers can't mutate cached values in place
        self._entries[key] = (self._clock() + ttl_seconds, json.dumps(value))

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class RedisCacheStore:
    """Redis-backed store; TTL handled by Redis key expiry."""

    def __init__(self, redis: Redis, namespace: str = "storefront:cache:"):
        self.redis = redis
        self.namespace = namespace

    async def get(self, key: str) -> Any | None:
        blob = await self.redis.get(self.namespace + key)
        if blob is None:
            return None
        return json.loads(blob)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self.redis.set(self.namespace + key, json.dumps(value), ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self.namespace + key)


def create_cache_store() -> tuple[CacheStore, Redis | None]:
    """
    Build the configured store.

    Returns:
        (store, redis connection to close on shutdown or None)
    """
    if config.CACHE_BACKEND == "redis":
        redis = Redis(host=config.REDIS_HOST, password=config.REDIS_PASSWORD, decode_responses=True)
        logging.info(f"Cache backend: redis ({config.REDIS_HOST})")
        return RedisCacheStore(redis), redis
    logging.info("Cache backend: in-memory")
    return InMemoryCacheStore(), None


class DeliveryDateCache:
    """
    Read-through cache of delivery dates per ZIP code.

    Best effort only: any store error is logged and treated as a miss (or a
    skipped write), never raised.
    """

    def __init__(self, store: CacheStore, ttl_seconds: int | None = None):
        self.store = store
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.DELIVERY_DATES_CACHE_TTL_SECONDS

    @staticmethod
    def key_for(zip_code: str) -> str:
        return f"{DELIVERY_DATES_KEY_PREFIX}{zip_code}"

    async def get(self, zip_code: str) -> Any | None:
        try:
            return await self.store.get(self.key_for(zip_code))
        except Exception as e:
            logging.warning(f"Cache read error for {self.key_for(zip_code)}: {e}")
            return None

    async def set(self, zip_code: str, value: Any) -> None:
        try:
            await self.store.set(self.key_for(zip_code), value, self.ttl_seconds)
        except Exception as e:
            logging.warning(f"Cache write error for {self.key_for(zip_code)}: {e}")

    async def delete(self, zip_code: str) -> None:
        try:
            await self.store.delete(self.key_for(zip_code))
        except Exception as e:
            logging.warning(f"Cache delete error for {self.key_for(zip_code)}: {e}")
