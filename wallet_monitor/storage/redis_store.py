"""Redis implementation of :class:`KeyValueStore`."""

import logging
from typing import Dict, List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from wallet_monitor.storage.base import KeyValueStore
from wallet_monitor.utils.errors import StorageError

logger = logging.getLogger(__name__)


class RedisStore(KeyValueStore):
    """Store backed by a Redis server through the asyncio client."""
    
    def __init__(self, client: Redis):
        """
        Initialize the store.
        
        Args:
            client: Redis client created with ``decode_responses=True``
        """
        self.client = client
    
    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        """Create a store connected to ``url``."""
        logger.info(f"Connecting to Redis at {url}")
        return cls(Redis.from_url(url, decode_responses=True))
    
    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise StorageError(f"Redis GET failed: {str(e)}", operation="get") from e
    
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        try:
            if ttl:
                await self.client.set(key, value, ex=ttl)
            else:
                await self.client.set(key, value)
        except RedisError as e:
            raise StorageError(f"Redis SET failed: {str(e)}", operation="set") from e
    
    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise StorageError(f"Redis DEL failed: {str(e)}", operation="delete") from e
    
    async def hset(self, key: str, field: str, value: str) -> None:
        try:
            await self.client.hset(key, field, value)
        except RedisError as e:
            raise StorageError(f"Redis HSET failed: {str(e)}", operation="hset") from e
    
    async def hget(self, key: str, field: str) -> Optional[str]:
        try:
            return await self.client.hget(key, field)
        except RedisError as e:
            raise StorageError(f"Redis HGET failed: {str(e)}", operation="hget") from e
    
    async def hgetall(self, key: str) -> Dict[str, str]:
        try:
            return await self.client.hgetall(key)
        except RedisError as e:
            raise StorageError(f"Redis HGETALL failed: {str(e)}", operation="hgetall") from e
    
    async def hdel(self, key: str, field: str) -> bool:
        try:
            return bool(await self.client.hdel(key, field))
        except RedisError as e:
            raise StorageError(f"Redis HDEL failed: {str(e)}", operation="hdel") from e
    
    async def push_and_trim(self, key: str, value: str, max_length: int) -> None:
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.lpush(key, value)
                pipe.ltrim(key, 0, max_length - 1)
                await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Redis LPUSH/LTRIM failed: {str(e)}", operation="push_and_trim") from e
    
    async def lrange(self, key: str, start: int, stop: int) -> List[str]:
        try:
            return await self.client.lrange(key, start, stop)
        except RedisError as e:
            raise StorageError(f"Redis LRANGE failed: {str(e)}", operation="lrange") from e
    
    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis connection closed")
