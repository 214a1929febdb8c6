"""Persistent key-value stores backing the cache, watchlist and alerts."""

from wallet_monitor.storage.base import KeyValueStore
from wallet_monitor.storage.memory import MemoryStore
from wallet_monitor.storage.redis_store import RedisStore

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "create_store"]


def create_store(backend: str, redis_url: str) -> KeyValueStore:
    """Create the store selected by configuration.
    
    Args:
        backend: ``"redis"`` or ``"memory"``
        redis_url: Connection URL used by the Redis backend
    """
    if backend == "memory":
        return MemoryStore()
    return RedisStore.from_url(redis_url)
