"""
Key-value store abstraction.

The store is the single source of truth shared by every worker process: cache
entries (strings with TTL), the watchlist (a hash), last-known balances
(strings without TTL) and the alert history (a bounded list).
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class KeyValueStore(ABC):
    """Asynchronous Redis-like store."""
    
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the string stored at ``key`` or None if absent or expired."""
    
    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a string, optionally expiring after ``ttl`` seconds."""
    
    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key."""
    
    @abstractmethod
    async def hset(self, key: str, field: str, value: str) -> None:
        """Set a field of the hash stored at ``key``."""
    
    @abstractmethod
    async def hget(self, key: str, field: str) -> Optional[str]:
        """Return one field of a hash."""
    
    @abstractmethod
    async def hgetall(self, key: str) -> Dict[str, str]:
        """Return every field of a hash."""
    
    @abstractmethod
    async def hdel(self, key: str, field: str) -> bool:
        """Remove a field of a hash, returning True if it existed."""
    
    @abstractmethod
    async def push_and_trim(self, key: str, value: str, max_length: int) -> None:
        """Prepend ``value`` to a list and keep only its first ``max_length`` items.
        
        Implementations must perform both steps atomically.
        """
    
    @abstractmethod
    async def lrange(self, key: str, start: int, stop: int) -> List[str]:
        """Return list items between ``start`` and ``stop`` inclusive (-1 = last)."""
    
    async def close(self) -> None:
        """Release connections held by the store."""
