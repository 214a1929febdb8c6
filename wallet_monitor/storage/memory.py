"""In-process implementation of :class:`KeyValueStore`.

Used by the test-suite and by single-process deployments started with
``STORAGE_BACKEND=memory``. Expired entries stay in memory until they are
read, at which point they are dropped.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from wallet_monitor.storage.base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dictionary-backed store with lazy TTL expiry."""
    
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the store.
        
        Args:
            clock: Function returning the current time in seconds
        """
        self._clock = clock
        self._strings: Dict[str, Tuple[str, Optional[float]]] = {}
        self._hashes: Dict[str, Dict[str, str]] = {}
        self._lists: Dict[str, List[str]] = {}
    
    def contains(self, key: str) -> bool:
        """Return True if a string entry is physically present, expired or not."""
        return key in self._strings
    
    async def get(self, key: str) -> Optional[str]:
        entry = self._strings.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._strings[key]
            return None
        return value
    
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl if ttl else None
        self._strings[key] = (value, expires_at)
    
    async def delete(self, key: str) -> None:
        self._strings.pop(key, None)
        self._hashes.pop(key, None)
        self._lists.pop(key, None)
    
    async def hset(self, key: str, field: str, value: str) -> None:
        self._hashes.setdefault(key, {})[field] = value
    
    async def hget(self, key: str, field: str) -> Optional[str]:
        return self._hashes.get(key, {}).get(field)
    
    async def hgetall(self, key: str) -> Dict[str, str]:
        return dict(self._hashes.get(key, {}))
    
    async def hdel(self, key: str, field: str) -> bool:
        fields = self._hashes.get(key)
        if not fields or field not in fields:
            return False
        del fields[field]
        return True
    
    async def push_and_trim(self, key: str, value: str, max_length: int) -> None:
        # No await between the two steps, so this is atomic on the event loop
        items = self._lists.setdefault(key, [])
        items.insert(0, value)
        del items[max_length:]
    
    async def lrange(self, key: str, start: int, stop: int) -> List[str]:
        items = self._lists.get(key, [])
        end = None if stop == -1 else stop + 1
        return list(items[start:end])
