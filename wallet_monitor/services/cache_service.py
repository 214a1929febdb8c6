"""
Cache service for the wallet monitor.

Values are stored as JSON in the shared key-value store with a per-resource
TTL. Concurrent misses for the same key inside one process share a single
in-flight computation.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, TypeVar

from pydantic import TypeAdapter, ValidationError

from wallet_monitor.services.base_service import BaseService
from wallet_monitor.storage.base import KeyValueStore
from wallet_monitor.utils.errors import CacheComputeError, WalletMonitorError

T = TypeVar('T')


class CacheKeys:
    """Key layout of cached resources."""
    
    @staticmethod
    def balance(address: str) -> str:
        return f"balance:{address}"
    
    @staticmethod
    def transactions(address: str, limit: int) -> str:
        return f"txs:{address}:{limit}"
    
    @staticmethod
    def tokens(address: str) -> str:
        return f"tokens:{address}"
    
    @staticmethod
    def nfts(address: str) -> str:
        return f"nfts:{address}"


def _consume_exception(future: "asyncio.Future[Any]") -> None:
    # Mark the exception as retrieved when no follower was waiting
    if not future.cancelled():
        future.exception()


class CacheService(BaseService):
    """
    Get-or-compute cache with TTL and single-flight de-duplication.
    
    Features:
    - JSON serialization through pydantic type adapters
    - Per-call TTL, enforced by the backing store
    - At most one concurrent computation per key in this process
    """
    
    def __init__(self, store: KeyValueStore, logger: Optional[logging.Logger] = None):
        """
        Initialize the cache service.
        
        Args:
            store: Backing key-value store
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.store = store
        self._inflight: Dict[str, "asyncio.Future[Any]"] = {}
    
    @property
    def inflight_count(self) -> int:
        """Number of computations currently in flight."""
        return len(self._inflight)
    
    async def get_or_compute(
        self,
        key: str,
        ttl: int,
        compute: Callable[[], Awaitable[T]],
        adapter: TypeAdapter
    ) -> Tuple[T, bool]:
        """
        Get a value from the cache or compute and store it.
        
        Args:
            key: Cache key
            ttl: Time-to-live in seconds for a freshly computed value
            compute: Async function producing the value on a miss
            adapter: Type adapter used to (de)serialize the value
            
        Returns:
            Tuple of the value and whether it was served from cache
            
        Raises:
            WalletMonitorError: Propagated unchanged from ``compute``
            CacheComputeError: If ``compute`` fails with any other exception
        """
        inflight = self._inflight.get(key)
        if inflight is None:
            cached = await self._read(key, adapter)
            if cached is not None:
                self.logger.debug(f"Cache hit for key: {key}")
                return cached, True
            # Another caller may have started computing while the store was read
            inflight = self._inflight.get(key)

        if inflight is not None:
            self.logger.debug(f"Joining in-flight computation for key: {key}")
            return await asyncio.shield(inflight), False
        
        future: "asyncio.Future[Any]" = asyncio.get_running_loop().create_future()
        future.add_done_callback(_consume_exception)
        self._inflight[key] = future
        
        try:
            self.logger.debug(f"Cache miss for key: {key}, computing")
            value = await self._compute(key, compute)
            await self.store.set(key, adapter.dump_json(value).decode(), ttl)
        except asyncio.CancelledError:
            future.set_exception(CacheComputeError(f"Computation for {key} was cancelled", key=key))
            raise
        except Exception as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(value)
            return value, False
        finally:
            self._inflight.pop(key, None)
    
    async def _compute(self, key: str, compute: Callable[[], Awaitable[T]]) -> T:
        try:
            return await compute()
        except WalletMonitorError:
            raise
        except Exception as e:
            self.logger.error(f"Error computing value for key {key}: {str(e)}")
            raise CacheComputeError(
                f"Failed to compute value for {key}: {str(e)}", key=key
            ) from e
    
    async def _read(self, key: str, adapter: TypeAdapter) -> Optional[Any]:
        raw = await self.store.get(key)
        if raw is None:
            return None
        try:
            return adapter.validate_json(raw)
        except ValidationError:
            self.logger.warning(f"Discarding undecodable cache entry: {key}")
            return None
    
    async def invalidate(self, key: str) -> None:
        """
        Invalidate a specific cache entry.
        
        Args:
            key: The key to invalidate
        """
        await self.store.delete(key)
        self.logger.debug(f"Invalidated cache key: {key}")
