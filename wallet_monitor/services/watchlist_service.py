"""Watchlist persistence.

Watched wallets live in the ``watchlist`` hash, one JSON-encoded
:class:`WatchedWallet` per address field.
"""

import logging
import time
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from wallet_monitor.models import WatchedWallet
from wallet_monitor.services.base_service import BaseService
from wallet_monitor.storage.base import KeyValueStore

WATCHLIST_KEY = "watchlist"


class WatchlistService(BaseService):
    """Persisted set of watched addresses with optional labels."""
    
    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the watchlist service.
        
        Args:
            store: Backing key-value store
            clock: Wall-clock function returning Unix seconds
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.store = store
        self._clock = clock
    
    async def add(self, address: str, label: Optional[str] = None) -> WatchedWallet:
        """
        Watch an address, replacing the label and timestamp of an existing entry.
        
        Args:
            address: Wallet address
            label: Optional label
            
        Returns:
            The stored entry
        """
        wallet = WatchedWallet(address=address, label=label, added_at=int(self._clock()))
        await self.store.hset(WATCHLIST_KEY, address, wallet.model_dump_json())
        self.logger.info(f"Watching wallet {address}" + (f" ({label})" if label else ""))
        return wallet
    
    async def list_all(self) -> Dict[str, WatchedWallet]:
        """
        Return every watched wallet keyed by address.
        """
        entries = await self.store.hgetall(WATCHLIST_KEY)
        wallets: Dict[str, WatchedWallet] = {}
        for address, payload in entries.items():
            try:
                wallets[address] = WatchedWallet.model_validate_json(payload)
            except ValidationError:
                self.logger.error(f"Skipping corrupt watchlist entry for {address}")
        return wallets
    
    async def remove(self, address: str) -> bool:
        """
        Stop watching an address.
        
        Returns:
            True if the address was being watched
        """
        removed = await self.store.hdel(WATCHLIST_KEY, address)
        if removed:
            self.logger.info(f"Stopped watching wallet {address}")
        return removed
