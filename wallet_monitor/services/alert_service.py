"""
Alert pipeline: bounded alert history and the balance change detector.

Persisted state:
- ``last_balance:{address}``: baseline of the detector, no TTL
- ``wallet:alerts``: alert history list, newest first, capped
"""

import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from wallet_monitor.models import BalanceAlert
from wallet_monitor.services.base_service import BaseService
from wallet_monitor.services.events import BalanceChangeNotifier
from wallet_monitor.storage.base import KeyValueStore
from wallet_monitor.utils.decimal_utils import has_changed

ALERTS_KEY = "wallet:alerts"
MAX_ALERTS = 50

# Baseline used when an address has never been evaluated
MISSING_BASELINE = "0"


def last_balance_key(address: str) -> str:
    return f"last_balance:{address}"


class AlertHistory(BaseService):
    """Append-only alert history capped at ``max_size`` entries."""
    
    def __init__(
        self,
        store: KeyValueStore,
        max_size: int = MAX_ALERTS,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(logger=logger)
        if max_size <= 0:
            raise ValueError("Alert history size must be positive")
        self.store = store
        self.max_size = max_size
    
    async def record(self, alert: BalanceAlert) -> None:
        """Prepend an alert and drop everything past the cap in one atomic step."""
        await self.store.push_and_trim(ALERTS_KEY, alert.model_dump_json(), self.max_size)
    
    async def list_alerts(self) -> List[BalanceAlert]:
        """Return the stored alerts, newest first."""
        raw_alerts = await self.store.lrange(ALERTS_KEY, 0, -1)
        alerts = []
        for payload in raw_alerts:
            try:
                alerts.append(BalanceAlert.model_validate_json(payload))
            except ValidationError:
                self.logger.error("Skipping corrupt alert history entry")
        return alerts


class BalanceChangeDetector(BaseService):
    """
    Compares fresh balances with the last known value of each address.
    
    Each address's read-compare-write sequence runs under its own lock, so two
    evaluations of the same address never interleave within a process.
    """
    
    def __init__(
        self,
        store: KeyValueStore,
        history: AlertHistory,
        notifier: BalanceChangeNotifier,
        threshold: str = "0",
        alert_on_first_observation: bool = True,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the detector.
        
        Args:
            store: Backing key-value store
            history: Alert history receiving detected changes
            notifier: Notifier receiving detected changes
            threshold: Minimum absolute difference that counts as a change
            alert_on_first_observation: Alert when an address has no baseline yet
                (its previous balance is then reported as "0")
            clock: Wall-clock function returning Unix seconds
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.store = store
        self.history = history
        self.notifier = notifier
        self.threshold = threshold
        self.alert_on_first_observation = alert_on_first_observation
        self._clock = clock
        self._locks: Dict[str, asyncio.Lock] = {}
    
    def _lock_for(self, address: str) -> asyncio.Lock:
        lock = self._locks.get(address)
        if lock is None:
            lock = self._locks[address] = asyncio.Lock()
        return lock
    
    @property
    def tracked_addresses(self) -> int:
        """Number of addresses holding a lock."""
        return len(self._locks)
    
    def forget(self, address: str) -> None:
        """Drop the lock of an address that is no longer watched.
        
        A lock held by a running evaluation is kept so the evaluation stays exclusive.
        """
        lock = self._locks.get(address)
        if lock is not None and not lock.locked():
            del self._locks[address]
    
    async def evaluate(
        self,
        address: str,
        network: str,
        symbol: str,
        current_balance: str
    ) -> Optional[BalanceAlert]:
        """
        Compare a fresh balance with the baseline and advance the baseline.
        
        Args:
            address: Wallet address
            network: Network name
            symbol: Native token symbol
            current_balance: Freshly fetched balance as a decimal string
            
        Returns:
            The recorded alert, or None if the balance did not change
        """
        async with self._lock_for(address):
            key = last_balance_key(address)
            stored = await self.store.get(key)
            previous = stored if stored is not None else MISSING_BASELINE
            
            alert = None
            should_alert = stored is not None or self.alert_on_first_observation
            if should_alert and has_changed(previous, current_balance, self.threshold):
                alert = BalanceAlert(
                    address=address,
                    network=network,
                    previous_balance=previous,
                    current_balance=current_balance,
                    symbol=symbol,
                    detected_at=int(self._clock() * 1000)
                )
                await self.history.record(alert)
                await self.notifier.publish(alert)
            
            await self.store.set(key, current_balance)
            return alert
