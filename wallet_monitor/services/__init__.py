"""Services of the wallet monitor."""

from wallet_monitor.services.alert_service import AlertHistory, BalanceChangeDetector
from wallet_monitor.services.base_service import BaseService
from wallet_monitor.services.cache_service import CacheKeys, CacheService
from wallet_monitor.services.events import BalanceChangedEvent, BalanceChangeNotifier
from wallet_monitor.services.poller import WatchlistPoller
from wallet_monitor.services.wallet_service import WalletService
from wallet_monitor.services.watchlist_service import WatchlistService

__all__ = [
    "AlertHistory",
    "BalanceChangeDetector",
    "BalanceChangedEvent",
    "BalanceChangeNotifier",
    "BaseService",
    "CacheKeys",
    "CacheService",
    "WalletService",
    "WatchlistPoller",
    "WatchlistService",
]
