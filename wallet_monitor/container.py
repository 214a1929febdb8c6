"""
Service wiring for the wallet monitor.

Everything is built once from an immutable :class:`Settings` and handed to
the HTTP layer through ``app.state``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from wallet_monitor.config import Settings
from wallet_monitor.logging_config import get_logger
from wallet_monitor.providers import ChainProvider, build_provider
from wallet_monitor.services.alert_service import AlertHistory, BalanceChangeDetector
from wallet_monitor.services.cache_service import CacheService
from wallet_monitor.services.events import BalanceChangeNotifier, make_logging_handler
from wallet_monitor.services.poller import WatchlistPoller
from wallet_monitor.services.wallet_service import WalletService
from wallet_monitor.services.watchlist_service import WatchlistService
from wallet_monitor.storage import KeyValueStore, create_store

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Long-lived services shared by every request."""
    
    settings: Settings
    store: KeyValueStore
    provider: ChainProvider
    notifier: BalanceChangeNotifier
    wallet_service: WalletService
    poller: Optional[WatchlistPoller] = None
    
    async def start(self) -> None:
        if self.poller is not None:
            await self.poller.start()
    
    async def aclose(self) -> None:
        """Stop background work and release network resources."""
        if self.poller is not None:
            await self.poller.stop()
        await self.provider.close()
        await self.store.close()


def create_services(
    settings: Settings,
    store: Optional[KeyValueStore] = None,
    provider: Optional[ChainProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None
) -> ServiceContainer:
    """
    Build the service graph for the configured network.
    
    Args:
        settings: Application settings
        store: Store to use instead of the configured backend
        provider: Provider to use instead of the configured network's
        http_client: Shared HTTP client for the chain clients
        
    Returns:
        Wired service container
    """
    store = store or create_store(settings.storage.backend, settings.storage.redis_url)
    provider = provider or build_provider(settings.chain, http_client=http_client)
    
    notifier = BalanceChangeNotifier()
    notifier.subscribe(make_logging_handler(logging.getLogger("wallet_monitor.alerts")))
    
    history = AlertHistory(store, max_size=settings.alerts.history_size)
    detector = BalanceChangeDetector(
        store,
        history,
        notifier,
        threshold=settings.alerts.change_threshold,
        alert_on_first_observation=settings.alerts.alert_on_first_observation
    )
    wallet_service = WalletService(
        provider=provider,
        cache=CacheService(store),
        watchlist=WatchlistService(store),
        detector=detector,
        history=history,
        cache_ttl=settings.cache_ttl,
        alert_config=settings.alerts
    )
    
    poller = None
    if settings.alerts.poll_interval > 0:
        poller = WatchlistPoller(wallet_service, settings.alerts.poll_interval)
    
    logger.info(
        f"Services ready for {provider.name} with {settings.storage.backend} storage"
    )
    return ServiceContainer(
        settings=settings,
        store=store,
        provider=provider,
        notifier=notifier,
        wallet_service=wallet_service,
        poller=poller
    )
