"""
Wallet service: the request-facing composition of provider, cache,
watchlist and alert pipeline.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import TypeAdapter

from wallet_monitor.config import AlertConfig, CacheTTLConfig
from wallet_monitor.models import (
    BalanceAlert,
    NftItem,
    NftList,
    TokenBalance,
    TokenBalanceList,
    TransactionList,
    TransactionRecord,
    WalletBalance,
    WatchedWallet,
    WatchedWalletWithBalance,
    WatchFailure,
    WatchlistReport,
    WatchResult,
)
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.services.alert_service import AlertHistory, BalanceChangeDetector
from wallet_monitor.services.base_service import BaseService
from wallet_monitor.services.cache_service import CacheKeys, CacheService
from wallet_monitor.services.watchlist_service import WatchlistService
from wallet_monitor.utils.decimal_utils import to_decimal
from wallet_monitor.utils.errors import (
    ErrorCode,
    InvalidAddressError,
    WalletMonitorError,
)
from wallet_monitor.utils.validation import is_supported_address

MAX_TRANSACTIONS_LIMIT = 100

_BALANCE_ADAPTER = TypeAdapter(str)
_TRANSACTIONS_ADAPTER = TypeAdapter(List[TransactionRecord])
_TOKENS_ADAPTER = TypeAdapter(List[TokenBalance])
_NFTS_ADAPTER = TypeAdapter(List[NftItem])


class WalletService(BaseService):
    """Unified wallet views and watchlist evaluation for the active network."""
    
    def __init__(
        self,
        provider: ChainProvider,
        cache: CacheService,
        watchlist: WatchlistService,
        detector: BalanceChangeDetector,
        history: AlertHistory,
        cache_ttl: Optional[CacheTTLConfig] = None,
        alert_config: Optional[AlertConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the wallet service.
        
        Args:
            provider: Active chain provider
            cache: Cache service
            watchlist: Watchlist service
            detector: Balance change detector
            history: Alert history
            cache_ttl: Per-resource cache lifetimes
            alert_config: Watchlist evaluation settings
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.provider = provider
        self.cache = cache
        self.watchlist = watchlist
        self.detector = detector
        self.history = history
        self.cache_ttl = cache_ttl or CacheTTLConfig()
        self.alert_config = alert_config or AlertConfig()
    
    @property
    def network(self) -> str:
        return self.provider.name
    
    async def _fetch_balance(self, address: str) -> Tuple[str, bool]:
        async def compute() -> str:
            raw = await self.provider.get_native_balance(address)
            return to_decimal(raw, self.provider.decimals)
        
        return await self.cache.get_or_compute(
            CacheKeys.balance(address), self.cache_ttl.balance, compute, _BALANCE_ADAPTER
        )
    
    async def get_balance(self, address: str) -> WalletBalance:
        """
        Get the native balance of a wallet.
        
        Raises:
            InvalidAddressError: If the address is invalid for the active network
        """
        self.provider.validate_address(address)
        balance, cached = await self._fetch_balance(address)
        return WalletBalance(
            address=address,
            balance=balance,
            symbol=self.provider.symbol,
            network=self.network,
            cached=cached
        )
    
    async def get_transactions(self, address: str, limit: int = 10) -> TransactionList:
        """
        Get the latest transactions of a wallet, most recent first.
        
        Args:
            address: Wallet address
            limit: Number of transactions, clamped to 1..100
        """
        self.provider.validate_address(address)
        limit = max(1, min(limit, MAX_TRANSACTIONS_LIMIT))
        
        transactions, cached = await self.cache.get_or_compute(
            CacheKeys.transactions(address, limit),
            self.cache_ttl.transactions,
            lambda: self.provider.list_transactions(address, limit),
            _TRANSACTIONS_ADAPTER
        )
        return TransactionList(
            address=address,
            network=self.network,
            transactions=transactions,
            cached=cached
        )
    
    async def get_token_balances(self, address: str) -> TokenBalanceList:
        """Get fungible token balances of a wallet."""
        self.provider.validate_address(address)
        tokens, cached = await self.cache.get_or_compute(
            CacheKeys.tokens(address),
            self.cache_ttl.tokens,
            lambda: self.provider.list_token_balances(address),
            _TOKENS_ADAPTER
        )
        return TokenBalanceList(address=address, network=self.network, tokens=tokens, cached=cached)
    
    async def get_nfts(self, address: str) -> NftList:
        """Get NFTs owned by a wallet."""
        self.provider.validate_address(address)
        nfts, cached = await self.cache.get_or_compute(
            CacheKeys.nfts(address),
            self.cache_ttl.nfts,
            lambda: self.provider.list_nfts(address),
            _NFTS_ADAPTER
        )
        return NftList(address=address, network=self.network, nfts=nfts, cached=cached)
    
    async def watch_wallet(self, address: str, label: Optional[str] = None) -> WatchResult:
        """
        Add a wallet to the watchlist.
        
        Any address valid for one of the supported chain families is accepted.
        
        Raises:
            InvalidAddressError: If the address is not valid for any family
        """
        if not is_supported_address(address):
            raise InvalidAddressError(address)
        await self.watchlist.add(address, label)
        return WatchResult(success=True, address=address)
    
    async def unwatch_wallet(self, address: str) -> bool:
        """Remove a wallet from the watchlist."""
        removed = await self.watchlist.remove(address)
        self.detector.forget(address)
        return removed
    
    async def _evaluate_wallet(
        self, wallet: WatchedWallet
    ) -> Tuple[WatchedWalletWithBalance, Optional[BalanceAlert]]:
        self.provider.validate_address(wallet.address)
        balance, _ = await self._fetch_balance(wallet.address)
        alert = await self.detector.evaluate(
            wallet.address, self.network, self.provider.symbol, balance
        )
        entry = WatchedWalletWithBalance(
            **wallet.model_dump(),
            balance=balance,
            symbol=self.provider.symbol
        )
        return entry, alert
    
    async def get_watched_wallets(self) -> WatchlistReport:
        """
        Run one evaluation cycle over the watchlist.
        
        Every wallet's balance is fetched through the cache and compared with
        its baseline. Wallets that fail are reported in ``failures``; they keep
        their baseline and raise no alert.
        """
        wallets = list((await self.watchlist.list_all()).values())
        report = WatchlistReport(network=self.network)
        if not wallets:
            return report
        
        async with self.log_timing(f"watchlist evaluation of {len(wallets)} wallets"):
            results = await self.gather_with_concurrency(
                self.alert_config.concurrency,
                *[self._evaluate_wallet(wallet) for wallet in wallets],
                return_exceptions=True
            )
        
        for wallet, result in zip(wallets, results):
            if isinstance(result, WalletMonitorError):
                self.logger.warning(f"Skipping {wallet.address} this cycle: {result.message}")
                report.failures.append(WatchFailure(
                    address=wallet.address,
                    code=result.code.value,
                    message=result.message
                ))
            elif isinstance(result, BaseException):
                self.logger.error(f"Unexpected error evaluating {wallet.address}: {result!r}")
                report.failures.append(WatchFailure(
                    address=wallet.address,
                    code=ErrorCode.UNKNOWN_ERROR.value,
                    message=str(result)
                ))
            else:
                entry, alert = result
                report.wallets.append(entry)
                if alert is not None:
                    report.alerts_created += 1
        
        return report
    
    async def get_alerts(self) -> List[BalanceAlert]:
        """Return the alert history, newest first."""
        return await self.history.list_alerts()
