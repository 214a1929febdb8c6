"""Pydantic models exchanged between the services and the API."""

from wallet_monitor.models.wallet import (
    BalanceAlert,
    NftItem,
    NftList,
    TokenBalance,
    TokenBalanceList,
    TransactionList,
    TransactionRecord,
    TransactionStatus,
    WalletBalance,
    WatchedWallet,
    WatchedWalletWithBalance,
    WatchFailure,
    WatchlistReport,
    WatchResult,
    WatchWalletRequest,
)

__all__ = [
    "BalanceAlert",
    "NftItem",
    "NftList",
    "TokenBalance",
    "TokenBalanceList",
    "TransactionList",
    "TransactionRecord",
    "TransactionStatus",
    "WalletBalance",
    "WatchedWallet",
    "WatchedWalletWithBalance",
    "WatchFailure",
    "WatchlistReport",
    "WatchResult",
    "WatchWalletRequest",
]
