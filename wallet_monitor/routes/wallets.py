"""Wallet API routes.

This module defines routes for wallet lookups, the watchlist and alerts.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query, Request

from wallet_monitor.models import (
    BalanceAlert,
    NftList,
    TokenBalanceList,
    TransactionList,
    WalletBalance,
    WatchlistReport,
    WatchResult,
    WatchWalletRequest,
)
from wallet_monitor.services.wallet_service import MAX_TRANSACTIONS_LIMIT, WalletService

router = APIRouter(tags=["wallets"])


def get_wallet_service(request: Request) -> WalletService:
    """Dependency returning the wallet service built at startup."""
    return request.app.state.services.wallet_service


@router.get(
    "/wallet/{address}/balance",
    response_model=WalletBalance,
    summary="Get wallet balance",
    description="Retrieves the native balance of a wallet on the active network."
)
async def get_balance(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
) -> WalletBalance:
    return await service.get_balance(address)


@router.get(
    "/wallet/{address}/transactions",
    response_model=TransactionList,
    summary="Get transaction history",
    description="Retrieves the latest transactions of a wallet, most recent first."
)
async def get_transactions(
    address: str = Path(..., description="Wallet address"),
    limit: int = Query(10, ge=1, le=MAX_TRANSACTIONS_LIMIT, description="Maximum number of transactions"),
    service: WalletService = Depends(get_wallet_service)
) -> TransactionList:
    return await service.get_transactions(address, limit)


@router.get(
    "/wallet/{address}/tokens",
    response_model=TokenBalanceList,
    summary="Get token balances"
)
async def get_token_balances(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
) -> TokenBalanceList:
    return await service.get_token_balances(address)


@router.get(
    "/wallet/{address}/nfts",
    response_model=NftList,
    summary="Get NFTs"
)
async def get_nfts(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
) -> NftList:
    return await service.get_nfts(address)


@router.post(
    "/wallets/watch",
    response_model=WatchResult,
    summary="Watch a wallet",
    description="Adds a wallet to the watchlist. Watching an address again updates its label."
)
async def watch_wallet(
    body: WatchWalletRequest,
    service: WalletService = Depends(get_wallet_service)
) -> WatchResult:
    return await service.watch_wallet(body.address, body.label)


@router.delete(
    "/wallets/watched/{address}",
    response_model=WatchResult,
    summary="Stop watching a wallet"
)
async def unwatch_wallet(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
) -> WatchResult:
    removed = await service.unwatch_wallet(address)
    return WatchResult(success=removed, address=address)


@router.get(
    "/wallets/watched",
    response_model=WatchlistReport,
    summary="Evaluate the watchlist",
    description=(
        "Fetches the balance of every watched wallet, records an alert for each "
        "balance change and reports wallets that could not be evaluated."
    )
)
async def get_watched_wallets(
    service: WalletService = Depends(get_wallet_service)
) -> WatchlistReport:
    return await service.get_watched_wallets()


@router.get(
    "/wallets/alerts",
    response_model=List[BalanceAlert],
    summary="Get balance change alerts",
    description="Returns the most recent balance change alerts, newest first."
)
async def get_alerts(
    service: WalletService = Depends(get_wallet_service)
) -> List[BalanceAlert]:
    return await service.get_alerts()
