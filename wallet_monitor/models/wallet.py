"""Wallet data models.

All monetary amounts are decimal strings produced by
:func:`wallet_monitor.utils.decimal_utils.to_decimal`.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionStatus(str, Enum):
    """Outcome of a transaction as reported by the chain."""
    
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"
    UNKNOWN = "unknown"


class WalletBalance(BaseModel):
    """Native balance of a wallet."""
    
    address: str = Field(..., description="Wallet address")
    balance: str = Field(..., description="Native balance as a decimal string")
    symbol: str = Field(..., description="Native token symbol")
    network: str = Field(..., description="Network name")
    cached: bool = Field(False, description="Whether the value was served from cache")


class TransactionRecord(BaseModel):
    """Normalized transaction."""
    
    hash: str = Field(..., description="Transaction hash or signature")
    from_address: Optional[str] = Field(None, description="Sender address")
    to_address: Optional[str] = Field(None, description="Recipient address")
    value: Optional[str] = Field(None, description="Transferred native amount as a decimal string")
    timestamp: Optional[int] = Field(None, description="Block time (Unix timestamp, seconds)")
    status: TransactionStatus = Field(TransactionStatus.UNKNOWN, description="Transaction status")


class TransactionList(BaseModel):
    """Transaction history of a wallet, most recent first."""
    
    address: str
    network: str
    transactions: List[TransactionRecord] = Field(default_factory=list)
    cached: bool = False


class TokenBalance(BaseModel):
    """Fungible token (ERC-20 / SPL) balance."""
    
    contract_address: str = Field(..., description="EVM contract address or Solana mint")
    name: str = Field("", description="Token name")
    symbol: str = Field("", description="Token symbol")
    balance: str = Field(..., description="Token balance as a decimal string")
    decimals: int = Field(..., description="Token decimals")
    network: str = Field(..., description="Network name")


class TokenBalanceList(BaseModel):
    """Token balances of a wallet."""
    
    address: str
    network: str
    tokens: List[TokenBalance] = Field(default_factory=list)
    cached: bool = False


class NftItem(BaseModel):
    """NFT owned by a wallet.
    
    EVM items carry ``contract_address`` and ``token_id``; Solana items carry
    ``mint``.
    """
    
    contract_address: Optional[str] = Field(None, description="EVM NFT contract address")
    mint: Optional[str] = Field(None, description="Solana mint address")
    token_id: Optional[str] = Field(None, description="EVM token ID")
    name: str = Field("", description="Collection or item name")
    symbol: str = Field("", description="Collection symbol")
    network: str = Field(..., description="Network name")


class NftList(BaseModel):
    """NFTs owned by a wallet."""
    
    address: str
    network: str
    nfts: List[NftItem] = Field(default_factory=list)
    cached: bool = False


class WatchWalletRequest(BaseModel):
    """Body of a watch request."""
    
    address: str = Field(..., min_length=1, description="Wallet address to watch")
    label: Optional[str] = Field(None, max_length=100, description="Optional human-readable label")


class WatchResult(BaseModel):
    """Response of a watch request."""
    
    success: bool
    address: str


class WatchedWallet(BaseModel):
    """Watchlist entry."""
    
    model_config = ConfigDict(frozen=True)
    
    address: str
    label: Optional[str] = None
    added_at: int = Field(..., description="Unix timestamp (seconds) the wallet was watched")


class WatchedWalletWithBalance(WatchedWallet):
    """Watchlist entry augmented with its live balance."""
    
    balance: str
    symbol: str


class WatchFailure(BaseModel):
    """A watched wallet that could not be evaluated in a cycle."""
    
    address: str
    code: str
    message: str


class WatchlistReport(BaseModel):
    """Result of one watchlist evaluation cycle."""
    
    network: str
    wallets: List[WatchedWalletWithBalance] = Field(default_factory=list)
    failures: List[WatchFailure] = Field(default_factory=list)
    alerts_created: int = 0


class BalanceAlert(BaseModel):
    """Immutable record of a detected balance change."""
    
    model_config = ConfigDict(frozen=True)
    
    address: str
    network: str
    previous_balance: str
    current_balance: str
    symbol: str
    detected_at: int = Field(..., description="Unix timestamp in milliseconds")
