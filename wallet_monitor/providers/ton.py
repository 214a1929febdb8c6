"""Provider for TON."""

from typing import Any, Dict, List

from wallet_monitor.clients import TonCenterClient
from wallet_monitor.config import ChainFamily, NetworkConfig
from wallet_monitor.models import NftItem, TokenBalance, TransactionRecord, TransactionStatus
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.utils.decimal_utils import to_decimal
from wallet_monitor.utils.validation import is_valid_ton_address


class TonProvider(ChainProvider):
    """toncenter for balances and history; no token or NFT indexer is wired for TON."""
    
    family = ChainFamily.TON
    
    def __init__(self, network: NetworkConfig, client: TonCenterClient):
        super().__init__(network)
        self.client = client
    
    def is_valid_address(self, address: str) -> bool:
        return is_valid_ton_address(address)
    
    async def get_native_balance(self, address: str) -> int:
        self.validate_address(address)
        return await self.client.get_balance(address)
    
    async def list_transactions(self, address: str, limit: int) -> List[TransactionRecord]:
        self.validate_address(address)
        rows = await self.client.get_transactions(address, limit=limit)
        return [self._to_transaction(row) for row in rows[:limit]]
    
    def _to_transaction(self, row: Dict[str, Any]) -> TransactionRecord:
        message = row.get("in_msg") or {}
        # Wallet-initiated transfers arrive as external messages without a source
        if not message.get("source") and row.get("out_msgs"):
            message = row["out_msgs"][0]
        
        return TransactionRecord(
            hash=(row.get("transaction_id") or {}).get("hash", ""),
            from_address=message.get("source") or None,
            to_address=message.get("destination") or None,
            value=to_decimal(message.get("value") or "0", self.decimals),
            timestamp=row.get("utime"),
            status=TransactionStatus.SUCCESS
        )
    
    async def list_token_balances(self, address: str) -> List[TokenBalance]:
        self.validate_address(address)
        self.unavailable("tokens", "no token indexer is configured for TON")
    
    async def list_nfts(self, address: str) -> List[NftItem]:
        self.validate_address(address)
        self.unavailable("nfts", "no NFT indexer is configured for TON")
    
    async def close(self) -> None:
        await self.client.close()
