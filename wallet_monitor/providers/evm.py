"""Provider for EVM-compatible networks (Ethereum, BNB Chain, Polygon)."""

from typing import Any, Dict, List, Optional

from wallet_monitor.clients import EvmRpcClient, ExplorerClient, MoralisClient
from wallet_monitor.config import ChainFamily, NetworkConfig
from wallet_monitor.models import NftItem, TokenBalance, TransactionRecord, TransactionStatus
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.utils.decimal_utils import to_decimal
from wallet_monitor.utils.validation import is_valid_evm_address

# ERC-20 decimals assumed when the indexer omits them
DEFAULT_TOKEN_DECIMALS = 18


def _explorer_status(row: Dict[str, Any]) -> TransactionStatus:
    if row.get("isError") == "1" or row.get("txreceipt_status") == "0":
        return TransactionStatus.FAILED
    if "isError" in row or row.get("txreceipt_status") == "1":
        return TransactionStatus.SUCCESS
    return TransactionStatus.UNKNOWN


class EvmProvider(ChainProvider):
    """JSON-RPC node for balances, explorer API for history, Moralis for tokens and NFTs."""
    
    family = ChainFamily.EVM
    
    def __init__(
        self,
        network: NetworkConfig,
        rpc: EvmRpcClient,
        explorer: Optional[ExplorerClient] = None,
        moralis: Optional[MoralisClient] = None
    ):
        super().__init__(network)
        self.rpc = rpc
        self.explorer = explorer
        self.moralis = moralis
    
    def is_valid_address(self, address: str) -> bool:
        return is_valid_evm_address(address)
    
    async def get_native_balance(self, address: str) -> int:
        self.validate_address(address)
        return await self.rpc.get_balance(address)
    
    async def list_transactions(self, address: str, limit: int) -> List[TransactionRecord]:
        self.validate_address(address)
        if self.explorer is None:
            self.unavailable(
                "transactions",
                f"{self.network.explorer_api_key_env} is not set"
            )
        
        rows = await self.explorer.get_transaction_history(address, page=1, page_size=limit)
        return [self._to_transaction(row) for row in rows[:limit]]
    
    def _to_transaction(self, row: Dict[str, Any]) -> TransactionRecord:
        timestamp = row.get("timeStamp")
        return TransactionRecord(
            hash=row.get("hash", ""),
            from_address=row.get("from") or None,
            # Contract creations have an empty "to"
            to_address=row.get("to") or row.get("contractAddress") or None,
            value=to_decimal(row.get("value") or "0", self.decimals),
            timestamp=int(timestamp) if timestamp else None,
            status=_explorer_status(row)
        )
    
    async def list_token_balances(self, address: str) -> List[TokenBalance]:
        self.validate_address(address)
        if self.moralis is None:
            self.unavailable("tokens", "MORALIS_API_KEY is not set")
        
        items = await self.moralis.get_evm_token_balances(address, self.network.indexer_chain)
        tokens = []
        for item in items:
            raw_decimals = item.get("decimals")
            decimals = int(raw_decimals) if raw_decimals not in (None, "") else DEFAULT_TOKEN_DECIMALS
            tokens.append(TokenBalance(
                contract_address=(item.get("token_address") or "").lower(),
                name=item.get("name") or "",
                symbol=item.get("symbol") or "",
                balance=to_decimal(item.get("balance") or "0", decimals),
                decimals=decimals,
                network=self.name
            ))
        return tokens
    
    async def list_nfts(self, address: str) -> List[NftItem]:
        self.validate_address(address)
        if self.moralis is None:
            self.unavailable("nfts", "MORALIS_API_KEY is not set")
        
        items = await self.moralis.get_evm_nfts(address, self.network.indexer_chain)
        return [
            NftItem(
                contract_address=(item.get("token_address") or "").lower() or None,
                token_id=str(item["token_id"]) if item.get("token_id") is not None else None,
                name=item.get("name") or "",
                symbol=item.get("symbol") or "",
                network=self.name
            )
            for item in items
        ]
    
    async def close(self) -> None:
        await self.rpc.close()
        if self.explorer is not None:
            await self.explorer.close()
        if self.moralis is not None:
            await self.moralis.close()
