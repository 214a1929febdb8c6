"""Provider for Solana."""

from typing import Any, Dict, List, Optional

from wallet_monitor.clients import MoralisClient, SolanaRpcClient
from wallet_monitor.config import ChainFamily, NetworkConfig
from wallet_monitor.models import NftItem, TokenBalance, TransactionRecord, TransactionStatus
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.utils.decimal_utils import to_decimal
from wallet_monitor.utils.validation import validate_public_key


def _signature_status(info: Dict[str, Any]) -> TransactionStatus:
    if info.get("err") is not None:
        return TransactionStatus.FAILED
    confirmation = info.get("confirmationStatus")
    if confirmation in ("confirmed", "finalized"):
        return TransactionStatus.SUCCESS
    if confirmation == "processed":
        return TransactionStatus.PENDING
    return TransactionStatus.UNKNOWN


class SolanaProvider(ChainProvider):
    """Solana RPC for balances and signatures, Moralis for SPL tokens and NFTs."""
    
    family = ChainFamily.SOLANA
    
    def __init__(
        self,
        network: NetworkConfig,
        rpc: SolanaRpcClient,
        moralis: Optional[MoralisClient] = None
    ):
        super().__init__(network)
        self.rpc = rpc
        self.moralis = moralis
    
    def is_valid_address(self, address: str) -> bool:
        return validate_public_key(address)
    
    async def get_native_balance(self, address: str) -> int:
        self.validate_address(address)
        return await self.rpc.get_balance(address)
    
    async def list_transactions(self, address: str, limit: int) -> List[TransactionRecord]:
        self.validate_address(address)
        signatures = await self.rpc.get_signatures_for_address(address, limit=limit)
        # Signature infos carry neither counterparties nor amounts
        return [
            TransactionRecord(
                hash=info.get("signature", ""),
                timestamp=info.get("blockTime"),
                status=_signature_status(info)
            )
            for info in signatures[:limit]
        ]
    
    async def list_token_balances(self, address: str) -> List[TokenBalance]:
        self.validate_address(address)
        if self.moralis is None:
            self.unavailable("tokens", "MORALIS_API_KEY is not set")
        
        items = await self.moralis.get_solana_tokens(address, self.network.indexer_chain)
        tokens = []
        for item in items:
            decimals = int(item.get("decimals") or 0)
            if item.get("amountRaw") is not None:
                balance = to_decimal(item["amountRaw"], decimals)
            else:
                balance = to_decimal(item.get("amount") or "0", 0)
            tokens.append(TokenBalance(
                contract_address=item.get("mint", ""),
                name=item.get("name") or "",
                symbol=item.get("symbol") or "",
                balance=balance,
                decimals=decimals,
                network=self.name
            ))
        return tokens
    
    async def list_nfts(self, address: str) -> List[NftItem]:
        self.validate_address(address)
        if self.moralis is None:
            self.unavailable("nfts", "MORALIS_API_KEY is not set")
        
        items = await self.moralis.get_solana_nfts(address, self.network.indexer_chain)
        return [
            NftItem(
                mint=item.get("mint"),
                name=item.get("name") or "",
                symbol=item.get("symbol") or "",
                network=self.name
            )
            for item in items
        ]
    
    async def close(self) -> None:
        await self.rpc.close()
        if self.moralis is not None:
            await self.moralis.close()
