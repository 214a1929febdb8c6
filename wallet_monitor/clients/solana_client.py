"""Solana JSON-RPC client."""

from typing import Any, Dict, List

from wallet_monitor.clients.base_client import JsonRpcClient
from wallet_monitor.utils.errors import UpstreamError


class SolanaRpcClient(JsonRpcClient):
    """Client for the Solana JSON-RPC API."""
    
    service_name = "solana-rpc"
    
    def __init__(self, *args: Any, commitment: str = "confirmed", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.commitment = commitment
    
    async def get_balance(self, pubkey: str) -> int:
        """Get the balance of an account in lamports.
        
        Args:
            pubkey: Account public key (base58)
            
        Returns:
            Balance in lamports
        """
        result = await self._make_request(
            "getBalance", [pubkey, {"commitment": self.commitment}]
        )
        if isinstance(result, dict):
            result = result.get("value")
        if not isinstance(result, int):
            raise UpstreamError(
                f"Unexpected getBalance result: {result!r}",
                service_name=self.service_name
            )
        return result
    
    async def get_signatures_for_address(self, pubkey: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Get confirmed signatures for transactions involving an address, newest first.
        
        Args:
            pubkey: Account public key (base58)
            limit: Maximum number of signatures to return
            
        Returns:
            List of signature information objects
        """
        result = await self._make_request(
            "getSignaturesForAddress",
            [pubkey, {"limit": limit, "commitment": self.commitment}]
        )
        if not isinstance(result, list):
            raise UpstreamError(
                f"Unexpected getSignaturesForAddress result: {result!r}",
                service_name=self.service_name
            )
        return result
