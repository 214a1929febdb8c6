"""toncenter JSON-RPC client for TON."""

from typing import Any, Dict, List, Optional

import httpx

from wallet_monitor.clients.base_client import JsonRpcClient
from wallet_monitor.utils.errors import UpstreamError


class TonCenterClient(JsonRpcClient):
    """Client for the toncenter v2 JSON-RPC endpoint."""
    
    service_name = "toncenter"
    
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        headers = {"X-API-Key": api_key} if api_key else None
        super().__init__(base_url, timeout=timeout, headers=headers, http_client=http_client)
    
    async def get_balance(self, address: str) -> int:
        """Get the balance of an account in nanoTON.
        
        Args:
            address: Account address (raw or user-friendly form)
            
        Returns:
            Balance in nanoTON
        """
        result = await self._make_request("getAddressBalance", {"address": address})
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise UpstreamError(
                f"Unexpected getAddressBalance result: {result!r}",
                service_name=self.service_name
            ) from e
    
    async def get_transactions(self, address: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Get the latest transactions of an account, newest first.
        
        Args:
            address: Account address
            limit: Maximum number of transactions
            
        Returns:
            Raw toncenter transaction objects
        """
        result = await self._make_request(
            "getTransactions", {"address": address, "limit": limit}
        )
        if not isinstance(result, list):
            raise UpstreamError(
                f"Unexpected getTransactions result: {result!r}",
                service_name=self.service_name
            )
        return result
