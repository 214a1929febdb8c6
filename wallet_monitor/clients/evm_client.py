"""Clients for EVM networks: JSON-RPC node and Etherscan-style explorer."""

from typing import Any, Dict, List, Optional

import httpx

from wallet_monitor.clients.base_client import BaseHttpClient, JsonRpcClient
from wallet_monitor.utils.errors import UpstreamError

# Explorer message returned with status "0" when an address has no history
NO_TRANSACTIONS_MESSAGE = "No transactions found"


class EvmRpcClient(JsonRpcClient):
    """Minimal Ethereum JSON-RPC client."""
    
    service_name = "evm-rpc"
    
    async def get_balance(self, address: str, block: str = "latest") -> int:
        """Get the balance of an account in wei.
        
        Args:
            address: Account address
            block: Block tag
            
        Returns:
            Balance in wei
        """
        result = await self._make_request("eth_getBalance", [address, block])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise UpstreamError(
                f"Unexpected eth_getBalance result: {result!r}",
                service_name=self.service_name
            ) from e


class ExplorerClient(BaseHttpClient):
    """Client for Etherscan-compatible explorer APIs (Etherscan, BscScan, Polygonscan)."""
    
    service_name = "explorer"
    
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(base_url, timeout=timeout, http_client=http_client)
        self.api_key = api_key
    
    async def get_transaction_history(
        self,
        address: str,
        page: int = 1,
        page_size: int = 10
    ) -> List[Dict[str, Any]]:
        """Get normal transactions of an address, newest first.
        
        Args:
            address: Account address
            page: Page number (1-based)
            page_size: Number of transactions per page
            
        Returns:
            Raw explorer transaction objects
        """
        params = {
            "module": "account",
            "action": "txlist",
            "address": address,
            "sort": "desc",
            "page": page,
            "offset": page_size,
            "apikey": self.api_key,
        }
        data = await self._request_json("GET", params=params)
        if not isinstance(data, dict):
            raise UpstreamError(
                "Unexpected explorer txlist response",
                service_name=self.service_name
            )
        
        status = str(data.get("status", ""))
        result = data.get("result")
        if status == "1" and isinstance(result, list):
            return result
        
        message = str(data.get("message") or "")
        if message.startswith(NO_TRANSACTIONS_MESSAGE):
            return []
        
        raise UpstreamError(
            f"Explorer error: {message or 'unknown error'} ({result})",
            service_name=self.service_name,
            details={"explorer_status": status}
        )
