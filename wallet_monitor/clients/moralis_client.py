"""Client for the Moralis multi-chain indexing API.

Covers the two Moralis surfaces used for token and NFT enumeration: the EVM
Web3 Data API (keyed by chain id strings such as ``0x1``) and the Solana
gateway (keyed by network name, ``mainnet``).
"""

from typing import Any, Dict, List, Optional

import httpx

from wallet_monitor.clients.base_client import BaseHttpClient
from wallet_monitor.utils.errors import UpstreamError


class MoralisClient(BaseHttpClient):
    """Moralis indexer client."""
    
    service_name = "moralis"
    
    def __init__(
        self,
        api_key: str,
        evm_api_url: str = "https://deep-index.moralis.io/api/v2.2",
        solana_api_url: str = "https://solana-gateway.moralis.io",
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__("", timeout=timeout, headers={"X-API-Key": api_key}, http_client=http_client)
        self.evm_api_url = evm_api_url.rstrip("/")
        self.solana_api_url = solana_api_url.rstrip("/")
    
    def _expect_list(self, data: Any, operation: str) -> List[Dict[str, Any]]:
        # Paginated endpoints wrap items in {"result": [...], "cursor": ...}
        if isinstance(data, dict) and isinstance(data.get("result"), list):
            return data["result"]
        if isinstance(data, list):
            return data
        raise UpstreamError(
            f"Unexpected Moralis {operation} response",
            service_name=self.service_name
        )
    
    async def get_evm_token_balances(self, address: str, chain: str) -> List[Dict[str, Any]]:
        """ERC-20 balances of a wallet on an EVM chain."""
        data = await self._request_json(
            "GET", f"{self.evm_api_url}/{address}/erc20", params={"chain": chain}
        )
        return self._expect_list(data, "erc20")
    
    async def get_evm_nfts(self, address: str, chain: str) -> List[Dict[str, Any]]:
        """NFTs owned by a wallet on an EVM chain."""
        data = await self._request_json(
            "GET",
            f"{self.evm_api_url}/{address}/nft",
            params={"chain": chain, "format": "decimal"}
        )
        return self._expect_list(data, "nft")
    
    async def get_solana_tokens(self, address: str, network: str = "mainnet") -> List[Dict[str, Any]]:
        """SPL token balances of a Solana wallet."""
        data = await self._request_json(
            "GET", f"{self.solana_api_url}/account/{network}/{address}/tokens"
        )
        return self._expect_list(data, "tokens")
    
    async def get_solana_nfts(self, address: str, network: str = "mainnet") -> List[Dict[str, Any]]:
        """NFTs owned by a Solana wallet."""
        data = await self._request_json(
            "GET", f"{self.solana_api_url}/account/{network}/{address}/nft"
        )
        return self._expect_list(data, "nft")
