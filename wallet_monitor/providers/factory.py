"""Resolution of the single active provider from the settings."""

from typing import Callable, Dict, Optional

import httpx

from wallet_monitor.clients import (
    EvmRpcClient,
    ExplorerClient,
    MoralisClient,
    SolanaRpcClient,
    TonCenterClient,
)
from wallet_monitor.config import ChainFamily, ChainSettings
from wallet_monitor.logging_config import get_logger
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.providers.evm import EvmProvider
from wallet_monitor.providers.solana import SolanaProvider
from wallet_monitor.providers.ton import TonProvider

logger = get_logger(__name__)


def _moralis(chain: ChainSettings, http_client: Optional[httpx.AsyncClient]) -> Optional[MoralisClient]:
    if not chain.moralis_api_key:
        logger.warning(
            "MORALIS_API_KEY is not set: token and NFT endpoints will be unavailable"
        )
        return None
    return MoralisClient(
        chain.moralis_api_key,
        evm_api_url=chain.moralis_evm_api_url,
        solana_api_url=chain.moralis_solana_api_url,
        timeout=chain.request_timeout,
        http_client=http_client
    )


def _build_evm(chain: ChainSettings, http_client: Optional[httpx.AsyncClient]) -> ChainProvider:
    network = chain.network
    explorer = None
    if chain.explorer_api_key:
        explorer = ExplorerClient(
            network.explorer_api_url,
            chain.explorer_api_key,
            timeout=chain.request_timeout,
            http_client=http_client
        )
    else:
        logger.warning(
            f"{network.explorer_api_key_env} is not set: transaction history will be unavailable"
        )
    return EvmProvider(
        network,
        rpc=EvmRpcClient(chain.rpc_url, timeout=chain.request_timeout, http_client=http_client),
        explorer=explorer,
        moralis=_moralis(chain, http_client)
    )


def _build_solana(chain: ChainSettings, http_client: Optional[httpx.AsyncClient]) -> ChainProvider:
    return SolanaProvider(
        chain.network,
        rpc=SolanaRpcClient(chain.rpc_url, timeout=chain.request_timeout, http_client=http_client),
        moralis=_moralis(chain, http_client)
    )


def _build_ton(chain: ChainSettings, http_client: Optional[httpx.AsyncClient]) -> ChainProvider:
    return TonProvider(
        chain.network,
        client=TonCenterClient(
            chain.rpc_url,
            api_key=chain.ton_api_key,
            timeout=chain.request_timeout,
            http_client=http_client
        )
    )


PROVIDER_BUILDERS: Dict[ChainFamily, Callable[[ChainSettings, Optional[httpx.AsyncClient]], ChainProvider]] = {
    ChainFamily.EVM: _build_evm,
    ChainFamily.SOLANA: _build_solana,
    ChainFamily.TON: _build_ton,
}


def build_provider(chain: ChainSettings, http_client: Optional[httpx.AsyncClient] = None) -> ChainProvider:
    """Build the provider for the configured network.
    
    Args:
        chain: Active network settings
        http_client: Optional shared HTTP client for every underlying client
        
    Returns:
        The active chain provider
    """
    provider = PROVIDER_BUILDERS[chain.network.family](chain, http_client)
    logger.info(f"Chain provider initialized: {chain.network.name} ({chain.rpc_url})")
    return provider
