"""HTTP clients for the chain RPC nodes, explorers and indexers."""

from wallet_monitor.clients.base_client import BaseHttpClient
from wallet_monitor.clients.evm_client import EvmRpcClient, ExplorerClient
from wallet_monitor.clients.moralis_client import MoralisClient
from wallet_monitor.clients.solana_client import SolanaRpcClient
from wallet_monitor.clients.ton_client import TonCenterClient

__all__ = [
    "BaseHttpClient",
    "EvmRpcClient",
    "ExplorerClient",
    "MoralisClient",
    "SolanaRpcClient",
    "TonCenterClient",
]
