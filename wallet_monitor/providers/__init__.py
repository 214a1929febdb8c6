"""Chain providers: one implementation per chain family."""

from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.providers.evm import EvmProvider
from wallet_monitor.providers.factory import build_provider
from wallet_monitor.providers.solana import SolanaProvider
from wallet_monitor.providers.ton import TonProvider

__all__ = [
    "ChainProvider",
    "EvmProvider",
    "SolanaProvider",
    "TonProvider",
    "build_provider",
]
