"""Wallet Monitor Package.

This package tracks native balances, transaction history, token holdings and
NFTs of wallets on EVM chains, Solana and TON, and raises alerts when a
watched wallet's balance changes.
"""

__version__ = "0.1.0"
__author__ = "Wallet Monitor Contributors"
__email__ = "maintainers@wallet-monitor.dev"
