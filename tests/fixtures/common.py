"""Common test fixtures for wallet monitor tests.

This module provides fixtures that can be reused across different test modules.
"""

from typing import Dict, List

import pytest

from wallet_monitor.config import (
    NETWORK_CONFIGS,
    AlertConfig,
    ChainFamily,
    ChainSettings,
    Settings,
    StorageConfig,
)
from wallet_monitor.container import ServiceContainer, create_services
from wallet_monitor.models import NftItem, TokenBalance, TransactionRecord, TransactionStatus
from wallet_monitor.providers.base import ChainProvider
from wallet_monitor.services.alert_service import AlertHistory, BalanceChangeDetector
from wallet_monitor.services.cache_service import CacheService
from wallet_monitor.services.events import BalanceChangeNotifier
from wallet_monitor.services.wallet_service import WalletService
from wallet_monitor.services.watchlist_service import WatchlistService
from wallet_monitor.storage.memory import MemoryStore
from wallet_monitor.utils.validation import is_valid_evm_address

ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "b" * 40
ADDRESS_C = "0x" + "c" * 40

ONE_ETH = 10 ** 18


class FakeClock:
    """Manually advanced clock returning seconds."""
    
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider(ChainProvider):
    """In-memory EVM provider with scripted balances and failures."""
    
    family = ChainFamily.EVM
    
    def __init__(self):
        super().__init__(NETWORK_CONFIGS["ethereum"])
        self.balances: Dict[str, int] = {}
        self.failures: Dict[str, Exception] = {}
        self.transactions: List[TransactionRecord] = []
        self.balance_calls = 0
        self.closed = False
    
    def is_valid_address(self, address: str) -> bool:
        return is_valid_evm_address(address)
    
    async def get_native_balance(self, address: str) -> int:
        self.validate_address(address)
        self.balance_calls += 1
        if address in self.failures:
            raise self.failures[address]
        return self.balances.get(address, 0)
    
    async def list_transactions(self, address: str, limit: int) -> List[TransactionRecord]:
        self.validate_address(address)
        return self.transactions[:limit]
    
    async def list_token_balances(self, address: str) -> List[TokenBalance]:
        self.validate_address(address)
        return [
            TokenBalance(
                contract_address="0x" + "d" * 40,
                name="USD Coin",
                symbol="USDC",
                balance="12.500000",
                decimals=6,
                network=self.name
            )
        ]
    
    async def list_nfts(self, address: str) -> List[NftItem]:
        self.validate_address(address)
        self.unavailable("nfts", "MORALIS_API_KEY is not set")
    
    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    """Create a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    """Create an in-memory store driven by the fake clock."""
    return MemoryStore(clock=clock)


@pytest.fixture
def fake_provider():
    """Create a scripted provider."""
    provider = FakeProvider()
    provider.transactions = [
        TransactionRecord(
            hash=f"0x{i:064x}",
            from_address=ADDRESS_A,
            to_address=ADDRESS_B,
            value="0.100000",
            timestamp=1_700_000_000 - i,
            status=TransactionStatus.SUCCESS
        )
        for i in range(5)
    ]
    return provider


@pytest.fixture
def notifier():
    """Create a balance change notifier without subscribers."""
    return BalanceChangeNotifier()


@pytest.fixture
def alert_history(memory_store):
    """Create an alert history on the memory store."""
    return AlertHistory(memory_store)


@pytest.fixture
def detector(memory_store, alert_history, notifier, clock):
    """Create a balance change detector."""
    return BalanceChangeDetector(memory_store, alert_history, notifier, clock=clock)


@pytest.fixture
def wallet_service(memory_store, fake_provider, detector, alert_history, clock):
    """Create a wallet service wired to the fake provider."""
    return WalletService(
        provider=fake_provider,
        cache=CacheService(memory_store),
        watchlist=WatchlistService(memory_store, clock=clock),
        detector=detector,
        history=alert_history
    )


@pytest.fixture
def settings():
    """Create settings for an in-memory ethereum deployment."""
    return Settings(
        chain=ChainSettings(network=NETWORK_CONFIGS["ethereum"], rpc_url="https://rpc.test"),
        alerts=AlertConfig(),
        storage=StorageConfig(backend="memory")
    )


@pytest.fixture
def services(settings, memory_store, fake_provider) -> ServiceContainer:
    """Create a service container around the fake provider."""
    return create_services(settings, store=memory_store, provider=fake_provider)
