"""
Chain provider contract.

A provider hides one chain family's clients, address syntax and raw units
behind the same four capabilities, so the cache layer and the orchestrator
never branch on the active network.
"""

from abc import ABC, abstractmethod
from typing import List, NoReturn

from wallet_monitor.config import ChainFamily, NetworkConfig
from wallet_monitor.logging_config import get_logger
from wallet_monitor.models import NftItem, TokenBalance, TransactionRecord
from wallet_monitor.utils.errors import InvalidAddressError, ProviderUnavailableError


class ChainProvider(ABC):
    """Uniform balance/transaction/token/NFT access for one network."""
    
    family: ChainFamily
    
    def __init__(self, network: NetworkConfig):
        """
        Initialize the provider.
        
        Args:
            network: Configuration of the network this provider serves
        """
        self.network = network
        self.logger = get_logger(self.__class__.__name__)
    
    @property
    def name(self) -> str:
        """Network name (``ethereum``, ``solana``...)."""
        return self.network.name
    
    @property
    def symbol(self) -> str:
        """Native token symbol."""
        return self.network.symbol
    
    @property
    def decimals(self) -> int:
        """Decimal exponent of the native raw unit."""
        return self.network.decimals
    
    @abstractmethod
    def is_valid_address(self, address: str) -> bool:
        """Return True if the address is syntactically valid for this family."""
    
    def validate_address(self, address: str) -> str:
        """Validate an address, returning it unchanged.
        
        Raises:
            InvalidAddressError: If the address is not valid for this family
        """
        if not self.is_valid_address(address):
            raise InvalidAddressError(address, network=self.name)
        return address
    
    def unavailable(self, capability: str, reason: str) -> NoReturn:
        """Raise :class:`ProviderUnavailableError` for a capability."""
        raise ProviderUnavailableError(
            f"{capability} is unavailable on {self.name}: {reason}",
            network=self.name,
            capability=capability
        )
    
    @abstractmethod
    async def get_native_balance(self, address: str) -> int:
        """Native balance in raw units (wei, lamports, nanoTON)."""
    
    @abstractmethod
    async def list_transactions(self, address: str, limit: int) -> List[TransactionRecord]:
        """Latest transactions involving the address, most recent first."""
    
    @abstractmethod
    async def list_token_balances(self, address: str) -> List[TokenBalance]:
        """Fungible token balances held by the address."""
    
    @abstractmethod
    async def list_nfts(self, address: str) -> List[NftItem]:
        """NFTs owned by the address."""
    
    async def close(self) -> None:
        """Release the clients used by the provider."""
