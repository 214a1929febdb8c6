"""Configuration module for the wallet monitor.

Settings are read from the environment (and an optional ``.env`` file) once
at startup and handed to every component as immutable dataclasses.
"""

# Standard library imports
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from wallet_monitor.utils.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class ChainFamily(str, Enum):
    """Architectural family of a supported network."""
    
    EVM = "evm"
    SOLANA = "solana"
    TON = "ton"


@dataclass(frozen=True)
class NetworkConfig:
    """Static description of one supported network."""
    
    name: str
    family: ChainFamily
    symbol: str
    decimals: int
    rpc_url: str
    explorer_api_url: Optional[str] = None
    explorer_api_key_env: Optional[str] = None
    # Chain identifier understood by the Moralis indexer ("0x1", "mainnet"...)
    indexer_chain: Optional[str] = None
    api_key_env: Optional[str] = None


NETWORK_CONFIGS: Dict[str, NetworkConfig] = {
    "ethereum": NetworkConfig(
        name="ethereum",
        family=ChainFamily.EVM,
        symbol="ETH",
        decimals=18,
        rpc_url="https://eth.llamarpc.com",
        explorer_api_url="https://api.etherscan.io/api",
        explorer_api_key_env="ETHERSCAN_API_KEY",
        indexer_chain="0x1",
    ),
    "bnb": NetworkConfig(
        name="bnb",
        family=ChainFamily.EVM,
        symbol="BNB",
        decimals=18,
        rpc_url="https://bsc-dataseed.binance.org",
        explorer_api_url="https://api.bscscan.com/api",
        explorer_api_key_env="BSCSCAN_API_KEY",
        indexer_chain="0x38",
    ),
    "polygon": NetworkConfig(
        name="polygon",
        family=ChainFamily.EVM,
        symbol="MATIC",
        decimals=18,
        rpc_url="https://polygon-rpc.com",
        explorer_api_url="https://api.polygonscan.com/api",
        explorer_api_key_env="POLYGONSCAN_API_KEY",
        indexer_chain="0x89",
    ),
    "solana": NetworkConfig(
        name="solana",
        family=ChainFamily.SOLANA,
        symbol="SOL",
        decimals=9,
        rpc_url="https://api.mainnet-beta.solana.com",
        indexer_chain="mainnet",
    ),
    "ton": NetworkConfig(
        name="ton",
        family=ChainFamily.TON,
        symbol="TON",
        decimals=9,
        rpc_url="https://toncenter.com/api/v2/jsonRPC",
        api_key_env="TON_API_KEY",
    ),
}


def get_env_var(key: str, default: Any = None, required: bool = False, 
               validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.
    
    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ConfigurationError when not found
        validator: Optional validation function
        
    Returns:
        The environment variable value or default
        
    Raises:
        ConfigurationError: If required and not found, or fails validation
    """
    value = os.environ.get(key)
    
    if value is None or value == "":
        if required:
            raise ConfigurationError(
                f"Required environment variable '{key}' not found",
                details={"setting": key}
            )
        return default
    
    if validator:
        try:
            return validator(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for environment variable '{key}': {str(e)}",
                details={"setting": key, "value": value}
            )
    
    return value


def bool_validator(value: str) -> bool:
    """Convert string to boolean."""
    return value.lower() in ("true", "1", "yes", "y", "on")


def int_validator(value: str) -> int:
    """Validate and convert string to integer.
    
    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def positive_int_validator(value: str) -> int:
    """Validate a strictly positive integer."""
    number = int_validator(value)
    if number <= 0:
        raise ValueError(f"'{value}' must be greater than zero")
    return number


def float_validator(value: str) -> float:
    """Validate and convert string to float."""
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid number")


def decimal_validator(value: str) -> str:
    """Validate a non-negative decimal amount, keeping its string form.
    
    Raises:
        ValueError: If not a valid decimal number
    """
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"'{value}' is not a valid decimal number")
    if not parsed.is_finite() or parsed < 0:
        raise ValueError(f"'{value}' must be a non-negative decimal number")
    return value


def url_validator(value: str) -> str:
    """Validate URL format.
    
    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)
    
    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value


def network_validator(value: str) -> str:
    """Validate the selected network name."""
    network = value.strip().lower()
    if network not in NETWORK_CONFIGS:
        raise ValueError(f"Network must be one of: {', '.join(NETWORK_CONFIGS)}")
    return network


def storage_validator(value: str) -> str:
    """Validate the storage backend name."""
    backend = value.strip().lower()
    if backend not in ("redis", "memory"):
        raise ValueError("Storage backend must be one of: redis, memory")
    return backend


def log_level_validator(value: str) -> str:
    """Validate log level."""
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def environment_validator(value: str) -> str:
    """Validate environment name."""
    valid_environments = ("development", "testing", "staging", "production")
    if value.lower() not in valid_environments:
        raise ValueError(f"Environment must be one of: {', '.join(valid_environments)}")
    return value.lower()


@dataclass(frozen=True)
class ChainSettings:
    """Active network and the credentials of its data sources."""
    
    network: NetworkConfig
    rpc_url: str
    explorer_api_key: Optional[str] = None
    moralis_api_key: Optional[str] = None
    moralis_evm_api_url: str = "https://deep-index.moralis.io/api/v2.2"
    moralis_solana_api_url: str = "https://solana-gateway.moralis.io"
    ton_api_key: Optional[str] = None
    request_timeout: float = 15.0  # seconds


@dataclass(frozen=True)
class CacheTTLConfig:
    """Per-resource cache lifetimes in seconds."""
    
    balance: int = 30
    transactions: int = 60
    tokens: int = 120
    nfts: int = 300


@dataclass(frozen=True)
class AlertConfig:
    """Configuration of the watchlist change detector."""
    
    history_size: int = 50
    change_threshold: str = "0"
    alert_on_first_observation: bool = True
    poll_interval: float = 0.0  # seconds, 0 disables the background poller
    concurrency: int = 5


@dataclass(frozen=True)
class StorageConfig:
    """Configuration of the persistent key-value store."""
    
    backend: str = "redis"
    redis_url: str = "redis://localhost:6379/0"


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the HTTP server."""
    
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"


@dataclass(frozen=True)
class Settings:
    """Complete, immutable application configuration."""
    
    chain: ChainSettings
    cache_ttl: CacheTTLConfig = field(default_factory=CacheTTLConfig)
    alerts: AlertConfig = field(default_factory=AlertConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    
    @property
    def network(self) -> NetworkConfig:
        """Configuration of the active network."""
        return self.chain.network


def load_chain_settings() -> ChainSettings:
    """Build the active network settings from environment variables.
    
    Raises:
        ConfigurationError: If environment variables fail validation
    """
    name = get_env_var("NETWORK", "ethereum", validator=network_validator)
    network = NETWORK_CONFIGS[name]
    
    explorer_api_key = None
    if network.explorer_api_key_env:
        explorer_api_key = get_env_var(network.explorer_api_key_env)
    
    network_api_key = None
    if network.api_key_env:
        network_api_key = get_env_var(network.api_key_env)
    
    return ChainSettings(
        network=network,
        rpc_url=get_env_var(f"{name.upper()}_RPC_URL", network.rpc_url, validator=url_validator),
        explorer_api_key=explorer_api_key,
        moralis_api_key=get_env_var("MORALIS_API_KEY"),
        moralis_evm_api_url=get_env_var(
            "MORALIS_EVM_API_URL", "https://deep-index.moralis.io/api/v2.2", validator=url_validator
        ),
        moralis_solana_api_url=get_env_var(
            "MORALIS_SOLANA_API_URL", "https://solana-gateway.moralis.io", validator=url_validator
        ),
        ton_api_key=network_api_key,
        request_timeout=get_env_var("REQUEST_TIMEOUT", 15.0, validator=float_validator),
    )


def load_settings() -> Settings:
    """Build the complete settings object from environment variables.
    
    Returns:
        Settings instance
        
    Raises:
        ConfigurationError: If any value fails validation
    """
    return Settings(
        chain=load_chain_settings(),
        cache_ttl=CacheTTLConfig(
            balance=get_env_var("BALANCE_CACHE_TTL", 30, validator=positive_int_validator),
            transactions=get_env_var("TRANSACTIONS_CACHE_TTL", 60, validator=positive_int_validator),
            tokens=get_env_var("TOKENS_CACHE_TTL", 120, validator=positive_int_validator),
            nfts=get_env_var("NFTS_CACHE_TTL", 300, validator=positive_int_validator),
        ),
        alerts=AlertConfig(
            history_size=get_env_var("ALERT_HISTORY_SIZE", 50, validator=positive_int_validator),
            change_threshold=get_env_var("BALANCE_CHANGE_THRESHOLD", "0", validator=decimal_validator),
            alert_on_first_observation=get_env_var(
                "ALERT_ON_FIRST_OBSERVATION", True, validator=bool_validator
            ),
            poll_interval=get_env_var("WATCHLIST_POLL_INTERVAL", 0.0, validator=float_validator),
            concurrency=get_env_var("WATCHLIST_CONCURRENCY", 5, validator=positive_int_validator),
        ),
        storage=StorageConfig(
            backend=get_env_var("STORAGE_BACKEND", "redis", validator=storage_validator),
            redis_url=get_env_var("REDIS_URL", "redis://localhost:6379/0"),
        ),
        server=ServerConfig(
            host=get_env_var("HOST", "0.0.0.0"),
            port=get_env_var("PORT", 8000, validator=int_validator),
            debug=get_env_var("DEBUG", False, validator=bool_validator),
            environment=get_env_var("ENVIRONMENT", "development", validator=environment_validator),
            log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings, loaded once on first use."""
    return load_settings()
