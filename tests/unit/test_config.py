"""Unit tests for configuration loading."""

import pytest

from wallet_monitor.config import ChainFamily, get_env_var, load_settings, positive_int_validator
from wallet_monitor.utils.errors import ConfigurationError

CONFIG_VARS = (
    "NETWORK", "SOLANA_RPC_URL", "STORAGE_BACKEND", "BALANCE_CACHE_TTL",
    "BALANCE_CHANGE_THRESHOLD", "ALERT_ON_FIRST_OBSERVATION", "ETHERSCAN_API_KEY",
    "MORALIS_API_KEY", "WATCHLIST_CONCURRENCY", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration variables that may leak in from the host."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Test suite for load_settings."""

    def test_defaults(self):
        settings = load_settings()

        assert settings.network.name == "ethereum"
        assert settings.network.family == ChainFamily.EVM
        assert settings.cache_ttl.balance == 30
        assert settings.cache_ttl.transactions == 60
        assert settings.cache_ttl.tokens == 120
        assert settings.cache_ttl.nfts == 300
        assert settings.alerts.history_size == 50
        assert settings.alerts.change_threshold == "0"
        assert settings.alerts.alert_on_first_observation is True
        assert settings.storage.backend == "redis"

    def test_network_selection_and_rpc_override(self, monkeypatch):
        monkeypatch.setenv("NETWORK", "Solana")
        monkeypatch.setenv("SOLANA_RPC_URL", "https://my-node.example.com")
        monkeypatch.setenv("STORAGE_BACKEND", "memory")

        settings = load_settings()

        assert settings.network.name == "solana"
        assert settings.network.decimals == 9
        assert settings.chain.rpc_url == "https://my-node.example.com"
        assert settings.storage.backend == "memory"

    def test_explorer_key_follows_network(self, monkeypatch):
        monkeypatch.setenv("ETHERSCAN_API_KEY", "abc")
        assert load_settings().chain.explorer_api_key == "abc"

    def test_alert_settings(self, monkeypatch):
        monkeypatch.setenv("BALANCE_CHANGE_THRESHOLD", "0.01")
        monkeypatch.setenv("ALERT_ON_FIRST_OBSERVATION", "false")

        alerts = load_settings().alerts
        assert alerts.change_threshold == "0.01"
        assert alerts.alert_on_first_observation is False

    @pytest.mark.parametrize("name, value", [
        ("NETWORK", "dogecoin"),
        ("BALANCE_CACHE_TTL", "0"),
        ("BALANCE_CHANGE_THRESHOLD", "-1"),
        ("STORAGE_BACKEND", "postgres"),
        ("SOLANA_RPC_URL", "not a url"),
        ("WATCHLIST_CONCURRENCY", "many"),
        ("LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        if name == "SOLANA_RPC_URL":
            monkeypatch.setenv("NETWORK", "solana")
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError):
            load_settings()


class TestGetEnvVar:
    """Test suite for get_env_var."""

    def test_required_missing(self, monkeypatch):
        monkeypatch.delenv("WALLET_MONITOR_TEST_VAR", raising=False)
        with pytest.raises(ConfigurationError):
            get_env_var("WALLET_MONITOR_TEST_VAR", required=True)

    def test_validator_applied(self, monkeypatch):
        monkeypatch.setenv("WALLET_MONITOR_TEST_VAR", "7")
        assert get_env_var("WALLET_MONITOR_TEST_VAR", validator=positive_int_validator) == 7
