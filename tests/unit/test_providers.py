"""Unit tests for the chain providers and their HTTP clients.

Upstream services are replaced with ``httpx.MockTransport`` handlers.
"""

import json

import httpx
import pytest

from wallet_monitor.clients import (
    EvmRpcClient,
    ExplorerClient,
    MoralisClient,
    SolanaRpcClient,
    TonCenterClient,
)
from wallet_monitor.config import NETWORK_CONFIGS, ChainSettings
from wallet_monitor.models import TransactionStatus
from wallet_monitor.providers import EvmProvider, SolanaProvider, TonProvider, build_provider
from wallet_monitor.utils.errors import (
    ErrorCode,
    InvalidAddressError,
    ProviderUnavailableError,
    UpstreamError,
    UpstreamTimeoutError,
)

EVM_ADDRESS = "0x" + "a" * 40
SOLANA_ADDRESS = "So11111111111111111111111111111111111111112"
TON_ADDRESS = "0:83dfd552e63729b472fcbcc8c45ebcc6691702558b68ec7527e1ba403a0f31a8"


def mock_http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def rpc_result(result) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def unreachable(request):
    raise AssertionError(f"unexpected request to {request.url}")


class TestEvmProvider:
    """Test suite for EvmProvider."""

    def make_provider(self, handler, explorer=True, moralis=True):
        http = mock_http(handler)
        network = NETWORK_CONFIGS["ethereum"]
        return EvmProvider(
            network,
            rpc=EvmRpcClient("https://rpc.test", http_client=http),
            explorer=ExplorerClient("https://explorer.test/api", "key", http_client=http) if explorer else None,
            moralis=MoralisClient("moralis-key", evm_api_url="https://moralis.test", http_client=http) if moralis else None
        )

    @pytest.mark.asyncio
    async def test_native_balance(self):
        requests = []

        def handler(request):
            requests.append(json.loads(request.content))
            return rpc_result(hex(10 ** 18))

        provider = self.make_provider(handler)
        assert await provider.get_native_balance(EVM_ADDRESS) == 10 ** 18
        assert requests[0]["method"] == "eth_getBalance"
        assert requests[0]["params"] == [EVM_ADDRESS, "latest"]

    @pytest.mark.asyncio
    async def test_invalid_address_makes_no_request(self):
        provider = self.make_provider(unreachable)
        with pytest.raises(InvalidAddressError):
            await provider.get_native_balance("0x1234")

    @pytest.mark.asyncio
    async def test_rpc_error_object(self):
        def handler(request):
            return httpx.Response(200, json={
                "jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "header not found"}
            })

        provider = self.make_provider(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await provider.get_native_balance(EVM_ADDRESS)
        assert "header not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        provider = self.make_provider(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(UpstreamError) as exc_info:
            await provider.get_native_balance(EVM_ADDRESS)
        assert exc_info.value.details["status_code"] == 503
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = self.make_provider(handler)
        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await provider.get_native_balance(EVM_ADDRESS)
        assert exc_info.value.code == ErrorCode.UPSTREAM_TIMEOUT

    @pytest.mark.asyncio
    async def test_transactions(self):
        params = {}

        def handler(request):
            params.update(request.url.params)
            return httpx.Response(200, json={
                "status": "1",
                "message": "OK",
                "result": [
                    {
                        "hash": "0x01", "from": EVM_ADDRESS, "to": "0x" + "b" * 40,
                        "value": "250000000000000000", "timeStamp": "1700000000",
                        "isError": "0", "txreceipt_status": "1",
                    },
                    {
                        "hash": "0x02", "from": EVM_ADDRESS, "to": "",
                        "contractAddress": "0x" + "c" * 40, "value": "0",
                        "timeStamp": "1690000000", "isError": "1", "txreceipt_status": "0",
                    },
                ],
            })

        provider = self.make_provider(handler)
        transactions = await provider.list_transactions(EVM_ADDRESS, 2)

        assert params["action"] == "txlist"
        assert params["sort"] == "desc"
        assert params["offset"] == "2"
        assert transactions[0].value == "0.250000"
        assert transactions[0].timestamp == 1700000000
        assert transactions[0].status == TransactionStatus.SUCCESS
        assert transactions[1].to_address == "0x" + "c" * 40
        assert transactions[1].status == TransactionStatus.FAILED

    @pytest.mark.asyncio
    async def test_no_transactions(self):
        def handler(request):
            return httpx.Response(200, json={"status": "0", "message": "No transactions found", "result": []})

        provider = self.make_provider(handler)
        assert await provider.list_transactions(EVM_ADDRESS, 10) == []

    @pytest.mark.asyncio
    async def test_explorer_error(self):
        def handler(request):
            return httpx.Response(200, json={"status": "0", "message": "NOTOK", "result": "Invalid API Key"})

        provider = self.make_provider(handler)
        with pytest.raises(UpstreamError):
            await provider.list_transactions(EVM_ADDRESS, 10)

    @pytest.mark.asyncio
    async def test_explorer_body_that_is_not_an_object(self):
        provider = self.make_provider(lambda request: httpx.Response(200, json=["x"]))
        with pytest.raises(UpstreamError) as exc_info:
            await provider.list_transactions(EVM_ADDRESS, 10)
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_missing_explorer_key(self):
        provider = self.make_provider(unreachable, explorer=False)
        with pytest.raises(ProviderUnavailableError) as exc_info:
            await provider.list_transactions(EVM_ADDRESS, 10)
        assert "ETHERSCAN_API_KEY" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_token_balances(self):
        def handler(request):
            assert request.url.path == f"/{EVM_ADDRESS}/erc20"
            assert request.url.params["chain"] == "0x1"
            assert request.headers["X-API-Key"] == "moralis-key"
            return httpx.Response(200, json=[
                {"token_address": "0x" + "D" * 40, "name": "USD Coin", "symbol": "USDC",
                 "decimals": 6, "balance": "12500000"},
                {"token_address": "0x" + "e" * 40, "name": "Mystery", "symbol": "MYS",
                 "decimals": None, "balance": "1000000000000000000"},
            ])

        tokens = await self.make_provider(handler).list_token_balances(EVM_ADDRESS)

        assert tokens[0].contract_address == "0x" + "d" * 40
        assert tokens[0].balance == "12.500000"
        assert tokens[1].decimals == 18
        assert tokens[1].balance == "1.000000"

    @pytest.mark.asyncio
    async def test_nfts(self):
        def handler(request):
            assert request.url.params["format"] == "decimal"
            return httpx.Response(200, json={"cursor": None, "result": [
                {"token_address": "0x" + "f" * 40, "token_id": "42", "name": "Punks", "symbol": "PNK"},
            ]})

        nfts = await self.make_provider(handler).list_nfts(EVM_ADDRESS)

        assert nfts[0].contract_address == "0x" + "f" * 40
        assert nfts[0].token_id == "42"
        assert nfts[0].mint is None

    @pytest.mark.asyncio
    async def test_missing_moralis_key(self):
        provider = self.make_provider(unreachable, moralis=False)
        with pytest.raises(ProviderUnavailableError):
            await provider.list_token_balances(EVM_ADDRESS)
        with pytest.raises(ProviderUnavailableError):
            await provider.list_nfts(EVM_ADDRESS)


class TestSolanaProvider:
    """Test suite for SolanaProvider."""

    def make_provider(self, handler, moralis=True):
        http = mock_http(handler)
        return SolanaProvider(
            NETWORK_CONFIGS["solana"],
            rpc=SolanaRpcClient("https://solana.test", http_client=http),
            moralis=MoralisClient("moralis-key", solana_api_url="https://gateway.test", http_client=http) if moralis else None
        )

    @pytest.mark.asyncio
    async def test_native_balance(self):
        def handler(request):
            body = json.loads(request.content)
            assert body["method"] == "getBalance"
            return rpc_result({"context": {"slot": 1}, "value": 1_500_000_000})

        assert await self.make_provider(handler).get_native_balance(SOLANA_ADDRESS) == 1_500_000_000

    @pytest.mark.asyncio
    async def test_rejects_evm_address(self):
        with pytest.raises(InvalidAddressError):
            await self.make_provider(unreachable).get_native_balance(EVM_ADDRESS)

    @pytest.mark.asyncio
    async def test_transactions(self):
        def handler(request):
            body = json.loads(request.content)
            assert body["method"] == "getSignaturesForAddress"
            assert body["params"][1]["limit"] == 3
            return rpc_result([
                {"signature": "sig1", "blockTime": 1700000000, "err": None, "confirmationStatus": "finalized"},
                {"signature": "sig2", "blockTime": 1699999999, "err": {"InstructionError": [0, "Custom"]},
                 "confirmationStatus": "finalized"},
                {"signature": "sig3", "blockTime": None, "err": None, "confirmationStatus": "processed"},
            ])

        transactions = await self.make_provider(handler).list_transactions(SOLANA_ADDRESS, 3)

        assert [tx.hash for tx in transactions] == ["sig1", "sig2", "sig3"]
        assert [tx.status for tx in transactions] == [
            TransactionStatus.SUCCESS, TransactionStatus.FAILED, TransactionStatus.PENDING
        ]
        assert transactions[0].value is None

    @pytest.mark.asyncio
    async def test_tokens_and_nfts(self):
        def handler(request):
            if request.url.path.endswith("/tokens"):
                assert request.url.path == f"/account/mainnet/{SOLANA_ADDRESS}/tokens"
                return httpx.Response(200, json=[
                    {"mint": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", "name": "USD Coin",
                     "symbol": "USDC", "decimals": 6, "amountRaw": "2500000", "amount": "2.5"},
                ])
            return httpx.Response(200, json=[
                {"mint": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", "name": "Mad Lad", "symbol": "MAD"},
            ])

        provider = self.make_provider(handler)
        tokens = await provider.list_token_balances(SOLANA_ADDRESS)
        nfts = await provider.list_nfts(SOLANA_ADDRESS)

        assert tokens[0].balance == "2.500000"
        assert tokens[0].contract_address == "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
        assert nfts[0].mint == "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
        assert nfts[0].network == "solana"


class TestTonProvider:
    """Test suite for TonProvider."""

    def make_provider(self, handler):
        return TonProvider(
            NETWORK_CONFIGS["ton"],
            client=TonCenterClient("https://toncenter.test/api/v2/jsonRPC", api_key="ton-key",
                                   http_client=mock_http(handler))
        )

    @pytest.mark.asyncio
    async def test_native_balance(self):
        def handler(request):
            assert request.headers["X-API-Key"] == "ton-key"
            body = json.loads(request.content)
            assert body["method"] == "getAddressBalance"
            assert body["params"] == {"address": TON_ADDRESS}
            return rpc_result("2500000000")

        assert await self.make_provider(handler).get_native_balance(TON_ADDRESS) == 2_500_000_000

    @pytest.mark.asyncio
    async def test_transactions(self):
        def handler(request):
            return rpc_result([
                {
                    "utime": 1700000000,
                    "transaction_id": {"lt": "1", "hash": "hash-in"},
                    "in_msg": {"source": "EQsender", "destination": TON_ADDRESS, "value": "1000000000"},
                    "out_msgs": [],
                },
                {
                    "utime": 1690000000,
                    "transaction_id": {"lt": "0", "hash": "hash-out"},
                    "in_msg": {"source": "", "destination": TON_ADDRESS, "value": "0"},
                    "out_msgs": [{"source": TON_ADDRESS, "destination": "EQreceiver", "value": "500000000"}],
                },
            ])

        transactions = await self.make_provider(handler).list_transactions(TON_ADDRESS, 10)

        assert transactions[0].hash == "hash-in"
        assert transactions[0].from_address == "EQsender"
        assert transactions[0].value == "1.000000"
        assert transactions[1].to_address == "EQreceiver"
        assert transactions[1].value == "0.500000"

    @pytest.mark.asyncio
    async def test_tokens_and_nfts_are_unavailable(self):
        provider = self.make_provider(unreachable)
        with pytest.raises(ProviderUnavailableError):
            await provider.list_token_balances(TON_ADDRESS)
        with pytest.raises(ProviderUnavailableError):
            await provider.list_nfts(TON_ADDRESS)


class TestBuildProvider:
    """Test suite for provider resolution."""

    @pytest.mark.parametrize("network, expected", [
        ("ethereum", EvmProvider),
        ("bnb", EvmProvider),
        ("polygon", EvmProvider),
        ("solana", SolanaProvider),
        ("ton", TonProvider),
    ])
    def test_family_dispatch(self, network, expected):
        config = NETWORK_CONFIGS[network]
        provider = build_provider(ChainSettings(network=config, rpc_url=config.rpc_url))

        assert isinstance(provider, expected)
        assert provider.name == network
        assert provider.symbol == config.symbol

    def test_optional_sources_follow_api_keys(self):
        config = NETWORK_CONFIGS["ethereum"]

        bare = build_provider(ChainSettings(network=config, rpc_url=config.rpc_url))
        assert bare.explorer is None
        assert bare.moralis is None

        keyed = build_provider(ChainSettings(
            network=config, rpc_url=config.rpc_url, explorer_api_key="e", moralis_api_key="m"
        ))
        assert keyed.explorer is not None
        assert keyed.moralis is not None
