import pytest
from decimal import Decimal

from uni_leaderboard.config import Settings, get_network_config
from uni_leaderboard.utils import (
    normalize_address, is_valid_address, to_checksum_address,
    parse_decimal, format_amount, format_usd, format_signed_amount
)


class TestAddressHelpers:
    """Address validation and normalization"""

    @pytest.mark.parametrize("address", [
        "0x1f9840a85d5af5bf1d1762f925bdaddc4201f984",
        "0x1F9840A85D5AF5BF1D1762F925BDADDC4201F984",
        "0xA0b86991c6218b36c1d19d4a2e9eb0ce3606eB48",
    ])
    def test_valid_addresses(self, address):
        assert is_valid_address(address)

    @pytest.mark.parametrize("address", [
        "",
        "0x",
        "1f9840a85d5af5bf1d1762f925bdaddc4201f984",
        "0x1f9840a85d5af5bf1d1762f925bdaddc4201f98",
        "0x1f9840a85d5af5bf1d1762f925bdaddc4201f9844",
        "0xg f9840a85d5af5bf1d1762f925bdaddc4201f98",
        "0X1f9840a85d5af5bf1d1762f925bdaddc4201f984",
    ])
    def test_invalid_addresses(self, address):
        assert not is_valid_address(address)

    def test_normalize_address(self):
        assert normalize_address(" 0xA0B86991C6218B36C1D19D4A2E9EB0CE3606EB48 ") == \
            "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

    def test_checksum_address(self):
        assert to_checksum_address("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48") == \
            "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


class TestDecimalHelpers:
    """Decimal parsing and fixed-precision formatting"""

    def test_parse_decimal(self):
        assert parse_decimal("-0.000000000000000001") == Decimal("-1E-18")
        assert parse_decimal(42) == Decimal(42)

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity"])
    def test_parse_decimal_rejects(self, value):
        with pytest.raises(ValueError):
            parse_decimal(value)

    def test_format_amount(self):
        assert format_amount(Decimal("100")) == "100.0000"
        assert format_amount(Decimal("0.123456")) == "0.1235"

    def test_format_usd(self):
        assert format_usd(Decimal("80")) == "80.00"
        assert format_usd(Decimal("1234567.891")) == "1234567.89"

    def test_format_signed_amount(self):
        assert format_signed_amount(Decimal("50")) == "+50.0000"
        assert format_signed_amount(Decimal("0")) == "+0.0000"
        assert format_signed_amount(Decimal("-2.5")) == "-2.5000"


class TestSettings:
    """Subgraph URL resolution"""

    def test_network_override_wins(self, monkeypatch):
        monkeypatch.setenv("ARBITRUM_SUBGRAPH_URL", "https://arb.example/graphql")
        settings = Settings(uniswap_subgraph_url="https://fallback.example", graph_api_key="key")
        assert settings.get_subgraph_url("arbitrum") == "https://arb.example/graphql"

    def test_global_override(self, monkeypatch):
        monkeypatch.delenv("POLYGON_SUBGRAPH_URL", raising=False)
        settings = Settings(uniswap_subgraph_url="https://fallback.example", graph_api_key="key")
        assert settings.get_subgraph_url("polygon") == "https://fallback.example"

    def test_gateway_url_from_api_key(self, monkeypatch):
        monkeypatch.delenv("ETHEREUM_SUBGRAPH_URL", raising=False)
        settings = Settings(uniswap_subgraph_url=None, graph_api_key="abc123")
        assert settings.get_subgraph_url("ethereum") == (
            "https://gateway.thegraph.com/api/abc123/subgraphs/id/"
            "5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV"
        )

    def test_no_url_without_key(self, monkeypatch):
        monkeypatch.delenv("BASE_SUBGRAPH_URL", raising=False)
        settings = Settings(uniswap_subgraph_url=None, graph_api_key=None)
        assert settings.get_subgraph_url("base") == ""

    def test_allowed_origins_list(self):
        settings = Settings(allowed_origins="http://localhost:3000, https://app.example ,")
        assert settings.allowed_origins_list == ["http://localhost:3000", "https://app.example"]

    def test_network_aliases(self):
        assert get_network_config("mainnet") == get_network_config("ethereum")
        assert get_network_config("Optimism").name == "Optimism"
        assert get_network_config("solana") is None
