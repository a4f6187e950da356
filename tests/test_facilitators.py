"""Unit tests for x402_solana.core.facilitators."""

import pytest

from x402_solana.core.errors import UnknownFacilitator
from x402_solana.core.facilitators import (
    FACILITATORS,
    default_supported_methods,
    get_facilitator,
    get_supported_facilitators,
)
from x402_solana.core.types import SupportedKind


class TestRegistry:
    def test_reference_entries(self):
        assert set(FACILITATORS) == {"payai", "coinbase", "x402org"}
        assert FACILITATORS["payai"].url == "https://facilitator.payai.network"
        assert "solana-devnet" in FACILITATORS["payai"].networks

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            FACILITATORS["rogue"] = FACILITATORS["payai"]

    def test_entries_are_immutable(self):
        with pytest.raises(AttributeError):
            FACILITATORS["payai"].url = "https://evil.example"

    def test_get_facilitator(self):
        assert get_facilitator("coinbase").name == "Coinbase CDP"

    def test_unknown_facilitator(self):
        with pytest.raises(UnknownFacilitator) as excinfo:
            get_facilitator("nope")
        assert isinstance(excinfo.value, KeyError)
        assert str(excinfo.value) == "Unknown facilitator 'nope'"


class TestSupportedFacilitators:
    def test_solana(self):
        names = [info.name for info in get_supported_facilitators("solana")]
        assert names == ["PayAI", "x402.org"]

    def test_devnet_only_on_payai(self):
        assert [info.name for info in get_supported_facilitators("solana-devnet")] == ["PayAI"]

    def test_unknown_network(self):
        assert get_supported_facilitators("dogecoin") == []


class TestDefaultSupportedMethods:
    def test_one_kind_per_network(self):
        info = FACILITATORS["payai"]
        kinds = default_supported_methods(info)
        assert [kind.network for kind in kinds] == list(info.networks)

    def test_scheme_from_network_family(self):
        kinds = default_supported_methods(FACILITATORS["x402org"])
        assert kinds == [
            SupportedKind("solana", "solana"),
            SupportedKind("evm", "base"),
            SupportedKind("evm", "ethereum"),
            SupportedKind("evm", "polygon"),
            SupportedKind("evm", "arbitrum"),
        ]

    def test_evm_only_facilitator(self):
        kinds = default_supported_methods(FACILITATORS["coinbase"])
        assert {kind.scheme for kind in kinds} == {"evm"}
