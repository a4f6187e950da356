"""Unit tests for x402_solana.core.requirements."""

from decimal import Decimal

from x402_solana.core.requirements import build_payment_requirements
from x402_solana.core.types import PaymentRequiredResponse, PaymentRequirements


class TestBuildPaymentRequirements:
    def test_reference_values(self):
        response = build_payment_requirements("Addr1", 1.5, "solana-devnet", "/pay", "desc")
        requirements = response.accepts[0]

        assert response.x402_version == 1
        assert len(response.accepts) == 1
        assert requirements.max_amount_required == "1500000000"
        assert requirements.scheme == "exact"
        assert requirements.asset == "SOL"
        assert requirements.max_timeout_seconds == 30
        assert requirements.mime_type == "application/json"
        assert requirements.pay_to == "Addr1"
        assert requirements.network == "solana-devnet"
        assert requirements.resource == "/pay"
        assert requirements.description == "desc"
        assert requirements.extra == {"decimals": 9, "symbol": "SOL"}

    def test_defaults(self):
        requirements = build_payment_requirements("Addr1", Decimal("0.01")).accepts[0]
        assert requirements.network == "solana"
        assert requirements.resource == "/"
        assert requirements.description == "Payment required"
        assert requirements.max_amount_required == "10000000"

    def test_is_deterministic(self):
        first = build_payment_requirements("Addr1", "2", "solana", "/a", "b")
        second = build_payment_requirements("Addr1", "2", "solana", "/a", "b")
        assert first == second

    def test_wire_shape(self):
        body = build_payment_requirements("Addr1", "1", "solana", "/r", "d").to_dict()
        assert body["x402Version"] == 1
        accepted = body["accepts"][0]
        assert accepted["maxAmountRequired"] == "1000000000"
        assert accepted["payTo"] == "Addr1"
        assert accepted["maxTimeoutSeconds"] == 30
        assert accepted["mimeType"] == "application/json"
        assert "error" not in body

    def test_parses_back_from_wire(self):
        response = build_payment_requirements("Addr1", "1", "solana", "/r", "d")
        assert PaymentRequiredResponse.from_dict(response.to_dict()) == response
        assert isinstance(response.accepts[0], PaymentRequirements)
