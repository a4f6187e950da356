"""Tests for the high-level helpers in x402_solana.api."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from x402_solana import (
    AttemptState,
    ClientConfig,
    ConfigError,
    FacilitatorClient,
    SupportedKind,
    create_facilitator_client,
    decode_payment_header,
    resolve_supported_methods,
    send_payment,
)
from x402_solana.core.facilitators import FACILITATORS

from .conftest import FACILITATOR_URL, FakeLedger


class TestResolveSupportedMethods:
    @pytest.mark.asyncio
    async def test_uses_facilitator_answer(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url="https://facilitator.payai.network/supported",
            json={"kinds": [{"scheme": "exact", "network": "solana"}]},
        )

        kinds = await resolve_supported_methods("payai")

        assert kinds == [SupportedKind("exact", "solana")]

    @pytest.mark.asyncio
    async def test_falls_back_to_registry(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url="https://facilitator.x402.org/supported", status_code=502)

        kinds = await resolve_supported_methods("x402org")

        assert kinds == [
            SupportedKind("solana" if "solana" in network else "evm", network)
            for network in FACILITATORS["x402org"].networks
        ]

    @pytest.mark.asyncio
    async def test_falls_back_on_timeout(self):
        async def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        client = FacilitatorClient(transport=httpx.MockTransport(handler))

        kinds = await resolve_supported_methods(
            FACILITATORS["coinbase"], client=client, facilitator_url=FACILITATOR_URL
        )

        assert [kind.scheme for kind in kinds] == ["evm"] * 4

    @pytest.mark.asyncio
    async def test_falls_back_on_malformed_url(self):
        kinds = await resolve_supported_methods(
            FACILITATORS["payai"], facilitator_url="http://facilitator.test:notaport"
        )

        assert [kind.network for kind in kinds] == list(FACILITATORS["payai"].networks)


class TestSendPayment:
    @pytest.mark.asyncio
    async def test_end_to_end(self, httpx_mock: HTTPXMock, payer_address, recipient_address):
        config = ClientConfig.from_mapping({"X402_FACILITATOR_URL": FACILITATOR_URL})
        httpx_mock.add_response(url=f"{FACILITATOR_URL}/verify", json={"isValid": True})
        httpx_mock.add_response(
            url=f"{FACILITATOR_URL}/settle",
            json={"success": True, "txHash": "sig", "networkId": "solana-devnet"},
        )

        outcome = await send_payment(
            recipient_address,
            "0.5",
            payer=payer_address,
            config=config,
            ledger=FakeLedger(),
        )

        assert outcome.state is AttemptState.SETTLED
        assert outcome.settlement.tx_hash == "sig"
        verify_body = json.loads(httpx_mock.get_requests()[0].content)
        assert verify_body["paymentRequirements"]["maxAmountRequired"] == "500000000"
        assert verify_body["paymentRequirements"]["network"] == "solana-devnet"
        assert verify_body["paymentRequirements"]["resource"] == "/payment"
        payload = decode_payment_header(verify_body["paymentHeader"])
        assert payload.payload["payer"] == payer_address

    @pytest.mark.asyncio
    async def test_verification_rejected(self, httpx_mock: HTTPXMock, payer_address, recipient_address):
        config = ClientConfig.from_mapping({"X402_FACILITATOR_URL": FACILITATOR_URL})
        httpx_mock.add_response(
            url=f"{FACILITATOR_URL}/verify",
            json={"isValid": False, "invalidReason": "invalid_exact_svm_payload_transaction"},
        )

        outcome = await send_payment(
            recipient_address, "0.5", payer=payer_address, config=config, ledger=FakeLedger()
        )

        assert outcome.state is AttemptState.VERIFICATION_FAILED
        assert outcome.failure_reason == "invalid_exact_svm_payload_transaction"

    @pytest.mark.asyncio
    async def test_payer_required(self, recipient_address):
        config = ClientConfig.from_mapping({})
        with pytest.raises(ConfigError):
            await send_payment(recipient_address, "1", config=config, ledger=FakeLedger())


def test_create_facilitator_client_from_config():
    config = ClientConfig.from_mapping({"X402_SETTLE_TIMEOUT_SECONDS": "12"})
    assert create_facilitator_client(config=config).settle_timeout == 12


def test_create_facilitator_client_rejects_mixed_arguments():
    config = ClientConfig.from_mapping({})
    with pytest.raises(ValueError):
        create_facilitator_client(config=config, network="solana")
