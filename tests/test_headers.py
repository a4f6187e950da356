"""Unit tests for x402_solana.core.headers."""

import base64
import json

import pytest

from x402_solana.core.headers import decode_payment_header, encode_payment_header
from x402_solana.core.types import PaymentPayload


@pytest.fixture
def payload():
    return PaymentPayload(
        x402_version=1,
        scheme="exact",
        network="solana-devnet",
        payload={
            "transaction": "3Bxs4h24hBtQy9rw",
            "payer": "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL",
            "amount": "250000000",
        },
    )


class TestEncodePaymentHeader:
    def test_is_ascii_base64(self, payload):
        header = encode_payment_header(payload)
        assert header.isascii()
        assert base64.b64decode(header, validate=True)

    def test_uses_canonical_json(self, payload):
        document = base64.b64decode(encode_payment_header(payload)).decode()
        assert document == json.dumps(payload.to_dict(), sort_keys=True, separators=(",", ":"))
        assert document.startswith('{"network":')

    def test_is_stable_across_key_order(self, payload):
        reordered = PaymentPayload(
            x402_version=1,
            scheme="exact",
            network="solana-devnet",
            payload=dict(reversed(list(payload.payload.items()))),
        )
        assert encode_payment_header(reordered) == encode_payment_header(payload)

    def test_non_ascii_values_are_escaped(self, payload):
        unicode_payload = PaymentPayload(1, "exact", "solana", {"memo": "café ☕"})
        header = encode_payment_header(unicode_payload)
        assert header.isascii()
        assert decode_payment_header(header) == unicode_payload


class TestDecodePaymentHeader:
    def test_round_trip(self, payload):
        assert decode_payment_header(encode_payment_header(payload)) == payload

    def test_round_trip_nested_payload(self):
        nested = PaymentPayload(1, "exact", "solana", {"a": [1, 2, {"b": None}], "c": True})
        assert decode_payment_header(encode_payment_header(nested)) == nested

    def test_accepts_headers_from_other_encoders(self, payload):
        header = base64.b64encode(json.dumps(payload.to_dict(), indent=2).encode()).decode()
        assert decode_payment_header(header) == payload

    @pytest.mark.parametrize(
        "header",
        [
            "not base64 json",
            "",
            base64.b64encode(b"not json").decode(),
            base64.b64encode(b"[1, 2, 3]").decode(),
            base64.b64encode(b'{"scheme": "exact"}').decode(),
            base64.b64encode(
                b'{"x402Version": "1", "scheme": "exact", "network": "solana", "payload": {}}'
            ).decode(),
            base64.b64encode(b"\xff\xfe").decode(),
        ],
    )
    def test_malformed_headers_decode_to_none(self, header):
        assert decode_payment_header(header) is None

    def test_non_string_input(self):
        assert decode_payment_header(None) is None
