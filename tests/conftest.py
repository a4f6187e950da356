"""Shared pytest fixtures for x402_solana tests."""

from __future__ import annotations

from typing import List, Optional, Tuple

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey

from x402_solana.core.errors import LedgerUnavailable
from x402_solana.core.ledger import CAPABILITY_BALANCE, CAPABILITY_LATEST_ANCHOR
from x402_solana.core.requirements import build_payment_requirements
from x402_solana.core.types import SettlementResult, VerificationResult

FACILITATOR_URL = "https://facilitator.test"
BLOCKHASH = str(Hash.default())


class FakeLedger:
    """In-memory ledger returning a fixed blockhash."""

    def __init__(
        self,
        blockhash: str = BLOCKHASH,
        *,
        balance: Optional[int] = None,
        fail: bool = False,
    ) -> None:
        self.blockhash = blockhash
        self.balance = balance
        self.fail = fail
        self.anchor_calls = 0
        self.capabilities = frozenset({CAPABILITY_LATEST_ANCHOR})
        if balance is not None:
            self.capabilities = self.capabilities | {CAPABILITY_BALANCE}

    async def get_latest_anchor(self) -> str:
        self.anchor_calls += 1
        if self.fail:
            raise LedgerUnavailable("cluster unreachable")
        return self.blockhash

    async def get_balance(self, address: str) -> int:
        assert self.balance is not None
        return self.balance


class StubFacilitator:
    """Stands in for FacilitatorClient and records every call."""

    def __init__(
        self,
        verification: Optional[VerificationResult] = None,
        settlement: Optional[SettlementResult] = None,
    ) -> None:
        self.verification = verification or VerificationResult(is_valid=True)
        self.settlement = settlement or SettlementResult(
            success=True, tx_hash="5xTx", network_id="solana-devnet"
        )
        self.calls: List[Tuple[str, str, str]] = []

    async def verify(self, facilitator_url, payment_header, requirements):
        self.calls.append(("verify", facilitator_url, payment_header))
        return self.verification

    async def settle(self, facilitator_url, payment_header, requirements):
        self.calls.append(("settle", facilitator_url, payment_header))
        return self.settlement


@pytest.fixture
def payer_address() -> str:
    return str(Pubkey.new_unique())


@pytest.fixture
def recipient_address() -> str:
    return str(Pubkey.new_unique())


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def payment_required(recipient_address):
    return build_payment_requirements(
        recipient_address, "0.25", "solana-devnet", "/payment", "x402 Payment"
    )


@pytest.fixture
def sample_requirements(payment_required):
    return payment_required.accepts[0]
