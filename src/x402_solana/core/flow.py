"""
State machine for a single verify/settle payment attempt.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .addresses import require_valid_address
from .client import FacilitatorClient
from .errors import AttemptStateError, InsufficientBalance
from .headers import encode_payment_header
from .ledger import CAPABILITY_BALANCE, Ledger
from .payloads import build_payment_payload
from .types import (
    PaymentPayload,
    PaymentRequiredResponse,
    PaymentRequirements,
    SettlementResult,
    VerificationResult,
)

__all__ = [
    "AttemptState",
    "PaymentAttempt",
    "PaymentOutcome",
    "RequirementSelector",
    "select_first",
]

RequirementSelector = Callable[[Sequence[PaymentRequirements]], PaymentRequirements]


class AttemptState(str, enum.Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"
    SETTLING = "settling"
    SETTLED = "settled"
    SETTLEMENT_FAILED = "settlement_failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {AttemptState.VERIFICATION_FAILED, AttemptState.SETTLED, AttemptState.SETTLEMENT_FAILED}
)

_TRANSITIONS = {
    AttemptState.IDLE: {AttemptState.VERIFYING},
    AttemptState.VERIFYING: {AttemptState.VERIFIED, AttemptState.VERIFICATION_FAILED},
    AttemptState.VERIFIED: {AttemptState.SETTLING},
    AttemptState.SETTLING: {AttemptState.SETTLED, AttemptState.SETTLEMENT_FAILED},
}


def select_first(accepts: Sequence[PaymentRequirements]) -> PaymentRequirements:
    if not accepts:
        raise ValueError("Payment required response does not accept any payment method")
    return accepts[0]


@dataclass(frozen=True)
class PaymentOutcome:
    state: AttemptState
    requirements: PaymentRequirements
    payload: PaymentPayload
    payment_header: str
    verification: VerificationResult
    settlement: Optional[SettlementResult] = None

    @property
    def success(self) -> bool:
        return self.state in (AttemptState.SETTLED, AttemptState.VERIFIED)

    @property
    def failure_reason(self) -> Optional[str]:
        if self.state is AttemptState.VERIFICATION_FAILED:
            return self.verification.invalid_reason or "Payment verification failed"
        if self.state is AttemptState.SETTLEMENT_FAILED and self.settlement is not None:
            return self.settlement.error or "Payment settlement failed"
        return None


class PaymentAttempt:
    """
    One payment attempt against one facilitator.

    The attempt builds a fresh payload, verifies it and, if valid, settles it.
    There are no retries: a failed attempt is final and callers start a new
    attempt (with a new blockhash) to try again.
    """

    def __init__(
        self,
        *,
        facilitator_url: str,
        ledger: Ledger,
        payer: str,
        payment_required: PaymentRequiredResponse,
        client: Optional[FacilitatorClient] = None,
        selector: RequirementSelector = select_first,
    ) -> None:
        self.facilitator_url = facilitator_url
        self.ledger = ledger
        self.payer = payer
        self.payment_required = payment_required
        self.client = client or FacilitatorClient()
        self.selector = selector
        self.state = AttemptState.IDLE
        self._check_balance = CAPABILITY_BALANCE in getattr(ledger, "capabilities", frozenset())
        self._started = False

    def _transition(self, target: AttemptState) -> None:
        if target not in _TRANSITIONS.get(self.state, set()):
            raise AttemptStateError(f"Cannot move from {self.state.value} to {target.value}")
        logging.debug("Payment attempt %s -> %s", self.state.value, target.value)
        self.state = target

    async def _preflight(self, requirements: PaymentRequirements) -> None:
        require_valid_address(requirements.pay_to, requirements.network)
        amount = int(requirements.max_amount_required)
        if amount <= 0:
            raise ValueError("Payment amount must be greater than zero")
        if self._check_balance:
            balance = await self.ledger.get_balance(self.payer)
            if balance < amount:
                raise InsufficientBalance(self.payer, balance, amount)

    async def run(self, *, verify_only: bool = False) -> PaymentOutcome:
        if self._started:
            raise AttemptStateError("A payment attempt can only be run once")
        self._started = True

        requirements = self.selector(self.payment_required.accepts)
        await self._preflight(requirements)
        payload = await build_payment_payload(self.ledger, self.payer, requirements)
        header = encode_payment_header(payload)

        self._transition(AttemptState.VERIFYING)
        verification = await self.client.verify(self.facilitator_url, header, requirements)
        if not verification.is_valid:
            self._transition(AttemptState.VERIFICATION_FAILED)
            logging.error(
                "Payment rejected: %s",
                verification.invalid_reason or "Payment verification failed",
            )
            return PaymentOutcome(self.state, requirements, payload, header, verification)

        self._transition(AttemptState.VERIFIED)
        if verify_only:
            logging.info("Skipping settlement because verify_only was requested")
            return PaymentOutcome(self.state, requirements, payload, header, verification)

        self._transition(AttemptState.SETTLING)
        settlement = await self.client.settle(self.facilitator_url, header, requirements)
        if settlement.success:
            self._transition(AttemptState.SETTLED)
            logging.info(
                "Payment settled on %s. Transaction hash: %s",
                settlement.network_id or requirements.network,
                settlement.tx_hash,
            )
        else:
            self._transition(AttemptState.SETTLEMENT_FAILED)
            logging.error("Settlement failed: %s", settlement.error or "Payment settlement failed")
        return PaymentOutcome(self.state, requirements, payload, header, verification, settlement)
