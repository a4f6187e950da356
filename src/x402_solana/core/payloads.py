"""
Helpers for constructing the Solana payment payload sent to the facilitator.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

import base58
from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from .errors import InvalidAddress, LedgerUnavailable
from .ledger import Ledger
from .types import X402_VERSION, PaymentPayload, PaymentRequirements

__all__ = [
    "build_payment_payload",
    "build_transfer_transaction",
    "parse_pubkey",
]


def parse_pubkey(address: Union[str, Pubkey]) -> Pubkey:
    if isinstance(address, Pubkey):
        return address
    try:
        return Pubkey.from_string(address)
    except (TypeError, ValueError) as exc:
        raise InvalidAddress(str(address)) from exc


def _parse_lamports(requirements: PaymentRequirements) -> int:
    try:
        lamports = int(requirements.max_amount_required)
    except ValueError as exc:
        raise ValueError(
            f"maxAmountRequired must be an integer string, got '{requirements.max_amount_required}'"
        ) from exc
    if lamports < 0:
        raise ValueError("maxAmountRequired must not be negative")
    return lamports


def build_transfer_transaction(
    payer: Pubkey,
    recipient: Pubkey,
    lamports: int,
    blockhash: str,
) -> Transaction:
    """
    Single system transfer with ``payer`` as fee payer, left unsigned.
    """
    try:
        recent_blockhash = Hash.from_string(blockhash)
    except ValueError as exc:
        raise LedgerUnavailable(f"Ledger returned a malformed blockhash '{blockhash}'") from exc

    instruction = transfer(
        TransferParams(from_pubkey=payer, to_pubkey=recipient, lamports=lamports)
    )
    message = Message.new_with_blockhash([instruction], payer, recent_blockhash)
    return Transaction.new_unsigned(message)


async def _fetch_blockhash(ledger: Ledger) -> str:
    try:
        return await ledger.get_latest_anchor()
    except LedgerUnavailable:
        raise
    except Exception as exc:  # noqa: BLE001
        raise LedgerUnavailable(f"Failed to fetch recent blockhash: {exc}") from exc


async def build_payment_payload(
    ledger: Ledger,
    payer: Union[str, Pubkey],
    requirements: PaymentRequirements,
) -> PaymentPayload:
    """
    Build the ``exact`` scheme payload for ``requirements``.

    The transaction is serialized without signatures; the payer's wallet signs
    it later. Each call fetches a fresh blockhash, so payloads must not be reused.
    """
    recipient = parse_pubkey(requirements.pay_to)
    payer_key = parse_pubkey(payer)
    lamports = _parse_lamports(requirements)

    blockhash = await _fetch_blockhash(ledger)
    transaction = build_transfer_transaction(payer_key, recipient, lamports, blockhash)
    serialized = bytes(transaction)
    logging.info(
        "Built %s lamport transfer from %s to %s (blockhash %s)",
        lamports,
        payer_key,
        recipient,
        blockhash,
    )

    body: Dict[str, Any] = {
        "transaction": base58.b58encode(serialized).decode("ascii"),
        "payer": str(payer_key),
        "amount": requirements.max_amount_required,
    }
    return PaymentPayload(
        x402_version=X402_VERSION,
        scheme=requirements.scheme,
        network=requirements.network,
        payload=body,
    )
