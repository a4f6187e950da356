"""
Solana Pay style payment URIs used for wallet-to-wallet and QR flows.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit

from .types import PaymentRequest
from .units import to_decimal

__all__ = [
    "SOLANA_PAY_SCHEME",
    "decode_payment_uri",
    "encode_payment_uri",
    "generate_qr_data",
]

SOLANA_PAY_SCHEME = "solana"

_OPTIONAL_FIELDS = ("label", "message", "memo", "reference")


def encode_payment_uri(request: PaymentRequest) -> str:
    params: List[Tuple[str, str]] = []
    if request.amount:
        params.append(("amount", format(to_decimal(request.amount), "f")))
    for name in _OPTIONAL_FIELDS:
        value = getattr(request, name)
        if value:
            params.append((name, value))

    uri = f"{SOLANA_PAY_SCHEME}:{request.recipient}"
    if params:
        uri = f"{uri}?{urlencode(params)}"
    return uri


def _parse_amount(raw: Optional[str]) -> Decimal:
    if raw is None:
        return Decimal(0)
    try:
        return to_decimal(raw)
    except ValueError:
        return Decimal(0)


def decode_payment_uri(uri: str) -> Optional[PaymentRequest]:
    """
    Parse a payment URI, returning ``None`` when it is not a Solana Pay URI.

    A missing or non-numeric ``amount`` decodes as zero.
    """
    try:
        parts = urlsplit(uri.strip())
        if parts.scheme.lower() != SOLANA_PAY_SCHEME or not parts.path:
            return None
        params = parse_qs(parts.query)
    except (AttributeError, ValueError) as exc:
        logging.warning("Failed to parse payment URI %r: %s", uri, exc)
        return None

    def first(name: str) -> Optional[str]:
        values = params.get(name)
        return values[0] if values and values[0] else None

    return PaymentRequest(
        recipient=parts.path,
        amount=_parse_amount(first("amount")),
        label=first("label"),
        message=first("message"),
        memo=first("memo"),
        reference=first("reference"),
    )


def generate_qr_data(request: PaymentRequest) -> str:
    """Return the string to embed in a QR code for ``request``."""
    return encode_payment_uri(request)
