"""
Encoding of payment payloads into the ``X-PAYMENT`` header value.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Optional

from .types import PaymentPayload

__all__ = [
    "PAYMENT_HEADER",
    "decode_payment_header",
    "encode_payment_header",
]

PAYMENT_HEADER = "X-PAYMENT"


def encode_payment_header(payload: PaymentPayload) -> str:
    """Canonical JSON (sorted keys, compact separators) wrapped in base64."""
    document = json.dumps(
        payload.to_dict(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
    )
    return base64.b64encode(document.encode("ascii")).decode("ascii")


def decode_payment_header(header: str) -> Optional[PaymentPayload]:
    try:
        raw = base64.b64decode(header, validate=True)
        return PaymentPayload.from_dict(json.loads(raw.decode("utf-8")))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logging.warning("Failed to decode payment header: %s", exc)
        return None
    except (KeyError, TypeError, ValueError) as exc:
        logging.warning("Payment header does not describe a payment payload: %s", exc)
        return None
