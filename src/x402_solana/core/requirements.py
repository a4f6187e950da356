"""
Builders for the payment requirements advertised to payers.
"""

from __future__ import annotations

from typing import Any, Dict

from .types import X402_VERSION, PaymentRequiredResponse, PaymentRequirements
from .units import SOL_DECIMALS, Amount, to_smallest_unit

__all__ = [
    "DEFAULT_MAX_TIMEOUT_SECONDS",
    "NATIVE_ASSET",
    "build_payment_requirements",
]

DEFAULT_MAX_TIMEOUT_SECONDS = 30
NATIVE_ASSET = "SOL"


def _native_asset_extra() -> Dict[str, Any]:
    return {"decimals": SOL_DECIMALS, "symbol": NATIVE_ASSET}


def build_payment_requirements(
    pay_to: str,
    amount: Amount,
    network: str = "solana",
    resource: str = "/",
    description: str = "Payment required",
) -> PaymentRequiredResponse:
    """
    Describe a native SOL payment of ``amount`` to ``pay_to``.

    ``pay_to`` is not validated here; the payload builder rejects malformed
    addresses.
    """
    requirements = PaymentRequirements(
        scheme="exact",
        network=network,
        max_amount_required=str(to_smallest_unit(amount, SOL_DECIMALS)),
        resource=resource,
        description=description,
        mime_type="application/json",
        pay_to=pay_to,
        max_timeout_seconds=DEFAULT_MAX_TIMEOUT_SECONDS,
        asset=NATIVE_ASSET,
        extra=_native_asset_extra(),
    )
    return PaymentRequiredResponse(x402_version=X402_VERSION, accepts=[requirements])
