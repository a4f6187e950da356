"""
Public, high-level helpers for paying through an x402 facilitator.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from .core.client import FacilitatorClient
from .core.config import ClientConfig, load_client_config
from .core.errors import ConfigError, FacilitatorError
from .core.facilitators import default_supported_methods, get_facilitator
from .core.flow import PaymentAttempt, PaymentOutcome, RequirementSelector, select_first
from .core.ledger import Ledger
from .core.requirements import build_payment_requirements
from .core.types import FacilitatorInfo, SupportedKind
from .core.units import Amount

__all__ = [
    "create_facilitator_client",
    "resolve_supported_methods",
    "send_payment",
]


def create_facilitator_client(
    *,
    config: Optional[ClientConfig] = None,
    env_file: Optional[str] = ".env",
    **parameters: object,
) -> FacilitatorClient:
    """
    Construct a :class:`FacilitatorClient` from a config or environment data.
    """
    if config is not None and parameters:
        raise ValueError(
            "Provide either a pre-built ClientConfig or individual parameters, not both."
        )
    cfg = config or load_client_config(env_file=env_file, **parameters)
    return cfg.facilitator_client()


async def resolve_supported_methods(
    facilitator: Union[str, FacilitatorInfo],
    *,
    client: Optional[FacilitatorClient] = None,
    facilitator_url: Optional[str] = None,
) -> List[SupportedKind]:
    """
    Ask the facilitator what it supports, falling back to the registry entry.
    """
    info = get_facilitator(facilitator) if isinstance(facilitator, str) else facilitator
    client = client or FacilitatorClient()
    try:
        return await client.get_supported_methods(facilitator_url or info.url)
    except FacilitatorError as exc:
        logging.warning(
            "Falling back to registered networks for %s: %s", info.name, exc
        )
        return default_supported_methods(info)


async def send_payment(
    pay_to: str,
    amount: Amount,
    *,
    payer: Optional[str] = None,
    config: Optional[ClientConfig] = None,
    ledger: Optional[Ledger] = None,
    client: Optional[FacilitatorClient] = None,
    resource: str = "/payment",
    description: str = "x402 Payment",
    selector: RequirementSelector = select_first,
    verify_only: bool = False,
) -> PaymentOutcome:
    """
    Build requirements for ``amount`` SOL and run one verify + settle attempt.
    """
    cfg = config or load_client_config()
    payer = payer or cfg.payer_address
    if payer is None:
        raise ConfigError("A payer address must be supplied or set in X402_PAYER_ADDRESS")

    payment_required = build_payment_requirements(
        pay_to, amount, cfg.network, resource, description
    )
    attempt = PaymentAttempt(
        facilitator_url=cfg.facilitator_url,
        ledger=ledger or cfg.ledger(),
        payer=payer,
        payment_required=payment_required,
        client=client or cfg.facilitator_client(),
        selector=selector,
    )
    return await attempt.run(verify_only=verify_only)
