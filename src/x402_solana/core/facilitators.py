"""
Static registry of known x402 facilitators.

The registry is built once at import time and exposed through a read-only
mapping; nothing mutates it afterwards.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from .addresses import network_family
from .errors import UnknownFacilitator
from .types import FacilitatorInfo, SupportedKind

__all__ = [
    "DEFAULT_FACILITATOR",
    "FACILITATORS",
    "default_supported_methods",
    "get_facilitator",
    "get_supported_facilitators",
]

DEFAULT_FACILITATOR = "payai"

FACILITATORS: Mapping[str, FacilitatorInfo] = MappingProxyType(
    {
        "payai": FacilitatorInfo(
            name="PayAI",
            url="https://facilitator.payai.network",
            networks=("solana", "solana-devnet", "base", "base-sepolia", "avalanche", "polygon"),
            description="Solana-first, multi-network facilitator with no API keys required",
        ),
        "coinbase": FacilitatorInfo(
            name="Coinbase CDP",
            url="https://facilitator.cdp.coinbase.com",
            networks=("base", "base-sepolia", "ethereum", "polygon"),
            description="Production-ready facilitator by Coinbase with USDC support",
        ),
        "x402org": FacilitatorInfo(
            name="x402.org",
            url="https://facilitator.x402.org",
            networks=("solana", "base", "ethereum", "polygon", "arbitrum"),
            description="Community-run facilitator supporting multiple chains",
        ),
    }
)


def get_facilitator(key: str) -> FacilitatorInfo:
    try:
        return FACILITATORS[key]
    except KeyError as exc:
        raise UnknownFacilitator(key) from exc


def get_supported_facilitators(network: str) -> List[FacilitatorInfo]:
    """Facilitators that declare support for ``network``, in registry order."""
    return [info for info in FACILITATORS.values() if info.supports(network)]


def default_supported_methods(info: FacilitatorInfo) -> List[SupportedKind]:
    """
    Static stand-in for ``GET /supported`` derived from the registry entry.

    One kind per registered network; the scheme is the network's ledger family.
    """
    return [
        SupportedKind(scheme=network_family(network), network=network)
        for network in info.networks
    ]
