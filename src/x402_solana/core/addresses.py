"""
Structural validation of account addresses.
"""

from __future__ import annotations

import base58
from eth_utils import is_hex_address

from .errors import InvalidAddress

__all__ = [
    "PUBKEY_LENGTH",
    "is_valid_address",
    "network_family",
    "require_valid_address",
]

PUBKEY_LENGTH = 32


def network_family(network: str) -> str:
    """Return ``"solana"`` for Solana clusters and ``"evm"`` for everything else."""
    return "solana" if "solana" in network else "evm"


def _is_valid_solana_address(address: str) -> bool:
    try:
        decoded = base58.b58decode(address)
    except ValueError:
        return False
    return len(decoded) == PUBKEY_LENGTH


def is_valid_address(address: str, network: str = "solana") -> bool:
    if not isinstance(address, str) or not address or address != address.strip():
        return False
    if network_family(network) == "evm":
        return bool(is_hex_address(address))
    return _is_valid_solana_address(address)


def require_valid_address(address: str, network: str = "solana") -> str:
    if not is_valid_address(address, network):
        raise InvalidAddress(address, network)
    return address
