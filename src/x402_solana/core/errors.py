"""
Exception types raised by the x402 payment helpers.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "AttemptStateError",
    "ConfigError",
    "FacilitatorError",
    "FacilitatorProtocolError",
    "FacilitatorTransportError",
    "InsufficientBalance",
    "InvalidAddress",
    "LedgerUnavailable",
    "UnknownFacilitator",
    "X402Error",
]


class X402Error(Exception):
    """Base error for the x402 payment helpers."""


class ConfigError(X402Error):
    """Raised when the supplied configuration is invalid."""


class InvalidAddress(X402Error, ValueError):
    """Raised when an account address fails structural validation."""

    def __init__(self, address: str, network: str = "solana") -> None:
        super().__init__(f"'{address}' is not a valid {network} address")
        self.address = address
        self.network = network


class LedgerUnavailable(X402Error):
    """Raised when a ledger read (recent blockhash, balance) fails."""


class InsufficientBalance(X402Error):
    def __init__(self, address: str, balance: int, required: int) -> None:
        super().__init__(
            f"Balance of {address} is {balance} lamports, {required} required"
        )
        self.address = address
        self.balance = balance
        self.required = required


class FacilitatorError(X402Error):
    """Base class for failures talking to a facilitator."""


class FacilitatorTransportError(FacilitatorError):
    """Network failure or timeout while calling a facilitator."""

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class FacilitatorProtocolError(FacilitatorError):
    """The facilitator answered with a non-2xx status or a malformed body."""

    def __init__(self, status_code: Optional[int], detail: str) -> None:
        message = detail if status_code is None else f"{status_code}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class AttemptStateError(X402Error):
    """Raised when a payment attempt is driven out of order."""


class UnknownFacilitator(X402Error, KeyError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown facilitator '{self.key}'"
