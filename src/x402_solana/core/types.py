"""
Wire-level value types exchanged with x402 facilitators.

Every type is an immutable dataclass. ``to_dict`` produces the camelCase JSON
shape used on the wire; ``from_dict``/``from_response`` parse it back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

__all__ = [
    "X402_VERSION",
    "FacilitatorInfo",
    "PaymentPayload",
    "PaymentRequest",
    "PaymentRequiredResponse",
    "PaymentRequirements",
    "SettlementResult",
    "SupportedKind",
    "VerificationResult",
]

X402_VERSION = 1


@dataclass(frozen=True)
class PaymentRequirements:
    scheme: str
    network: str
    max_amount_required: str
    resource: str
    description: str
    mime_type: str
    pay_to: str
    max_timeout_seconds: int
    asset: str
    extra: Optional[Dict[str, Any]] = None
    output_schema: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "network": self.network,
            "maxAmountRequired": self.max_amount_required,
            "resource": self.resource,
            "description": self.description,
            "mimeType": self.mime_type,
            "outputSchema": self.output_schema,
            "payTo": self.pay_to,
            "maxTimeoutSeconds": self.max_timeout_seconds,
            "asset": self.asset,
            "extra": self.extra,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaymentRequirements":
        return cls(
            scheme=data["scheme"],
            network=data["network"],
            max_amount_required=str(data["maxAmountRequired"]),
            resource=data.get("resource", "/"),
            description=data.get("description", ""),
            mime_type=data.get("mimeType", "application/json"),
            pay_to=data["payTo"],
            max_timeout_seconds=int(data.get("maxTimeoutSeconds", 30)),
            asset=data["asset"],
            extra=data.get("extra"),
            output_schema=data.get("outputSchema"),
        )


@dataclass(frozen=True)
class PaymentRequiredResponse:
    x402_version: int
    accepts: List[PaymentRequirements]
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "x402Version": self.x402_version,
            "accepts": [item.to_dict() for item in self.accepts],
        }
        if self.error is not None:
            body["error"] = self.error
        return body

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaymentRequiredResponse":
        return cls(
            x402_version=int(data.get("x402Version", X402_VERSION)),
            accepts=[PaymentRequirements.from_dict(item) for item in data.get("accepts", [])],
            error=data.get("error"),
        )


@dataclass(frozen=True)
class PaymentPayload:
    """
    Payload envelope carried in the payment header.

    ``payload`` is scheme specific; for Solana transfers it holds the base58
    serialized transaction, the payer address and the amount in lamports.
    """

    x402_version: int
    scheme: str
    network: str
    payload: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x402Version": self.x402_version,
            "scheme": self.scheme,
            "network": self.network,
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaymentPayload":
        version = data["x402Version"]
        if isinstance(version, bool) or not isinstance(version, int):
            raise ValueError("x402Version must be an integer")
        scheme, network, payload = data["scheme"], data["network"], data["payload"]
        if not isinstance(scheme, str) or not isinstance(network, str):
            raise ValueError("scheme and network must be strings")
        if not isinstance(payload, dict):
            raise ValueError("payload must be an object")
        return cls(x402_version=version, scheme=scheme, network=network, payload=payload)


@dataclass(frozen=True)
class VerificationResult:
    is_valid: bool
    invalid_reason: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "VerificationResult":
        return cls(
            is_valid=bool(payload.get("isValid")),
            invalid_reason=payload.get("invalidReason"),
            raw=payload,
        )

    @classmethod
    def failure(cls, reason: str) -> "VerificationResult":
        return cls(is_valid=False, invalid_reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "invalidReason": self.invalid_reason}


@dataclass(frozen=True)
class SettlementResult:
    success: bool
    error: Optional[str] = None
    tx_hash: Optional[str] = None
    network_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "SettlementResult":
        # Newer facilitators report ``transaction``/``network`` instead.
        return cls(
            success=bool(payload.get("success")),
            error=payload.get("error", payload.get("errorReason")),
            tx_hash=payload.get("txHash", payload.get("transaction")),
            network_id=payload.get("networkId", payload.get("network")),
            raw=payload,
        )

    @classmethod
    def failure(cls, error: str) -> "SettlementResult":
        return cls(success=False, error=error, tx_hash=None, network_id=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error,
            "txHash": self.tx_hash,
            "networkId": self.network_id,
        }


@dataclass(frozen=True)
class SupportedKind:
    scheme: str
    network: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SupportedKind":
        return cls(scheme=str(data["scheme"]), network=str(data["network"]))

    def to_dict(self) -> Dict[str, str]:
        return {"scheme": self.scheme, "network": self.network}


@dataclass(frozen=True)
class FacilitatorInfo:
    name: str
    url: str
    networks: Tuple[str, ...]
    description: str

    def supports(self, network: str) -> bool:
        return network in self.networks


@dataclass(frozen=True)
class PaymentRequest:
    """A shareable Solana Pay request (``solana:<recipient>?...``)."""

    recipient: str
    amount: Decimal = Decimal(0)
    label: Optional[str] = None
    message: Optional[str] = None
    memo: Optional[str] = None
    reference: Optional[str] = None
