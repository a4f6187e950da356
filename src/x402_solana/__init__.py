"""
Public facade for the x402 Solana payment package.

The most useful pieces are re-exported here so integrators can
``from x402_solana import ...`` without navigating the package.
"""

from .api import create_facilitator_client, resolve_supported_methods, send_payment
from .core import (
    FACILITATORS,
    AttemptState,
    ClientConfig,
    ConfigError,
    FacilitatorClient,
    FacilitatorInfo,
    FacilitatorProtocolError,
    FacilitatorTransportError,
    InsufficientBalance,
    InvalidAddress,
    LedgerUnavailable,
    PaymentAttempt,
    PaymentOutcome,
    PaymentPayload,
    PaymentRequest,
    PaymentRequiredResponse,
    PaymentRequirements,
    SettlementResult,
    SolanaRpcLedger,
    SupportedKind,
    VerificationResult,
    X402Error,
    build_payment_payload,
    build_payment_requirements,
    decode_payment_header,
    decode_payment_uri,
    default_supported_methods,
    encode_payment_header,
    encode_payment_uri,
    format_decimal,
    get_facilitator,
    get_supported_facilitators,
    get_supported_methods,
    is_valid_address,
    load_client_config,
    settle_payment,
    to_decimal_unit,
    to_smallest_unit,
    verify_payment,
)

__all__ = (
    "AttemptState",
    "ClientConfig",
    "ConfigError",
    "FACILITATORS",
    "FacilitatorClient",
    "FacilitatorInfo",
    "FacilitatorProtocolError",
    "FacilitatorTransportError",
    "InsufficientBalance",
    "InvalidAddress",
    "LedgerUnavailable",
    "PaymentAttempt",
    "PaymentOutcome",
    "PaymentPayload",
    "PaymentRequest",
    "PaymentRequiredResponse",
    "PaymentRequirements",
    "SettlementResult",
    "SolanaRpcLedger",
    "SupportedKind",
    "VerificationResult",
    "X402Error",
    "build_payment_payload",
    "build_payment_requirements",
    "create_facilitator_client",
    "decode_payment_header",
    "decode_payment_uri",
    "default_supported_methods",
    "encode_payment_header",
    "encode_payment_uri",
    "format_decimal",
    "get_facilitator",
    "get_supported_facilitators",
    "get_supported_methods",
    "is_valid_address",
    "load_client_config",
    "resolve_supported_methods",
    "send_payment",
    "settle_payment",
    "to_decimal_unit",
    "to_smallest_unit",
    "verify_payment",
)
