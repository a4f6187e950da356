"""
Core primitives that implement the x402 payment lifecycle on Solana.
"""

from .addresses import is_valid_address, network_family, require_valid_address
from .client import (
    FacilitatorClient,
    get_supported_methods,
    settle_payment,
    verify_payment,
)
from .config import ClientConfig, ClientParameters, load_client_config
from .environment import ENV_PREFIX, ClientEnvironment, build_environment
from .errors import (
    AttemptStateError,
    ConfigError,
    FacilitatorError,
    FacilitatorProtocolError,
    FacilitatorTransportError,
    InsufficientBalance,
    InvalidAddress,
    LedgerUnavailable,
    UnknownFacilitator,
    X402Error,
)
from .facilitators import (
    FACILITATORS,
    default_supported_methods,
    get_facilitator,
    get_supported_facilitators,
)
from .flow import AttemptState, PaymentAttempt, PaymentOutcome, select_first
from .headers import PAYMENT_HEADER, decode_payment_header, encode_payment_header
from .ledger import (
    CAPABILITY_BALANCE,
    CAPABILITY_LATEST_ANCHOR,
    Ledger,
    SolanaRpcLedger,
)
from .payloads import build_payment_payload
from .requirements import build_payment_requirements
from .types import (
    X402_VERSION,
    FacilitatorInfo,
    PaymentPayload,
    PaymentRequest,
    PaymentRequiredResponse,
    PaymentRequirements,
    SettlementResult,
    SupportedKind,
    VerificationResult,
)
from .units import (
    LAMPORTS_PER_SOL,
    format_decimal,
    lamports_to_sol,
    sol_to_lamports,
    to_decimal_unit,
    to_smallest_unit,
)
from .uri import decode_payment_uri, encode_payment_uri, generate_qr_data

__all__ = [
    "AttemptState",
    "AttemptStateError",
    "CAPABILITY_BALANCE",
    "CAPABILITY_LATEST_ANCHOR",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "ENV_PREFIX",
    "FACILITATORS",
    "FacilitatorClient",
    "FacilitatorError",
    "FacilitatorInfo",
    "FacilitatorProtocolError",
    "FacilitatorTransportError",
    "InsufficientBalance",
    "InvalidAddress",
    "LAMPORTS_PER_SOL",
    "Ledger",
    "LedgerUnavailable",
    "PAYMENT_HEADER",
    "PaymentAttempt",
    "PaymentOutcome",
    "PaymentPayload",
    "PaymentRequest",
    "PaymentRequiredResponse",
    "PaymentRequirements",
    "SettlementResult",
    "SolanaRpcLedger",
    "SupportedKind",
    "UnknownFacilitator",
    "VerificationResult",
    "X402Error",
    "X402_VERSION",
    "build_environment",
    "build_payment_payload",
    "build_payment_requirements",
    "decode_payment_header",
    "decode_payment_uri",
    "default_supported_methods",
    "encode_payment_header",
    "encode_payment_uri",
    "format_decimal",
    "generate_qr_data",
    "get_facilitator",
    "get_supported_facilitators",
    "get_supported_methods",
    "is_valid_address",
    "lamports_to_sol",
    "load_client_config",
    "network_family",
    "require_valid_address",
    "select_first",
    "settle_payment",
    "sol_to_lamports",
    "to_decimal_unit",
    "to_smallest_unit",
    "verify_payment",
]
