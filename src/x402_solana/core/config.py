"""
Configuration objects for the x402 Solana client.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .addresses import is_valid_address
from .client import (
    DEFAULT_SETTLE_TIMEOUT,
    DEFAULT_SUPPORTED_TIMEOUT,
    DEFAULT_VERIFY_TIMEOUT,
    FacilitatorClient,
)
from .environment import build_environment
from .errors import ConfigError, UnknownFacilitator
from .facilitators import DEFAULT_FACILITATOR, get_facilitator
from .ledger import DEFAULT_RPC_URLS, SolanaRpcLedger
from .types import FacilitatorInfo

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "facilitator": "X402_FACILITATOR",
    "facilitator_url": "X402_FACILITATOR_URL",
    "network": "X402_NETWORK",
    "rpc_url": "X402_RPC_URL",
    "payer_address": "X402_PAYER_ADDRESS",
    "verify_timeout": "X402_VERIFY_TIMEOUT_SECONDS",
    "settle_timeout": "X402_SETTLE_TIMEOUT_SECONDS",
    "supported_timeout": "X402_SUPPORTED_TIMEOUT_SECONDS",
}

DEFAULT_NETWORK = "solana-devnet"


@dataclass(frozen=True)
class ClientParameters:
    """Keyword-style overrides for :func:`load_client_config`."""

    facilitator: Optional[str] = None
    facilitator_url: Optional[str] = None
    network: Optional[str] = None
    rpc_url: Optional[str] = None
    payer_address: Optional[str] = None
    verify_timeout: Optional[float | str] = None
    settle_timeout: Optional[float | str] = None
    supported_timeout: Optional[float | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is not None:
                overrides[env_key] = str(value)
        return overrides


def _positive_seconds(values: Mapping[str, str], key: str, default: float) -> float:
    raw = values.get(key)
    if raw is None or raw == "":
        return default
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number of seconds, got '{raw}'") from exc
    if seconds <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return seconds


@dataclass(frozen=True)
class ClientConfig:
    facilitator_key: str
    facilitator_url: str
    network: str
    rpc_url: Optional[str]
    payer_address: Optional[str]
    verify_timeout: float = DEFAULT_VERIFY_TIMEOUT
    settle_timeout: float = DEFAULT_SETTLE_TIMEOUT
    supported_timeout: float = DEFAULT_SUPPORTED_TIMEOUT

    @property
    def facilitator(self) -> FacilitatorInfo:
        return get_facilitator(self.facilitator_key)

    def facilitator_client(self, **kwargs: Any) -> FacilitatorClient:
        return FacilitatorClient(
            verify_timeout=self.verify_timeout,
            settle_timeout=self.settle_timeout,
            supported_timeout=self.supported_timeout,
            **kwargs,
        )

    def ledger(self, **kwargs: Any) -> SolanaRpcLedger:
        if self.rpc_url is None:
            raise ConfigError(
                f"X402_RPC_URL must be provided for network '{self.network}'"
            )
        return SolanaRpcLedger(self.rpc_url, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        facilitator_key = values.get("X402_FACILITATOR", DEFAULT_FACILITATOR)
        try:
            info = get_facilitator(facilitator_key)
        except UnknownFacilitator as exc:
            raise ConfigError(str(exc)) from exc

        facilitator_url = (values.get("X402_FACILITATOR_URL") or info.url).rstrip("/")
        network = values.get("X402_NETWORK", DEFAULT_NETWORK)
        rpc_url = values.get("X402_RPC_URL") or DEFAULT_RPC_URLS.get(network)

        payer_address = values.get("X402_PAYER_ADDRESS") or None
        if payer_address is not None and not is_valid_address(payer_address, network):
            raise ConfigError(f"X402_PAYER_ADDRESS is not a valid {network} address")

        return cls(
            facilitator_key=facilitator_key,
            facilitator_url=facilitator_url,
            network=network,
            rpc_url=rpc_url,
            payer_address=payer_address,
            verify_timeout=_positive_seconds(
                values, "X402_VERIFY_TIMEOUT_SECONDS", DEFAULT_VERIFY_TIMEOUT
            ),
            settle_timeout=_positive_seconds(
                values, "X402_SETTLE_TIMEOUT_SECONDS", DEFAULT_SETTLE_TIMEOUT
            ),
            supported_timeout=_positive_seconds(
                values, "X402_SUPPORTED_TIMEOUT_SECONDS", DEFAULT_SUPPORTED_TIMEOUT
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
    ) -> "ClientConfig":
        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        for key in sorted(environment.variables):
            logging.debug("%s taken from %s", key, environment.source_of(key))
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    **kwargs: Any,
) -> ClientConfig:
    """
    Convenience wrapper around :meth:`ClientConfig.from_env`.

    Keyword arguments named after :class:`ClientParameters` fields are merged
    into ``parameters``.
    """
    if kwargs:
        unknown = set(kwargs) - set(_PARAMETER_TO_ENV_KEY)
        if unknown:
            raise TypeError(f"Unknown client parameter(s): {', '.join(sorted(unknown))}")
        base_params = asdict(parameters) if parameters is not None else {}
        merged = {**base_params, **{k: v for k, v in kwargs.items() if v is not None}}
        parameters = ClientParameters(**merged)
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
    )
