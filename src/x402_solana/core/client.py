"""
HTTP client for the x402 facilitator endpoints.

``verify`` and ``settle`` never raise: transport and protocol failures are
folded into the returned result. ``get_supported_methods`` raises instead, so
callers can fall back to the static registry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Union

import httpx

from .errors import FacilitatorError, FacilitatorProtocolError, FacilitatorTransportError
from .types import (
    X402_VERSION,
    PaymentRequirements,
    SettlementResult,
    SupportedKind,
    VerificationResult,
)

__all__ = [
    "DEFAULT_SETTLE_TIMEOUT",
    "DEFAULT_SUPPORTED_TIMEOUT",
    "DEFAULT_VERIFY_TIMEOUT",
    "REQUEST_TIMEOUT_REASON",
    "FacilitatorClient",
    "get_supported_methods",
    "settle_payment",
    "verify_payment",
]

DEFAULT_VERIFY_TIMEOUT = 30.0
DEFAULT_SETTLE_TIMEOUT = 30.0
DEFAULT_SUPPORTED_TIMEOUT = 10.0
REQUEST_TIMEOUT_REASON = "Request timeout"

_JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

Requirements = Union[PaymentRequirements, Mapping[str, Any]]


def _requirements_body(requirements: Requirements) -> Dict[str, Any]:
    if isinstance(requirements, PaymentRequirements):
        return requirements.to_dict()
    return dict(requirements)


def _endpoint(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path}"


class FacilitatorClient:
    """
    Stateless facilitator client.

    Each call opens its own short-lived ``httpx.AsyncClient`` and is bounded by
    a wall-clock deadline; nothing is shared between concurrent calls.
    """

    def __init__(
        self,
        *,
        verify_timeout: float = DEFAULT_VERIFY_TIMEOUT,
        settle_timeout: float = DEFAULT_SETTLE_TIMEOUT,
        supported_timeout: float = DEFAULT_SUPPORTED_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.verify_timeout = verify_timeout
        self.settle_timeout = settle_timeout
        self.supported_timeout = supported_timeout
        self._transport = transport

    async def _request(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        async def send() -> httpx.Response:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                if body is None:
                    return await client.request(
                        method, url, headers={"Accept": "application/json"}
                    )
                return await client.request(method, url, json=body, headers=_JSON_HEADERS)

        response = await self._with_deadline(send(), timeout)
        if not response.is_success:
            detail = response.text or response.reason_phrase
            raise FacilitatorProtocolError(response.status_code, detail)
        try:
            return response.json()
        except ValueError as exc:
            raise FacilitatorProtocolError(
                None, f"Failed to parse JSON from facilitator at {url}: {response.text}"
            ) from exc

    @staticmethod
    async def _with_deadline(call: Awaitable[httpx.Response], timeout: float) -> httpx.Response:
        try:
            return await asyncio.wait_for(call, timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise FacilitatorTransportError(REQUEST_TIMEOUT_REASON, timed_out=True) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FacilitatorTransportError(str(exc) or type(exc).__name__) from exc

    def _payment_body(self, payment_header: str, requirements: Requirements) -> Dict[str, Any]:
        return {
            "x402Version": X402_VERSION,
            "paymentHeader": payment_header,
            "paymentRequirements": _requirements_body(requirements),
        }

    async def verify(
        self,
        facilitator_url: str,
        payment_header: str,
        requirements: Requirements,
    ) -> VerificationResult:
        verify_url = _endpoint(facilitator_url, "verify")
        logging.info("Submitting payment for verification to %s", verify_url)
        try:
            payload = await self._request(
                "POST",
                verify_url,
                timeout=self.verify_timeout,
                body=self._payment_body(payment_header, requirements),
            )
        except FacilitatorError as exc:
            logging.error("Payment verification error: %s", exc)
            return VerificationResult.failure(str(exc) or "Verification request failed")
        if not isinstance(payload, dict):
            logging.error("Facilitator returned a non-object verification body: %r", payload)
            return VerificationResult.failure("Malformed verification response")
        return VerificationResult.from_response(payload)

    async def settle(
        self,
        facilitator_url: str,
        payment_header: str,
        requirements: Requirements,
    ) -> SettlementResult:
        settle_url = _endpoint(facilitator_url, "settle")
        logging.info("Submitting payment for settlement to %s", settle_url)
        try:
            payload = await self._request(
                "POST",
                settle_url,
                timeout=self.settle_timeout,
                body=self._payment_body(payment_header, requirements),
            )
        except FacilitatorError as exc:
            logging.error("Payment settlement error: %s", exc)
            return SettlementResult.failure(str(exc) or "Settlement request failed")
        if not isinstance(payload, dict):
            logging.error("Facilitator returned a non-object settlement body: %r", payload)
            return SettlementResult.failure("Malformed settlement response")
        return SettlementResult.from_response(payload)

    async def get_supported_methods(self, facilitator_url: str) -> List[SupportedKind]:
        """
        Query ``GET /supported``.

        Raises :class:`FacilitatorTransportError` or
        :class:`FacilitatorProtocolError` on failure.
        """
        supported_url = _endpoint(facilitator_url, "supported")
        logging.info("Fetching supported payment kinds from %s", supported_url)
        try:
            payload = await self._request("GET", supported_url, timeout=self.supported_timeout)
        except FacilitatorTransportError as exc:
            if exc.timed_out:
                logging.error("Request timeout: facilitator at %s not responding", facilitator_url)
            else:
                logging.error("Failed to get supported methods: %s", exc)
            raise

        kinds = payload.get("kinds") if isinstance(payload, dict) else None
        if kinds is None:
            return []
        try:
            return [SupportedKind.from_dict(kind) for kind in kinds]
        except (KeyError, TypeError) as exc:
            raise FacilitatorProtocolError(
                None, f"Malformed /supported response from {facilitator_url}: {payload!r}"
            ) from exc


_default_client = FacilitatorClient()


async def verify_payment(
    facilitator_url: str,
    payment_header: str,
    requirements: Requirements,
) -> VerificationResult:
    return await _default_client.verify(facilitator_url, payment_header, requirements)


async def settle_payment(
    facilitator_url: str,
    payment_header: str,
    requirements: Requirements,
) -> SettlementResult:
    return await _default_client.settle(facilitator_url, payment_header, requirements)


async def get_supported_methods(facilitator_url: str) -> List[SupportedKind]:
    return await _default_client.get_supported_methods(facilitator_url)
