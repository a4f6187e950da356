"""
Read-only access to the Solana ledger.

The payment helpers only need a recent blockhash (and, optionally, balances).
Anything that satisfies :class:`Ledger` can be plugged in; the default
:class:`SolanaRpcLedger` speaks JSON-RPC to a cluster endpoint.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, FrozenSet, List, Mapping, Optional, Protocol

import httpx

from .errors import LedgerUnavailable

__all__ = [
    "CAPABILITY_BALANCE",
    "CAPABILITY_LATEST_ANCHOR",
    "DEFAULT_RPC_URLS",
    "Ledger",
    "SolanaRpcLedger",
    "default_rpc_url",
]

CAPABILITY_LATEST_ANCHOR = "latest_anchor"
CAPABILITY_BALANCE = "balance"

DEFAULT_RPC_URLS: Mapping[str, str] = {
    "solana": "https://api.mainnet-beta.solana.com",
    "solana-devnet": "https://api.devnet.solana.com",
    "solana-testnet": "https://api.testnet.solana.com",
}


def default_rpc_url(network: str) -> str:
    try:
        return DEFAULT_RPC_URLS[network]
    except KeyError as exc:
        raise ValueError(f"No default RPC endpoint for network '{network}'") from exc


class Ledger(Protocol):
    """
    Minimal ledger surface consumed by the payload builder.

    ``capabilities`` names the optional operations an implementation offers.
    ``get_balance`` is only called when ``CAPABILITY_BALANCE`` is listed.
    """

    capabilities: FrozenSet[str]

    async def get_latest_anchor(self) -> str:
        ...

    async def get_balance(self, address: str) -> int:
        ...


class SolanaRpcLedger:
    capabilities: FrozenSet[str] = frozenset({CAPABILITY_LATEST_ANCHOR, CAPABILITY_BALANCE})

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = 10.0,
        commitment: str = "confirmed",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.commitment = commitment
        self._transport = transport
        self._ids = itertools.count(1)

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.rpc_url, json=body)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise LedgerUnavailable(f"{method} failed against {self.rpc_url}: {exc}") from exc
        except ValueError as exc:
            raise LedgerUnavailable(f"{method} returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise LedgerUnavailable(f"{method} returned an unexpected body: {data!r}")
        if data.get("error"):
            raise LedgerUnavailable(f"{method} failed: {data['error']}")
        return data.get("result")

    async def get_latest_anchor(self) -> str:
        result = await self._rpc("getLatestBlockhash", [{"commitment": self.commitment}])
        try:
            blockhash = result["value"]["blockhash"]
        except (KeyError, TypeError) as exc:
            raise LedgerUnavailable(f"getLatestBlockhash returned {result!r}") from exc
        logging.debug("Fetched recent blockhash %s from %s", blockhash, self.rpc_url)
        return blockhash

    async def get_balance(self, address: str) -> int:
        result = await self._rpc("getBalance", [address, {"commitment": self.commitment}])
        try:
            return int(result["value"])
        except (KeyError, TypeError, ValueError) as exc:
            raise LedgerUnavailable(f"getBalance returned {result!r}") from exc
