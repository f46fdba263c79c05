"""Sui fullnode JSON-RPC client.

Thin wrapper over :class:`httpx.Client`. Each call is issued exactly once;
retry policy, if any, belongs to the caller. Transport and protocol errors
are translated into the pipeline's error taxonomy at this boundary.
"""

from __future__ import annotations

import base64
import binascii
import logging
import struct
from typing import Any

import httpx

from nexusctl.domain.errors import NexusError, RpcError, SubmissionFailed, TransactionBuildFailed
from nexusctl.domain.response import ExecutionResponse
from nexusctl.domain.transaction import TransactionPayload
from nexusctl.domain.types import SUI_COIN_TYPE, Coin, ObjectRef

logger = logging.getLogger(__name__)

_PAGE_SIZE = 50

EXECUTE_OPTIONS = {
    "showEffects": True,
    "showEvents": True,
    "showObjectChanges": True,
}


class SuiRpcClient:
    """Synchronous JSON-RPC client for a Sui fullnode."""

    def __init__(
        self,
        url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self._client = httpx.Client(
            timeout=timeout,
            auth=httpx.BasicAuth(*auth) if auth else None,
            transport=transport,
        )
        self._next_id = 0

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def enumerate_coins(self, address: str, coin_type: str = SUI_COIN_TYPE) -> list[Coin]:
        """All coins of *coin_type* owned by *address*, in fullnode order."""
        coins: list[Coin] = []
        cursor: str | None = None
        while True:
            page = self._call("suix_getCoins", [address, coin_type, cursor, _PAGE_SIZE])
            for item in page.get("data", []):
                coins.append(_coin_from_rpc(item))
            if not page.get("hasNextPage"):
                break
            cursor = page.get("nextCursor")
        logger.debug("Enumerated %d coins for %s", len(coins), address)
        return coins

    def reference_gas_price(self) -> int:
        return int(self._call("suix_getReferenceGasPrice", []))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def build_move_call(self, payload: TransactionPayload) -> str:
        """Have the fullnode serialise *payload*; returns base64 tx bytes.

        ``unsafe_moveCall`` takes no gas price and fills in whatever the
        fullnode's reference price is at build time. ``payload.gas_price`` is
        then written into the returned bytes, so the transaction is priced
        with the value read once for this command.
        """
        call = payload.call
        result = self._call(
            "unsafe_moveCall",
            [
                payload.sender,
                call.package,
                call.module,
                call.function,
                list(payload.type_arguments),
                list(payload.arguments),
                payload.gas_object_id,
                str(payload.gas_budget),
            ],
            error=TransactionBuildFailed,
        )
        tx_bytes = result.get("txBytes") if isinstance(result, dict) else None
        if not tx_bytes:
            raise TransactionBuildFailed(
                "Fullnode returned no transaction bytes", target=str(call)
            )
        return apply_gas_price(str(tx_bytes), price=payload.gas_price, budget=payload.gas_budget)

    def execute(self, tx_bytes: str, signatures: list[str]) -> ExecutionResponse:
        """Submit signed bytes and wait for local execution.

        Raises:
            SubmissionFailed: On transport/RPC errors or a failed execution.
        """
        raw = self._call(
            "sui_executeTransactionBlock",
            [tx_bytes, signatures, EXECUTE_OPTIONS, "WaitForLocalExecution"],
            error=SubmissionFailed,
        )
        response = ExecutionResponse.from_rpc(raw)
        if not response.ok:
            raise SubmissionFailed(
                f"Transaction {response.digest} failed: {response.error}",
                digest=response.digest,
                abort=response.error,
            )
        return response

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _call(
        self,
        method: str,
        params: list[Any],
        *,
        error: type[NexusError] = RpcError,
    ) -> Any:
        self._next_id += 1
        body = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        try:
            resp = self._client.post(self.url, json=body)
        except httpx.HTTPError as exc:
            raise error(f"Sui RPC {method} failed: {exc}", method=method, url=self.url) from exc

        if resp.status_code != 200:
            raise error(
                f"Sui RPC {method} returned status {resp.status_code}",
                method=method,
                url=self.url,
                status=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise error(f"Sui RPC {method} returned invalid JSON", method=method) from exc

        if not isinstance(data, dict):
            raise error(f"Sui RPC {method} returned a malformed envelope", method=method)
        if "error" in data:
            rpc_error = data["error"] or {}
            message = (
                rpc_error.get("message", rpc_error) if isinstance(rpc_error, dict) else rpc_error
            )
            raise error(f"Sui RPC error in {method}: {message}", method=method, rpc_error=rpc_error)
        return data.get("result")


def apply_gas_price(tx_bytes: str, *, price: int, budget: int) -> str:
    """Rewrite the gas price inside BCS ``TransactionData`` bytes.

    ``GasData`` ends in ``price: u64, budget: u64`` and is followed only by
    the expiration, either ``None`` (one zero byte) or ``Epoch(u64)``. The
    known budget pins down which layout the bytes use.

    Raises:
        TransactionBuildFailed: If the bytes are not base64 or the gas
            fields cannot be located.
    """
    try:
        raw = bytearray(base64.b64decode(tx_bytes, validate=True))
    except (binascii.Error, ValueError) as exc:
        raise TransactionBuildFailed("Fullnode returned undecodable transaction bytes") from exc

    encoded_budget = struct.pack("<Q", budget)
    budget_at: int | None = None
    if len(raw) >= 17 and raw[-1] == 0 and raw[-9:-1] == encoded_budget:
        budget_at = len(raw) - 9
    elif len(raw) >= 25 and raw[-9] == 1 and raw[-17:-9] == encoded_budget:
        budget_at = len(raw) - 17
    if budget_at is None:
        raise TransactionBuildFailed(
            "Could not locate gas data in the built transaction", gas_budget=budget
        )

    price_at = budget_at - 8
    (built_price,) = struct.unpack_from("<Q", raw, price_at)
    if built_price != price:
        logger.debug("Repricing transaction gas from %d to %d", built_price, price)
        struct.pack_into("<Q", raw, price_at, price)
    return base64.b64encode(bytes(raw)).decode("ascii")


def _coin_from_rpc(item: dict[str, Any]) -> Coin:
    ref = ObjectRef(item["coinObjectId"], int(item["version"]), item["digest"])
    return Coin(object_id=ref.object_id, balance=int(item["balance"]), object_ref=ref)
