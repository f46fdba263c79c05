"""Call building — marshal a Move call into a submittable payload.

Arguments are encoded as Sui JSON values by the helpers below. The builder
does not check them against the callee; a malformed encoding surfaces when
the fullnode serialises the payload, as TransactionBuildFailed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from nexusctl.domain.transaction import MoveCall, TransactionPayload
from nexusctl.domain.types import Coin, normalize_address

logger = logging.getLogger(__name__)


# ── Argument encoding ────────────────────────────────────────────────


def pure_u64(value: int) -> str:
    """u64/u32 arguments travel as decimal strings."""
    return str(value)


def pure_string(value: str) -> str:
    return value


def pure_addresses(addresses: Iterable[str]) -> list[str]:
    """``vector<address>`` as a JSON array of normalised addresses."""
    return [normalize_address(a) for a in addresses]


def object_arg(object_id: str) -> str:
    """An owned or shared object passed by id."""
    return normalize_address(object_id)


# ── Builder ──────────────────────────────────────────────────────────


class CallBuilder:
    """Builds a :class:`TransactionPayload` for a single Move call."""

    def build(
        self,
        *,
        sender: str,
        target: MoveCall,
        arguments: Sequence[Any],
        gas_coin: Coin,
        gas_budget: int,
        gas_price: int,
        type_arguments: Sequence[str] = (),
    ) -> TransactionPayload:
        payload = TransactionPayload(
            sender=sender,
            call=target,
            type_arguments=tuple(type_arguments),
            arguments=tuple(arguments),
            gas_object_id=gas_coin.object_id,
            gas_budget=gas_budget,
            gas_price=gas_price,
        )
        logger.debug(
            "Built call to %s with %d arguments (gas coin %s, budget %d, price %d)",
            target,
            len(payload.arguments),
            gas_coin.object_id,
            gas_budget,
            gas_price,
        )
        return payload
