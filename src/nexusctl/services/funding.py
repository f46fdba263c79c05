"""Funding resolution — pick one distinct coin per funding role.

Pipeline: ENUMERATE → CHECK EXPLICIT → TOP UP (once) → ASSIGN → VERIFY

The faucet is asked at most once per resolution and never retried: the
testnet faucet rate-limits, and a local retry would only mask that.
A top-up is not rolled back if resolution later fails.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from nexusctl.domain.errors import (
    DuplicateFundingObject,
    InsufficientFunds,
    ObjectNotFound,
    TopUpFailed,
)
from nexusctl.domain.types import Coin, normalize_address

if TYPE_CHECKING:
    from nexusctl.infrastructure.ledger import Ledger

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FundingRole:
    """A named slot to fill with a coin, optionally pinned to an object id."""

    name: str
    object_id: str | None = None

    def __post_init__(self) -> None:
        if self.object_id is not None:
            object.__setattr__(self, "object_id", normalize_address(self.object_id))


class FundingResolver:
    """Selects funding coins from the active wallet's holdings."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def resolve(self, address: str, roles: Sequence[FundingRole]) -> dict[str, Coin]:
        """Return one coin per role, keyed by role name in role order.

        Raises:
            ObjectNotFound: An explicit object id is not among the wallet's coins.
            InsufficientFunds: Fewer coins than roles, after the one permitted top-up.
            DuplicateFundingObject: Two roles resolved to the same coin.
        """
        names = [role.name for role in roles]
        if len(set(names)) != len(names):
            raise ValueError(f"Funding role names must be unique: {names}")

        tier = self._ledger.tier
        required = len(roles)
        coins = _distinct(self._ledger.enumerate_coins(address))

        # A faucet cannot produce a specific object id, so check before topping up.
        for role in roles:
            if role.object_id is not None:
                _find_explicit(coins, role)

        if len(coins) < required:
            if not tier.allows_top_up:
                raise InsufficientFunds(
                    f"The wallet holds {len(coins)} coins but {required} are needed",
                    tier=str(tier),
                    address=address,
                    required=required,
                    available=len(coins),
                )

            top_up_error: str | None = None
            log.info("funding.top_up", tier=str(tier), address=address, available=len(coins))
            try:
                self._ledger.request_funds(tier, address)
            except TopUpFailed as exc:
                top_up_error = exc.message
                log.warning("funding.top_up_failed", tier=str(tier), error=exc.message)

            coins = _distinct(self._ledger.enumerate_coins(address))
            if len(coins) < required:
                raise InsufficientFunds(
                    f"The wallet holds {len(coins)} coins after a faucet top-up "
                    f"but {required} are needed",
                    tier=str(tier),
                    address=address,
                    required=required,
                    available=len(coins),
                    top_up_error=top_up_error,
                )

        pool = list(coins)
        selected: dict[str, Coin] = {}
        for role in roles:
            if role.object_id is not None:
                selected[role.name] = _find_explicit(coins, role)
            else:
                selected[role.name] = pool.pop(0)

        _verify_distinct(selected)
        log.debug(
            "funding.resolved",
            address=address,
            coins={name: coin.object_id for name, coin in selected.items()},
        )
        return selected


def _distinct(coins: Sequence[Coin]) -> list[Coin]:
    """Drop repeated object ids, keeping enumeration order."""
    seen: set[str] = set()
    result: list[Coin] = []
    for coin in coins:
        if coin.object_id not in seen:
            seen.add(coin.object_id)
            result.append(coin)
    return result


def _find_explicit(coins: Sequence[Coin], role: FundingRole) -> Coin:
    for coin in coins:
        if coin.object_id == role.object_id:
            return coin
    raise ObjectNotFound(
        f"Coin '{role.object_id}' not found in wallet",
        object_id=role.object_id,
        role=role.name,
    )


def _verify_distinct(selected: dict[str, Coin]) -> None:
    owners: dict[str, str] = {}
    for name, coin in selected.items():
        other = owners.get(coin.object_id)
        if other is not None:
            raise DuplicateFundingObject(
                f"Roles '{other}' and '{name}' both resolved to coin '{coin.object_id}'",
                object_id=coin.object_id,
                roles=[other, name],
            )
        owners[coin.object_id] = name
