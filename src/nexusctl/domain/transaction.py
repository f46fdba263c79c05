"""Submittable transaction payload for a single Move call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MoveCall:
    """Target of a call into a remote Move program."""

    package: str
    module: str
    function: str

    def __str__(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


@dataclass(frozen=True)
class TransactionPayload:
    """Everything the ledger needs to turn a call into transaction bytes.

    Arguments are already encoded as Sui JSON values; nothing here checks
    them against the callee's signature.
    """

    sender: str
    call: MoveCall
    type_arguments: tuple[str, ...]
    arguments: tuple[Any, ...]
    gas_object_id: str
    gas_budget: int
    gas_price: int
