"""Ledger value types: network tiers, object references, coins, type signatures.

Addresses are normalised to ``0x`` + 64 lowercase hex digits everywhere so
that short framework addresses (``0x2``) compare equal to their long form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

MIST_PER_SUI = 1_000_000_000
SUI_COIN_TYPE = "0x2::sui::SUI"

_ADDRESS_HEX_LEN = 64


class NetworkTier(StrEnum):
    """Deployment environment of the Sui ledger."""

    LOCALNET = "localnet"
    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET = "mainnet"

    @property
    def allows_top_up(self) -> bool:
        """Whether a faucet may fund wallets on this tier."""
        return self is not NetworkTier.MAINNET


def normalize_address(address: str) -> str:
    """Pad a hex address to its canonical 32-byte form.

    Examples:
        >>> normalize_address("0x2")[-4:]
        '0002'
        >>> len(normalize_address("0xABC"))
        66

    Raises:
        ValueError: If *address* is not ``0x``-prefixed hex of at most 32 bytes.
    """
    raw = address.strip().lower()
    if not raw.startswith("0x"):
        raise ValueError(f"Address must start with 0x: {address!r}")
    digits = raw[2:]
    if not digits or len(digits) > _ADDRESS_HEX_LEN:
        raise ValueError(f"Address has invalid length: {address!r}")
    try:
        int(digits, 16)
    except ValueError as exc:
        raise ValueError(f"Address is not hex: {address!r}") from exc
    return "0x" + digits.rjust(_ADDRESS_HEX_LEN, "0")


@dataclass(frozen=True)
class ObjectRef:
    """A versioned reference to a ledger object."""

    object_id: str
    version: int
    digest: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_id", normalize_address(self.object_id))


@dataclass(frozen=True)
class Coin:
    """A spendable SUI coin owned by a wallet address.

    Identity is the object id; two Coin values with the same id are the
    same ledger object even if fetched at different versions.
    """

    object_id: str
    balance: int
    object_ref: ObjectRef

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_id", normalize_address(self.object_id))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coin):
            return NotImplemented
        return self.object_id == other.object_id

    def __hash__(self) -> int:
        return hash(self.object_id)


@dataclass(frozen=True)
class TypeSignature:
    """The declared type of a ledger object or event.

    Primitive type parameters (``u64``, ``vector<u8>``...) are represented
    with an empty address and module. They compare by name alone, and the
    empty address keeps them from ever matching a struct.
    """

    address: str
    module: str
    name: str
    type_params: tuple[TypeSignature, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.address:
            object.__setattr__(self, "address", normalize_address(self.address))

    @property
    def is_struct(self) -> bool:
        return bool(self.address)

    @property
    def first_param(self) -> TypeSignature | None:
        return self.type_params[0] if self.type_params else None

    def same_type(self, other: TypeSignature) -> bool:
        """Exact identity on address, module, and name (type params ignored)."""
        return (self.address, self.module, self.name) == (other.address, other.module, other.name)

    def matches(self, outer: TypeSignature, first_param: TypeSignature | None = None) -> bool:
        """Match *outer* exactly and, if given, the first type parameter positionally."""
        if not self.same_type(outer):
            return False
        if first_param is None:
            return True
        own = self.first_param
        return own is not None and own.same_type(first_param)

    def with_params(self, *params: TypeSignature) -> TypeSignature:
        return TypeSignature(self.address, self.module, self.name, tuple(params))

    @classmethod
    def parse(cls, text: str) -> TypeSignature:
        """Parse a Move type string such as ``0x2::coin::Coin<0x2::sui::SUI>``.

        Raises:
            ValueError: On unbalanced brackets or a malformed struct path.
        """
        text = text.strip()
        if not text:
            raise ValueError("Empty type string")

        head, params = text, ""
        if text.endswith(">"):
            open_at = text.find("<")
            if open_at == -1:
                raise ValueError(f"Unbalanced type parameters in {text!r}")
            head, params = text[:open_at], text[open_at + 1 : -1]
        elif "<" in text:
            raise ValueError(f"Unbalanced type parameters in {text!r}")

        type_params = tuple(cls.parse(part) for part in _split_params(params)) if params else ()

        parts = head.split("::")
        if len(parts) == 1:
            return cls("", "", head, type_params)
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Malformed struct type {text!r}")
        address, module, name = parts
        return cls(address, module, name, type_params)

    def __str__(self) -> str:
        head = f"{self.address}::{self.module}::{self.name}" if self.is_struct else self.name
        if not self.type_params:
            return head
        return f"{head}<{', '.join(str(p) for p in self.type_params)}>"


def _split_params(params: str) -> list[str]:
    """Split a type parameter list on top-level commas."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in params:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced type parameters in {params!r}")
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise ValueError(f"Unbalanced type parameters in {params!r}")
    parts.append("".join(current).strip())
    if any(not p for p in parts):
        raise ValueError(f"Empty type parameter in {params!r}")
    return parts
