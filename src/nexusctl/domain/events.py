"""Event records and their tagged decode into known Nexus event kinds.

Raw events are untyped ``{type, parsedJson}`` records. :func:`decode_event`
maps each one to exactly one variant: a known kind, or
:class:`UnknownEvent` when the type is unrecognised or the payload does not
fit the kind's shape. There is no silent fallthrough.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Self

from nexusctl.domain.idents import LeaderCap, MoveIdent, PrimitivesEvent, ToolRegistry
from nexusctl.domain.types import TypeSignature, normalize_address


@dataclass(frozen=True)
class Event:
    """A raw event emitted by an executed transaction."""

    kind_signature: TypeSignature
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_rpc(cls, raw: dict[str, Any]) -> Self:
        """Build from a JSON-RPC event record.

        Raises:
            ValueError: If the record has no parseable ``type``.
        """
        type_str = raw.get("type")
        if not isinstance(type_str, str):
            raise ValueError("Event record has no type")
        payload = raw.get("parsedJson")
        return cls(
            kind_signature=TypeSignature.parse(type_str),
            payload=payload if isinstance(payload, dict) else {},
        )


# ---------------------------------------------------------------------------
# Decoded variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NexusEvent:
    """Base of all decoded event variants.

    Every variant overrides :meth:`from_payload`; the base only declares it.
    """

    ident: ClassVar[MoveIdent | None] = None

    signature: TypeSignature

    @classmethod
    def from_payload(cls, signature: TypeSignature, payload: dict[str, Any]) -> Self:
        """Build the variant from an unwrapped payload.

        Raises:
            KeyError, TypeError, ValueError: The payload does not fit the kind.
        """
        raise NotImplementedError(f"{cls.__name__} does not decode payloads")


@dataclass(frozen=True)
class FoundingLeaderCapCreated(NexusEvent):
    ident: ClassVar[MoveIdent | None] = LeaderCap.FOUNDING_LEADER_CAP_CREATED

    network: str = ""

    @classmethod
    def from_payload(cls, signature: TypeSignature, payload: dict[str, Any]) -> Self:
        return cls(signature=signature, network=normalize_address(_id_field(payload, "network")))


@dataclass(frozen=True)
class ToolRegistered(NexusEvent):
    ident: ClassVar[MoveIdent | None] = ToolRegistry.TOOL_REGISTERED

    tool: str = ""
    tool_fqn: str = ""

    @classmethod
    def from_payload(cls, signature: TypeSignature, payload: dict[str, Any]) -> Self:
        return cls(
            signature=signature,
            tool=normalize_address(_id_field(payload, "tool")),
            tool_fqn=str(payload["tool_fqn"]),
        )


@dataclass(frozen=True)
class UnknownEvent(NexusEvent):
    """An event that is not a known Nexus kind (or failed to decode)."""

    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, signature: TypeSignature, payload: dict[str, Any]) -> Self:
        return cls(signature=signature, payload=payload)


EVENT_KINDS: dict[tuple[str, str], type[NexusEvent]] = {
    (kind.ident.module, kind.ident.name): kind
    for kind in (FoundingLeaderCapCreated, ToolRegistered)
    if kind.ident is not None
}


def decode_event(event: Event, primitives_pkg: str | None = None) -> NexusEvent:
    """Decode a raw event into a known variant or :class:`UnknownEvent`.

    Nexus wraps its events in ``primitives::event::EventWrapper<T>`` with
    the inner payload under ``event``; the wrapper is unwrapped first. With
    *primitives_pkg* only that package's wrapper is unwrapped. Without it any
    ``event::EventWrapper`` is, and the inner type's own address still has to
    match the query.
    """
    signature = event.kind_signature
    payload = event.payload
    wrapper = PrimitivesEvent.EVENT_WRAPPER
    if _is_wrapper(signature, wrapper, primitives_pkg):
        inner = signature.first_param
        if inner is None:
            return UnknownEvent.from_payload(signature, payload)
        signature = inner
        nested = payload.get("event")
        payload = nested if isinstance(nested, dict) else payload

    kind = EVENT_KINDS.get((signature.module, signature.name))
    if kind is None or not signature.is_struct:
        return UnknownEvent.from_payload(signature, payload)
    try:
        return kind.from_payload(signature, payload)
    except (KeyError, TypeError, ValueError):
        return UnknownEvent.from_payload(signature, payload)


def _is_wrapper(signature: TypeSignature, wrapper: MoveIdent, package: str | None) -> bool:
    if (signature.module, signature.name) != (wrapper.module, wrapper.name):
        return False
    return package is None or signature.address == normalize_address(package)


def _id_field(payload: dict[str, Any], key: str) -> str:
    """Read an object id that may be a bare string or ``{"id": ...}``."""
    value = payload[key]
    if isinstance(value, dict):
        value = value.get("id", value.get("bytes"))
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} is not an object id")
    return value
