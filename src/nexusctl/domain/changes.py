"""Object-change records as a tagged variant.

The ledger reports one record per touched object, tagged by ``type``.
Unrecognised tags and unparseable object types decode to
:class:`UnknownChange` instead of being dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nexusctl.domain.types import TypeSignature, normalize_address


@dataclass(frozen=True)
class ObjectChange:
    object_id: str


@dataclass(frozen=True)
class Created(ObjectChange):
    object_type: TypeSignature


@dataclass(frozen=True)
class Mutated(ObjectChange):
    object_type: TypeSignature


@dataclass(frozen=True)
class Transferred(ObjectChange):
    object_type: TypeSignature


@dataclass(frozen=True)
class Deleted(ObjectChange):
    object_type: TypeSignature


@dataclass(frozen=True)
class Wrapped(ObjectChange):
    object_type: TypeSignature


@dataclass(frozen=True)
class Published(ObjectChange):
    modules: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnknownChange(ObjectChange):
    raw: dict[str, Any] = field(default_factory=dict)


_TYPED_CHANGES: dict[str, type[Created | Mutated | Transferred | Deleted | Wrapped]] = {
    "created": Created,
    "mutated": Mutated,
    "transferred": Transferred,
    "deleted": Deleted,
    "wrapped": Wrapped,
}


def parse_object_change(raw: dict[str, Any]) -> ObjectChange:
    """Decode one JSON-RPC ``objectChanges`` entry."""
    tag = raw.get("type")
    object_id = raw.get("objectId") or raw.get("packageId") or ""

    try:
        object_id = normalize_address(str(object_id)) if object_id else ""
        if tag == "published":
            return Published(object_id=object_id, modules=tuple(raw.get("modules", ())))
        change_cls = _TYPED_CHANGES.get(str(tag))
        if change_cls is None or not object_id:
            return UnknownChange(object_id=object_id, raw=raw)
        object_type = TypeSignature.parse(str(raw.get("objectType", "")))
    except ValueError:
        return UnknownChange(object_id=str(object_id), raw=raw)
    return change_cls(object_id=object_id, object_type=object_type)
