"""ExecutionResponse — the ledger's structured result of one transaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Self

from nexusctl.domain.changes import ObjectChange, parse_object_change
from nexusctl.domain.events import Event
from nexusctl.domain.types import TypeSignature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResponse:
    """Read-only view of an executed transaction.

    Attributes:
        digest: Transaction digest.
        events: Emitted events, in emission order.
        object_changes: Object-change records, in response order.
        status: ``"success"`` or ``"failure"`` from the effects block.
        error: Abort message reported by the ledger when ``status`` is failure.
    """

    digest: str
    events: tuple[Event, ...] = ()
    object_changes: tuple[ObjectChange, ...] = ()
    status: str = "success"
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_rpc(cls, raw: dict[str, Any]) -> Self:
        """Build from a ``sui_executeTransactionBlock`` result.

        Events whose type cannot be parsed are kept as unknown-kind events
        so that event positions stay faithful to the response.
        """
        events: list[Event] = []
        for raw_event in raw.get("events") or []:
            try:
                events.append(Event.from_rpc(raw_event))
            except ValueError:
                logger.debug("Unparseable event type in %s: %r", raw.get("digest"), raw_event)
                events.append(_opaque_event(raw_event))

        changes = tuple(parse_object_change(c) for c in raw.get("objectChanges") or [])

        status_block = (raw.get("effects") or {}).get("status") or {}
        return cls(
            digest=str(raw.get("digest", "")),
            events=tuple(events),
            object_changes=changes,
            status=str(status_block.get("status", "success")),
            error=status_block.get("error"),
        )


def _opaque_event(raw: dict[str, Any]) -> Event:
    payload = raw.get("parsedJson")
    return Event(
        kind_signature=TypeSignature("", "", str(raw.get("type", "?"))),
        payload=payload if isinstance(payload, dict) else {},
    )

