"""Result resolution — recover typed artifacts from an execution response.

Two extraction modes:

* **Event** — decode events in emission order and take the first one of
  the expected kind.
* **Created object** — filter ``Created`` object changes by exact outer
  type and exact first type parameter. Nexus reuses a few generic
  capability shapes (``CloneableOwnerCap<T>``) for many grants, so the
  parameter is what tells ``<OverTool>`` from ``<OverGas>``.

Matching is exact and positional. When several records match, the first
in response order wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from nexusctl.domain.changes import Created
from nexusctl.domain.errors import ArtifactNotFound
from nexusctl.domain.events import NexusEvent, UnknownEvent, decode_event

if TYPE_CHECKING:
    from nexusctl.domain.response import ExecutionResponse
    from nexusctl.domain.types import TypeSignature


@dataclass(frozen=True)
class EventQuery:
    """Take ``attribute`` of the first decoded ``variant`` whose type is ``kind``."""

    name: str
    kind: TypeSignature
    variant: type[NexusEvent]
    attribute: str


@dataclass(frozen=True)
class CreatedObjectQuery:
    """Take the id of the first created object of type ``outer<first_param, ..>``."""

    name: str
    outer: TypeSignature
    first_param: TypeSignature | None = None

    @property
    def expected(self) -> str:
        if self.first_param is None:
            return str(self.outer)
        return str(self.outer.with_params(self.first_param))


ArtifactQuery = EventQuery | CreatedObjectQuery


@dataclass(frozen=True)
class ResolvedArtifact:
    name: str
    object_id: str
    source: Literal["event", "object_change"]


class ResultResolver:
    """Matches response records against expected type signatures.

    *primitives_pkg*, when known, restricts event unwrapping to that
    package's ``EventWrapper``.
    """

    def __init__(self, primitives_pkg: str | None = None) -> None:
        self.primitives_pkg = primitives_pkg

    def resolve(
        self, response: ExecutionResponse, *queries: ArtifactQuery
    ) -> dict[str, ResolvedArtifact]:
        """Resolve every query or fail on the first one that has no match.

        Raises:
            ArtifactNotFound: A query matched no record.
        """
        artifacts: dict[str, ResolvedArtifact] = {}
        for query in queries:
            if isinstance(query, EventQuery):
                value = self.find_event(response, query)
                artifacts[query.name] = ResolvedArtifact(query.name, value, "event")
            else:
                object_id = self.find_created(response, query)
                artifacts[query.name] = ResolvedArtifact(query.name, object_id, "object_change")
        return artifacts

    def find_event(self, response: ExecutionResponse, query: EventQuery) -> str:
        for event in response.events:
            decoded = decode_event(event, self.primitives_pkg)
            if isinstance(decoded, UnknownEvent) or not isinstance(decoded, query.variant):
                continue
            if decoded.signature.same_type(query.kind):
                return str(getattr(decoded, query.attribute))
        raise ArtifactNotFound(
            f"No {query.kind.name} event in the transaction response",
            artifact=query.name,
            expected=str(query.kind),
            digest=response.digest,
        )

    def find_created(self, response: ExecutionResponse, query: CreatedObjectQuery) -> str:
        for change in response.object_changes:
            if isinstance(change, Created) and change.object_type.matches(
                query.outer, query.first_param
            ):
                return change.object_id
        raise ArtifactNotFound(
            f"Could not find the {query.expected} object ID in the transaction response",
            artifact=query.name,
            expected=query.expected,
            digest=response.digest,
        )
