"""Identifiers of the Nexus Move modules, functions, and types.

Package addresses are deployment-specific and come from configuration;
only the ``module::name`` part is fixed here.
"""

from __future__ import annotations

from dataclasses import dataclass

from nexusctl.domain.types import TypeSignature

SUI_CLOCK_OBJECT_ID = "0x6"


@dataclass(frozen=True)
class MoveIdent:
    """A ``module::name`` pair inside some package."""

    module: str
    name: str

    def signature(self, package: str, *type_params: TypeSignature) -> TypeSignature:
        """Bind this identifier to a package address."""
        return TypeSignature(package, self.module, self.name, tuple(type_params))


# --- nexus_primitives ---


class PrimitivesEvent:
    EVENT_WRAPPER = MoveIdent("event", "EventWrapper")


class OwnerCap:
    CLONEABLE_OWNER_CAP = MoveIdent("owner_cap", "CloneableOwnerCap")


# --- nexus_workflow ---


class LeaderCap:
    CREATE_FOR_SELF_AND_ADDRESSES = MoveIdent("leader_cap", "create_for_self_and_addresses")
    FOUNDING_LEADER_CAP_CREATED = MoveIdent("leader_cap", "FoundingLeaderCapCreatedEvent")


class ToolRegistry:
    REGISTER_OFF_CHAIN_TOOL_FOR_SELF = MoveIdent(
        "tool_registry", "register_off_chain_tool_for_self"
    )
    OVER_TOOL = MoveIdent("tool_registry", "OverTool")
    TOOL_REGISTERED = MoveIdent("tool_registry", "ToolRegisteredEvent")


class Gas:
    OVER_GAS = MoveIdent("gas", "OverGas")
