"""ToolService — register an off-chain tool in the Nexus tool registry.

Pipeline: FETCH META → FUND (gas + collateral) → BUILD → SUBMIT → RESOLVE → RESPOND

Registration creates two ``CloneableOwnerCap`` objects that share their
outer type and differ only in the type parameter (``OverTool`` for the
tool entry, ``OverGas`` for its gas settlement). Both must be resolved.
"""

from __future__ import annotations

import structlog

from nexusctl.domain.errors import NexusError
from nexusctl.domain.idents import SUI_CLOCK_OBJECT_ID, Gas, OwnerCap, ToolRegistry
from nexusctl.domain.transaction import MoveCall
from nexusctl.services.base import BaseService
from nexusctl.services.calls import CallBuilder, object_arg, pure_string, pure_u64
from nexusctl.services.funding import FundingResolver, FundingRole
from nexusctl.services.resolve import CreatedObjectQuery, ResultResolver
from nexusctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class ToolService(BaseService):
    """Operations on Nexus tools."""

    def register(
        self,
        url: str,
        *,
        collateral_coin: str | None,
        invocation_cost: int,
        gas_coin: str | None,
        gas_budget: int,
    ) -> ServiceResult:
        """Register the tool served at *url*, posting a collateral coin."""
        op = "register_tool"
        ledger = self._ledger

        try:
            meta = ledger.fetch_tool_meta(url)
            objects = ledger.objects
            sender = ledger.active_address()
            coins = FundingResolver(ledger).resolve(
                sender,
                [FundingRole("gas", gas_coin), FundingRole("collateral", collateral_coin)],
            )
            gas_price = ledger.reference_gas_price()

            ident = ToolRegistry.REGISTER_OFF_CHAIN_TOOL_FOR_SELF
            payload = CallBuilder().build(
                sender=sender,
                target=MoveCall(objects.workflow_pkg_id, ident.module, ident.name),
                arguments=[
                    object_arg(objects.tool_registry.object_id),
                    object_arg(objects.gas_service.object_id),
                    pure_string(meta.fqn),
                    pure_string(meta.url),
                    pure_string(meta.description),
                    pure_string(meta.schema_json("input")),
                    pure_string(meta.schema_json("output")),
                    object_arg(coins["collateral"].object_id),
                    pure_u64(invocation_cost),
                    object_arg(SUI_CLOCK_OBJECT_ID),
                ],
                gas_coin=coins["gas"],
                gas_budget=gas_budget,
                gas_price=gas_price,
            )
            response = ledger.submit(payload)
        except NexusError as exc:
            return self._failure(op, exc)

        owner_cap = OwnerCap.CLONEABLE_OWNER_CAP.signature(objects.primitives_pkg_id)
        queries = (
            CreatedObjectQuery(
                name="owner_cap_over_tool_id",
                outer=owner_cap,
                first_param=ToolRegistry.OVER_TOOL.signature(objects.workflow_pkg_id),
            ),
            CreatedObjectQuery(
                name="owner_cap_over_gas_id",
                outer=owner_cap,
                first_param=Gas.OVER_GAS.signature(objects.workflow_pkg_id),
            ),
        )
        try:
            artifacts = ResultResolver(objects.primitives_pkg_id).resolve(response, *queries)
        except NexusError as exc:
            return self._failure(op, exc, digest=response.digest)

        log.info("tool.registered", tool_fqn=meta.fqn, digest=response.digest)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "digest": response.digest,
                "tool_fqn": meta.fqn,
                **{name: artifact.object_id for name, artifact in artifacts.items()},
            },
            meta={
                "sender": sender,
                "url": meta.url,
                "gas_coin": coins["gas"].object_id,
                "collateral_coin": coins["collateral"].object_id,
                "invocation_cost": invocation_cost,
                "gas_budget": gas_budget,
                "gas_price": gas_price,
            },
        )
