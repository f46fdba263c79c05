"""NetworkService — create a Nexus network and hand out leader caps.

Pipeline: FUND → BUILD → SUBMIT → RESOLVE → RESPOND
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from nexusctl.domain.errors import NexusError
from nexusctl.domain.events import FoundingLeaderCapCreated
from nexusctl.domain.idents import LeaderCap
from nexusctl.domain.transaction import MoveCall
from nexusctl.services.base import BaseService
from nexusctl.services.calls import CallBuilder, pure_addresses, pure_u64
from nexusctl.services.funding import FundingResolver, FundingRole
from nexusctl.services.resolve import EventQuery, ResultResolver
from nexusctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class NetworkService(BaseService):
    """Operations on Nexus networks."""

    def create(
        self,
        addresses: Sequence[str],
        *,
        count_leader_caps: int,
        gas_coin: str | None,
        gas_budget: int,
    ) -> ServiceResult:
        """Create a network and assign *count_leader_caps* leader caps to each address."""
        op = "create_network"
        ledger = self._ledger

        # ── FUND → BUILD → SUBMIT ────────────────────────────────────
        try:
            objects = ledger.objects
            sender = ledger.active_address()
            coins = FundingResolver(ledger).resolve(sender, [FundingRole("gas", gas_coin)])
            gas_price = ledger.reference_gas_price()

            ident = LeaderCap.CREATE_FOR_SELF_AND_ADDRESSES
            payload = CallBuilder().build(
                sender=sender,
                target=MoveCall(objects.workflow_pkg_id, ident.module, ident.name),
                arguments=[pure_u64(count_leader_caps), pure_addresses(addresses)],
                gas_coin=coins["gas"],
                gas_budget=gas_budget,
                gas_price=gas_price,
            )
            response = ledger.submit(payload)
        except NexusError as exc:
            return self._failure(op, exc)

        # ── RESOLVE ──────────────────────────────────────────────────
        # The transaction is already executed; a miss here is still a failure.
        query = EventQuery(
            name="network_id",
            kind=LeaderCap.FOUNDING_LEADER_CAP_CREATED.signature(objects.workflow_pkg_id),
            variant=FoundingLeaderCapCreated,
            attribute="network",
        )
        try:
            artifacts = ResultResolver(objects.primitives_pkg_id).resolve(response, query)
        except NexusError as exc:
            return self._failure(op, exc, digest=response.digest)

        network_id = artifacts["network_id"].object_id
        log.info("network.created", network_id=network_id, digest=response.digest)

        # ── RESPOND ──────────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={"digest": response.digest, "network_id": network_id},
            meta={
                "sender": sender,
                "gas_coin": coins["gas"].object_id,
                "gas_budget": gas_budget,
                "gas_price": gas_price,
                "leader_cap_addresses": len(addresses),
            },
        )
