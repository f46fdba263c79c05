"""Tests for Ledger — component wiring and the submit pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from nexusctl.config.models import SuiConfig
from nexusctl.config.settings import NexusSettings
from nexusctl.domain.errors import ConfigurationMissing
from nexusctl.domain.transaction import MoveCall, TransactionPayload
from nexusctl.domain.types import NetworkTier, normalize_address
from nexusctl.infrastructure.ledger import Ledger
from nexusctl.infrastructure.rpc import SuiRpcClient
from nexusctl.infrastructure.wallet import WalletContext
from tests.fakes import SENDER, make_objects, rpc_response, tx_bytes


class _Signer(WalletContext):
    def __init__(self) -> None:
        super().__init__(Path("client.yaml"), {"active_address": SENDER})
        self.signed: list[tuple[str, str]] = []

    def sign(self, address: str, tx_bytes: str) -> str:
        self.signed.append((address, tx_bytes))
        return "SIG"


def _rpc(methods: list[str]) -> SuiRpcClient:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        methods.append(body["method"])
        results: dict[str, Any] = {
            "unsafe_moveCall": {"txBytes": tx_bytes(750, 10)},
            "sui_executeTransactionBlock": rpc_response(digest="Dg9"),
        }
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": body["id"], "result": results[body["method"]]}
        )

    return SuiRpcClient("http://fullnode.test", transport=httpx.MockTransport(handler))


class TestLedger:
    def test_tier_and_objects(self) -> None:
        settings = NexusSettings(sui=SuiConfig(net=NetworkTier.DEVNET), nexus=make_objects())
        ledger = Ledger(settings)
        assert ledger.tier is NetworkTier.DEVNET
        assert ledger.objects.network_id == normalize_address("0xd4")

    def test_missing_nexus_section(self) -> None:
        ledger = Ledger(NexusSettings())
        with pytest.raises(ConfigurationMissing):
            _ = ledger.objects

    def test_wallet_loaded_lazily(self, tmp_path: Path) -> None:
        settings = NexusSettings(sui=SuiConfig(wallet_path=tmp_path / "client.yaml"))
        ledger = Ledger(settings)
        with pytest.raises(ConfigurationMissing):
            ledger.active_address()

    def test_submit_builds_signs_executes_once(self) -> None:
        methods: list[str] = []
        signer = _Signer()
        ledger = Ledger(NexusSettings(), wallet=signer, rpc=_rpc(methods))
        payload = TransactionPayload(
            sender=SENDER,
            call=MoveCall("0xa1", "leader_cap", "create_for_self_and_addresses"),
            type_arguments=(),
            arguments=("1", []),
            gas_object_id=normalize_address("0x1"),
            gas_budget=10,
            gas_price=1,
        )
        response = ledger.submit(payload)
        assert response.digest == "Dg9"
        assert methods == ["unsafe_moveCall", "sui_executeTransactionBlock"]
        assert signer.signed == [(SENDER, tx_bytes(1, 10))]
        ledger.close()

    def test_active_address_from_wallet(self) -> None:
        ledger = Ledger(NexusSettings(), wallet=_Signer())
        assert ledger.active_address() == SENDER

    def test_faucet_uses_tier_default(self) -> None:
        ledger = Ledger(NexusSettings(sui=SuiConfig(net=NetworkTier.TESTNET)))
        assert ledger.faucet.url is not None
        assert "testnet" in ledger.faucet.url
