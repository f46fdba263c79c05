"""Tests for NetworkService.create."""

from __future__ import annotations

from nexusctl.domain.errors import SubmissionFailed
from nexusctl.domain.response import ExecutionResponse
from nexusctl.domain.types import NetworkTier, normalize_address
from nexusctl.services.network import NetworkService
from tests.fakes import (
    SENDER,
    WORKFLOW_PKG,
    FakeLedger,
    make_coins,
    network_response,
    rpc_response,
)

NEW_NETWORK = normalize_address("0xeeee")


def _create(ledger: FakeLedger, addresses: list[str], **overrides: object):
    kwargs: dict[str, object] = {
        "count_leader_caps": 5,
        "gas_coin": None,
        "gas_budget": 100_000_000,
    }
    kwargs.update(overrides)
    return NetworkService(ledger).create(addresses, **kwargs)  # type: ignore[arg-type]


class TestCreateNetwork:
    def test_success(self) -> None:
        ledger = FakeLedger(coins=make_coins("0x1"), response=network_response(NEW_NETWORK))
        result = _create(ledger, ["0xa11ce", "0xb0b"])
        assert result.ok
        assert result.op == "create_network"
        assert result.data == {"digest": "TxDigest111", "network_id": NEW_NETWORK}
        assert result.meta is not None
        assert result.meta["sender"] == SENDER
        assert result.meta["leader_cap_addresses"] == 2

    def test_call_shape(self) -> None:
        ledger = FakeLedger(coins=make_coins("0x1"), response=network_response(NEW_NETWORK))
        _create(ledger, ["0xa11ce", "0xb0b"], count_leader_caps=3, gas_budget=42)
        (payload,) = ledger.submitted
        assert payload.call.package == WORKFLOW_PKG
        assert payload.call.module == "leader_cap"
        assert payload.call.function == "create_for_self_and_addresses"
        assert payload.arguments == (
            "3",
            [normalize_address("0xa11ce"), normalize_address("0xb0b")],
        )
        assert payload.gas_object_id == normalize_address("0x1")
        assert payload.gas_budget == 42
        assert payload.gas_price == 1000

    def test_one_network_for_many_addresses(self) -> None:
        addresses = [hex(i) for i in range(1, 9)]
        ledger = FakeLedger(coins=make_coins("0x1"), response=network_response(NEW_NETWORK))
        result = _create(ledger, addresses)
        assert result.data["network_id"] == NEW_NETWORK
        assert len(ledger.submitted) == 1
        assert ledger.gas_price_requests == 1

    def test_no_addresses(self) -> None:
        ledger = FakeLedger(coins=make_coins("0x1"), response=network_response(NEW_NETWORK))
        result = _create(ledger, [])
        assert result.ok
        assert ledger.submitted[0].arguments == ("5", [])

    def test_explicit_gas_coin(self) -> None:
        ledger = FakeLedger(
            coins=make_coins("0x1", "0x2"), response=network_response(NEW_NETWORK)
        )
        _create(ledger, [], gas_coin="0x2")
        assert ledger.submitted[0].gas_object_id == normalize_address("0x2")

    def test_explicit_gas_coin_missing(self) -> None:
        ledger = FakeLedger(coins=make_coins("0x1"), response=network_response(NEW_NETWORK))
        result = _create(ledger, [], gas_coin="0x404")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OBJECT_NOT_FOUND"
        assert ledger.submitted == []

    def test_mainnet_without_coins(self) -> None:
        ledger = FakeLedger(tier=NetworkTier.MAINNET, coins=[])
        result = _create(ledger, [])
        assert result.error is not None
        assert result.error.code == "INSUFFICIENT_FUNDS"
        assert ledger.top_up_requests == []
        assert ledger.submitted == []

    def test_submission_failure(self) -> None:
        ledger = FakeLedger(
            coins=make_coins("0x1"),
            submit_error=SubmissionFailed("MoveAbort in 1st command", digest="Bad1"),
        )
        result = _create(ledger, [])
        assert result.error is not None
        assert result.error.code == "SUBMISSION_FAILED"
        assert result.error.detail["digest"] == "Bad1"

    def test_missing_event_reports_digest(self) -> None:
        ledger = FakeLedger(
            coins=make_coins("0x1"),
            response=ExecutionResponse.from_rpc(rpc_response(digest="NoEvents")),
        )
        result = _create(ledger, [])
        assert result.error is not None
        assert result.error.code == "ARTIFACT_NOT_FOUND"
        assert result.error.detail["digest"] == "NoEvents"
        assert result.error.detail["artifact"] == "network_id"
