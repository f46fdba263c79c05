"""Tests for the ``network create`` command."""

from __future__ import annotations

import json
from collections.abc import Callable

from click.testing import CliRunner

from nexusctl.cli import cli
from nexusctl.commands._base import DEFAULT_GAS_BUDGET
from nexusctl.commands._context import AppContext
from nexusctl.domain.types import NetworkTier, normalize_address
from tests.fakes import FakeLedger, make_coins, network_response

NEW_NETWORK = normalize_address("0xeeee")


def _ledger(**kwargs: object) -> FakeLedger:
    kwargs.setdefault("coins", make_coins("0x1"))
    kwargs.setdefault("response", network_response(NEW_NETWORK))
    return FakeLedger(**kwargs)  # type: ignore[arg-type]


class TestNetworkCreate:
    def test_human_output(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(
            cli, ["network", "create", "-a", "0xa11ce"], obj=make_app(_ledger())
        )
        assert result.exit_code == 0, result.output
        assert f"New Nexus network created with ID: {NEW_NETWORK}" in result.output

    def test_json_output(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(
            cli, ["network", "create"], obj=make_app(_ledger(), json_output=True)
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["network_id"] == NEW_NETWORK

    def test_quiet_output(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(cli, ["network", "create"], obj=make_app(_ledger(), quiet=True))
        assert result.output.strip() == NEW_NETWORK

    def test_options_reach_the_call(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        ledger = _ledger(coins=make_coins("0x1", "0x2"))
        result = cli_runner.invoke(
            cli,
            [
                "network", "create",
                "-a", "0xa11ce", "--address", "0xb0b",
                "--count-leader-caps", "2",
                "-g", "0x2", "-b", "5000",
            ],
            obj=make_app(ledger),
        )
        assert result.exit_code == 0, result.output
        (payload,) = ledger.submitted
        assert payload.arguments == (
            "2",
            [normalize_address("0xa11ce"), normalize_address("0xb0b")],
        )
        assert payload.gas_object_id == normalize_address("0x2")
        assert payload.gas_budget == 5000

    def test_defaults(self, cli_runner: CliRunner, make_app: Callable[..., AppContext]) -> None:
        ledger = _ledger()
        cli_runner.invoke(cli, ["network", "create"], obj=make_app(ledger))
        (payload,) = ledger.submitted
        assert payload.arguments[0] == "5"
        assert payload.gas_budget == DEFAULT_GAS_BUDGET

    def test_invalid_address(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        ledger = _ledger()
        result = cli_runner.invoke(
            cli, ["network", "create", "-a", "alice"], obj=make_app(ledger)
        )
        assert result.exit_code == 2
        assert ledger.submitted == []

    def test_failure_exits_1(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        ledger = _ledger(tier=NetworkTier.MAINNET, coins=[])
        result = cli_runner.invoke(cli, ["network", "create"], obj=make_app(ledger))
        assert result.exit_code == 1
        assert "INSUFFICIENT_FUNDS" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["network", "create", "--examples"])
        assert result.exit_code == 0
        assert "nexusctl network create" in result.output
