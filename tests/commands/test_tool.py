"""Tests for the ``tool register`` command."""

from __future__ import annotations

import json
from collections.abc import Callable

from click.testing import CliRunner

from nexusctl.cli import cli
from nexusctl.commands._context import AppContext
from nexusctl.domain.types import normalize_address
from tests.fakes import FakeLedger, make_coins, tool_response

OVER_TOOL_ID = normalize_address("0x70")
OVER_GAS_ID = normalize_address("0x6a")


def _ledger(**kwargs: object) -> FakeLedger:
    kwargs.setdefault("coins", make_coins("0x1", "0x2", "0x3"))
    kwargs.setdefault("response", tool_response(OVER_TOOL_ID, OVER_GAS_ID))
    return FakeLedger(**kwargs)  # type: ignore[arg-type]


class TestToolRegister:
    def test_human_output(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(
            cli, ["tool", "register", "--url", "http://localhost:8080"], obj=make_app(_ledger())
        )
        assert result.exit_code == 0, result.output
        assert f"OwnerCap<OverTool> object ID: {OVER_TOOL_ID}" in result.output
        assert f"OwnerCap<OverGas> object ID: {OVER_GAS_ID}" in result.output

    def test_json_output(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(
            cli,
            ["tool", "register", "--url", "http://localhost:8080"],
            obj=make_app(_ledger(), json_output=True),
        )
        data = json.loads(result.output)
        assert data["data"]["owner_cap_over_tool_id"] == OVER_TOOL_ID
        assert data["data"]["owner_cap_over_gas_id"] == OVER_GAS_ID

    def test_explicit_coins(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        ledger = _ledger()
        result = cli_runner.invoke(
            cli,
            [
                "tool", "register",
                "--url", "http://localhost:8080",
                "--collateral-coin", "0x1",
                "-g", "0x3",
                "--invocation-cost", "10",
            ],
            obj=make_app(ledger),
        )
        assert result.exit_code == 0, result.output
        (payload,) = ledger.submitted
        assert payload.gas_object_id == normalize_address("0x3")
        assert payload.arguments[7] == normalize_address("0x1")
        assert payload.arguments[8] == "10"

    def test_url_required(self, cli_runner: CliRunner, make_app: Callable[..., AppContext]) -> None:
        result = cli_runner.invoke(cli, ["tool", "register"], obj=make_app(_ledger()))
        assert result.exit_code == 2
        assert "--url" in result.output

    def test_collision_fails(
        self, cli_runner: CliRunner, make_app: Callable[..., AppContext]
    ) -> None:
        result = cli_runner.invoke(
            cli,
            ["tool", "register", "--url", "http://x", "--collateral-coin", "0x1"],
            obj=make_app(_ledger()),
        )
        assert result.exit_code == 1
        assert "DUPLICATE_FUNDING_OBJECT" in result.output
