"""Command group: Nexus tool management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nexusctl.commands._base import OBJECT_ID, NexusGroup, gas_options

if TYPE_CHECKING:
    from nexusctl.commands._context import AppContext


@click.group(
    cls=NexusGroup,
    examples="""\
  nexusctl tool register --url https://tools.example.com/llm""",
)
def tool() -> None:
    """Register and manage Nexus tools."""


@tool.command(
    examples="""\
  nexusctl tool register --url https://tools.example.com/llm
  nexusctl tool register --url http://localhost:8080 --invocation-cost 1000
  nexusctl --json tool register --url http://localhost:8080 --collateral-coin 0xc0ffee"""
)
@click.option("--url", required=True, help="Base URL the off-chain tool is served at.")
@click.option(
    "--collateral-coin",
    type=OBJECT_ID,
    default=None,
    metavar="OBJECT_ID",
    help="The collateral coin object ID. Second coin object is chosen if not present.",
)
@click.option(
    "--invocation-cost",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="What the tool charges per invocation (MIST).",
)
@gas_options
@click.pass_obj
def register(
    app: AppContext,
    url: str,
    collateral_coin: str | None,
    invocation_cost: int,
    gas_coin: str | None,
    gas_budget: int,
) -> None:
    """Register an off-chain tool, posting a collateral coin."""
    from nexusctl.services.tool import ToolService

    result = ToolService(app.ledger).register(
        url,
        collateral_coin=collateral_coin,
        invocation_cost=invocation_cost,
        gas_coin=gas_coin,
        gas_budget=gas_budget,
    )
    app.emit(result)
