"""Command group: Nexus network management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nexusctl.commands._base import OBJECT_ID, NexusGroup, gas_options

if TYPE_CHECKING:
    from nexusctl.commands._context import AppContext


@click.group(
    cls=NexusGroup,
    examples="""\
  nexusctl network create --address 0xa11ce --address 0xb0b
  nexusctl --json network create --count-leader-caps 2""",
)
def network() -> None:
    """Create and manage Nexus networks."""


@network.command(
    examples="""\
  nexusctl network create
  nexusctl network create -a 0xa11ce -a 0xb0b --count-leader-caps 3
  nexusctl network create -g 0xc01n -b 50000000"""
)
@click.option(
    "--address",
    "-a",
    "addresses",
    type=OBJECT_ID,
    multiple=True,
    metavar="ADDRESS",
    help="Address that receives leader caps (repeatable).",
)
@click.option(
    "--count-leader-caps",
    type=click.IntRange(min=1, max=2**32 - 1),
    default=5,
    show_default=True,
    help="How many leader caps to assign to each address.",
)
@gas_options
@click.pass_obj
def create(
    app: AppContext,
    addresses: tuple[str, ...],
    count_leader_caps: int,
    gas_coin: str | None,
    gas_budget: int,
) -> None:
    """Create a new Nexus network and assign leader caps to addresses."""
    from nexusctl.services.network import NetworkService

    result = NetworkService(app.ledger).create(
        list(addresses),
        count_leader_caps=count_leader_caps,
        gas_coin=gas_coin,
        gas_budget=gas_budget,
    )
    app.emit(result)
