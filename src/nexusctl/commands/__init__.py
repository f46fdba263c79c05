"""Subcommand modules for nexusctl.

Provides register_commands() which uses deferred imports to keep
``nexusctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from nexusctl.commands.network import network
    from nexusctl.commands.tool import tool

    cli.add_command(network)
    cli.add_command(tool)
