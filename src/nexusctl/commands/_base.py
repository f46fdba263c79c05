"""Custom Click base classes and shared options.

Provides NexusCommand and NexusGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from nexusctl.domain.types import MIST_PER_SUI, normalize_address

DEFAULT_GAS_BUDGET = MIST_PER_SUI // 10

_F = TypeVar("_F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class NexusCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class NexusGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = NexusCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = NexusCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class ObjectIdType(click.ParamType):
    """A Sui object id or address, normalised to its 32-byte hex form."""

    name = "object_id"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> str:
        try:
            return normalize_address(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


OBJECT_ID = ObjectIdType()


def gas_options(func: _F) -> _F:
    """Reusable ``--sui-gas-coin`` / ``--sui-gas-budget`` options."""
    func = click.option(
        "--sui-gas-budget",
        "-b",
        "gas_budget",
        type=click.IntRange(min=1),
        default=DEFAULT_GAS_BUDGET,
        show_default=True,
        metavar="AMOUNT",
        help="The gas budget for the transaction (MIST).",
    )(func)
    func = click.option(
        "--sui-gas-coin",
        "-g",
        "gas_coin",
        type=OBJECT_ID,
        default=None,
        metavar="OBJECT_ID",
        help="The gas coin object ID. First coin object is chosen if not present.",
    )(func)
    return func
