"""Rich Console factory and theme for nexusctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NEXUS_THEME = Theme(
    {
        "nexus.ok": "bold green",
        "nexus.error": "bold red",
        "nexus.op": "bold cyan",
        "nexus.key": "dim",
        "nexus.id": "bold blue",
        "nexus.digest": "grey62",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width. Object ids are 66 characters, so
            the default leaves room for a key column.
    """
    return Console(
        file=StringIO(),
        theme=NEXUS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
