"""Output mode selection.

The CLI renders ServiceResult for humans (Rich) or machines (--json).
Which mode applies is passed in explicitly as :class:`OutputSettings`;
the formatter never consults process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nexusctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from nexusctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, and quiet wins over verbose.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
