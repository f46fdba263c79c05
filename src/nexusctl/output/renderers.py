"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from nexusctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from nexusctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: resolved ids, one per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    ids = [str(v) for k, v in result.data.items() if k.endswith("_id")]
    return "\n".join(ids) if ids else f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="nexus.ok")
    op = Text(f"  {result.op}", style="nexus.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="nexus.key")
    if key.endswith("_id"):
        v = Text(str(value), style="nexus.id")
    elif key == "digest":
        v = Text(str(value), style="nexus.digest")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="nexus.error")
    op = Text(f"  {result.op}", style="nexus.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(" — "), msg, sep="")

    # The digest means funds were spent; always show it.
    if err and "digest" in err.detail:
        _field(console, "digest", err.detail["digest"])

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_create_network(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    console.print(
        Text("  New Nexus network created with ID: "),
        Text(str(result.data.get("network_id", "?")), style="nexus.id"),
        sep="",
    )
    _field(console, "digest", result.data.get("digest", ""))
    if verbose:
        _render_meta(console, result)


def _render_register_tool(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    if "tool_fqn" in result.data:
        _field(console, "tool_fqn", result.data["tool_fqn"])
    console.print(
        Text("  OwnerCap<OverTool> object ID: "),
        Text(str(result.data.get("owner_cap_over_tool_id", "?")), style="nexus.id"),
        sep="",
    )
    console.print(
        Text("  OwnerCap<OverGas> object ID: "),
        Text(str(result.data.get("owner_cap_over_gas_id", "?")), style="nexus.id"),
        sep="",
    )
    _field(console, "digest", result.data.get("digest", ""))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "create_network": _render_create_network,
    "register_tool": _render_register_tool,
}
