"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` (``run`` or ``demo``) in
:func:`render_result`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from roverctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from roverctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    no_color: bool = False,
    width: int | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(no_color=no_color, width=width)

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_partial(
    result: ServiceResult,
    *,
    no_color: bool = False,
    width: int | None = None,
) -> str:
    """Render the positions a failed run completed before its error.

    Returns an empty string when no rover finished.
    """
    positions = result.data.get("positions") or []
    if not positions:
        return ""
    console = create_console(no_color=no_color, width=width)
    console.print(Text("PARTIAL", style="rover.warning"), Text(f"  {result.op}", style="rover.op"))
    console.print(_position_table(positions))
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    A run prints bare ``X Y H`` lines, one per rover.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "demo":
        return "\n".join(str(s.get("output", "")) for s in result.data.get("scenarios", []))
    return str(result.data.get("output", ""))


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="rover.ok")
    op = Text(f"  {result.op}", style="rover.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rover.key")
    console.print(k, Text(str(value)), sep="")


def _position_table(positions: list[str]) -> Table:
    """Table of resting positions, one row per rover in input order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rover", style="rover.id", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Heading", style="rover.heading")
    for rover_id, position in enumerate(positions):
        x, y, heading = position.split()
        table.add_row(str(rover_id), x, y, heading)
    return table


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rover.error")
    op = Text(f"  {result.op}", style="rover.op")
    console.print(label, op, Text(" — "), Text(msg), sep="")

    if verbose and err:
        _field(console, "code", err.code)
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(f"    {k}: {v}")
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    positions = result.data.get("positions", [])
    _field(console, "rovers", len(positions))
    if positions:
        console.print(_position_table(positions))
    if verbose:
        _render_meta(console, result)


def _render_demo(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=True, pad_edge=False, expand=False)
    table.add_column("Scenario")
    table.add_column("Output", style="rover.position")
    table.add_column("Error", style="rover.error")
    if verbose:
        table.add_column("Input", style="dim")
    for scenario in result.data.get("scenarios", []):
        row = [
            str(scenario.get("name", "")),
            str(scenario.get("output", "")),
            str(scenario.get("error") or ""),
        ]
        if verbose:
            row.append(str(scenario.get("input", "")))
        table.add_row(*row)
    console.print(table)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "run": _render_run,
    "demo": _render_demo,
}
