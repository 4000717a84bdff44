"""Format dispatcher — adapts ServiceResult to the requested output mode.

Modes, in priority order: ``--json`` (serialized ServiceResult),
``--quiet`` (bare rover positions), default (Rich rendering).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from roverctl.output.renderers import render_partial, render_quiet, render_result

if TYPE_CHECKING:
    from roverctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-mode flags plus console options from the ``[output]`` section."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    color: bool = True
    width: int | None = None


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        no_color=not settings.color,
        width=settings.width,
    )


def format_partial(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format the output a failed run produced before its error.

    Empty in JSON mode, where the positions are part of the payload.
    """
    settings = settings or OutputSettings()
    if result.ok or settings.json_output:
        return ""
    if settings.quiet:
        return str(result.data.get("output", ""))
    return render_partial(result, no_color=not settings.color, width=settings.width)
