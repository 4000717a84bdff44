"""Command: run the built-in example instruction sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roverctl.commands._base import RoverCommand

if TYPE_CHECKING:
    from roverctl.commands._context import AppContext


@click.command(
    cls=RoverCommand,
    examples="""\
  roverctl demo
  roverctl --verbose demo
  roverctl --json demo""",
)
@click.pass_obj
def demo(app: AppContext) -> None:
    """Run the example scenarios, including one where a rover leaves the surface."""
    app.emit(app.runner.demo())
