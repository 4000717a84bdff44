"""Command: run an instruction set and print each rover's resting position."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from roverctl.commands._base import RoverCommand

if TYPE_CHECKING:
    from roverctl.commands._context import AppContext


@click.command(
    cls=RoverCommand,
    examples="""\
  roverctl run instructions.txt
  cat instructions.txt | roverctl run -
  roverctl run -i '5 5\\n1 2 N\\nLMLMLMLMM'
  roverctl --quiet run instructions.txt
  roverctl --json --parallel run instructions.txt""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"), required=False)
@click.option(
    "-i",
    "--instructions",
    default=None,
    help="Instruction set given inline. Literal '\\n' sequences are line breaks.",
)
@click.pass_obj
def run(app: AppContext, source: IO[str] | None, instructions: str | None) -> None:
    """Guide rovers across a surface using the instructions in SOURCE.

    SOURCE is a file path, or '-' to read standard input.  On failure the
    positions of rovers that finished before the error are still printed.
    """
    if source is not None and instructions is not None:
        raise click.UsageError("Give either SOURCE or --instructions, not both.")
    if source is None and instructions is None:
        raise click.UsageError("Missing SOURCE (use '-' for stdin) or --instructions.")

    if instructions is not None:
        text = instructions.replace("\\n", "\n")
        name = "<instructions>"
    else:
        assert source is not None
        text = source.read()
        name = getattr(source, "name", "<stdin>")

    app.emit(app.runner.run(text, source=name))
