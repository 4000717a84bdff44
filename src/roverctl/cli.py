"""Root CLI group for roverctl with global flags and command registration."""

from __future__ import annotations

import click

from roverctl import __version__
from roverctl.commands import register_commands
from roverctl.commands._context import AppContext
from roverctl.config.settings import RoverSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="roverctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Bare rover positions only.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--parallel/--sequential",
    default=None,
    help="Guide rovers on a thread pool (overrides [runner] parallel).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    parallel: bool | None,
) -> None:
    """roverctl — guide rovers across a bounded plateau."""
    settings = RoverSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        parallel=parallel,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)