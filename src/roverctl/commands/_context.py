"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the runner service and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roverctl.config.logging import configure_logging
from roverctl.output.formatters import OutputSettings, format_partial, format_result

if TYPE_CHECKING:
    from roverctl.config.settings import RoverSettings
    from roverctl.services.result import ServiceResult
    from roverctl.services.runner import RunnerService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RoverSettings) -> None:
        self.settings = settings

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from roverctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def runner(self) -> RunnerService:
        """A runner configured from ``[runner]`` and ``--parallel``."""
        from roverctl.services.runner import RunnerService

        return RunnerService(self.settings.runner_config())

    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            color=self.settings.output.color,
            width=self.settings.output.width,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: positions completed before the error go to stdout,
          the error goes to stderr, and the process exits with code 1.
        """
        settings = self.output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            return

        partial = format_partial(result, settings=settings)
        if partial:
            click.echo(partial)
        click.echo(output, err=True)
        raise SystemExit(1)
