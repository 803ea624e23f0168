"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns the converter session (created on first use)
and centralizes result emission: stdout/stderr routing and exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unitctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from unitctl.config.settings import UnitSettings
    from unitctl.services.result import ServiceResult
    from unitctl.services.session import ConverterSession


class AppContext:
    """State shared across one CLI invocation.

    The session is built lazily so ``--help`` and ``--version`` never
    touch the registry or validate the configured default domain.
    """

    def __init__(self, settings: UnitSettings) -> None:
        self.settings = settings
        self._session: ConverterSession | None = None

        from unitctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from unitctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def session(self) -> ConverterSession:
        """The converter session (created on first access)."""
        if self._session is None:
            from unitctl.domain.types import UnknownDomainError
            from unitctl.services.session import ConverterSession

            try:
                self._session = ConverterSession(
                    display=self.settings.display,
                    default_domain=self.settings.session.default_domain,
                )
            except UnknownDomainError as exc:
                msg = f"Invalid [session] default_domain: {exc.message}"
                raise click.ClickException(msg) from exc
        return self._session

    def emit(self, result: ServiceResult, *, exit_on_error: bool = True) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr and exits with code 1, unless
          *exit_on_error* is False (the interactive shell keeps going).
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            if exit_on_error:
                raise SystemExit(1)
