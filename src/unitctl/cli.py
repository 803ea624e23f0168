"""Root CLI group for unitctl with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from unitctl import __version__
from unitctl.commands import register_commands
from unitctl.commands._base import UnitGroup
from unitctl.commands._context import AppContext
from unitctl.config.settings import UnitSettings

_CLI_EXAMPLES = """\
  unitctl domains
  unitctl units Volume
  unitctl convert 1000 m km
  unitctl --json convert 100 C F
  unitctl shell --domain Pressure"""


@click.group(cls=UnitGroup, examples=_CLI_EXAMPLES, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="unitctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """unitctl — unit conversion with step-by-step derivations."""
    ctx.ensure_object(dict)
    try:
        settings = UnitSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    cli()
