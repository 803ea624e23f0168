"""Standalone commands: browse the unit catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unitctl.commands._base import UnitCommand

if TYPE_CHECKING:
    from unitctl.commands._context import AppContext


@click.command(
    cls=UnitCommand,
    examples="""\
  unitctl domains
  unitctl -v domains
  unitctl --json domains""",
)
@click.pass_obj
def domains(app: AppContext) -> None:
    """List measurement domains in catalog order."""
    app.emit(app.session.list_domains())


@click.command(
    cls=UnitCommand,
    examples="""\
  unitctl units Length
  unitctl units Temperature
  unitctl -q units Pressure""",
)
@click.argument("domain")
@click.pass_obj
def units(app: AppContext, domain: str) -> None:
    """List the units of DOMAIN with their base-unit factors."""
    app.emit(app.session.list_units(domain))
