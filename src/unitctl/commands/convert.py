"""Standalone command: one-shot conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unitctl.commands._base import UnitCommand

if TYPE_CHECKING:
    from unitctl.commands._context import AppContext

_CONVERT_EXAMPLES = """\
  unitctl convert 1000 m km
  unitctl convert 100 C F
  unitctl convert -40 F C
  unitctl convert 9.81 m/s² g --domain Acceleration
  unitctl -q convert 2.5e-3 kg mg
  unitctl --json convert 1 atm psi"""


@click.command(
    cls=UnitCommand,
    examples=_CONVERT_EXAMPLES,
    context_settings={"ignore_unknown_options": True},
)
@click.argument("value")
@click.argument("source_unit")
@click.argument("target_unit")
@click.option(
    "-d",
    "--domain",
    default=None,
    help="Measurement domain. Inferred from the units when omitted.",
)
@click.pass_obj
def convert(
    app: AppContext,
    value: str,
    source_unit: str,
    target_unit: str,
    domain: str | None,
) -> None:
    """Convert VALUE from SOURCE_UNIT to TARGET_UNIT and show the derivation."""
    session = app.session
    if domain is None:
        located = session.locate(source_unit, target_unit)
        if located.ok:
            domain = located.data["domain"]
        elif source_unit == target_unit and located.error and located.error.detail["candidates"]:
            # Every candidate rejects the pair as SAME_UNIT.
            domain = located.error.detail["candidates"][0]
        else:
            app.emit(located)
            return

    app.emit(session.convert(value, source_unit, target_unit, domain=domain))
