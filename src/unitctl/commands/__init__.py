"""Subcommand modules for unitctl.

Provides register_commands(), which imports command modules lazily so
``unitctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    from unitctl.commands.catalog import domains, units
    from unitctl.commands.convert import convert
    from unitctl.commands.shell import shell

    cli.add_command(domains)
    cli.add_command(units)
    cli.add_command(convert)
    cli.add_command(shell)
