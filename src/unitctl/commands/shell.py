"""Standalone command: interactive converter session.

One ConverterSession lives for the whole shell, so the selected domain,
the last result, and the history carry over between lines.
"""

from __future__ import annotations

import json
import logging
import shlex
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from unitctl.commands._base import UnitCommand
from unitctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from unitctl.commands._context import AppContext

logger = logging.getLogger(__name__)

_SHELL_HELP = """\
  domains                 list domains
  domain NAME             select a domain (resets units)
  units                   list units of the selected domain
  convert VALUE [FROM TO] convert using the selected or given units
  history [--json]        show conversions made in this shell
  status                  show the current selection and last result
  reset                   clear result and history, back to the default domain
  help                    show this help
  quit                    leave the shell"""

_EXIT_WORDS = frozenset({"quit", "exit", "q"})


def _usage(op: str, message: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="USAGE", message=message),
    )


def _history(app: AppContext, args: list[str]) -> None:
    result = app.session.get_history()
    if args == ["--json"]:
        click.echo(json.dumps(result.data["items"], ensure_ascii=False, indent=2))
        return
    if args:
        app.emit(_usage("history", "usage: history [--json]"), exit_on_error=False)
        return

    limit = app.settings.shell.history_limit_display
    items = result.data["items"]
    if len(items) > limit and not app.settings.json_output:
        result = result.model_copy(
            update={"data": {"items": items[-limit:], "count": len(items)}}
        )
    app.emit(result, exit_on_error=False)


def _convert(app: AppContext, args: list[str]) -> None:
    if len(args) == 1:
        result = app.session.convert(args[0])
    elif len(args) == 3:
        result = app.session.convert(args[0], args[1], args[2])
    else:
        result = _usage("convert", "usage: convert VALUE [FROM TO]")
    app.emit(result, exit_on_error=False)


def _domain(app: AppContext, args: list[str]) -> None:
    if len(args) != 1:
        app.emit(_usage("select_domain", "usage: domain NAME"), exit_on_error=False)
        return
    app.emit(app.session.select_domain(args[0]), exit_on_error=False)


def _simple(method: str) -> Callable[[AppContext, list[str]], None]:
    """Handler for argument-less session operations."""

    def handler(app: AppContext, args: list[str]) -> None:
        if args:
            app.emit(_usage(method, f"usage: {method}"), exit_on_error=False)
            return
        app.emit(getattr(app.session, method)(), exit_on_error=False)

    return handler


_HANDLERS: dict[str, Callable[[AppContext, list[str]], None]] = {
    "convert": _convert,
    "domain": _domain,
    "history": _history,
    "domains": _simple("list_domains"),
    "units": _simple("list_units"),
    "status": _simple("status"),
    "reset": _simple("reset"),
}


def run_line(app: AppContext, line: str) -> bool:
    """Execute one shell line. Returns False when the shell should exit."""
    try:
        words = shlex.split(line)
    except ValueError as exc:
        app.emit(_usage("shell", str(exc)), exit_on_error=False)
        return True
    if not words:
        return True

    command, args = words[0].lower(), words[1:]
    if command in _EXIT_WORDS:
        return False
    if command in ("help", "?"):
        click.echo(_SHELL_HELP)
        return True

    handler = _HANDLERS.get(command)
    if handler is None:
        app.emit(
            _usage("shell", f"Unknown command '{command}' (try 'help')"),
            exit_on_error=False,
        )
        return True

    logger.debug("shell.command", extra={"command": command, "arguments": args})
    handler(app, args)
    return True


@click.command(
    cls=UnitCommand,
    examples="""\
  unitctl shell
  printf 'domain Temperature\\nconvert 100 C F\\nhistory\\n' | unitctl shell""",
)
@click.option("--domain", "-d", default=None, help="Start in this domain.")
@click.pass_obj
def shell(app: AppContext, domain: str | None) -> None:
    """Interactive session with history. Type 'help' for commands."""
    if domain is not None:
        app.emit(app.session.select_domain(domain))

    prompt = app.settings.shell.prompt
    while True:
        try:
            line = click.prompt(prompt, default="", show_default=False, prompt_suffix="")
        except (click.Abort, EOFError):
            break
        if not run_line(app, line):
            break
