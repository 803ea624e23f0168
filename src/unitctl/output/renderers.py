"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO); the caller
extracts the text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from unitctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from unitctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "convert":
        return str(d.get("result", ""))
    if result.op in ("list_domains", "list_units"):
        key = "domain" if result.op == "list_domains" else "unit"
        return "\n".join(str(item[key]) for item in d.get("items", []))
    if result.op == "history":
        return "\n".join(_history_line(item) for item in d.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _history_line(item: dict[str, Any]) -> str:
    return (
        f"{item['domain']}: {_number(item['input_value'])} {item['source_unit']} "
        f"-> {item['result_text']}"
    )


def _number(value: Any) -> str:
    """Show whole floats without the trailing ``.0``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="uc.ok")
    op = Text(f"  {result.op}", style="uc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="uc.key")
    if key == "domain":
        v = Text(str(value), style="uc.domain")
    elif key.endswith("_unit"):
        v = Text(str(value), style="uc.unit")
    elif key == "result":
        v = Text(str(value), style="uc.result")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _steps(console: Console, lines: list[str]) -> None:
    """Print numbered derivation steps."""
    for number, line in enumerate(lines, start=1):
        console.print(Text(f"  Step {number}: ", style="uc.step"), Text(line), end="")
        console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree, one line per span with its duration."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 10 else "dim"

    line = f"{prefix}[{style}]{duration:>8.3f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="uc.error")
    op = Text(f"  {result.op}", style="uc.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Conversion renderers ──────────────────────────────────────────────


def _render_convert(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "domain", d["domain"])
    _field(console, "result", d["result"])
    console.print()
    _steps(console, d.get("derivation", []))
    if verbose:
        _field(console, "value", repr(d["value"]))
        _render_meta(console, result)


def _render_selection(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render select_domain and reset results."""
    d = result.data
    _status_line(console, result)
    for key in ("domain", "source_unit", "target_unit"):
        _field(console, key, d[key])
    _field(console, "units", ", ".join(d.get("units", [])))
    if "cleared" in d:
        _field(console, "cleared", d["cleared"])
    if verbose:
        _render_meta(console, result)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("state", "domain", "source_unit", "target_unit"):
        _field(console, key, d[key])
    if d.get("input"):
        _field(console, "input", d["input"])
    if d.get("result"):
        _field(console, "result", d["result"])
    if d.get("error"):
        console.print(Text("  error: ", style="uc.key"), Text(d["error"], style="uc.error"))
    _field(console, "history", d.get("history_count", 0))
    if d.get("derivation"):
        console.print()
        _steps(console, d["derivation"])


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_domains(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain", style="uc.domain", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Base")
    table.add_column("Units", justify="right")
    if verbose:
        table.add_column("Negatives")

    for item in items:
        kind = str(item.get("kind", ""))
        name = str(item["domain"])
        if item.get("current"):
            name += " *"
        row = [
            name,
            Text(kind, style=style_for_kind(kind)),
            str(item.get("base_unit") or "—"),
            str(item.get("unit_count", "")),
        ]
        if verbose:
            row.append("yes" if item.get("allows_negative") else "no")
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} domains")


def _render_units(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    base = d.get("base_unit")
    title = f"{d['domain']} (base: {base})" if base else f"{d['domain']} (via Celsius)"
    table = Table(title=title, show_header=True, pad_edge=False, expand=False)
    table.add_column("Unit", style="uc.unit", no_wrap=True)
    if base:
        table.add_column(f"1 unit = … {base}", justify="right")

    for item in d.get("items", []):
        if base:
            table.add_row(str(item["unit"]), _number(item["factor"]))
        else:
            table.add_row(str(item["unit"]))
    console.print(table)


def _render_history(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("  no conversions yet", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Domain", style="uc.domain")
    table.add_column("Input", justify="right")
    table.add_column("From", style="uc.unit")
    table.add_column("To", style="uc.unit")
    table.add_column("Result", style="uc.result", justify="right")

    offset = result.data.get("count", len(items)) - len(items)
    for index, item in enumerate(items, start=offset + 1):
        table.add_row(
            str(index),
            str(item["domain"]),
            _number(item["input_value"]),
            str(item["source_unit"]),
            str(item["target_unit"]),
            str(item["result_text"]),
        )
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), ensure_ascii=False))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "convert": _render_convert,
    "select_domain": _render_selection,
    "reset": _render_selection,
    "status": _render_status,
    "list_domains": _render_domains,
    "list_units": _render_units,
    "history": _render_history,
}
