"""Rich Console factory and theme for unitctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Off a TTY (tests, pipes) Rich emits no color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

UNIT_THEME = Theme(
    {
        "uc.ok": "bold green",
        "uc.error": "bold red",
        "uc.warning": "bold yellow",
        "uc.op": "bold cyan",
        "uc.key": "dim",
        "uc.domain": "bold blue",
        "uc.unit": "cyan",
        "uc.result": "bold",
        "uc.step": "magenta",
        "uc.kind.linear": "green",
        "uc.kind.nonlinear": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=UNIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Rich style name for a domain kind (``linear`` / ``nonlinear``)."""
    return f"uc.kind.{kind}" if kind in ("linear", "nonlinear") else ""
