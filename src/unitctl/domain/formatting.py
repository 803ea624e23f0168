"""Display formatting for quantities.

Rounding here is presentation only. Callers keep full-precision floats
for arithmetic and format at the last moment.
"""

from __future__ import annotations


def _clean_zero(value: float) -> float:
    # -0.0 + 0.0 == +0.0
    return value + 0.0


def format_number(value: float) -> str:
    """Shortest faithful form of *value*; whole numbers print without ``.0``.

    Examples:
        >>> format_number(1000.0)
        '1000'
        >>> format_number(0.3048)
        '0.3048'
    """
    value = _clean_zero(float(value))
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_rounded(value: float, places: int) -> str:
    """Round to *places* decimals and drop trailing zeros.

    Examples:
        >>> format_rounded(1000.0, 6)
        '1000'
        >>> format_rounded(37.77777777, 4)
        '37.7778'
    """
    text = format_fixed(value, places)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_fixed(value: float, places: int) -> str:
    """Fixed-point with exactly *places* decimals, e.g. ``1.000000``."""
    return f"{_clean_zero(round(value, places)):.{places}f}"


def format_step(value: float, places: int) -> str:
    """Like :func:`format_rounded`, but never shows a non-zero value as ``0``.

    Intermediate derivation values fall back to *places* significant
    digits when they are smaller than the display precision.

    Examples:
        >>> format_step(1000.0, 6)
        '1000'
        >>> format_step(1e-07, 6)
        '1e-07'
    """
    text = format_rounded(value, places)
    if text == "0" and value != 0:
        return f"{value:.{max(places, 1)}g}"
    return text
