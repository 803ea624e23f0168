"""Input validation rules.

Each validator either returns normally or raises
:class:`~unitctl.domain.types.ConversionError` with the code and
user-facing message for the failure.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from unitctl.domain.types import ConversionError, ErrorCode

if TYPE_CHECKING:
    from unitctl.domain.registry import Domain

# Optional sign, digits with at most one point (digits required after it),
# optional exponent with at least one digit.
NUMBER_PATTERN = re.compile(r"[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?")

NOT_A_NUMBER_MESSAGE = "Enter a valid number - letters are not allowed."
SAME_UNIT_MESSAGE = "Source and target units must differ."


def validate_number(raw: str) -> float:
    """Parse *raw* as a real number.

    Surrounding whitespace is ignored.

    Examples:
        >>> validate_number(" -1.5 ")
        -1.5
        >>> validate_number(".5")
        0.5
        >>> validate_number("2.5e-3")
        0.0025
    """
    text = raw.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        raise ConversionError(ErrorCode.NOT_A_NUMBER, NOT_A_NUMBER_MESSAGE, raw=raw)
    value = float(text)
    if not math.isfinite(value):
        raise ConversionError(ErrorCode.NOT_A_NUMBER, NOT_A_NUMBER_MESSAGE, raw=raw)
    return value


def validate_sign(value: float, domain: Domain) -> None:
    """Reject negative *value* for domains that only admit magnitudes."""
    if value < 0 and not domain.allows_negative:
        raise ConversionError(
            ErrorCode.NEGATIVE_NOT_ALLOWED,
            f"Negative values are not valid for {domain.name}.",
            domain=domain.name,
            value=value,
        )


def validate_units_distinct(source_unit: str, target_unit: str) -> None:
    if source_unit == target_unit:
        raise ConversionError(ErrorCode.SAME_UNIT, SAME_UNIT_MESSAGE, unit=source_unit)


def validate_unit(domain: Domain, unit: str) -> None:
    """Reject a unit symbol that *domain* does not define."""
    if unit not in domain.symbols:
        raise ConversionError(
            ErrorCode.UNKNOWN_UNIT,
            f"Unit '{unit}' is not part of {domain.name}",
            domain=domain.name,
            unit=unit,
            available=list(domain.symbols),
        )
