"""Conversion algorithm — base-unit normalization and the Celsius pivot.

Linear domains go through the base unit::

    base   = value * factor(source)
    result = base / factor(target)

Temperature goes through Celsius. Both produce an ordered derivation,
one human-readable line per step.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from unitctl.domain.formatting import (
    format_fixed,
    format_number,
    format_rounded,
    format_step,
)
from unitctl.domain.registry import Domain, LinearDomain, NonlinearDomain
from unitctl.domain.types import ConversionError, DomainKind, ErrorCode, TemperatureScale

DEFAULT_LINEAR_PRECISION = 6
DEFAULT_TEMPERATURE_PRECISION = 4

OUT_OF_RANGE_MESSAGE = "Result is out of range - enter a smaller number."


@dataclass(frozen=True)
class ConversionResult:
    """Converted value plus its derivation.

    Attributes:
        value: Full-precision result.
        unit: Target unit symbol.
        text: Display form, e.g. ``"1.000000 km"``.
        derivation: One line per step, in order.
    """

    value: float
    unit: str
    text: str
    derivation: tuple[str, ...]


# ---------------------------------------------------------------------------
# Linear domains
# ---------------------------------------------------------------------------


def convert_linear(
    domain: LinearDomain,
    value: float,
    source_unit: str,
    target_unit: str,
    *,
    precision: int = DEFAULT_LINEAR_PRECISION,
) -> ConversionResult:
    """Convert through the base unit with a four-step derivation."""
    source_factor = domain.factor(source_unit)
    target_factor = domain.factor(target_unit)
    base_value = value * source_factor
    result = base_value / target_factor

    base = domain.base_unit
    shown_base = format_step(base_value, precision)
    derivation = (
        f"1 {source_unit} = {format_number(source_factor)} {base}",
        f"{format_number(value)} {source_unit} = {format_number(value)} × "
        f"{format_number(source_factor)} = {shown_base} {base}",
        f"1 {target_unit} = {format_number(target_factor)} {base}",
        f"{shown_base} ÷ {format_number(target_factor)} = "
        f"{format_rounded(result, precision)} {target_unit}",
    )
    return ConversionResult(
        value=result,
        unit=target_unit,
        text=f"{format_fixed(result, precision)} {target_unit}",
        derivation=derivation,
    )


# ---------------------------------------------------------------------------
# Temperature
# ---------------------------------------------------------------------------


def to_celsius(value: float, scale: str) -> float:
    match TemperatureScale(scale):
        case TemperatureScale.CELSIUS:
            return value
        case TemperatureScale.FAHRENHEIT:
            return (value - 32) * 5 / 9
        case TemperatureScale.KELVIN:
            return value - 273.15


def from_celsius(celsius: float, scale: str) -> float:
    match TemperatureScale(scale):
        case TemperatureScale.CELSIUS:
            return celsius
        case TemperatureScale.FAHRENHEIT:
            return celsius * 9 / 5 + 32
        case TemperatureScale.KELVIN:
            return celsius + 273.15


def _to_celsius_formula(shown: str, scale: str) -> str:
    match TemperatureScale(scale):
        case TemperatureScale.CELSIUS:
            return shown
        case TemperatureScale.FAHRENHEIT:
            return f"({shown} - 32) × 5/9"
        case TemperatureScale.KELVIN:
            return f"{shown} - 273.15"


def _from_celsius_formula(shown: str, scale: str) -> str:
    match TemperatureScale(scale):
        case TemperatureScale.CELSIUS:
            return shown
        case TemperatureScale.FAHRENHEIT:
            return f"{shown} × 9/5 + 32"
        case TemperatureScale.KELVIN:
            return f"{shown} + 273.15"


def convert_temperature(
    domain: NonlinearDomain,
    value: float,
    source_unit: str,
    target_unit: str,
    *,
    precision: int = DEFAULT_TEMPERATURE_PRECISION,
) -> ConversionResult:
    """Convert via Celsius. Always reports two steps, even from or to Celsius."""
    celsius = to_celsius(value, source_unit)
    result = from_celsius(celsius, target_unit)

    pivot = TemperatureScale.CELSIUS.value
    shown_value = format_number(value)
    shown_celsius = format_step(celsius, precision)
    derivation = (
        f"Convert {shown_value} {source_unit} to Celsius: "
        f"{_to_celsius_formula(shown_value, source_unit)} = {shown_celsius} {pivot}",
        f"Convert {shown_celsius} {pivot} to {target_unit}: "
        f"{_from_celsius_formula(shown_celsius, target_unit)} = "
        f"{format_rounded(result, precision)} {target_unit}",
    )
    return ConversionResult(
        value=result,
        unit=target_unit,
        text=f"{format_fixed(result, precision)} {target_unit}",
        derivation=derivation,
    )


NONLINEAR_CONVERTERS: dict[str, Callable[..., ConversionResult]] = {
    "Temperature": convert_temperature,
}


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def convert(
    domain: Domain,
    value: float,
    source_unit: str,
    target_unit: str,
    *,
    linear_precision: int = DEFAULT_LINEAR_PRECISION,
    temperature_precision: int = DEFAULT_TEMPERATURE_PRECISION,
) -> ConversionResult:
    """Convert an already-validated *value* between two units of *domain*.

    Raises ConversionError (NOT_A_NUMBER) when the result overflows to
    infinity, e.g. ``1e308 GHz`` to ``Hz``.
    """
    if domain.kind is DomainKind.LINEAR:
        assert isinstance(domain, LinearDomain)
        result = convert_linear(
            domain, value, source_unit, target_unit, precision=linear_precision
        )
    else:
        assert isinstance(domain, NonlinearDomain)
        converter = NONLINEAR_CONVERTERS[domain.name]
        result = converter(
            domain, value, source_unit, target_unit, precision=temperature_precision
        )

    if not math.isfinite(result.value):
        raise ConversionError(
            ErrorCode.NOT_A_NUMBER,
            OUT_OF_RANGE_MESSAGE,
            value=value,
            source_unit=source_unit,
            target_unit=target_unit,
        )
    return result
