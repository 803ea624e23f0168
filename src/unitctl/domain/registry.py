"""Unit registry — the static catalog of measurement domains.

Two domain variants:

- :class:`LinearDomain`: every unit is a positive multiple of a base unit
  (``1 unit = factor base-units``).
- :class:`NonlinearDomain`: a fixed ordered set of scales converted
  through a pivot function (Temperature).

Units are stored as ordered ``(symbol, factor)`` pairs so catalog order
is explicit; default unit selection depends on it.

INVARIANT: The registry is read-only after construction. A malformed
catalog raises :class:`RegistryError` at construction, never per
conversion.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar

from unitctl.domain.types import DomainKind, RegistryError, TemperatureScale, UnknownDomainError


@dataclass(frozen=True)
class LinearDomain:
    """A domain whose units differ from the base unit by a constant factor."""

    kind: ClassVar[DomainKind] = DomainKind.LINEAR

    name: str
    base_unit: str
    units: tuple[tuple[str, float], ...]
    allows_negative: bool = False

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(symbol for symbol, _ in self.units)

    def factor(self, symbol: str) -> float:
        """Return how many base units one *symbol* is worth."""
        for sym, factor in self.units:
            if sym == symbol:
                return factor
        msg = f"{symbol!r} is not a unit of {self.name}"
        raise KeyError(msg)


@dataclass(frozen=True)
class NonlinearDomain:
    """A domain converted through a pivot scale rather than a factor."""

    kind: ClassVar[DomainKind] = DomainKind.NONLINEAR

    name: str
    scales: tuple[str, ...]
    pivot: str
    allows_negative: bool = True

    @property
    def symbols(self) -> tuple[str, ...]:
        return self.scales


Domain = LinearDomain | NonlinearDomain


# ---------------------------------------------------------------------------
# Catalog (17 domains, factors relative to SI-consistent base units)
# ---------------------------------------------------------------------------

# fmt: off
CATALOG: tuple[Domain, ...] = (
    LinearDomain("Length", "m", (
        ("km", 1000), ("m", 1), ("cm", 0.01), ("mm", 0.001),
        ("mi", 1609.34), ("yd", 0.9144), ("ft", 0.3048), ("in", 0.0254),
    )),
    LinearDomain("Mass", "kg", (
        ("t", 1000), ("kg", 1), ("g", 0.001), ("mg", 1e-6),
        ("lb", 0.453592), ("oz", 0.0283495),
    )),
    LinearDomain("Time", "s", (
        ("yr", 31536000), ("wk", 604800), ("day", 86400),
        ("hr", 3600), ("min", 60), ("s", 1),
    )),
    NonlinearDomain(
        "Temperature",
        scales=tuple(scale.value for scale in TemperatureScale),
        pivot=TemperatureScale.CELSIUS.value,
    ),
    LinearDomain("ElectricCurrent", "A", (
        ("kA", 1e3), ("A", 1), ("mA", 1e-3), ("μA", 1e-6),
    ), allows_negative=True),
    LinearDomain("AmountOfSubstance", "mol", (
        ("mol", 1), ("mmol", 1e-3),
    )),
    LinearDomain("LuminousIntensity", "cd", (
        ("cd", 1),
    )),
    LinearDomain("Area", "m²", (
        ("km²", 1e6), ("m²", 1), ("cm²", 1e-4), ("mm²", 1e-6),
        ("acre", 4046.86), ("ft²", 0.092903),
    )),
    LinearDomain("Volume", "m³", (
        ("m³", 1), ("L", 1e-3), ("mL", 1e-6),
        ("ft³", 0.0283168), ("in³", 1.63871e-5),
    )),
    LinearDomain("Pressure", "Pa", (
        ("Pa", 1), ("kPa", 1e3), ("bar", 1e5), ("atm", 101325), ("psi", 6894.76),
    )),
    LinearDomain("Speed", "m/s", (
        ("m/s", 1), ("kmh", 0.277778), ("mph", 0.44704),
        ("knot", 0.514444), ("ft/s", 0.3048),
    )),
    LinearDomain("Acceleration", "m/s²", (
        ("m/s²", 1), ("ft/s²", 0.3048), ("g", 9.80665),
    )),
    LinearDomain("Force", "N", (
        ("N", 1), ("kN", 1e3), ("dyn", 1e-5), ("lbf", 4.44822),
    )),
    LinearDomain("Energy", "J", (
        ("J", 1), ("kJ", 1e3), ("cal", 4.184), ("Wh", 3600), ("eV", 1.60218e-19),
    )),
    LinearDomain("Power", "W", (
        ("W", 1), ("kW", 1e3), ("MW", 1e6), ("hp", 745.7),
    )),
    LinearDomain("Frequency", "Hz", (
        ("Hz", 1), ("kHz", 1e3), ("MHz", 1e6), ("GHz", 1e9), ("rpm", 1 / 60),
    )),
    LinearDomain("Density", "kg/m³", (
        ("kg/m³", 1), ("g/cm³", 1e3), ("lb/ft³", 16.0185),
    )),
)
# fmt: on


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def _check_domain(domain: Domain) -> None:
    """Raise :class:`RegistryError` if *domain* breaks a catalog invariant."""
    symbols = domain.symbols
    if not symbols:
        msg = f"{domain.name}: unit set is empty"
        raise RegistryError(msg)
    if len(set(symbols)) != len(symbols):
        msg = f"{domain.name}: duplicate unit symbol"
        raise RegistryError(msg)

    if isinstance(domain, NonlinearDomain):
        if domain.pivot not in symbols:
            msg = f"{domain.name}: pivot scale {domain.pivot!r} is not a member"
            raise RegistryError(msg)
        return

    for symbol, factor in domain.units:
        if not math.isfinite(factor) or factor <= 0:
            msg = f"{domain.name}: factor for {symbol!r} must be a positive real, got {factor!r}"
            raise RegistryError(msg)
    if domain.base_unit not in symbols:
        msg = f"{domain.name}: base unit {domain.base_unit!r} is not a member"
        raise RegistryError(msg)
    if domain.factor(domain.base_unit) != 1:
        msg = f"{domain.name}: base unit {domain.base_unit!r} must have factor 1"
        raise RegistryError(msg)


class UnitRegistry:
    """Read-only lookup over a validated catalog of domains."""

    def __init__(self, domains: Iterable[Domain] = CATALOG) -> None:
        self._domains: dict[str, Domain] = {}
        for domain in domains:
            if domain.name in self._domains:
                msg = f"duplicate domain {domain.name!r}"
                raise RegistryError(msg)
            _check_domain(domain)
            self._domains[domain.name] = domain

    def __len__(self) -> int:
        return len(self._domains)

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def list_domains(self) -> tuple[str, ...]:
        """Domain names in catalog order."""
        return tuple(self._domains)

    def get_domain(self, name: str) -> Domain:
        try:
            return self._domains[name]
        except KeyError:
            raise UnknownDomainError(name) from None

    def list_units(self, name: str) -> tuple[str, ...]:
        """Unit symbols of domain *name* in declaration order."""
        return self.get_domain(name).symbols

    def has_unit(self, name: str, symbol: str) -> bool:
        return symbol in self.list_units(name)

    def default_units(self, name: str) -> tuple[str, str]:
        """First two units in catalog order, or the single unit repeated."""
        units = self.list_units(name)
        return units[0], units[1] if len(units) > 1 else units[0]

    def domains_with_units(self, *symbols: str) -> tuple[str, ...]:
        """Names of the domains that define every one of *symbols*."""
        return tuple(
            name
            for name, domain in self._domains.items()
            if all(symbol in domain.symbols for symbol in symbols)
        )


@functools.cache
def default_registry() -> UnitRegistry:
    """The process-wide registry built from :data:`CATALOG`."""
    return UnitRegistry()
