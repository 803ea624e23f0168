"""ConverterSession — per-user conversion state and history.

State machine::

    IDLE --convert ok--> CONVERTED
    CONVERTED --select_domain / reset / convert failure--> IDLE

One session per interactive user. Sessions never share mutable state;
only the read-only registry is shared.

INVARIANT: The history is append-only. Only ``reset()`` empties it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from unitctl.config.models import DisplayConfig
from unitctl.domain.conversion import ConversionResult, convert
from unitctl.domain.registry import Domain, LinearDomain, UnitRegistry
from unitctl.domain.types import ConversionError, DomainKind, ErrorCode, SessionState
from unitctl.domain.validation import (
    validate_number,
    validate_sign,
    validate_unit,
    validate_units_distinct,
)
from unitctl.services.base import BaseService
from unitctl.services.result import ServiceError, ServiceResult
from unitctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class HistoryEntry(BaseModel):
    """One successful conversion, as recorded in the session history."""

    model_config = {"frozen": True}

    domain: str
    input_value: float
    source_unit: str
    target_unit: str
    result_text: str


class ConverterSession(BaseService):
    """Selected domain and units, last outcome, and conversion history."""

    def __init__(
        self,
        registry: UnitRegistry | None = None,
        *,
        display: DisplayConfig | None = None,
        default_domain: str | None = None,
    ) -> None:
        super().__init__(registry)
        self._display = display or DisplayConfig()
        # Raises UnknownDomainError for a bad default: a configuration
        # mistake, not a user-input one.
        self._default_domain = default_domain or self._registry.list_domains()[0]
        self._registry.get_domain(self._default_domain)

        self._history: list[HistoryEntry] = []
        self._domain = self._default_domain
        self._source_unit, self._target_unit = self._registry.default_units(self._domain)
        self._input = ""
        self._result: ConversionResult | None = None
        self._error: str | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.CONVERTED if self._result is not None else SessionState.IDLE

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def units(self) -> tuple[str, str]:
        """Currently selected ``(source, target)`` units."""
        return self._source_unit, self._target_unit

    @property
    def result(self) -> ConversionResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        """History entries, oldest first."""
        return tuple(self._history)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _clear_outcome(self) -> None:
        self._input = ""
        self._result = None
        self._error = None

    def _select(self, name: str) -> None:
        """Switch domain and reset units to their defaults. Raises on unknown."""
        self._registry.get_domain(name)
        self._domain = name
        self._source_unit, self._target_unit = self._registry.default_units(name)
        self._clear_outcome()

    def _precision_warnings(self, dom: Domain, result: ConversionResult) -> list[str]:
        """Warn when a non-zero result shows as zero at display precision."""
        places = (
            self._display.linear_precision
            if dom.kind is DomainKind.LINEAR
            else self._display.temperature_precision
        )
        if result.value != 0 and round(result.value, places) == 0:
            return [
                f"Result {result.value!r} {result.unit} rounds to zero at {places} decimal places"
            ]
        return []

    def _selection_data(self) -> dict[str, Any]:
        return {
            "domain": self._domain,
            "source_unit": self._source_unit,
            "target_unit": self._target_unit,
            "units": list(self._registry.list_units(self._domain)),
        }

    # ------------------------------------------------------------------
    # Catalog queries
    # ------------------------------------------------------------------

    def list_domains(self) -> ServiceResult:
        """Every domain with its base unit and unit count, in catalog order."""
        items: list[dict[str, Any]] = []
        for name in self._registry.list_domains():
            dom = self._registry.get_domain(name)
            items.append(
                {
                    "domain": name,
                    "kind": str(dom.kind),
                    "base_unit": dom.base_unit if isinstance(dom, LinearDomain) else None,
                    "allows_negative": dom.allows_negative,
                    "unit_count": len(dom.symbols),
                    "current": name == self._domain,
                }
            )
        return ServiceResult(ok=True, op="list_domains", data={"items": items, "count": len(items)})

    def list_units(self, name: str | None = None) -> ServiceResult:
        """Units of *name* (default: the selected domain) with their factors."""
        op = "list_units"
        name = name or self._domain
        try:
            dom = self._registry.get_domain(name)
        except ConversionError as exc:
            return self._failure(op, exc)

        if isinstance(dom, LinearDomain):
            items = [{"unit": sym, "factor": factor} for sym, factor in dom.units]
            base_unit: str | None = dom.base_unit
        else:
            items = [{"unit": sym, "factor": None} for sym in dom.symbols]
            base_unit = None
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": name,
                "kind": str(dom.kind),
                "base_unit": base_unit,
                "items": items,
                "count": len(items),
            },
        )

    def locate(self, source_unit: str, target_unit: str) -> ServiceResult:
        """Find the single domain that defines both units."""
        op = "locate"
        matches = self._registry.domains_with_units(source_unit, target_unit)
        if len(matches) == 1:
            return ServiceResult(ok=True, op=op, data={"domain": matches[0]})

        if matches:
            message = (
                f"Units '{source_unit}' and '{target_unit}' exist in several domains "
                f"({', '.join(matches)}); pass a domain explicitly"
            )
        else:
            message = f"No domain defines both '{source_unit}' and '{target_unit}'"
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=str(ErrorCode.UNKNOWN_UNIT),
                message=message,
                detail={"candidates": list(matches)},
            ),
        )

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    @traced
    def select_domain(self, name: str) -> ServiceResult:
        """Switch to *name*, clearing the last outcome and resetting units."""
        op = "select_domain"
        try:
            self._select(name)
        except ConversionError as exc:
            return self._failure(op, exc)
        logger.debug("domain.selected", extra={"domain": name})
        return ServiceResult(ok=True, op=op, data=self._selection_data())

    @traced
    def convert(
        self,
        raw_input: str,
        source_unit: str | None = None,
        target_unit: str | None = None,
        *,
        domain: str | None = None,
    ) -> ServiceResult:
        """Validate *raw_input*, convert it, and record the outcome.

        Omitted units fall back to the current selection. A *domain*
        different from the selected one is selected first, which resets
        the unit defaults before the explicit units are applied.

        Checks run in order: domain, unit membership, distinct units,
        number syntax, sign.
        """
        op = "convert"
        try:
            with trace_span("validate") as span:
                if domain is not None and domain != self._domain:
                    self._select(domain)
                dom = self._registry.get_domain(self._domain)

                source = source_unit or self._source_unit
                target = target_unit or self._target_unit
                validate_unit(dom, source)
                validate_unit(dom, target)
                self._source_unit, self._target_unit = source, target
                self._input = raw_input

                validate_units_distinct(source, target)
                value = validate_number(raw_input)
                validate_sign(value, dom)
                if span:
                    span.annotate("domain", dom.name)
                    span.annotate("kind", str(dom.kind))

            with trace_span("convert"):
                result = convert(
                    dom,
                    value,
                    source,
                    target,
                    linear_precision=self._display.linear_precision,
                    temperature_precision=self._display.temperature_precision,
                )
        except ConversionError as exc:
            self._result = None
            self._error = exc.message
            logger.debug(
                "conversion.rejected",
                extra={"domain": self._domain, "code": str(exc.code), "raw_input": raw_input},
            )
            return self._failure(op, exc)

        with trace_span("record"):
            self._result = result
            self._error = None
            self._history.append(
                HistoryEntry(
                    domain=dom.name,
                    input_value=value,
                    source_unit=source,
                    target_unit=target,
                    result_text=result.text,
                )
            )

        logger.debug(
            "conversion.ok",
            extra={
                "domain": dom.name,
                "source_unit": source,
                "target_unit": target,
                "result": result.text,
            },
        )
        return ServiceResult(
            ok=True,
            op=op,
            warnings=self._precision_warnings(dom, result),
            data={
                "domain": dom.name,
                "input": value,
                "source_unit": source,
                "target_unit": target,
                "value": result.value,
                "result": result.text,
                "derivation": list(result.derivation),
                "history_count": len(self._history),
            },
        )

    def get_history(self) -> ServiceResult:
        """All recorded conversions, oldest first."""
        items = [entry.model_dump() for entry in self._history]
        return ServiceResult(ok=True, op="history", data={"items": items, "count": len(items)})

    @traced
    def reset(self) -> ServiceResult:
        """Clear everything, including history, and return to the default domain."""
        cleared = len(self._history)
        self._history.clear()
        self._select(self._default_domain)
        logger.debug("session.reset", extra={"cleared": cleared})
        return ServiceResult(
            ok=True,
            op="reset",
            data={**self._selection_data(), "cleared": cleared},
        )

    def status(self) -> ServiceResult:
        """Snapshot of the session for display."""
        return ServiceResult(
            ok=True,
            op="status",
            data={
                "state": str(self.state),
                "domain": self._domain,
                "source_unit": self._source_unit,
                "target_unit": self._target_unit,
                "input": self._input,
                "result": self._result.text if self._result else None,
                "derivation": list(self._result.derivation) if self._result else [],
                "error": self._error,
                "history_count": len(self._history),
            },
        )
