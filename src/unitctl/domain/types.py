"""Enums and the error type shared across the domain layer."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class DomainKind(StrEnum):
    """Tag for the two domain variants in the registry."""

    LINEAR = "linear"
    NONLINEAR = "nonlinear"


class TemperatureScale(StrEnum):
    """Recognized temperature scales, in catalog order."""

    CELSIUS = "C"
    FAHRENHEIT = "F"
    KELVIN = "K"


class SessionState(StrEnum):
    """Converter session states."""

    IDLE = "idle"
    CONVERTED = "converted"


class ErrorCode(StrEnum):
    """User-input failures reported by the converter."""

    UNKNOWN_DOMAIN = "UNKNOWN_DOMAIN"
    UNKNOWN_UNIT = "UNKNOWN_UNIT"
    NOT_A_NUMBER = "NOT_A_NUMBER"
    NEGATIVE_NOT_ALLOWED = "NEGATIVE_NOT_ALLOWED"
    SAME_UNIT = "SAME_UNIT"


class ConversionError(ValueError):
    """A recoverable, user-caused failure.

    Raised by the domain layer and converted into a failed
    ``ServiceResult`` by the session; never surfaced to the user as a
    traceback.
    """

    def __init__(self, code: ErrorCode, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail


class UnknownDomainError(ConversionError, KeyError):
    """Lookup of a domain name that is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(ErrorCode.UNKNOWN_DOMAIN, f"Unknown domain '{name}'", domain=name)

    def __str__(self) -> str:
        return self.message


class RegistryError(Exception):
    """A malformed unit catalog. Raised once, at registry construction."""
