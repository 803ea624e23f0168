"""BaseService — shared foundation for unitctl services.

Every service reads from a :class:`UnitRegistry`. The registry is
immutable, so one instance is safely shared by any number of services;
anything mutable belongs to the service instance itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from unitctl.domain.registry import default_registry
from unitctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from unitctl.domain.registry import UnitRegistry
    from unitctl.domain.types import ConversionError


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ConverterSession(BaseService):
            def convert(self, raw: str, ...) -> ServiceResult:
                try:
                    ...
                except ConversionError as exc:
                    return self._failure("convert", exc)
    """

    def __init__(self, registry: UnitRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    @staticmethod
    def _failure(op: str, exc: ConversionError) -> ServiceResult:
        """Translate a domain-layer failure into a failed ServiceResult."""
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=str(exc.code), message=exc.message, detail=exc.detail),
        )
