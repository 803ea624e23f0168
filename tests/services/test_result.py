"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from unitctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="convert", data={"result": "1.000000 km"})
        assert result.ok is True
        assert result.op == "convert"
        assert result.data == {"result": "1.000000 km"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="SAME_UNIT", message="Source and target units must differ.")
        result = ServiceResult(ok=False, op="convert", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "SAME_UNIT"

    def test_json_serialization_keeps_unicode(self) -> None:
        result = ServiceResult(
            ok=True,
            op="convert",
            data={"derivation": ["1000 ÷ 1000 = 1 km"], "unit": "μA"},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["derivation"] == ["1000 ÷ 1000 = 1 km"]
        assert parsed["data"]["unit"] == "μA"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="UNKNOWN_UNIT",
            message="Unit 'kg' is not part of Length",
            detail={"unit": "kg", "domain": "Length"},
        )
        assert error.detail["unit"] == "kg"

    def test_default_detail(self) -> None:
        assert ServiceError(code="E", message="bad").detail == {}
