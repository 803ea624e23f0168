"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

import pytest

from unitctl.services.result import ServiceResult
from unitctl.services.session import ConverterSession
from unitctl.services.telemetry import (
    Span,
    _current_span,
    enable_telemetry,
    trace_span,
    traced,
)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        child.annotate("domain", "Length")
        root.children.append(child)
        d = root.to_dict()
        assert d["children"][0]["annotations"] == {"domain": "Length"}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None


class TestTraced:
    def test_disabled_leaves_result_untouched(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="noop")

        assert op().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("inner") as span:
                assert span is not None
                span.annotate("k", 1)
            return ServiceResult(ok=True, op="noop", meta={"keep": True})

        result = op()
        assert result.meta is not None
        assert result.meta["keep"] is True
        tree = result.meta["telemetry"]
        assert tree["children"][0]["name"] == "inner"
        assert tree["children"][0]["annotations"] == {"k": 1}

    def test_exception_propagates(self) -> None:
        enable_telemetry()

        @traced
        def boom() -> ServiceResult:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            boom()
        assert _current_span.get() is None

    def test_session_convert_records_steps(self, session: ConverterSession) -> None:
        enable_telemetry()
        result = session.convert("1000", "m", "km")
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "ConverterSession.convert"
        assert [c["name"] for c in tree["children"]] == ["validate", "convert", "record"]
        assert tree["children"][0]["annotations"] == {"domain": "Length", "kind": "linear"}

    def test_failed_convert_still_traced(self, session: ConverterSession) -> None:
        enable_telemetry()
        result = session.convert("nope", "m", "km")
        assert not result.ok
        assert result.meta is not None
        assert [c["name"] for c in result.meta["telemetry"]["children"]] == ["validate"]
