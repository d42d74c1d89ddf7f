"""Tests for the @traced_engine decorator and input fingerprinting."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from payroll_engines.tracer import compute_input_fingerprint, traced_engine
from payroll_kernel.domain import HolidayType


@dataclass(frozen=True)
class _Rates:
    rate: Decimal
    cap: Decimal


@traced_engine("sample", "2.1", fingerprint_fields=("amount", "rates"))
def _sample_engine(amount, rates, note=""):
    return amount * rates.rate


@traced_engine("failing", "1.0", fingerprint_fields=("amount",))
def _failing_engine(amount):
    raise ValueError("bad amount")


class TestFingerprint:

    def test_deterministic(self):
        args = {"amount": Decimal("100.50"), "when": date(2025, 9, 1)}
        assert compute_input_fingerprint(("amount", "when"), args) == compute_input_fingerprint(
            ("amount", "when"), dict(args)
        )

    def test_length(self):
        assert len(compute_input_fingerprint(("a",), {"a": 1})) == 16

    def test_sensitive_to_values(self):
        one = compute_input_fingerprint(("amount",), {"amount": Decimal("1")})
        two = compute_input_fingerprint(("amount",), {"amount": Decimal("2")})
        assert one != two

    def test_mapping_order_irrelevant(self):
        a = compute_input_fingerprint(("m",), {"m": {"x": 1, "y": 2}})
        b = compute_input_fingerprint(("m",), {"m": {"y": 2, "x": 1}})
        assert a == b

    def test_enum_and_dataclass(self):
        fp1 = compute_input_fingerprint(
            ("t", "r"), {"t": HolidayType.REGULAR, "r": _Rates(Decimal("0.1"), Decimal("5"))}
        )
        fp2 = compute_input_fingerprint(
            ("t", "r"), {"t": "regular", "r": _Rates(Decimal("0.1"), Decimal("5"))}
        )
        assert fp1 == fp2

    def test_missing_field_recorded_as_null(self):
        assert compute_input_fingerprint(("gone",), {}) == compute_input_fingerprint(
            ("gone",), {"gone": None}
        )


class TestTracedEngine:

    def test_result_unchanged(self):
        rates = _Rates(Decimal("0.5"), Decimal("0"))
        assert _sample_engine(Decimal("10"), rates) == Decimal("5.0")

    def test_emits_trace(self, captured_logs):
        _sample_engine(Decimal("10"), _Rates(Decimal("0.5"), Decimal("0")))
        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_ENGINE_TRACE"]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["trace_type"] == "PAYROLL_ENGINE_TRACE"
        assert trace["engine_name"] == "sample"
        assert trace["engine_version"] == "2.1"
        assert trace["function"] == "_sample_engine"
        assert trace["duration_ms"] >= 0

    def test_positional_and_keyword_fingerprint_alike(self, captured_logs):
        rates = _Rates(Decimal("0.5"), Decimal("0"))
        _sample_engine(Decimal("10"), rates)
        _sample_engine(amount=Decimal("10"), rates=rates, note="ignored")
        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_ENGINE_TRACE"]
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]

    def test_failure_propagates_without_trace(self, captured_logs):
        with pytest.raises(ValueError, match="bad amount"):
            _failing_engine(Decimal("1"))
        assert not [r for r in captured_logs() if r["message"] == "PAYROLL_ENGINE_TRACE"]

    def test_wraps_preserves_metadata(self):
        assert _sample_engine.__name__ == "_sample_engine"
