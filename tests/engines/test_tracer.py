"""Tests for the engine tracer decorator and fingerprints."""

from datetime import date

from receipt_engines.tracer import compute_input_fingerprint, traced_engine
from receipt_kernel.domain.records import ReceiptStatus
from receipt_kernel.domain.values import MonetaryAmount


@traced_engine("sample", "2.1", fingerprint_fields=("today", "limit"))
def _sample_engine(today, items, limit=3):
    return [item for item in items][:limit]


class TestComputeInputFingerprint:

    def test_deterministic(self):
        args = {"today": date(2025, 9, 7), "limit": 3}
        assert compute_input_fingerprint(("today", "limit"), args) == (
            compute_input_fingerprint(("today", "limit"), dict(args))
        )

    def test_sixteen_hex_chars(self):
        fp = compute_input_fingerprint(("today",), {"today": date(2025, 9, 7)})
        assert len(fp) == 16
        int(fp, 16)

    def test_changes_with_value(self):
        a = compute_input_fingerprint(("today",), {"today": date(2025, 9, 7)})
        b = compute_input_fingerprint(("today",), {"today": date(2025, 9, 8)})
        assert a != b

    def test_unlisted_fields_ignored(self):
        a = compute_input_fingerprint(("today",), {"today": date(2025, 9, 7), "x": 1})
        b = compute_input_fingerprint(("today",), {"today": date(2025, 9, 7), "x": 2})
        assert a == b

    def test_missing_field_is_null(self):
        a = compute_input_fingerprint(("today",), {})
        b = compute_input_fingerprint(("today",), {"today": None})
        assert a == b

    def test_dataclasses_and_enums(self):
        a = compute_input_fingerprint(
            ("amount", "status"),
            {"amount": MonetaryAmount.of("1.00"), "status": ReceiptStatus.ISSUED},
        )
        b = compute_input_fingerprint(
            ("amount", "status"),
            {"amount": MonetaryAmount.from_cents(100), "status": "issued"},
        )
        c = compute_input_fingerprint(
            ("amount", "status"),
            {"amount": MonetaryAmount.from_cents(101), "status": "issued"},
        )
        assert a == b
        assert a != c


class TestTracedEngine:

    def test_result_passes_through(self):
        assert _sample_engine(date(2025, 9, 7), [1, 2, 3, 4]) == [1, 2, 3]

    def test_wraps_metadata(self):
        assert _sample_engine.__name__ == "_sample_engine"

    def test_trace_record(self, captured_logs):
        _sample_engine(date(2025, 9, 7), [1])

        traces = [r for r in captured_logs() if r["message"] == "RECEIPT_ENGINE_TRACE"]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["trace_type"] == "RECEIPT_ENGINE_TRACE"
        assert trace["engine_name"] == "sample"
        assert trace["engine_version"] == "2.1"
        assert trace["function"] == "_sample_engine"
        assert trace["duration_ms"] >= 0

    def test_positional_and_keyword_calls_same_fingerprint(self, captured_logs):
        _sample_engine(date(2025, 9, 7), [], 3)
        _sample_engine(today=date(2025, 9, 7), items=[])

        traces = [r for r in captured_logs() if r["message"] == "RECEIPT_ENGINE_TRACE"]
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]

    def test_unfingerprinted_inputs_do_not_change_hash(self, captured_logs):
        _sample_engine(date(2025, 9, 7), [1])
        _sample_engine(date(2025, 9, 7), [9, 9])

        traces = [r for r in captured_logs() if r["message"] == "RECEIPT_ENGINE_TRACE"]
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]
