"""Tests for the structured logging system (receipt_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from receipt_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "receipt_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("generated", extra={"count": 3, "status": "issued"})

        record = _parse_log(stream)
        assert record["count"] == 3
        assert record["status"] == "issued"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(correlation_id="abc-123", contract_id="c1")
        get_logger("test").info("test_msg")

        record = _parse_log(stream)
        assert record["correlation_id"] == "abc-123"
        assert record["contract_id"] == "c1"

    def test_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise ValueError("boom")
        except ValueError:
            get_logger("test").error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "traceback" in record

    def test_kernel_exception_code_extracted(self):
        """Receipt kernel exceptions carry a .code attribute."""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        from receipt_kernel.exceptions import ReceiptPersistenceError

        try:
            raise ReceiptPersistenceError("RB-AUTO-202509-CONT-001", "c1", "timeout")
        except ReceiptPersistenceError:
            get_logger("test").error("save_failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "RECEIPT_PERSISTENCE_FAILED"
        assert record["exc_type"] == "ReceiptPersistenceError"
        assert record["exc_receipt_number"] == "RB-AUTO-202509-CONT-001"
        assert record["exc_contract_id"] == "c1"
        assert record["exc_reason"] == "timeout"

    def test_no_context_fields_when_empty(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("bare_message")

        record = _parse_log(stream)
        assert "correlation_id" not in record
        assert "contract_id" not in record

    def test_uuid_date_and_decimal_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        uid = uuid4()
        get_logger("test").info(
            "typed_values",
            extra={
                "receipt_id": uid,
                "issue_date": date(2025, 9, 17),
                "amount": Decimal("100.00"),
            },
        )

        record = _parse_log(stream)
        assert record["receipt_id"] == str(uid)
        assert record["issue_date"] == "2025-09-17"
        assert record["amount"] == "100.00"

    def test_enum_serialized_by_value(self):
        from receipt_kernel.domain.records import ReceiptStatus

        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("status", extra={"status": ReceiptStatus.ISSUED})

        assert _parse_log(stream)["status"] == ReceiptStatus.ISSUED.value

    def test_bound_context_wins_over_extra(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        with LogContext.bind(contract_id="bound"):
            get_logger("test").info("clash", extra={"contract_id": "extra"})

        assert _parse_log(stream)["contract_id"] == "bound"

    def test_valid_json_every_line(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        # Default level is INFO, so the debug line is dropped.
        assert len(logs) == 2
        for record in logs:
            assert {"ts", "level", "logger", "message"} <= record.keys()


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_set_and_get(self):
        LogContext.set(correlation_id="x", contract_id="c1")
        assert LogContext.get_all() == {"correlation_id": "x", "contract_id": "c1"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_context_manager(self):
        LogContext.set(correlation_id="outer")
        with LogContext.bind(correlation_id="inner"):
            assert LogContext.get_all()["correlation_id"] == "inner"
        assert LogContext.get_all()["correlation_id"] == "outer"

    def test_bind_restores_none(self):
        """bind() restores to None if there was no previous value."""
        assert "contract_id" not in LogContext.get_all()
        with LogContext.bind(contract_id="temp"):
            assert LogContext.get_all()["contract_id"] == "temp"
        assert "contract_id" not in LogContext.get_all()

    def test_additive_set(self):
        LogContext.set(correlation_id="a")
        LogContext.set(contract_id="b")
        ctx = LogContext.get_all()
        assert ctx["correlation_id"] == "a"
        assert ctx["contract_id"] == "b"

    def test_set_none_keeps_value(self):
        LogContext.set(correlation_id="a")
        LogContext.set(correlation_id=None, contract_id="c1")
        assert LogContext.get_all() == {"correlation_id": "a", "contract_id": "c1"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(contract_id="c1"):
                raise RuntimeError("boom")
        assert LogContext.get_all() == {}

    def test_unknown_bind_field_rejected(self):
        with pytest.raises(TypeError):
            with LogContext.bind(not_a_field="x"):
                pass
        assert LogContext.get_all() == {}

    def test_unknown_set_field_rejected(self):
        with pytest.raises(TypeError):
            LogContext.set(owner_id="o1")


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for logger hierarchy setup."""

    def test_idempotent(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        configure_logging(handler=handler)
        assert len(logging.getLogger("receipt_kernel").handlers) == 1

    def test_reset_clears_handlers(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        reset_logging()
        assert logging.getLogger("receipt_kernel").handlers == []

    def test_does_not_propagate_to_root(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        assert logging.getLogger("receipt_kernel").propagate is False
