"""
Unit tests for structured logging.
"""

from __future__ import annotations

import json
import logging

import pytest

from cypherlink.core.logging import (
    JSONFormatter,
    TransactionIdFilter,
    get_log_level_from_env,
    get_transaction_id,
    reset_transaction_id,
    set_transaction_id,
    setup_structured_logging,
)
from cypherlink.graph.transaction import Transaction
from cypherlink.graph.transport import FakeHttpTransport


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="cypherlink.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestTransactionIdContext:
    """Tests for the transaction ID context variable."""

    def test_set_and_reset(self) -> None:
        assert get_transaction_id() is None

        token = set_transaction_id("abc123")
        assert get_transaction_id() == "abc123"

        reset_transaction_id(token)
        assert get_transaction_id() is None

    def test_filter_stamps_record(self) -> None:
        record = _record()
        token = set_transaction_id("abc123")
        try:
            TransactionIdFilter().filter(record)
        finally:
            reset_transaction_id(token)

        assert record.transaction_id == "abc123"

    def test_filter_uses_dash_outside_transaction(self) -> None:
        record = _record()

        TransactionIdFilter().filter(record)

        assert record.transaction_id == "-"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_formats_standard_fields(self) -> None:
        record = _record("committed")
        record.transaction_id = "abc123"

        data = json.loads(JSONFormatter(service_name="svc").format(record))

        assert data["level"] == "INFO"
        assert data["service"] == "svc"
        assert data["transaction_id"] == "abc123"
        assert data["message"] == "committed"
        assert "timestamp" in data


class TestLogLevel:
    """Tests for CYPHERLINK_LOG_LEVEL."""

    def test_reads_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CYPHERLINK_LOG_LEVEL", "debug")

        assert get_log_level_from_env() == logging.DEBUG

    def test_invalid_level_defaults_to_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CYPHERLINK_LOG_LEVEL", "chatty")

        assert get_log_level_from_env() == logging.INFO

    def test_setup_configures_package_logger(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "cypherlink.log"

        logger = setup_structured_logging(
            service_name="cypherlink-test",
            log_file_path=str(log_file),
            log_level=logging.DEBUG,
        )

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert logger.propagate is False
        assert log_file.parent.exists()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


class TestTransactionLogging:
    """Records emitted during execute() carry the transaction ID."""

    @pytest.mark.asyncio
    async def test_execute_records_have_transaction_id(self) -> None:
        handler = _ListHandler()
        handler.addFilter(TransactionIdFilter())
        logger = logging.getLogger("cypherlink.graph.transaction")
        previous_level = logger.level
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

        fake = FakeHttpTransport()
        fake.queue_json(201, {"results": [], "errors": [], "commit": "http://db/commit"})
        fake.queue_response(200)
        tx = Transaction("http://db/tx", "", fake).add_query("RETURN 1")
        try:
            await tx.execute()
        finally:
            logger.removeHandler(handler)
            logger.setLevel(previous_level)

        assert handler.records
        assert {r.transaction_id for r in handler.records} == {tx.transaction_id}
        assert get_transaction_id() is None
