"""Tests for logging setup module."""

import io
import json
import logging
import sys

from optsim.logging_setup import (
    JSONFormatter,
    SimpleFormatter,
    fields,
    get_logger,
    reset_logging,
    setup_logging,
)
from optsim.options.chain import OptionChain
from optsim.options.contract import Contract, OptionType


class TestJSONFormatter:
    """Tests for JSON formatter."""

    def test_format_basic_message(self) -> None:
        """Test formatting a basic log message."""
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Test message",
            args=(),
            exc_info=None,
        )

        data = json.loads(formatter.format(record))

        assert "timestamp" in data
        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"

    def test_format_with_extra_fields(self) -> None:
        """Test extra_fields are merged into the output."""
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test",
            level=logging.WARNING,
            pathname="test.py",
            lineno=1,
            msg="Premium %.2f",
            args=(4.75,),
            exc_info=None,
        )
        record.__dict__.update(fields(contract="Call"))

        data = json.loads(formatter.format(record))

        assert data["message"] == "Premium 4.75"
        assert data["contract"] == "Call"


class TestSimpleFormatter:
    """Tests for simple formatter."""

    def test_format_includes_level(self) -> None:
        """Test simple formatter includes level."""
        formatter = SimpleFormatter()
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Test message",
            args=(),
            exc_info=None,
        )

        output = formatter.format(record)

        assert "INFO" in output
        assert "test" in output
        assert "Test message" in output


class TestLoggingSetup:
    """Tests for logging setup functions."""

    def test_setup_logging_creates_handler(self) -> None:
        """Test setup_logging adds handler to logger."""
        reset_logging()
        setup_logging(level="DEBUG")

        logger = logging.getLogger("optsim")
        assert len(logger.handlers) > 0
        assert logger.level == logging.DEBUG

    def test_handler_writes_to_stderr(self) -> None:
        """Log lines must not land on stdout, which the display owns."""
        reset_logging()
        setup_logging()

        handler = logging.getLogger("optsim").handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_json_format_selected(self) -> None:
        """Test format_type='json' installs the JSON formatter."""
        reset_logging()
        setup_logging(format_type="json")

        handler = logging.getLogger("optsim").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_setup_logging_only_once(self) -> None:
        """Test setup_logging only runs once."""
        reset_logging()
        setup_logging()
        handler_count = len(logging.getLogger("optsim").handlers)

        setup_logging()
        assert len(logging.getLogger("optsim").handlers) == handler_count

    def test_get_logger_returns_child(self) -> None:
        """Test get_logger returns child logger."""
        assert get_logger("options.chain").name == "optsim.options.chain"

    def test_get_logger_handles_prefixed_name(self) -> None:
        """Test get_logger handles already-prefixed names."""
        assert get_logger("optsim.cli.sim").name == "optsim.cli.sim"

    def test_reset_logging(self) -> None:
        """Test reset_logging clears handlers."""
        setup_logging()
        reset_logging()

        assert len(logging.getLogger("optsim").handlers) == 0

    def test_setup_logging_custom_stream(self) -> None:
        """Records go to the stream passed in."""
        out = io.StringIO()
        reset_logging()
        setup_logging(level="INFO", stream=out)

        get_logger("test.stream").info("hello")

        assert "hello" in out.getvalue()


class TestStructuredFields:
    """Tests for extra_fields produced by library code."""

    def test_fields_wraps_values(self) -> None:
        """fields() builds the extra= mapping."""
        assert fields(index=1, drift_pct=-2) == {"extra_fields": {"index": 1, "drift_pct": -2}}

    def test_simple_formatter_appends_fields(self) -> None:
        """Plain lines carry key=value pairs after the message."""
        record = logging.LogRecord(
            name="test",
            level=logging.DEBUG,
            pathname="test.py",
            lineno=1,
            msg="Premium drift",
            args=(),
            exc_info=None,
        )
        record.__dict__.update(fields(index=0, drift_pct=3))

        output = SimpleFormatter().format(record)

        assert output.endswith("Premium drift | index=0 drift_pct=3")

    def test_premium_drift_records_carry_fields(self, caplog) -> None:
        """Each drifted premium is logged with index, prices and drift."""
        chain = OptionChain(seed=9)
        chain.add(Contract(OptionType.CALL, 100.0, 5.0, "2024-12-31"))
        chain.add(Contract(OptionType.PUT, 100.0, 4.0, "2024-12-31"))

        with caplog.at_level(logging.DEBUG, logger="optsim"):
            chain.update_all_premiums()

        drift_records = [
            r
            for r in caplog.records
            if r.name == "optsim.options.chain" and hasattr(r, "extra_fields")
        ]
        assert [r.extra_fields["index"] for r in drift_records] == [0, 1]
        first = drift_records[0].extra_fields
        assert first["option_type"] == "Call"
        assert first["old_premium"] == 5.0
        assert first["new_premium"] == chain.contracts[0].premium
        assert -5 <= first["drift_pct"] <= 4

    def test_premium_drift_json_line(self) -> None:
        """The JSON formatter renders drift fields as top-level keys."""
        out = io.StringIO()
        reset_logging()
        setup_logging(level="DEBUG", format_type="json", stream=out)
        chain = OptionChain(seed=9)
        chain.add(Contract(OptionType.CALL, 100.0, 5.0, "2024-12-31"))

        chain.update_all_premiums()

        lines = [json.loads(line) for line in out.getvalue().splitlines()]
        drift = [d for d in lines if "drift_pct" in d]
        assert len(drift) == 1
        assert drift[0]["index"] == 0
        assert drift[0]["old_premium"] == 5.0
        assert drift[0]["logger"] == "optsim.options.chain"
