from __future__ import annotations

import io
import logging

from adapters.diagnostic_sink import LoggingDiagnosticSink, read_stream_text


def test_log_stream_at_debug_keeps_cursor(caplog) -> None:
    sink = LoggingDiagnosticSink(logging.getLogger("tests.sink"))
    data = io.BytesIO(b"SKU,Status\r\nA,OK\r\n")
    data.seek(4)

    with caplog.at_level(logging.DEBUG, logger="tests.sink"):
        sink.log_stream("response", "acme", data)

    assert data.tell() == 4
    assert caplog.records[0].levelno == logging.DEBUG
    assert caplog.records[0].getMessage() == "response [acme]: SKU,Status\r\nA,OK\r\n"


def test_log_stream_skipped_above_debug(caplog) -> None:
    sink = LoggingDiagnosticSink(logging.getLogger("tests.sink.quiet"))

    with caplog.at_level(logging.INFO, logger="tests.sink.quiet"):
        sink.log_stream("response", "acme", io.BytesIO(b"payload"))

    assert caplog.records == []


def test_log_error_with_and_without_exception(caplog) -> None:
    sink = LoggingDiagnosticSink(logging.getLogger("tests.sink.errors"))
    boom = ValueError("bad")

    with caplog.at_level(logging.ERROR, logger="tests.sink.errors"):
        sink.log_error(None, "Failed for account '%s'", "acme")
        sink.log_error(boom, "Failed to parse file for account '%s':\n\r%s", "acme", "raw")

    first, second = caplog.records
    assert first.getMessage() == "Failed for account 'acme'"
    assert first.exc_info is None
    assert second.getMessage() == "Failed to parse file for account 'acme':\n\rraw"
    assert second.exc_info[1] is boom


def test_read_stream_text_strips_bom() -> None:
    assert read_stream_text(io.BytesIO(b"\xef\xbb\xbfabc")) == "abc"
