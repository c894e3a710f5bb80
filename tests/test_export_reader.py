from __future__ import annotations

import io
from datetime import date
from decimal import Decimal

import pytest

from adapters.web_request_services import WebRequestServices
from core.domain.errors import TeapplixParseError


def _web(credentials, settings, sink, **kwargs) -> WebRequestServices:
    return WebRequestServices(credentials, settings=settings, sink=sink, **kwargs)


def test_single_order_is_parsed(credentials, settings, sink, export_single_order) -> None:
    orders = _web(credentials, settings, sink).get_parsed_orders(io.BytesIO(export_single_order))

    assert len(orders) == 1
    order = orders[0]
    assert order.txn_id == "1001"
    assert order.order_date == date(2024, 3, 5)
    assert order.payment_status == "Completed"
    assert order.customer_name == "Jane Roe"
    assert order.customer_email == "jane@example.com"
    assert order.currency == "USD"
    assert order.total == Decimal("42.50")
    assert order.shipping == Decimal("5.00")
    assert [(i.sku, i.quantity, i.description, i.subtotal) for i in order.items] == [
        ("SKU-RED", 2, "Red mug", Decimal("37.50"))
    ]
    assert sink.errors == []


def test_cursor_is_reset_before_parsing(credentials, settings, sink, export_single_order) -> None:
    buffer = io.BytesIO(export_single_order)
    buffer.read()

    orders = _web(credentials, settings, sink).get_parsed_orders(buffer)

    assert [o.txn_id for o in orders] == ["1001"]


def test_reading_twice_gives_equal_results(credentials, settings, sink, export_single_order) -> None:
    web = _web(credentials, settings, sink)
    buffer = io.BytesIO(export_single_order)
    buffer.seek(17)

    first = web.get_parsed_orders(buffer)
    second = web.get_parsed_orders(buffer)

    assert first == second


def test_corrupt_export_logs_full_content(credentials, settings, sink) -> None:
    corrupt = b"TxnId,Date,ItemName,Quantity\r\n1001,2024-03-05,SKU-RED,2\r\n1002,2024-03-0"
    buffer = io.BytesIO(corrupt)
    buffer.seek(5)

    with pytest.raises(TeapplixParseError) as excinfo:
        _web(credentials, settings, sink).get_parsed_orders(buffer)

    assert len(sink.errors) == 1
    error, template, args = sink.errors[0]
    assert error is excinfo.value
    assert args == ("acme", corrupt.decode("utf-8"))
    assert sink.rendered_errors()[0].startswith("Failed to parse file for account 'acme':\n\r")
    assert sink.streams == []


def test_any_parser_error_is_logged_and_reraised(credentials, settings, sink) -> None:
    boom = RuntimeError("parser exploded")

    class _Parser:
        def parse(self, stream):
            raise boom

    buffer = io.BytesIO(b"anything")

    with pytest.raises(RuntimeError) as excinfo:
        _web(credentials, settings, sink, export_parser=_Parser()).get_parsed_orders(buffer)

    assert excinfo.value is boom
    assert sink.errors[0][0] is boom
    assert sink.errors[0][2] == ("acme", "anything")


def test_lazy_parser_errors_are_intercepted(credentials, settings, sink) -> None:
    class _LazyParser:
        def parse(self, stream):
            yield from ()
            raise ValueError("bad row")

    with pytest.raises(ValueError, match="bad row"):
        _web(credentials, settings, sink, export_parser=_LazyParser()).get_parsed_orders(io.BytesIO(b"x"))

    assert len(sink.errors) == 1


def test_undecodable_bytes_still_dumped(credentials, settings, sink) -> None:
    raw = b"TxnId,Date\r\n\xff\xfe,2024-01-01\r\n"

    with pytest.raises(TeapplixParseError):
        _web(credentials, settings, sink).get_parsed_orders(io.BytesIO(raw))

    assert sink.errors[0][2] == ("acme", raw.decode("utf-8", errors="replace"))
