"""Parser del fichero de export de pedidos.

El export trae una fila por línea de pedido; las filas con el mismo `TxnId`
se agrupan en un único `TeapplixOrder` (orden de primera aparición).

Columnas obligatorias: TxnId, Date, ItemName (o SKU), Quantity.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import BinaryIO

from adapters.parsers._csv import cell, iter_rows, pick_column, read_text
from core.domain.errors import TeapplixParseError
from core.domain.models import TeapplixOrder, TeapplixOrderItem

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S")


def _parse_date(value: str, line: int) -> date:
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise TeapplixParseError(f"invalid date {value!r}", line=line)


def _parse_decimal(value: str | None, line: int) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(value.replace(",", ""))
    except InvalidOperation as exc:
        raise TeapplixParseError(f"invalid amount {value!r}", line=line) from exc


def _parse_quantity(value: str | None, line: int) -> int:
    if value is None:
        raise TeapplixParseError("missing Quantity value", line=line)
    try:
        quantity = int(value)
    except ValueError as exc:
        raise TeapplixParseError(f"invalid quantity {value!r}", line=line) from exc
    if quantity < 0:
        raise TeapplixParseError(f"negative quantity {quantity}", line=line)
    return quantity


class TeapplixExportFileParser:
    def parse(self, stream: BinaryIO) -> list[TeapplixOrder]:
        text = read_text(stream)
        if not text.strip():
            return []

        columns, rows = iter_rows(text)
        txn_col = pick_column(columns, "txnid", "txn_id")
        date_col = pick_column(columns, "date", "orderdate", "order_date")
        sku_col = pick_column(columns, "itemname", "sku", "item_name")
        qty_col = pick_column(columns, "quantity", "qty")
        missing = [
            name
            for name, col in (("TxnId", txn_col), ("Date", date_col), ("ItemName", sku_col), ("Quantity", qty_col))
            if col is None
        ]
        if missing:
            raise TeapplixParseError(f"missing columns: {', '.join(missing)}", line=1)

        description_col = pick_column(columns, "itemdescription", "description", "itemtitle")
        subtotal_col = pick_column(columns, "itemsubtotal", "subtotal")
        payment_col = pick_column(columns, "paymentstatus", "payment_status")
        currency_col = pick_column(columns, "currency")
        total_col = pick_column(columns, "total")
        shipping_col = pick_column(columns, "shipping")
        name_col = pick_column(columns, "name", "customername")
        email_col = pick_column(columns, "email", "payeremail")

        orders: dict[str, TeapplixOrder] = {}
        for line, row in rows:
            txn_id = cell(row, txn_col)
            raw_date = cell(row, date_col)
            sku = cell(row, sku_col)
            if not txn_id or not raw_date or not sku:
                raise TeapplixParseError("missing TxnId, Date or ItemName value", line=line)

            item = TeapplixOrderItem(
                sku=sku,
                quantity=_parse_quantity(cell(row, qty_col), line),
                description=cell(row, description_col),
                subtotal=_parse_decimal(cell(row, subtotal_col), line),
            )

            order = orders.get(txn_id)
            if order is None:
                order = TeapplixOrder(
                    txn_id=txn_id,
                    order_date=_parse_date(raw_date, line),
                    payment_status=cell(row, payment_col),
                    currency=cell(row, currency_col),
                    total=_parse_decimal(cell(row, total_col), line),
                    shipping=_parse_decimal(cell(row, shipping_col), line),
                    customer_name=cell(row, name_col),
                    customer_email=cell(row, email_col),
                )
                orders[txn_id] = order
            order.items.append(item)

        return list(orders.values())
