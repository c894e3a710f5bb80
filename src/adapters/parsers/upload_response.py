"""Parser de la respuesta de subida de inventario.

Formato esperado: CSV con cabecera, una fila por SKU enviado, p.ej.

    SKU,Status,Message
    ABC-1,OK,
    ABC-2,Error,Unknown item

Cuerpo vacío => sin resultados.
"""

from __future__ import annotations

from typing import BinaryIO

from adapters.parsers._csv import cell, iter_rows, pick_column, read_text
from core.domain.errors import TeapplixParseError
from core.domain.models import TeapplixInventoryUploadResponse


class TeapplixUploadResponseParser:
    def parse(self, stream: BinaryIO) -> list[TeapplixInventoryUploadResponse]:
        text = read_text(stream)
        if not text.strip():
            return []

        columns, rows = iter_rows(text)
        sku_col = pick_column(columns, "sku", "itemname", "item_name")
        status_col = pick_column(columns, "status", "result")
        if sku_col is None or status_col is None:
            raise TeapplixParseError("upload response must have SKU and Status columns", line=1)
        message_col = pick_column(columns, "message", "error", "errormessage")
        quantity_col = pick_column(columns, "quantity", "qty")

        results: list[TeapplixInventoryUploadResponse] = []
        for line, row in rows:
            sku = cell(row, sku_col)
            status = cell(row, status_col)
            if not sku or not status:
                raise TeapplixParseError("missing SKU or Status value", line=line)

            quantity_raw = cell(row, quantity_col)
            try:
                quantity = int(quantity_raw) if quantity_raw is not None else None
            except ValueError as exc:
                raise TeapplixParseError(f"invalid quantity {quantity_raw!r}", line=line) from exc

            results.append(
                TeapplixInventoryUploadResponse(
                    sku=sku,
                    status=status,
                    message=cell(row, message_col),
                    quantity=quantity,
                )
            )
        return results
