"""Utilidades CSV compartidas por los parsers de Teapplix."""

from __future__ import annotations

import csv
import io
from typing import BinaryIO, Iterator

from core.domain.errors import TeapplixParseError


def read_text(stream: BinaryIO) -> str:
    raw = stream.read()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TeapplixParseError(f"content is not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


def iter_rows(text: str) -> tuple[dict[str, str], Iterator[tuple[int, dict[str, str]]]]:
    """Devuelve (columnas normalizadas -> nombre original, filas con número de línea).

    Las cabeceras se comparan en minúsculas y sin espacios.
    """

    reader = csv.DictReader(io.StringIO(text, newline=""), skipinitialspace=True)
    try:
        fieldnames = reader.fieldnames or []
    except csv.Error as exc:
        raise TeapplixParseError(f"malformed header: {exc}", line=1) from exc

    columns = {name.strip().lower(): name for name in fieldnames if name}

    def _rows() -> Iterator[tuple[int, dict[str, str]]]:
        try:
            for row in reader:
                if None in row:
                    raise TeapplixParseError("row has more values than header columns", line=reader.line_num)
                if not any((value or "").strip() for value in row.values()):
                    continue
                yield reader.line_num, row
        except csv.Error as exc:
            raise TeapplixParseError(str(exc), line=reader.line_num) from exc

    return columns, _rows()


def pick_column(columns: dict[str, str], *aliases: str) -> str | None:
    for alias in aliases:
        original = columns.get(alias)
        if original is not None:
            return original
    return None


def cell(row: dict[str, str], column: str | None) -> str | None:
    if column is None:
        return None
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None
