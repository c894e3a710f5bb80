"""Cuerpo multipart/form-data para la subida de inventario.

httpx puede generar multipart por sí mismo, pero Teapplix recibe el boundary
en un `Content-Type` construido a mano (ver `WebRequestServices`), así que el
cuerpo tiene que usar exactamente el mismo token.
"""

from __future__ import annotations

import uuid

_CRLF = b"\r\n"


def new_boundary() -> str:
    return "---------------------------" + uuid.uuid4().hex


_HEADER_ESCAPES = {chr(c): f"%{c:02X}" for c in range(0x00, 0x20) if c != 0x1B}
_HEADER_ESCAPES["\""] = "%22"
_HEADER_ESCAPES["\\"] = "\\\\"


def _escape(value: str) -> str:
    # Mismo criterio que httpx (HTML5 / RFC 7578): comillas y controles en %XX.
    return "".join(_HEADER_ESCAPES.get(ch, ch) for ch in value)


def build_multipart_body(
    *,
    boundary: str,
    file_name: str,
    content: bytes,
    file_field: str = "upload",
    content_type: str = "text/csv",
    fields: dict[str, str] | None = None,
) -> bytes:
    """Form fields primero, luego el fichero; CRLF y cierre `--boundary--`."""

    if not boundary:
        raise ValueError("boundary must be a non-empty string")

    delimiter = b"--" + boundary.encode("ascii")
    parts: list[bytes] = []

    for name, value in (fields or {}).items():
        parts.append(delimiter)
        parts.append(f'Content-Disposition: form-data; name="{_escape(name)}"'.encode("utf-8"))
        parts.append(b"")
        parts.append(value.encode("utf-8"))

    parts.append(delimiter)
    parts.append(
        f'Content-Disposition: form-data; name="{_escape(file_field)}"; '
        f'filename="{_escape(file_name)}"'.encode("utf-8")
    )
    parts.append(f"Content-Type: {content_type}".encode("ascii"))
    parts.append(b"")
    parts.append(content)
    parts.append(delimiter + b"--")
    parts.append(b"")

    return _CRLF.join(parts)
