"""Errores del dominio.

Los errores de transporte NO viven aquí: se propagan tal cual los lanza httpx.
"""

from __future__ import annotations


class TeapplixError(Exception):
    """Base para errores propios del cliente."""


class TeapplixParseError(TeapplixError, ValueError):
    """Contenido de Teapplix que no se puede interpretar."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
