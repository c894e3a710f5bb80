"""Contrato del sink de diagnóstico.

Reglas de diseño:
- Fire-and-forget: ninguna implementación debe lanzar excepciones.
- Se inyecta en los servicios (no es un singleton de proceso), así los tests
  pueden grabar las llamadas sin un backend de logging real.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class DiagnosticSink(Protocol):
    def log_stream(self, label: str, account_id: str, data: BinaryIO) -> None:
        """Registra un payload crudo (p.ej. el cuerpo de una respuesta)."""

        ...

    def log_error(self, error: BaseException | None, template: str, *args: object) -> None:
        """Registra un error con un template estilo `%s` y sus argumentos."""

        ...
