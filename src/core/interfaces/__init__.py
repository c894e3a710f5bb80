"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.diagnostics import DiagnosticSink
from core.interfaces.parsers import ExportFileParser, UploadResponseParser

__all__ = [
    "DiagnosticSink",
    "ExportFileParser",
    "UploadResponseParser",
]
