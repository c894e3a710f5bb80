"""Sink de diagnóstico sobre `logging`.

Payloads crudos a DEBUG (pueden ser grandes), errores a ERROR.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from core.interfaces.diagnostics import DiagnosticSink

_DEFAULT_LOGGER = "teapplix.diagnostics"


def read_stream_text(data: BinaryIO) -> str:
    """Lee todo el stream como texto sin mover su cursor."""

    position = data.tell()
    try:
        data.seek(0)
        raw = data.read()
    finally:
        data.seek(position)
    return raw.decode("utf-8-sig", errors="replace")


class LoggingDiagnosticSink(DiagnosticSink):
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(_DEFAULT_LOGGER)

    def log_stream(self, label: str, account_id: str, data: BinaryIO) -> None:
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        try:
            self._logger.debug("%s [%s]: %s", label, account_id, read_stream_text(data))
        except Exception:  # pragma: no cover - fire-and-forget
            pass

    def log_error(self, error: BaseException | None, template: str, *args: object) -> None:
        try:
            if error is None:
                self._logger.error(template, *args)
            else:
                self._logger.error(template, *args, exc_info=error)
        except Exception:  # pragma: no cover - fire-and-forget
            pass
