"""Contratos de los parsers de Teapplix.

Por qué Protocol:
- Los formatos (respuesta de subida, fichero de export) pertenecen a Teapplix,
  no al Core; el Core solo necesita "bytes posicionados al inicio -> registros".
- Permite sustituir el parser CSV por otro (o por un fake en tests) sin tocar
  `WebRequestServices`.
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Protocol, runtime_checkable

from core.domain.models import TeapplixInventoryUploadResponse, TeapplixOrder


@runtime_checkable
class UploadResponseParser(Protocol):
    """Interpreta la respuesta de una subida de inventario."""

    def parse(self, stream: BinaryIO) -> Iterable[TeapplixInventoryUploadResponse]:
        """Lee `stream` desde la posición actual (el llamador lo deja al inicio).

        Puede lanzar cualquier error de parseo.
        """

        ...


@runtime_checkable
class ExportFileParser(Protocol):
    """Interpreta un fichero de export de pedidos."""

    def parse(self, stream: BinaryIO) -> Iterable[TeapplixOrder]:
        ...
