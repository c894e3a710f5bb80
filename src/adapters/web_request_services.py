"""Ciclo request/response contra Teapplix.

Responsabilidad:
- Construir descriptores GET/POST (`create_service_*_request`).
- Enviar una petición, copiar el cuerpo completo a memoria, registrarlo en el
  sink y delegar en el parser de respuesta de subida.
- Reinterpretar exports ya descargados con el parser de export, volcando el
  contenido crudo al sink si el parseo falla.

Reglas:
- Un intento por llamada: sin reintentos, sin timeouts propios (los configura
  el transporte).
- La variante bloqueante es un adaptador sobre la asíncrona (`asyncio.run`).
- Los errores se registran y se relanzan sin modificar; nunca se devuelve un
  resultado vacío en su lugar.
- Errores del parser de subida NO se registran aquí; los del parser de export sí.
"""

from __future__ import annotations

import asyncio
import io
from typing import Awaitable, Callable, TypeVar

import httpx

from adapters.diagnostic_sink import LoggingDiagnosticSink, read_stream_text
from adapters.http_client import build_async_client, transport_status
from adapters.parsers import TeapplixExportFileParser, TeapplixUploadResponseParser
from core.config import AppSettings
from core.domain.models import (
    ServiceRequest,
    TeapplixCredentials,
    TeapplixInventoryUploadResponse,
    TeapplixOrder,
)
from core.interfaces import DiagnosticSink, ExportFileParser, UploadResponseParser

T = TypeVar("T")

# Copia en incrementos fijos; el buffer destino no tiene límite.
COPY_CHUNK_SIZE = 0x100

RESPONSE_LOG_LABEL = "response"


class WebRequestServices:
    def __init__(
        self,
        credentials: TeapplixCredentials,
        *,
        settings: AppSettings | None = None,
        sink: DiagnosticSink | None = None,
        upload_parser: UploadResponseParser | None = None,
        export_parser: ExportFileParser | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        if credentials is None:
            raise ValueError("credentials must not be None")

        self._credentials = credentials
        self._settings = settings or AppSettings()
        self._sink = sink or LoggingDiagnosticSink()
        self._upload_parser = upload_parser or TeapplixUploadResponseParser()
        self._export_parser = export_parser or TeapplixExportFileParser()
        self._transport = transport
        self._auth = auth

    @property
    def credentials(self) -> TeapplixCredentials:
        return self._credentials

    # Request builder

    def create_service_get_request(self, service_url: str) -> ServiceRequest:
        return ServiceRequest(method="GET", url=service_url)

    def create_service_post_request(self, service_url: str, boundary: str) -> ServiceRequest:
        """POST multipart con keep-alive y la identidad por defecto del transporte.

        El `Content-Type` no lleva `;` antes de `boundary=`: es el formato que
        Teapplix recibe hoy.
        """

        if not boundary:
            raise ValueError("boundary must be a non-empty string")

        return ServiceRequest(
            method="POST",
            url=service_url,
            content_type="multipart/form-data boundary=" + boundary,
            keep_alive=True,
            use_default_credentials=True,
        )

    # Response executor

    async def get_upload_result_async(self, request: ServiceRequest) -> list[TeapplixInventoryUploadResponse]:
        with await self._fetch_body(request, self._log_upload_http_error) as buffer:
            with io.BytesIO(buffer.getvalue()) as snapshot:
                self._sink.log_stream(RESPONSE_LOG_LABEL, self._credentials.account_name, snapshot)

            buffer.seek(0)
            return list(self._upload_parser.parse(buffer))

    def get_upload_result(self, request: ServiceRequest) -> list[TeapplixInventoryUploadResponse]:
        return self._run_blocking(lambda: self.get_upload_result_async(request))

    # Export download + reader

    async def download_async(self, request: ServiceRequest) -> io.BytesIO:
        """Descarga el cuerpo completo a un `BytesIO` (el llamador lo cierra)."""

        return await self._fetch_body(request, self._log_download_http_error)

    def download(self, request: ServiceRequest) -> io.BytesIO:
        return self._run_blocking(lambda: self.download_async(request))

    def get_parsed_orders(self, buffer: io.BytesIO) -> list[TeapplixOrder]:
        buffer.seek(0)
        try:
            return list(self._export_parser.parse(buffer))
        except Exception as exc:
            self._log_parse_report_error(buffer, exc)
            raise

    # Internals

    async def _fetch_body(self, request: ServiceRequest, on_http_error: Callable[[str], None]) -> io.BytesIO:
        buffer = io.BytesIO()
        try:
            async with build_async_client(self._settings, auth=self._auth, transport=self._transport) as client:
                # POST: auth por defecto del cliente (no las credenciales guardadas).
                auth = httpx.USE_CLIENT_DEFAULT if request.use_default_credentials else None
                async with client.stream(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.content,
                    auth=auth,
                ) as response:
                    response.raise_for_status()
                    async for chunk in response.aiter_bytes(COPY_CHUNK_SIZE):
                        buffer.write(chunk)
        except httpx.HTTPError as exc:
            buffer.close()
            on_http_error(transport_status(exc))
            raise
        except BaseException:
            buffer.close()
            raise

        buffer.seek(0)
        return buffer

    @staticmethod
    def _run_blocking(factory: Callable[[], Awaitable[T]]) -> T:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError("blocking call made from a running event loop; use the *_async variant")

        async def _main() -> T:
            return await factory()

        return asyncio.run(_main())

    def _log_parse_report_error(self, buffer: io.BytesIO, exc: BaseException) -> None:
        with io.BytesIO(buffer.getvalue()) as raw_stream:
            raw_export = read_stream_text(raw_stream)

        self._sink.log_error(
            exc,
            "Failed to parse file for account '%s':\n\r%s",
            self._credentials.account_name,
            raw_export,
        )

    def _log_upload_http_error(self, status: str) -> None:
        self._sink.log_error(
            None,
            "Failed to upload file for account '%s'. Request status is '%s'",
            self._credentials.account_name,
            status,
        )

    def _log_download_http_error(self, status: str) -> None:
        self._sink.log_error(
            None,
            "Failed to download file for account '%s'. Request status is '%s'",
            self._credentials.account_name,
            status,
        )
