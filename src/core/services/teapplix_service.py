"""Teapplix upload/export orchestration.

This module wires the pieces that callers would otherwise assemble by hand:
endpoint URLs, multipart body, request descriptors and the buffered
request/response cycle in `WebRequestServices`. It keeps side-effects
(printing, progress) out, so the CLI and any batch job share one flow.
"""

from __future__ import annotations

import logging
from datetime import date

import httpx

from adapters.multipart import build_multipart_body, new_boundary
from adapters.web_request_services import WebRequestServices
from core.config import AppSettings
from core.domain.models import (
    ServiceRequest,
    TeapplixCredentials,
    TeapplixInventoryUploadResponse,
    TeapplixOrder,
)
from core.endpoints import export_orders_url, upload_inventory_url
from core.interfaces import DiagnosticSink

logger = logging.getLogger(__name__)


class TeapplixService:
    """High-level entry point: inventory upload and order export.

    Each method has a coroutine form and a blocking form with the same
    behaviour; the blocking forms must not be called from a running loop.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        credentials: TeapplixCredentials | None = None,
        sink: DiagnosticSink | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._credentials = credentials or self._settings.credentials()
        self._web = WebRequestServices(
            self._credentials,
            settings=self._settings,
            sink=sink,
            transport=transport,
            auth=auth,
        )

    @property
    def account_name(self) -> str:
        return self._credentials.account_name

    async def upload_inventory_async(self, *, file_name: str, content: bytes) -> list[TeapplixInventoryUploadResponse]:
        request = self._upload_request(file_name, content)
        results = await self._web.get_upload_result_async(request)
        self._log_upload(results)
        return results

    def upload_inventory(self, *, file_name: str, content: bytes) -> list[TeapplixInventoryUploadResponse]:
        request = self._upload_request(file_name, content)
        results = self._web.get_upload_result(request)
        self._log_upload(results)
        return results

    async def get_orders_async(self, *, start: date, end: date) -> list[TeapplixOrder]:
        request = self._orders_request(start, end)
        with await self._web.download_async(request) as buffer:
            orders = self._web.get_parsed_orders(buffer)
        self._log_orders(start, end, orders)
        return orders

    def get_orders(self, *, start: date, end: date) -> list[TeapplixOrder]:
        request = self._orders_request(start, end)
        with self._web.download(request) as buffer:
            orders = self._web.get_parsed_orders(buffer)
        self._log_orders(start, end, orders)
        return orders

    def _upload_request(self, file_name: str, content: bytes) -> ServiceRequest:
        boundary = new_boundary()
        body = build_multipart_body(
            boundary=boundary,
            file_name=file_name,
            content=content,
            fields={"AccountName": self.account_name},
        )
        url = upload_inventory_url(self._settings, self._credentials)
        logger.info("Uploading %s (%d bytes) for account '%s'", file_name, len(content), self.account_name)
        return self._web.create_service_post_request(url, boundary).with_content(body)

    def _orders_request(self, start: date, end: date) -> ServiceRequest:
        url = export_orders_url(self._settings, self._credentials, start=start, end=end)
        return self._web.create_service_get_request(url)

    def _log_upload(self, results: list[TeapplixInventoryUploadResponse]) -> None:
        failed = sum(1 for r in results if not r.succeeded)
        logger.info(
            "Upload for account '%s' returned %d result(s), %d failed",
            self.account_name,
            len(results),
            failed,
        )

    def _log_orders(self, start: date, end: date, orders: list[TeapplixOrder]) -> None:
        logger.info(
            "Export %s..%s for account '%s' contained %d order(s)",
            start.isoformat(),
            end.isoformat(),
            self.account_name,
            len(orders),
        )
