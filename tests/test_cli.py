from __future__ import annotations

import json
from datetime import date

import httpx
import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from cli.doctor import _check_http
from core.domain.errors import TeapplixParseError
from core.domain.models import TeapplixInventoryUploadResponse, TeapplixOrder, TeapplixOrderItem

runner = CliRunner()


class _FakeService:
    calls: list[tuple] = []
    results: list[TeapplixInventoryUploadResponse] = []
    error: Exception | None = None

    def __init__(self, settings) -> None:
        self.account_name = "acme"

    def upload_inventory(self, *, file_name: str, content: bytes):
        type(self).calls.append(("upload", file_name, content))
        if type(self).error is not None:
            raise type(self).error
        return type(self).results

    def get_orders(self, *, start: date, end: date):
        type(self).calls.append(("orders", start, end))
        if type(self).error is not None:
            raise type(self).error
        return [
            TeapplixOrder(
                txn_id="1001",
                order_date=date(2024, 3, 5),
                items=[TeapplixOrderItem(sku="SKU-RED", quantity=2)],
            )
        ]


@pytest.fixture(autouse=True)
def _fake_service(monkeypatch):
    monkeypatch.setenv("TEAPPLIX_ACCOUNT_NAME", "acme")
    monkeypatch.setattr(cli_main, "TeapplixService", _FakeService)
    _FakeService.calls = []
    _FakeService.results = []
    _FakeService.error = None


def test_upload_success(tmp_path) -> None:
    inventory = tmp_path / "inventory.csv"
    inventory.write_bytes(b"SKU,Quantity\nA,1\n")
    _FakeService.results = [TeapplixInventoryUploadResponse(sku="A", status="OK")]

    result = runner.invoke(cli_main.app, ["upload", str(inventory), "--quiet"])

    assert result.exit_code == 0, result.output
    assert _FakeService.calls == [("upload", "inventory.csv", b"SKU,Quantity\nA,1\n")]
    assert "Inventory upload" in result.output


def test_upload_with_failed_sku_exits_1(tmp_path) -> None:
    inventory = tmp_path / "inventory.csv"
    inventory.write_bytes(b"x")
    _FakeService.results = [TeapplixInventoryUploadResponse(sku="A", status="Error", message="Unknown")]

    result = runner.invoke(cli_main.app, ["upload", str(inventory), "-q"])

    assert result.exit_code == 1


def test_orders_json() -> None:
    result = runner.invoke(cli_main.app, ["orders", "--start", "2024-03-01", "--end", "2024-03-31", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload[0]["txn_id"] == "1001"
    assert payload[0]["items"][0]["sku"] == "SKU-RED"
    assert _FakeService.calls == [("orders", date(2024, 3, 1), date(2024, 3, 31))]


def test_orders_rejects_bad_dates() -> None:
    result = runner.invoke(cli_main.app, ["orders", "--start", "03/01/2024", "--end", "2024-03-31"])

    assert result.exit_code == 2
    assert _FakeService.calls == []


def test_orders_parse_error_exits_1() -> None:
    _FakeService.error = TeapplixParseError("broken", line=3)

    result = runner.invoke(cli_main.app, ["orders", "--start", "2024-03-01", "--end", "2024-03-01"])

    assert result.exit_code == 1
    assert "TeapplixParseError" in result.output


def test_doctor_http_check_reports_transport_status(settings) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    ok, detail = _check_http(settings, settings.base_url, transport=httpx.MockTransport(refuse))
    assert (ok, detail) == (False, "ConnectFailure")

    ok, detail = _check_http(
        settings,
        settings.base_url,
        transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )
    assert (ok, detail) == (True, "HTTP 200")


def test_http_failure_output_hides_export_password() -> None:
    url = "https://teapplix.test/h/acme/ea/export.php?User=api-user&Passwd=s3cret"
    request = httpx.Request("GET", url)
    response = httpx.Response(503, request=request)
    _FakeService.error = httpx.HTTPStatusError(
        f"Server error '503 Service Unavailable' for url '{url}'",
        request=request,
        response=response,
    )

    result = runner.invoke(cli_main.app, ["orders", "--start", "2024-03-01", "--end", "2024-03-01"])

    assert result.exit_code == 1
    assert "ProtocolError (503)" in result.output
    assert "s3cret" not in result.output
