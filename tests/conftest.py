"""Pytest configuration.

Shared fakes for the diagnostic sink and settings that never read the
developer's `.env` files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO

import pytest

from core.config import AppSettings
from core.domain.models import TeapplixCredentials


@dataclass
class RecordingSink:
    """Records sink calls; `data` is read at call time (the caller may close it)."""

    streams: list[tuple[str, str, bytes]] = field(default_factory=list)
    errors: list[tuple[BaseException | None, str, tuple[object, ...]]] = field(default_factory=list)

    def log_stream(self, label: str, account_id: str, data: BinaryIO) -> None:
        data.seek(0)
        self.streams.append((label, account_id, data.read()))

    def log_error(self, error: BaseException | None, template: str, *args: object) -> None:
        self.errors.append((error, template, args))

    def rendered_errors(self) -> list[str]:
        return [template % args for _, template, args in self.errors]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        account_name="acme",
        user_name="api-user",
        password="s3cret",
        base_url="https://teapplix.test",
        http_timeout_seconds=5,
    )


@pytest.fixture
def credentials() -> TeapplixCredentials:
    return TeapplixCredentials(account_name="acme", user_name="api-user", password="s3cret")


UPLOAD_RESPONSE = b"SKU,Status,Message,Quantity\r\nABC-1,OK,,5\r\nABC-2,Error,Unknown item,\r\n"

EXPORT_SINGLE_ORDER = (
    b"TxnId,Date,PaymentStatus,Name,Email,Currency,Total,Shipping,ItemName,ItemDescription,Quantity,ItemSubtotal\r\n"
    b"1001,2024-03-05,Completed,Jane Roe,jane@example.com,usd,42.50,5.00,SKU-RED,Red mug,2,37.50\r\n"
)


@pytest.fixture
def upload_body() -> bytes:
    return UPLOAD_RESPONSE


@pytest.fixture
def export_single_order() -> bytes:
    return EXPORT_SINGLE_ORDER
