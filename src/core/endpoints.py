"""Construcción de URLs de Teapplix.

Las URLs se validan aguas arriba (aquí): `WebRequestServices` asume que recibe
una URL absoluta bien formada.
"""

from __future__ import annotations

from datetime import date
from urllib.parse import quote, urlencode

from core.config import AppSettings
from core.domain.models import TeapplixCredentials


def _account_url(settings: AppSettings, path: str, credentials: TeapplixCredentials) -> str:
    account = quote(credentials.account_name, safe="")
    return settings.base_url.rstrip("/") + path.format(account=account)


def upload_inventory_url(settings: AppSettings, credentials: TeapplixCredentials) -> str:
    return _account_url(settings, settings.upload_path, credentials)


def export_orders_url(
    settings: AppSettings,
    credentials: TeapplixCredentials,
    *,
    start: date,
    end: date,
) -> str:
    """URL del export de pedidos para el rango [start, end]."""

    if end < start:
        raise ValueError(f"end date {end.isoformat()} is before start date {start.isoformat()}")

    params: dict[str, str] = {
        "Subaction": "Export",
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
    }
    if credentials.user_name:
        params["User"] = credentials.user_name
    if credentials.password:
        params["Passwd"] = credentials.password

    url = _account_url(settings, settings.export_path, credentials)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(params)}"
