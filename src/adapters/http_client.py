"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para todas las peticiones.
- Facilita testeo: se puede inyectar un transporte (`httpx.MockTransport`).

Sin reintentos ni políticas de pool: una petición = un intento.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def _default_headers(settings: AppSettings, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    auth: httpx.Auth | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que subida y export se comporten igual.
    - `auth` es la identidad por defecto del transporte (la que usan los POST).
    - `transport` es el punto de extensión para cancelación/timeouts propios
      del llamador y para tests.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        auth=auth,
        transport=transport,
    )


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Variante síncrona, usada por diagnósticos puntuales (doctor)."""

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def transport_status(exc: httpx.HTTPError) -> str:
    """Clasifica un error de transporte como string (para logs).

    Los nombres siguen la clasificación clásica de estados de WebRequest
    (ConnectFailure, Timeout, ProtocolError...).
    """

    if isinstance(exc, httpx.HTTPStatusError):
        return f"ProtocolError ({exc.response.status_code})"
    if isinstance(exc, httpx.TimeoutException):
        return "Timeout"
    if isinstance(exc, httpx.ProxyError):
        return "ProxyConnectFailure"
    if isinstance(exc, httpx.ConnectError):
        message = str(exc).lower()
        if "name or service not known" in message or "nodename nor servname" in message or "getaddrinfo" in message:
            return "NameResolutionFailure"
        return "ConnectFailure"
    if isinstance(exc, httpx.RemoteProtocolError):
        return "ServerProtocolViolation"
    if isinstance(exc, httpx.WriteError):
        return "SendFailure"
    if isinstance(exc, (httpx.ReadError, httpx.DecodingError)):
        return "ReceiveFailure"
    return "UnknownError"
