"""CLI principal (Typer).

Comandos:
- `upload FILE`: sube un fichero de inventario y muestra el resultado por SKU.
- `orders --start --end`: descarga el export de pedidos y lo muestra.
- `doctor ...`: diagnósticos y configuración.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.http_client import transport_status
from cli import doctor
from cli.ui_components import build_orders_table, build_upload_table, print_banner
from core.config import AppSettings
from core.domain.errors import TeapplixError
from core.log_config import configure_logging
from core.services.teapplix_service import TeapplixService

app = typer.Typer(no_args_is_help=True, help="Teapplix inventory upload and order export client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _parse_day(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


def _build_service() -> TeapplixService:
    settings = AppSettings()
    try:
        return TeapplixService(settings)
    except ValidationError:
        _console.print("[red]Missing account name.[/red] Set TEAPPLIX_ACCOUNT_NAME or run `doctor setup`.")
        raise typer.Exit(code=1)


def _fail(exc: Exception) -> typer.Exit:
    # El detalle (payload crudo, estado de transporte) ya está en el log.
    # Nunca `str(exc)` de httpx: incluye la URL, y la de export lleva la contraseña.
    detail = transport_status(exc) if isinstance(exc, httpx.HTTPError) else str(exc)
    _console.print(f"[red]{type(exc).__name__}:[/red] {detail}")
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log raw payloads (DEBUG)."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def upload(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Inventory file (CSV)."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner."),
) -> None:
    """Upload an inventory file and show per-SKU results."""

    service = _build_service()
    if not quiet:
        print_banner(_console, service.account_name)

    try:
        results = service.upload_inventory(file_name=file.name, content=file.read_bytes())
    except (httpx.HTTPError, TeapplixError) as exc:
        raise _fail(exc)

    _console.print(build_upload_table(results))
    if any(not r.succeeded for r in results):
        raise typer.Exit(code=1)


@app.command()
def orders(
    start: str = typer.Option(..., "--start", help="First day (YYYY-MM-DD)."),
    end: str = typer.Option(..., "--end", help="Last day (YYYY-MM-DD)."),
    as_json: bool = typer.Option(False, "--json", help="Print orders as JSON."),
) -> None:
    """Download the order export for a date range."""

    start_day, end_day = _parse_day(start), _parse_day(end)
    if end_day < start_day:
        raise typer.BadParameter("--end must not be before --start")

    service = _build_service()
    try:
        result = service.get_orders(start=start_day, end=end_day)
    except (httpx.HTTPError, TeapplixError) as exc:
        raise _fail(exc)

    if as_json:
        payload = [o.model_dump(mode="json") for o in result]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
        return

    print_banner(_console, service.account_name)
    _console.print(build_orders_table(result))


def run() -> None:
    app()
