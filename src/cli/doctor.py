"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client, transport_status
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings, url: str, *, transport: httpx.BaseTransport | None = None) -> tuple[bool, str]:
    try:
        with build_client(settings, transport=transport) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, transport_status(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="teapplix-access Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.account_name:
        table.add_row("Account", "OK", settings.account_name)
    else:
        table.add_row("Account", "FAIL", "Set TEAPPLIX_ACCOUNT_NAME or run `doctor setup`")
    if settings.user_name and settings.password:
        table.add_row("Export credentials", "OK", settings.user_name)
    else:
        table.add_row("Export credentials", "OPTIONAL", "Needed only for `orders`")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(settings, settings.base_url)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.account_name or not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive account setup (stores config in the user config .env)."""

    account = typer.prompt("Teapplix account name").strip()
    user = typer.prompt("API user name (export)", default="", show_default=False).strip()
    password = typer.prompt("API password (export)", default="", show_default=False, hide_input=True).strip()

    if not account:
        raise typer.BadParameter("account name is required")

    values = {"TEAPPLIX_ACCOUNT_NAME": account}
    if user:
        values["TEAPPLIX_USER_NAME"] = user
    if password:
        values["TEAPPLIX_PASSWORD"] = password

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved account config to:[/green] {env_path}")
