"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import TeapplixInventoryUploadResponse, TeapplixOrder


def print_banner(console: Console, account_name: str) -> None:
    """Imprime el banner con la cuenta activa."""

    title = Text("teapplix-access", style="bold cyan")
    subtitle = Text(f"Cuenta: {account_name}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def build_upload_table(results: Iterable[TeapplixInventoryUploadResponse]) -> Table:
    table = Table(title="Inventory upload")
    table.add_column("SKU", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Quantity", justify="right")
    table.add_column("Message", style="red")
    for r in results:
        status = Text(r.status, style="green" if r.succeeded else "bold red")
        table.add_row(r.sku, status, "" if r.quantity is None else str(r.quantity), r.message or "")
    return table


def build_orders_table(orders: Iterable[TeapplixOrder]) -> Table:
    """Una fila por pedido; los items se resumen como `sku x qty`."""

    table = Table(title="Orders")
    table.add_column("TxnId", style="cyan", no_wrap=True)
    table.add_column("Date", style="white")
    table.add_column("Customer", style="white")
    table.add_column("Items", style="magenta")
    table.add_column("Total", justify="right", style="green")
    for order in orders:
        items = ", ".join(f"{i.sku} x{i.quantity}" for i in order.items)
        total = ""
        if order.total is not None:
            total = f"{order.total} {order.currency or ''}".strip()
        table.add_row(
            order.txn_id,
            order.order_date.isoformat(),
            order.customer_name or order.customer_email or "",
            items,
            total,
        )
    return table
