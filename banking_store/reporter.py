from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from banking_store.domain.models import Customer


def _fmt_ts(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def print_customers(customers: List[Customer], console: Optional[Console] = None) -> None:
    """
    Render customers as a rich table, in the order given. Passwords are never shown.
    """
    console = console or Console()

    if not customers:
        console.print("[yellow]No customers found.[/yellow]")
        return

    table = Table(
        title="Customers",
        box=box.ROUNDED,
        caption=f"{len(customers):,} customer(s)",
    )
    table.add_column("Account No", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Email", style="green")
    table.add_column("Contact No", justify="right", style="magenta")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")

    for customer in customers:
        table.add_row(
            str(customer.account_no),
            str(customer.full_name),
            customer.email,
            str(customer.contact_no),
            _fmt_ts(customer.created_at),
            _fmt_ts(customer.updated_at),
        )

    console.print(table)


__all__ = ["print_customers"]
