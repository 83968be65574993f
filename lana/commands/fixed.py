"""Fixed payment commands (list, add, edit, delete)."""

import sys
from datetime import date

import typer
from rich.table import Table

from lana.api import ApiClient, create_client
from lana.commands.common import console, fail, fetch, load_categories, require_category, submit_form
from lana.domain.budget import (
    FixedPayment,
    build_fixed_payment_payload,
    fixed_payment_display_date,
    normalize_fixed_payments,
)
from lana.domain.categories import category_label
from lana.domain.money import format_money, parse_money


def load_fixed_payments(client: ApiClient) -> list[FixedPayment]:
    """Fetch and normalize fixed payments."""
    return normalize_fixed_payments(fetch(client.list_fixed_payments, "Loading fixed payments..."))


def list_command() -> None:
    """List fixed payments with their date in the current month."""
    client = create_client()
    _, lookup = load_categories(client)
    payments = load_fixed_payments(client)

    if not payments:
        console.print("[yellow]No fixed payments found[/yellow]")
        return

    today = date.today()
    table = Table(title=f"Fixed payments ({len(payments)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Time", style="dim")
    table.add_column("Description", style="white")

    for payment in payments:
        shown = fixed_payment_display_date(payment, today)
        table.add_row(
            str(payment.id),
            category_label(payment.category, lookup.id_to_name),
            format_money(payment.amount),
            shown.strftime("%d/%m/%Y") if shown else "[dim]-[/dim]",
            payment.time,
            payment.description or "[dim]-[/dim]",
        )

    console.print(table)
    total = sum(p.amount for p in payments)
    console.print(f"\n  [bold]Total per month:[/bold] {format_money(total)}")


def add_command(category: str, amount: str, day: int, time: str | None = None, description: str = "") -> None:
    """Create a fixed payment."""
    client = create_client()
    _, lookup = load_categories(client)

    submit_form(
        lambda: build_fixed_payment_payload(
            parse_money(amount), day, require_category(category, lookup), description, time
        ),
        client.create_fixed_payment,
        success="Fixed payment created",
    )


def edit_command(
    payment_id: str,
    category: str | None = None,
    amount: str | None = None,
    day: int | None = None,
    time: str | None = None,
    description: str | None = None,
) -> None:
    """Edit a fixed payment by id."""
    client = create_client()
    _, lookup = load_categories(client)

    current = next((p for p in load_fixed_payments(client) if str(p.id) == payment_id), None)
    if current is None:
        fail(f"Fixed payment {payment_id} not found")

    submit_form(
        lambda: build_fixed_payment_payload(
            parse_money(amount) if amount is not None else current.amount,
            day if day is not None else current.day,
            require_category(category, lookup) if category is not None else current.category,
            description if description is not None else current.description,
            time if time is not None else current.time,
        ),
        lambda body: client.update_fixed_payment(current.id, body),
        success=f"Fixed payment {payment_id} updated",
    )


def delete_command(payment_id: str, yes: bool = False) -> None:
    """Delete a fixed payment by id after confirmation."""
    client = create_client()

    if not yes and not typer.confirm(f"Delete fixed payment {payment_id}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(0)

    submit_form(
        lambda: payment_id,
        client.delete_fixed_payment,
        success=f"Fixed payment {payment_id} deleted",
        working="Deleting...",
    )
