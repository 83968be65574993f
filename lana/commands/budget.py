"""Budget commands (list, set, edit, delete, status)."""

import sys
from datetime import datetime

import typer
from rich.table import Table

from lana.api import ApiClient, create_client
from lana.commands.common import console, fail, fetch, load_categories, require_category, submit_form
from lana.commands.transactions import load_transactions
from lana.dates import parse_year_month
from lana.domain.budget import (
    Budget,
    build_budget_payload,
    compute_budget_status,
    month_budget_total,
    month_display_name,
    normalize_budgets,
    parse_month,
)
from lana.domain.categories import category_label
from lana.domain.money import format_money, parse_money


def load_budgets(client: ApiClient) -> list[Budget]:
    """Fetch and normalize budgets."""
    return normalize_budgets(fetch(client.list_budgets, "Loading budgets..."))


def resolve_month(month: str | None) -> int:
    """Month number from user input, defaulting to the current month."""
    if month is None:
        return datetime.now().month
    return parse_month(month)


def format_percentage(percentage: float) -> str:
    """Color a budget usage percentage."""
    text = f"{percentage:.0f}%"
    if percentage > 100:
        return f"[red]{text}[/red]"
    elif percentage > 90:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def list_command(month: str | None = None) -> None:
    """List budgets, optionally for one month."""
    month_number = resolve_month(month) if month is not None else None
    if month_number == 0:
        fail(f"Invalid month '{month}'")

    client = create_client()
    _, lookup = load_categories(client)
    budgets = load_budgets(client)

    if month_number is not None:
        budgets = [b for b in budgets if b.month == month_number]

    if not budgets:
        console.print("[yellow]No budgets found[/yellow]")
        return

    table = Table(title=f"Budgets ({len(budgets)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Month", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for budget in budgets:
        table.add_row(
            str(budget.id),
            month_display_name(budget.month),
            category_label(budget.category, lookup.id_to_name),
            format_money(budget.amount),
        )

    console.print(table)


def set_command(category: str, amount: str, month: str | None = None) -> None:
    """Create a budget for a category and month."""
    client = create_client()
    _, lookup = load_categories(client)

    submit_form(
        lambda: build_budget_payload(parse_money(amount), resolve_month(month), require_category(category, lookup)),
        lambda body: client.create_budget(body["category"], body["amount"], body["month"]),
        success="Budget created",
    )


def edit_command(
    budget_id: str,
    amount: str | None = None,
    month: str | None = None,
    category: str | None = None,
) -> None:
    """Edit a budget by id."""
    client = create_client()
    _, lookup = load_categories(client)

    current = next((b for b in load_budgets(client) if str(b.id) == budget_id), None)
    if current is None:
        fail(f"Budget {budget_id} not found")

    def validate() -> dict:
        return build_budget_payload(
            parse_money(amount) if amount is not None else current.amount,
            parse_month(month) if month is not None else current.month,
            require_category(category, lookup) if category is not None else current.category,
        )

    submit_form(
        validate,
        lambda body: client.update_budget(current.id, body),
        success=f"Budget {budget_id} updated",
    )


def delete_command(budget_id: str, yes: bool = False) -> None:
    """Delete a budget by id after confirmation."""
    client = create_client()

    if not yes and not typer.confirm(f"Delete budget {budget_id}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(0)

    submit_form(
        lambda: budget_id,
        client.delete_budget,
        success=f"Budget {budget_id} deleted",
        working="Deleting...",
    )


def status_command(month: str | None = None) -> None:
    """Show spending against each budget of a month."""
    year = datetime.now().year
    month_number = resolve_month(month)
    if month and "-" in month:
        try:
            target = parse_year_month(month)
        except ValueError:
            fail(f"Invalid month '{month}', use YYYY-MM")
        year, month_number = int(target[:4]), int(target[5:7])
    if month_number == 0:
        fail(f"Invalid month '{month}'")

    client = create_client()
    _, lookup = load_categories(client)

    budgets = load_budgets(client)
    transactions = load_transactions(client)
    statuses = compute_budget_status(budgets, transactions, year, month_number, lookup.id_to_name)

    console.print(f"[bold cyan]{month_display_name(month_number)} {year}[/bold cyan]\n")

    if not statuses:
        console.print("[yellow]No budgets for this month[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Available", justify="right")
    table.add_column("Used", justify="right")

    for status in statuses:
        available_style = "red" if status.available < 0 else "green"
        table.add_row(
            status.category,
            format_money(status.allocated),
            format_money(status.spent),
            f"[{available_style}]{format_money(status.available, include_sign=True)}[/{available_style}]",
            format_percentage(status.percentage),
        )

    console.print(table)
    console.print(f"\n  [bold]Total budget:[/bold] {format_money(month_budget_total(budgets, month_number))}")
