"""Transaction commands (list, add, edit, delete)."""

import sys
from datetime import datetime
from typing import Any

import typer
from rich.table import Table

from lana.api import ApiClient, create_client
from lana.commands.common import (
    amount_style,
    console,
    fail,
    fetch,
    load_categories,
    parse_date_input,
    require_category,
    submit_form,
)
from lana.dates import month_of, month_range, parse_year_month
from lana.domain.budget import month_budget_total, normalize_budgets
from lana.domain.categories import CategoryLookup
from lana.domain.models import Month
from lana.domain.money import format_money, parse_money
from lana.domain.transactions import (
    EXPENSE,
    INCOME,
    DayGroup,
    Transaction,
    TransactionKind,
    build_transaction_payload,
    filter_by_month,
    group_by_day,
    parse_transactions,
    plan_combined_edit,
    summarize_groups,
    transaction_kind,
)
from lana.errors import LanaError, ValidationError


def load_transactions(client: ApiClient) -> list[Transaction]:
    """Fetch and parse all transactions."""
    raw = fetch(client.list_transactions, "Loading transactions...")
    try:
        return parse_transactions(raw)
    except ValueError as e:
        fail(f"Server sent an invalid transaction: {e}")


def render_day_groups(groups: list[DayGroup]) -> None:
    """Render day groups as one table, newest day first."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim", justify="right")

    for group in groups:
        totals = f"[green]{format_money(group.income)}[/green] [red]{format_money(group.expense)}[/red]"
        table.add_row(f"[bold]{group.day_of_month}[/bold] {group.weekday_name}", "", "", totals, "")
        for item in group.items:
            amount = item.transaction.amount
            table.add_row(
                "",
                item.category_name,
                item.transaction.description or "[dim]-[/dim]",
                f"[{amount_style(amount)}]{format_money(amount, include_sign=True)}[/{amount_style(amount)}]",
                str(item.transaction.id),
            )
        table.add_section()

    console.print(table)


def month_budget(client: ApiClient, month: Month) -> float | None:
    """Budget total for a month, None when budgets cannot be loaded."""
    try:
        raw = client.list_budgets()
    except LanaError as e:
        console.print(f"[dim]Budgets unavailable: {e}[/dim]")
        return None
    return month_budget_total(normalize_budgets(raw), int(month[5:7]))


def list_command(month: str | None = None, all: bool = False) -> None:
    """List transactions grouped by day with month totals."""
    client = create_client()

    try:
        target = parse_year_month(month) if month else month_of(datetime.now().date())
        _, _, label = month_range(target)
    except ValueError:
        fail(f"Invalid month '{month}', use YYYY-MM")

    _, lookup = load_categories(client)
    transactions = load_transactions(client)
    if not all:
        transactions = filter_by_month(transactions, target)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    groups = group_by_day(transactions, lookup.id_to_name)
    summary = summarize_groups(groups)

    console.print(f"[bold cyan]{'All Time' if all else label}[/bold cyan]\n")
    if not all:
        budget = month_budget(client, target)
        if budget is not None:
            console.print(f"  [bold]Budget:[/bold]   {format_money(budget)}")
    console.print(f"  [bold]Income:[/bold]   [green]{format_money(summary.income)}[/green]")
    console.print(f"  [bold]Expenses:[/bold] [red]{format_money(summary.expense)}[/red]")
    console.print(f"  [bold]Balance:[/bold]  {format_money(summary.balance, include_sign=True)}\n")

    render_day_groups(groups)


def add_command(
    income: str | None = None,
    income_category: str | None = None,
    expense: str | None = None,
    expense_category: str | None = None,
    date: str | None = None,
    description: str = "",
) -> None:
    """Add an income, an expense, or both from one form."""
    client = create_client()
    _, lookup = load_categories(client)

    def validate() -> list[tuple[TransactionKind, dict[str, Any]]]:
        when = parse_date_input(date)
        categories = {INCOME: income_category, EXPENSE: expense_category}
        plan = plan_combined_edit(parse_money(income), parse_money(expense))
        return [
            (kind, build_transaction_payload(kind, amount, when, require_category(categories[kind], lookup), description))
            for kind, amount in plan
        ]

    def send(plan: list[tuple[TransactionKind, dict[str, Any]]]) -> None:
        saved: list[TransactionKind] = []
        for kind, payload in plan:
            try:
                client.create_transaction(payload)
            except LanaError as e:
                if not saved:
                    raise
                done = " and ".join(saved)
                raise LanaError(f"{kind.capitalize()} not saved: {e} ({done} already saved)") from e
            saved.append(kind)

    submit_form(validate, send, success="Transaction saved")


def find_transaction(transactions: list[Transaction], transaction_id: str) -> Transaction | None:
    return next((t for t in transactions if str(t.id) == transaction_id), None)


def build_edit_payload(
    current: Transaction,
    lookup: CategoryLookup,
    amount: str | None,
    kind: str | None,
    category: str | None,
    date: str | None,
    description: str | None,
) -> dict[str, Any]:
    """Merge edited fields over an existing transaction.

    Raises:
        ValidationError: If an edited field is invalid.
    """
    if kind is not None and kind not in (INCOME, EXPENSE):
        raise ValidationError("Kind must be 'income' or 'expense'.")
    new_kind = kind if kind is not None else transaction_kind(current.amount)
    new_amount = parse_money(amount) if amount is not None else abs(current.amount)
    new_category = require_category(category, lookup) if category is not None else current.category
    when = parse_date_input(date) if date is not None else current.timestamp
    new_description = description if description is not None else current.description

    return build_transaction_payload(new_kind, new_amount, when, new_category, new_description)


def edit_command(
    transaction_id: str,
    amount: str | None = None,
    kind: str | None = None,
    category: str | None = None,
    date: str | None = None,
    description: str | None = None,
) -> None:
    """Edit a transaction by id."""
    client = create_client()
    _, lookup = load_categories(client)

    current = find_transaction(load_transactions(client), transaction_id)
    if current is None:
        fail(f"Transaction {transaction_id} not found")

    submit_form(
        lambda: build_edit_payload(current, lookup, amount, kind, category, date, description),
        lambda payload: client.update_transaction(current.id, payload),
        success=f"Transaction {transaction_id} updated",
    )


def delete_command(transaction_id: str, yes: bool = False) -> None:
    """Delete a transaction by id after confirmation."""
    client = create_client()

    if not yes and not typer.confirm(f"Delete transaction {transaction_id}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(0)

    submit_form(
        lambda: transaction_id,
        client.delete_transaction,
        success=f"Transaction {transaction_id} deleted",
        working="Deleting...",
    )
