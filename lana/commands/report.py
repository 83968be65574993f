"""Charts command: income and expense breakdown by category."""

from lana.api import create_client
from lana.commands.common import console, fail, fetch, load_categories
from lana.domain.budget import month_display_name, parse_month
from lana.domain.money import format_money
from lana.domain.report import (
    CategoryShare,
    calculate_histogram_bar_length,
    create_chart_report,
    normalize_chart_rows,
)

MODES = ("income", "expense", "general")


def render_shares(shares: list[CategoryShare], color: str, histogram: bool, bar_width: int = 30) -> None:
    """Render category lines with percentage and optional bar."""
    max_amount = max((s.amount for s in shares), default=0.0)
    for share in shares:
        line = f"  {share.category:20} {format_money(share.amount):>12} {share.percentage:5.1f}%"
        if histogram:
            bar = "█" * calculate_histogram_bar_length(share.amount, max_amount, bar_width)
            line = f"{line} [{color}]{bar}[/{color}]"
        console.print(line)


def charts_command(
    mode: str = "general",
    month: str | None = None,
    sort_by: str = "value",
    histogram: bool = True,
) -> None:
    """Show income, expense or combined breakdown by category."""
    if mode not in MODES:
        fail(f"Unknown mode '{mode}', use one of: {', '.join(MODES)}")

    month_number = None
    if month is not None:
        month_number = parse_month(month)
        if month_number == 0:
            fail(f"Invalid month '{month}'")

    client = create_client()
    _, lookup = load_categories(client)
    income_rows = normalize_chart_rows(fetch(client.income_chart, "Loading income..."))
    expense_rows = normalize_chart_rows(fetch(client.expense_chart, "Loading expenses..."))

    report = create_chart_report(income_rows, expense_rows, month_number, lookup.id_to_name, sort_by)

    period = month_display_name(month_number) if month_number else "All months"
    console.print(f"[bold cyan]{period}[/bold cyan]\n")
    console.print(f"  [bold]Balance:[/bold] {format_money(report.balance, include_sign=True)}\n")

    if mode == "income":
        console.print("[bold green]Income by category:[/bold green]\n")
        if not report.income:
            console.print("  [dim]No income recorded[/dim]")
        render_shares(report.income, "green", histogram)
        console.print(f"\n  [bold]Total income:[/bold] {format_money(report.income_total)}")
    elif mode == "expense":
        console.print("[bold red]Expenses by category:[/bold red]\n")
        if not report.expense:
            console.print("  [dim]No expenses recorded[/dim]")
        render_shares(report.expense, "red", histogram)
        console.print(f"\n  [bold]Total expenses:[/bold] {format_money(report.expense_total)}")
    else:
        if not report.general:
            console.print("  [dim]No data for this period[/dim]")
        for row in report.general:
            console.print(
                f"  {row.category:20} [green]{format_money(row.income):>12}[/green] [red]{format_money(row.expense):>12}[/red]"
            )
        console.print(f"\n  [bold]Total income:[/bold]   [green]{format_money(report.income_total)}[/green]")
        console.print(f"  [bold]Total expenses:[/bold] [red]{format_money(report.expense_total)}[/red]")
