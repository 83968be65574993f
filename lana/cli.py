"""CLI entry point for lana."""

import typer

from lana.commands import budget as budget_commands
from lana.commands import categories as category_commands
from lana.commands import fixed as fixed_commands
from lana.commands import transactions as transaction_commands
from lana.commands.auth import config_command, init_command, login_command, logout_command, register_command
from lana.commands.report import charts_command
from lana.log import configure_logging

app = typer.Typer(
    name="lana",
    help="Lana - track your income, expenses, fixed payments and budgets",
    add_completion=False,
)
transactions_app = typer.Typer(help="List and manage your transactions.")
categories_app = typer.Typer(help="List and manage your categories.")
budgets_app = typer.Typer(help="Plan monthly spending per category.")
fixed_app = typer.Typer(help="Manage your fixed monthly payments.")

app.add_typer(transactions_app, name="transactions")
app.add_typer(categories_app, name="categories")
app.add_typer(budgets_app, name="budgets")
app.add_typer(fixed_app, name="fixed")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show request diagnostics"),
) -> None:
    """Lana - track your income, expenses, fixed payments and budgets."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    api_url: str = typer.Option(None, "--api-url", help="Base URL of the Lana API"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create your lana configuration."""
    init_command(api_url, force)


@app.command(name="config")
def config(
    api_url: str = typer.Option(None, "--api-url", help="New base URL of the Lana API"),
) -> None:
    """Show or change the API your client talks to."""
    config_command(api_url)


@app.command()
def login(
    identifier: str = typer.Argument(..., help="Your email or phone number"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Your password"),
) -> None:
    """Log in and remember your session."""
    login_command(identifier, password)


@app.command()
def register(
    name: str = typer.Option(..., prompt=True, help="First name"),
    lastname: str = typer.Option(..., prompt=True, help="Last name"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    phone: str = typer.Option(..., prompt=True, help="Phone number"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
    confirm: str = typer.Option(..., prompt="Confirm password", hide_input=True, help="Password again"),
) -> None:
    """Create a new account."""
    register_command(name, lastname, email, phone, password, confirm)


@app.command()
def logout() -> None:
    """Forget your session on this machine."""
    logout_command()


@app.command()
def charts(
    mode: str = typer.Option("general", help="'income', 'expense' or 'general'"),
    month: str = typer.Option(None, "--month", help="Month (1-12, YYYY-MM or name)"),
    sort_by: str = typer.Option("value", help="Sort by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show bars next to each category"),
) -> None:
    """Show your income and spending by category."""
    charts_command(mode, month, sort_by, histogram)


@transactions_app.command(name="list")
def list_transactions(
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM, default: current)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions grouped by day."""
    transaction_commands.list_command(month, all)


@transactions_app.command(name="add")
def add_transaction(
    income: str = typer.Option(None, "--income", help="Income amount"),
    income_category: str = typer.Option(None, "--income-category", help="Income category (name or id)"),
    expense: str = typer.Option(None, "--expense", help="Expense amount"),
    expense_category: str = typer.Option(None, "--expense-category", help="Expense category (name or id)"),
    date: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD, DD/MM/YYYY...; default: now)"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
) -> None:
    """Add an income, an expense, or both."""
    transaction_commands.add_command(income, income_category, expense, expense_category, date, description)


@transactions_app.command(name="edit")
def edit_transaction(
    transaction_id: str,
    amount: str = typer.Option(None, "--amount", help="New amount (positive)"),
    kind: str = typer.Option(None, "--kind", help="'income' or 'expense'"),
    category: str = typer.Option(None, "--category", help="New category (name or id)"),
    date: str = typer.Option(None, "--date", help="New date"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
) -> None:
    """Edit one of your transactions."""
    transaction_commands.edit_command(transaction_id, amount, kind, category, date, description)


@transactions_app.command(name="delete")
def delete_transaction(
    transaction_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete one of your transactions."""
    transaction_commands.delete_command(transaction_id, yes)


@categories_app.command(name="list")
def list_categories() -> None:
    """List your categories."""
    category_commands.list_command()


@categories_app.command(name="add")
def add_category(
    name: str,
    description: str = typer.Option("", "--description", "-d", help="Description"),
    schedulable: bool = typer.Option(False, "--schedulable", help="Usable for fixed payments"),
) -> None:
    """Create a category."""
    category_commands.add_command(name, description, schedulable)


@categories_app.command(name="rename")
def rename_category(
    category: str,
    new_name: str,
    description: str = typer.Option("", "--description", "-d", help="Description"),
    schedulable: bool = typer.Option(False, "--schedulable", help="Usable for fixed payments"),
) -> None:
    """Rename a category (by name or id)."""
    category_commands.rename_command(category, new_name, description, schedulable)


@categories_app.command(name="delete")
def delete_category(
    category: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a category (by name or id)."""
    category_commands.delete_command(category, yes)


@budgets_app.command(name="list")
def list_budgets(
    month: str = typer.Option(None, "--month", help="Only this month (1-12, YYYY-MM or name)"),
) -> None:
    """List your budgets."""
    budget_commands.list_command(month)


@budgets_app.command(name="set")
def set_budget(
    category: str,
    amount: str,
    month: str = typer.Option(None, "--month", help="Month (1-12, YYYY-MM or name; default: current)"),
) -> None:
    """Set a budget for a category."""
    budget_commands.set_command(category, amount, month)


@budgets_app.command(name="edit")
def edit_budget(
    budget_id: str,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    month: str = typer.Option(None, "--month", help="New month"),
    category: str = typer.Option(None, "--category", help="New category (name or id)"),
) -> None:
    """Edit one of your budgets."""
    budget_commands.edit_command(budget_id, amount, month, category)


@budgets_app.command(name="delete")
def delete_budget(
    budget_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete one of your budgets."""
    budget_commands.delete_command(budget_id, yes)


@budgets_app.command(name="status")
def budget_status(
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM; default: current)"),
) -> None:
    """Show your spending against each budget."""
    budget_commands.status_command(month)


@fixed_app.command(name="list")
def list_fixed() -> None:
    """List your fixed payments."""
    fixed_commands.list_command()


@fixed_app.command(name="add")
def add_fixed(
    category: str,
    amount: str,
    day: int = typer.Option(..., "--day", help="Day of month (1-31)"),
    time: str = typer.Option(None, "--time", help="Time of day (HH:MM; default: now)"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
) -> None:
    """Add a fixed monthly payment."""
    fixed_commands.add_command(category, amount, day, time, description)


@fixed_app.command(name="edit")
def edit_fixed(
    payment_id: str,
    category: str = typer.Option(None, "--category", help="New category (name or id)"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    day: int = typer.Option(None, "--day", help="New day of month"),
    time: str = typer.Option(None, "--time", help="New time of day"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
) -> None:
    """Edit one of your fixed payments."""
    fixed_commands.edit_command(payment_id, category, amount, day, time, description)


@fixed_app.command(name="delete")
def delete_fixed(
    payment_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete one of your fixed payments."""
    fixed_commands.delete_command(payment_id, yes)


if __name__ == "__main__":
    app()
