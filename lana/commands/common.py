"""Helpers shared by the command modules.

Every write follows the same form flow: validate locally, submit with a
spinner, then report success or the error. Control always comes back to the
shell; failures exit with status 1.
"""

import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any, NoReturn, TypeVar

import pandas as pd
from rich.console import Console

from lana.api import ApiClient
from lana.domain.categories import (
    Category,
    CategoryLookup,
    build_lookup,
    normalize_categories,
    resolve_category_ref,
)
from lana.domain.models import CategoryId
from lana.errors import LanaError, ValidationError

console = Console()

T = TypeVar("T")


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def fetch(action: Callable[[], T], working: str = "Loading...") -> T:
    """Run a read against the API with a spinner, exiting on failure."""
    try:
        with console.status(working):
            return action()
    except LanaError as e:
        fail(str(e))


def submit_form(
    validate: Callable[[], T],
    send: Callable[[T], Any],
    success: str,
    working: str = "Saving...",
) -> Any:
    """Run one form submission: validate -> submit -> success or failure.

    Validation errors are shown without contacting the server.

    Args:
        validate: Builds the payload, raising ValidationError when invalid.
        send: Performs the API write with the payload.
        success: Message printed on success.
        working: Spinner text while the request is in flight.

    Returns:
        Whatever ``send`` returned.
    """
    try:
        payload = validate()
    except ValidationError as e:
        console.print(f"[yellow]{e}[/yellow]")
        sys.exit(1)

    try:
        with console.status(working):
            result = send(payload)
    except LanaError as e:
        fail(str(e))

    console.print(f"[green]✓[/green] {success}")
    return result


def load_categories(client: ApiClient) -> tuple[list[Category], CategoryLookup]:
    """Fetch and normalize categories with their lookup maps."""
    categories = normalize_categories(fetch(client.list_categories, "Loading categories..."))
    return categories, build_lookup(categories)


def require_category(ref: str | None, lookup: CategoryLookup) -> CategoryId:
    """Resolve a category typed by the user.

    Raises:
        ValidationError: If nothing was given or no category matches.
    """
    if not ref:
        raise ValidationError("Select a category.")
    category_id = resolve_category_ref(ref, lookup)
    if category_id is None:
        raise ValidationError(f"Unknown category '{ref}'.")
    return category_id


def parse_date_input(text: str | None) -> datetime:
    """Parse a date typed by the user; None means now.

    Uses pandas.to_datetime so ISO, European and other common formats all
    work.

    Raises:
        ValidationError: If the date cannot be parsed.
    """
    if not text:
        return datetime.now().replace(microsecond=0)
    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValidationError(f"Invalid date format: {text}") from e
    if pd.isna(parsed):
        raise ValidationError(f"Invalid date format: {text}")
    return parsed.to_pydatetime()


def amount_style(amount: float) -> str:
    """Rich color for an amount by sign."""
    return "red" if amount < 0 else "green"
