"""Category commands (list, add, rename, delete)."""

import sys

import typer
from rich.table import Table

from lana.api import create_client
from lana.commands.common import console, load_categories, require_category, submit_form
from lana.domain.categories import find_category, resolve_category_ref
from lana.errors import ValidationError


def require_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Enter a category name.")
    return name


def list_command() -> None:
    """List categories."""
    client = create_client()
    categories, _ = load_categories(client)

    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(title=f"Categories ({len(categories)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="magenta")

    for category in categories:
        table.add_row(str(category.id), category.name)

    console.print(table)


def add_command(name: str, description: str = "", schedulable: bool = False) -> None:
    """Create a category."""
    client = create_client()

    submit_form(
        lambda: require_name(name),
        lambda clean: client.create_category(clean, description=description, schedulable=schedulable),
        success=f"Created category: {name.strip()}",
    )


def rename_command(category: str, new_name: str, description: str = "", schedulable: bool = False) -> None:
    """Rename a category given its current name or id."""
    client = create_client()
    _, lookup = load_categories(client)

    submit_form(
        lambda: (require_category(category, lookup), require_name(new_name)),
        lambda target: client.update_category(target[0], target[1], description=description, schedulable=schedulable),
        success=f"Renamed '{category}' to '{new_name.strip()}'",
    )


def delete_command(category: str, yes: bool = False) -> None:
    """Delete a category given its name or id."""
    client = create_client()
    categories, lookup = load_categories(client)
    target = find_category(categories, resolve_category_ref(category, lookup))
    label = target.name if target else category

    if not yes and not typer.confirm(f"Delete category '{label}'?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(0)

    submit_form(
        lambda: require_category(category, lookup),
        client.delete_category,
        success=f"Deleted category: {label}",
        working="Deleting...",
    )
