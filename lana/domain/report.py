"""Pure functions for chart calculations and aggregations.

This module contains the functional core for the charts screen:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

The chart endpoints return flat rows of ``{mes, categoria, total}``; this
module folds them into per-category totals with shares of the whole.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from lana.domain.budget import parse_month
from lana.domain.categories import first_present
from lana.domain.models import Amount, CategoryName
from lana.domain.money import to_number


@dataclass(frozen=True)
class ChartRow:
    """Immutable row from a chart endpoint."""

    month: int
    category: str
    total: Amount


@dataclass(frozen=True)
class CategoryShare:
    """Immutable per-category total with its share of the overall total."""

    category: CategoryName
    amount: Amount
    percentage: float


@dataclass(frozen=True)
class GeneralRow:
    """Immutable income vs expense line for one category."""

    category: CategoryName
    income: Amount
    expense: Amount


@dataclass(frozen=True)
class ChartReport:
    """Immutable data behind the charts screen."""

    income: list[CategoryShare]
    expense: list[CategoryShare]
    general: list[GeneralRow]
    income_total: Amount
    expense_total: Amount
    balance: Amount


def normalize_chart_rows(raw: Any) -> list[ChartRow]:
    """Normalize rows from /api/graficaIngresos or /api/graficaGastos.

    Args:
        raw: Decoded JSON list.

    Returns:
        List of ChartRow; rows without a category are dropped.
    """
    if not isinstance(raw, list):
        return []

    rows: list[ChartRow] = []
    for record in raw:
        if not isinstance(record, Mapping):
            continue
        category = first_present(record, ("categoria", "category"))
        if category is None:
            continue
        rows.append(
            ChartRow(
                month=parse_month(first_present(record, ("mes", "month"))),
                category=str(category),
                total=abs(to_number(first_present(record, ("total", "amount")))),
            )
        )
    return rows


def totals_by_category(
    rows: Iterable[ChartRow],
    month: int | None = None,
    id_to_name: Mapping[str, CategoryName] | None = None,
) -> dict[CategoryName, Amount]:
    """Sum chart rows per category.

    Args:
        rows: Normalized chart rows.
        month: Only count rows for this month (1-12). None counts all.
        id_to_name: Optional map used when rows carry category ids.

    Returns:
        Dictionary of category name to total, in first-seen order.
    """
    totals: dict[CategoryName, Amount] = {}
    for row in rows:
        if month is not None and row.month != month:
            continue
        name = CategoryName(id_to_name.get(row.category, row.category) if id_to_name else row.category)
        totals[name] = totals.get(name, 0.0) + row.total
    return totals


def calculate_share(amount: Amount, total: Amount) -> float:
    """Percentage of a total taken by an amount (0 for an empty total)."""
    if total <= 0:
        return 0.0
    return (amount / total) * 100


def create_shares(totals: dict[CategoryName, Amount], sort_by: str = "value") -> list[CategoryShare]:
    """Turn per-category totals into shares, sorted by value or alphabetically."""
    grand_total = sum(totals.values())
    if sort_by == "alpha":
        ordered = sorted(totals.items(), key=lambda x: x[0])
    else:
        ordered = sorted(totals.items(), key=lambda x: x[1], reverse=True)
    return [CategoryShare(category=cat, amount=amt, percentage=calculate_share(amt, grand_total)) for cat, amt in ordered]


def merge_for_general(
    income: dict[CategoryName, Amount],
    expense: dict[CategoryName, Amount],
) -> list[GeneralRow]:
    """Join income and expense totals per category for the general view.

    Income categories come first, in their order, followed by categories
    that only have expenses.
    """
    merged: dict[CategoryName, list[Amount]] = {}
    for category, amount in income.items():
        merged[category] = [amount, 0.0]
    for category, amount in expense.items():
        merged.setdefault(category, [0.0, 0.0])[1] += amount
    return [GeneralRow(category=cat, income=inc, expense=exp) for cat, (inc, exp) in merged.items()]


def create_chart_report(
    income_rows: Iterable[ChartRow],
    expense_rows: Iterable[ChartRow],
    month: int | None = None,
    id_to_name: Mapping[str, CategoryName] | None = None,
    sort_by: str = "value",
) -> ChartReport:
    """Create the full chart report.

    Args:
        income_rows: Rows from the income chart endpoint.
        expense_rows: Rows from the expense chart endpoint.
        month: Optional month filter (1-12).
        id_to_name: Optional category id to name map.
        sort_by: "value" or "alpha".

    Returns:
        ChartReport with shares, general rows, totals and balance.
    """
    income = totals_by_category(income_rows, month, id_to_name)
    expense = totals_by_category(expense_rows, month, id_to_name)

    income_total = sum(income.values(), 0.0)
    expense_total = sum(expense.values(), 0.0)

    return ChartReport(
        income=create_shares(income, sort_by),
        expense=create_shares(expense, sort_by),
        general=merge_for_general(income, expense),
        income_total=income_total,
        expense_total=expense_total,
        balance=income_total - expense_total,
    )


def calculate_histogram_bar_length(
    amount: Amount,
    max_amount: Amount,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
