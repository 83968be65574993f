"""Pure functions for budgets and fixed payments.

This module contains the functional core for budget operations:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Server records for budgets and fixed (scheduled) payments come in partial
and legacy shapes; the normalizers here always return complete records.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Any

from lana.dates import clamp_day, local_date, month_of
from lana.domain.categories import category_label
from lana.domain.models import Amount, CategoryId, CategoryName
from lana.domain.money import to_number
from lana.domain.transactions import Transaction
from lana.errors import ValidationError

MONTH_NAMES_ES: tuple[str, ...] = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

MONTH_NAMES_EN: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_YEAR_MONTH = re.compile(r"^\d{4}-(\d{1,2})$")


@dataclass(frozen=True)
class Budget:
    """Immutable spending ceiling for one category in one month."""

    id: Any
    amount: Amount
    month: int  # 1-12, 0 when unreadable
    category: CategoryId | None


@dataclass(frozen=True)
class FixedPayment:
    """Immutable recurring monthly payment (scheduled transaction)."""

    id: Any
    amount: Amount
    day: int  # day of month only
    time: str  # ISO time of day
    description: str
    category: CategoryId | None


@dataclass(frozen=True)
class BudgetCategoryStatus:
    """Immutable budget status for a single category."""

    budget_id: Any
    category: CategoryName
    allocated: Amount
    spent: Amount
    available: Amount
    percentage: float


def parse_month(value: Any) -> int:
    """Read a budget month from the shapes the backend has used.

    Accepts integers, numeric strings, ``YYYY-MM`` strings and Spanish or
    English month names.

    Args:
        value: Raw month value.

    Returns:
        Month number 1-12, or 0 when the value cannot be read.
    """
    if isinstance(value, str):
        text = value.strip()
        match = _YEAR_MONTH.match(text)
        if match:
            text = match.group(1)
        folded = text.casefold()
        for names in (MONTH_NAMES_ES, MONTH_NAMES_EN):
            for index, name in enumerate(names, 1):
                if name.casefold() == folded:
                    return index
        value = text

    month = int(to_number(value))
    return month if 1 <= month <= 12 else 0


def month_display_name(month: int) -> str:
    """Spanish month name as shown in the app, "-" if out of range."""
    if 1 <= month <= 12:
        return MONTH_NAMES_ES[month - 1]
    return "-"


def current_time_of_day(now: datetime | None = None) -> str:
    """Wall-clock time of day as an ISO string (HH:MM:SS)."""
    moment = now or datetime.now()
    return moment.time().replace(microsecond=0).isoformat()


def normalize_budget(raw: Mapping[str, Any]) -> Budget:
    """Normalize a raw budget record.

    Args:
        raw: Raw budget dictionary from the API.

    Returns:
        Budget with numeric amount and month (unreadable values become 0).
    """
    return Budget(
        id=raw.get("id"),
        amount=to_number(raw.get("amount")),
        month=parse_month(raw.get("month")),
        category=raw.get("category"),
    )


def normalize_budgets(raw: Any) -> list[Budget]:
    """Normalize a raw budget list; non-list responses yield an empty list."""
    if not isinstance(raw, list):
        return []
    return [normalize_budget(record) for record in raw if isinstance(record, Mapping)]


def _legacy_datetime(raw: Mapping[str, Any]) -> datetime | None:
    value = raw.get("date")
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def normalize_fixed_payment(raw: Mapping[str, Any], now: datetime | None = None) -> FixedPayment:
    """Normalize a raw fixed payment record.

    Older records carry a full ``date`` instead of ``day``/``time``; those
    fields are derived from it. A record without any time gets the current
    wall-clock time of day.

    Args:
        raw: Raw scheduled transaction dictionary from the API.
        now: Clock override for the missing-time fallback.

    Returns:
        FixedPayment with every field populated.
    """
    legacy = _legacy_datetime(raw)

    raw_day = raw.get("day")
    if raw_day is None and legacy is not None:
        day = legacy.day
    else:
        day = int(to_number(raw_day))

    raw_time = raw.get("time")
    if isinstance(raw_time, str) and raw_time.strip():
        time_of_day = raw_time.strip()
    elif legacy is not None:
        time_of_day = legacy.time().replace(microsecond=0).isoformat()
    else:
        time_of_day = current_time_of_day(now)

    description = raw.get("description")

    return FixedPayment(
        id=raw.get("id"),
        amount=to_number(raw.get("amount")),
        day=day,
        time=time_of_day,
        description=str(description) if description is not None else "",
        category=raw.get("category"),
    )


def normalize_fixed_payments(raw: Any, now: datetime | None = None) -> list[FixedPayment]:
    """Normalize a raw fixed payment list; non-list responses yield an empty list."""
    if not isinstance(raw, list):
        return []
    return [normalize_fixed_payment(record, now) for record in raw if isinstance(record, Mapping)]


def fixed_payment_display_date(payment: FixedPayment, today: date) -> date | None:
    """Full date shown for a fixed payment.

    Only the day of month is stored, so the date is rebuilt in the current
    month and year. Days past the end of the month are clamped. A payment
    without a readable day (day 0) has no date.
    """
    if payment.day < 1:
        return None
    return clamp_day(today.year, today.month, payment.day)


def _category_for_payload(category: CategoryId | None) -> CategoryId:
    if category is None or category == "":
        raise ValidationError("Select a category.")
    if isinstance(category, str) and category.strip().isdigit():
        return int(category.strip())
    return category


def build_budget_payload(amount: Amount, month: int, category: CategoryId | None) -> dict[str, Any]:
    """Assemble the create/update body for a budget.

    Raises:
        ValidationError: If the amount is not positive, the month is out of
            range or no category is selected.
    """
    if not amount > 0:
        raise ValidationError("Enter an amount greater than 0.")
    if not 1 <= month <= 12:
        raise ValidationError("Select a month between 1 and 12.")

    return {"amount": amount, "month": month, "category": _category_for_payload(category)}


def build_fixed_payment_payload(
    amount: Amount,
    day: int,
    category: CategoryId | None,
    description: str = "",
    time_of_day: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the create/update body for a fixed payment.

    Raises:
        ValidationError: If the amount is not positive, the day is not 1-31,
            the time is not an ISO time of day or no category is selected.
    """
    if not amount > 0:
        raise ValidationError("Enter an amount greater than 0.")
    if not 1 <= day <= 31:
        raise ValidationError("Day must be between 1 and 31.")

    if time_of_day:
        try:
            time_of_day = time.fromisoformat(time_of_day.strip()).isoformat()
        except ValueError as e:
            raise ValidationError(f"Invalid time '{time_of_day}', use HH:MM") from e
    else:
        time_of_day = current_time_of_day(now)

    return {
        "amount": amount,
        "day": day,
        "time": time_of_day,
        "description": description.strip(),
        "category": _category_for_payload(category),
    }


def month_budget_total(budgets: Iterable[Budget], month: int) -> Amount:
    """Sum of all budget amounts planned for a month."""
    return sum((b.amount for b in budgets if b.month == month), 0.0)


def calculate_budget_percentage(spent: Amount, allocated: Amount) -> float:
    """Percentage of a budget used (0 when nothing is allocated)."""
    if allocated <= 0:
        return 0.0
    return (abs(spent) / allocated) * 100


def compute_budget_status(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    id_to_name: Mapping[str, CategoryName],
    tz: tzinfo | None = None,
) -> list[BudgetCategoryStatus]:
    """Compare each budget of a month against the expenses in its category.

    Args:
        budgets: Normalized budgets (only those for ``month`` are reported).
        transactions: Parsed transactions of any period.
        year: Year the budgets apply to.
        month: Month number 1-12.
        id_to_name: Category id to name map.
        tz: Time zone defining "local" days. None means system local time.

    Returns:
        One status per budget, in input order.
    """
    target = f"{year:04d}-{month:02d}"
    spent_by_category: dict[str, Amount] = {}
    for txn in transactions:
        if not txn.is_expense or month_of(local_date(txn.timestamp, tz)) != target:
            continue
        key = str(txn.category)
        spent_by_category[key] = spent_by_category.get(key, 0.0) + abs(txn.amount)

    statuses: list[BudgetCategoryStatus] = []
    for budget in budgets:
        if budget.month != month:
            continue
        spent = spent_by_category.get(str(budget.category), 0.0)
        statuses.append(
            BudgetCategoryStatus(
                budget_id=budget.id,
                category=category_label(budget.category, id_to_name),
                allocated=budget.amount,
                spent=spent,
                available=budget.amount - spent,
                percentage=calculate_budget_percentage(spent, budget.amount),
            )
        )
    return statuses
