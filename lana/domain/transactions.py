"""Pure functions for transaction parsing, grouping and payload assembly.

This module contains the functional core for transaction operations:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Sign convention: a positive amount is income, a negative amount is an
expense. There is no separate type field; use ``is_income``/``is_expense``
(or ``transaction_kind``) instead of checking the sign ad hoc.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Literal

from lana.dates import day_key, local_date, month_of, parse_timestamp, weekday_name
from lana.domain.categories import NAME_KEYS, category_label, extract_category_id, first_present
from lana.domain.models import Amount, CategoryId, CategoryName, DayKey, Month
from lana.domain.money import to_number
from lana.errors import ValidationError

TransactionKind = Literal["income", "expense"]

INCOME: TransactionKind = "income"
EXPENSE: TransactionKind = "expense"

EMBEDDED_NAME_KEYS: tuple[str, ...] = ("category_name", "categoryName")


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: Any
    amount: Amount
    timestamp: datetime
    description: str = ""
    category: CategoryId | None = None
    category_name: CategoryName | None = None  # embedded by some endpoints

    @property
    def is_income(self) -> bool:
        return is_income(self.amount)

    @property
    def is_expense(self) -> bool:
        return is_expense(self.amount)


@dataclass(frozen=True)
class DayItem:
    """A transaction with its resolved category display name."""

    transaction: Transaction
    category_name: CategoryName


@dataclass(frozen=True)
class DayGroup:
    """Immutable aggregation of all transactions sharing a calendar date."""

    key: DayKey
    day_of_month: str
    weekday_name: str
    income: Amount
    expense: Amount
    items: tuple[DayItem, ...]


@dataclass(frozen=True)
class PeriodSummary:
    """Immutable income/expense totals over a set of day groups."""

    income: Amount
    expense: Amount
    balance: Amount


@dataclass
class _DayBucket:
    key: DayKey
    day_of_month: str
    weekday_name: str
    income: Amount = 0.0
    expense: Amount = 0.0
    items: list[DayItem] = field(default_factory=list)


def is_income(amount: Amount) -> bool:
    """Whether an amount counts as income (strictly positive)."""
    return amount > 0


def is_expense(amount: Amount) -> bool:
    """Whether an amount counts as an expense (strictly negative)."""
    return amount < 0


def transaction_kind(amount: Amount) -> TransactionKind:
    """Kind of a transaction by sign; zero falls on the income side."""
    return EXPENSE if amount < 0 else INCOME


def signed_amount(kind: TransactionKind, amount: Amount) -> Amount:
    """Apply the sign convention to a positive form amount."""
    magnitude = abs(amount)
    return -magnitude if kind == EXPENSE else magnitude


def parse_transaction(raw: Mapping[str, Any]) -> Transaction:
    """Parse a raw transaction record from the API.

    The category may be a bare id or an embedded ``{id, name}`` object.

    Args:
        raw: Raw transaction dictionary.

    Returns:
        Parsed Transaction.

    Raises:
        ValueError: If the record is not a mapping or its datetime is missing
            or invalid.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"Invalid transaction record: {raw!r}")

    timestamp = parse_timestamp(first_present(raw, ("datetime", "date")))

    raw_category = raw.get("category")
    category_name = first_present(raw, EMBEDDED_NAME_KEYS)
    if isinstance(raw_category, Mapping):
        category_id = extract_category_id(raw_category)
        if category_name is None:
            category_name = first_present(raw_category, NAME_KEYS)
    else:
        category_id = raw_category

    description = raw.get("description")

    return Transaction(
        id=first_present(raw, ("id", "ID", "Id")),
        amount=to_number(raw.get("amount")),
        timestamp=timestamp,
        description=str(description) if description is not None else "",
        category=category_id,
        category_name=CategoryName(str(category_name)) if category_name is not None else None,
    )


def parse_transactions(raw: Any) -> list[Transaction]:
    """Parse a raw transaction list; a non-list response yields no transactions."""
    if not isinstance(raw, list):
        return []
    return [parse_transaction(record) for record in raw]


def resolve_item_name(transaction: Transaction, id_to_name: Mapping[str, CategoryName]) -> CategoryName:
    """Display name for a transaction's category.

    Prefers the name embedded in the record, then the lookup map, then the
    "Cat <id>" placeholder.
    """
    if transaction.category_name:
        return transaction.category_name
    return category_label(transaction.category, id_to_name)


def group_by_day(
    transactions: Iterable[Transaction | Mapping[str, Any]],
    id_to_name: Mapping[str, CategoryName],
    tz: tzinfo | None = None,
) -> list[DayGroup]:
    """Group transactions by local calendar day.

    Each group carries income (sum of positive amounts) and expense (sum of
    absolute negative amounts) subtotals. Groups are ordered newest day first;
    items keep the order they had in the input.

    Args:
        transactions: Parsed transactions or raw API records.
        id_to_name: Category id (string form) to name map.
        tz: Time zone defining "local" days. None means system local time.

    Returns:
        List of DayGroup sorted by key descending.

    Raises:
        ValueError: If a record has no valid datetime.
    """
    buckets: dict[DayKey, _DayBucket] = {}

    for entry in transactions:
        transaction = entry if isinstance(entry, Transaction) else parse_transaction(entry)
        if not isinstance(transaction.timestamp, datetime):
            raise ValueError(f"Transaction {transaction.id!r} has no valid datetime")

        day = local_date(transaction.timestamp, tz)
        key = day_key(day)

        bucket = buckets.get(key)
        if bucket is None:
            bucket = _DayBucket(key=key, day_of_month=f"{day.day:02d}", weekday_name=weekday_name(day))
            buckets[key] = bucket

        if transaction.is_expense:
            bucket.expense += abs(transaction.amount)
        else:
            bucket.income += abs(transaction.amount)

        bucket.items.append(DayItem(transaction=transaction, category_name=resolve_item_name(transaction, id_to_name)))

    return [
        DayGroup(
            key=bucket.key,
            day_of_month=bucket.day_of_month,
            weekday_name=bucket.weekday_name,
            income=bucket.income,
            expense=bucket.expense,
            items=tuple(bucket.items),
        )
        for bucket in sorted(buckets.values(), key=lambda b: b.key, reverse=True)
    ]


def filter_by_month(
    transactions: Iterable[Transaction],
    month: Month,
    tz: tzinfo | None = None,
) -> list[Transaction]:
    """Keep the transactions whose local date falls in a month (YYYY-MM)."""
    return [t for t in transactions if month_of(local_date(t.timestamp, tz)) == month]


def summarize_groups(groups: Iterable[DayGroup]) -> PeriodSummary:
    """Total income and expense across day groups."""
    income = 0.0
    expense = 0.0
    for group in groups:
        income += group.income
        expense += group.expense
    return PeriodSummary(income=income, expense=expense, balance=income - expense)


def build_transaction_payload(
    kind: TransactionKind,
    amount: Amount,
    when: datetime,
    category: CategoryId | None,
    description: str = "",
) -> dict[str, Any]:
    """Assemble the create/update body for a transaction.

    Args:
        kind: "income" or "expense".
        amount: Positive amount from the form.
        when: Transaction timestamp.
        category: Selected category id.
        description: Optional free text.

    Returns:
        JSON-ready payload with the signed amount.

    Raises:
        ValidationError: If the amount is not positive or no category is set.
    """
    if kind not in (INCOME, EXPENSE):
        raise ValidationError(f"Unknown transaction kind: {kind}")
    if not amount > 0:
        raise ValidationError("Enter an amount greater than 0.")
    if category is None or category == "":
        raise ValidationError("Select a category.")

    return {
        "amount": signed_amount(kind, amount),
        "datetime": when.isoformat(),
        "description": description.strip(),
        "category": category,
    }


def plan_combined_edit(income_amount: Amount, expense_amount: Amount) -> list[tuple[TransactionKind, Amount]]:
    """Decide which sides of a combined income/expense form get written.

    A zero or blank side means "do not write that side", not an error.

    Args:
        income_amount: Parsed income amount (0 when blank).
        expense_amount: Parsed expense amount (0 when blank).

    Returns:
        List of (kind, amount) pairs to save, income first.

    Raises:
        ValidationError: If neither side has a positive amount.
    """
    plan: list[tuple[TransactionKind, Amount]] = []
    if income_amount > 0:
        plan.append((INCOME, income_amount))
    if expense_amount > 0:
        plan.append((EXPENSE, expense_amount))

    if not plan:
        raise ValidationError("Enter an income or expense amount greater than 0.")
    return plan
