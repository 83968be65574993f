"""Pure functions for reading and displaying money values.

Server records and form input both arrive in loose shapes; everything here
coerces instead of raising.
"""

import math
from typing import Any

from lana.domain.models import Amount


def to_number(value: Any) -> float:
    """Coerce a loosely typed value to a number.

    Mirrors JavaScript's ``Number(...)`` as the backend clients use it, with
    NaN treated as zero.

    Args:
        value: Raw value (number, numeric string, None, bool, ...).

    Returns:
        The numeric value, or 0.0 if it cannot be read as a finite number.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_money(text: Any) -> Amount:
    """Parse a money string typed into a form.

    Accepts both ``.`` and ``,`` as decimal separator and ignores surrounding
    whitespace. Invalid input parses to zero.

    Args:
        text: Raw form input.

    Returns:
        Parsed amount, 0.0 when the input is empty or not a number.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return to_number(text)
    if not isinstance(text, str):
        return 0.0
    return to_number(text.strip().replace(",", "."))


def format_money(amount: Amount, include_sign: bool = False) -> str:
    """Format an amount for display with two decimals.

    Args:
        amount: Amount in currency units.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "$12.50", "-$40.00" or "+$100.00").
    """
    formatted = f"${abs(amount):.2f}"

    if include_sign:
        if amount < 0:
            return f"-{formatted}"
        return f"+{formatted}"
    return formatted
