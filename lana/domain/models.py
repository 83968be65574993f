"""Domain type definitions for lana.

These aliases provide semantic clarity and help with type checking:
- Amount: Signed amount in currency units (positive = income, negative = expense)
- CategoryId: Opaque category identifier, numeric or string depending on the backend
- DayKey: Calendar day in YYYY-MM-DD format
- Month: Month in YYYY-MM format
- CategoryName: Display name of a category
"""

from typing import NewType

# Amounts travel as JSON numbers, so they stay floats in currency units
Amount = float

# The backend hands out both integer and string ids
CategoryId = int | str

# DayKey is always in YYYY-MM-DD format (e.g., "2025-05-26")
DayKey = NewType("DayKey", str)

# Month is always in YYYY-MM format (e.g., "2025-05")
Month = NewType("Month", str)

# Category name for display
CategoryName = NewType("CategoryName", str)
