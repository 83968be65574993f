"""Domain models and types for lana.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from lana.domain.models import Amount, CategoryId, CategoryName, DayKey, Month

__all__ = ["Amount", "CategoryId", "CategoryName", "DayKey", "Month"]
