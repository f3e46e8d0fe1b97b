"""Domain models and types for finandrive.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from finandrive.domain.models import CategoryName, Description, IsoDate, Money

__all__ = ["Money", "IsoDate", "CategoryName", "Description"]
