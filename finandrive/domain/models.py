"""Domain type definitions for finandrive.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in centavos (minor units)
- IsoDate: Calendar date in YYYY-MM-DD format
- CategoryName: Name of an expense category
- Description: Transaction or bill description text
"""

from typing import NewType

# Money amounts are stored as centavos (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Dates are always in YYYY-MM-DD format (e.g., "2025-01-31")
IsoDate = NewType("IsoDate", str)

# Category name for transactions and bills
CategoryName = NewType("CategoryName", str)

# Transaction or bill description text
Description = NewType("Description", str)
