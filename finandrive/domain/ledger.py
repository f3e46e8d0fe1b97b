"""Pure functions for the transaction log and the bill list.

This module contains the functional core for ledger data:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in centavos (Money type).
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from finandrive.domain.models import CategoryName, Description, IsoDate, Money

# Largest value a SQLite INTEGER column holds
MAX_MONEY = Money(2**63 - 1)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    type: TransactionType
    amount: Money
    description: Description
    date: IsoDate
    category: CategoryName | None = None
    mileage: float | None = None
    duration_hours: float | None = None


@dataclass(frozen=True)
class Bill:
    """Immutable bill data."""

    id: int
    description: Description
    amount: Money
    due_date: IsoDate
    is_paid: bool = False
    category: CategoryName | None = None


def transaction_from_row(row: dict[str, Any]) -> Transaction:
    """Build a Transaction from a store row.

    Args:
        row: Dictionary with the transactions table columns.

    Returns:
        Transaction with typed fields.
    """
    return Transaction(
        id=row["id"],
        type=TransactionType(row["type"]),
        amount=Money(row["amount"]),
        description=Description(row["description"]),
        date=IsoDate(row["date"]),
        category=CategoryName(row["category"]) if row.get("category") else None,
        mileage=row.get("mileage"),
        duration_hours=row.get("duration_hours"),
    )


def bill_from_row(row: dict[str, Any]) -> Bill:
    """Build a Bill from a store row.

    Args:
        row: Dictionary with the bills table columns.

    Returns:
        Bill with typed fields.
    """
    return Bill(
        id=row["id"],
        description=Description(row["description"]),
        amount=Money(row["amount"]),
        due_date=IsoDate(row["due_date"]),
        is_paid=bool(row["is_paid"]),
        category=CategoryName(row["category"]) if row.get("category") else None,
    )


def total_income(transactions: Iterable[Transaction]) -> Money:
    """Sum the amounts of all income transactions."""
    return Money(sum(t.amount for t in transactions if t.type == TransactionType.INCOME))


def total_expense(transactions: Iterable[Transaction]) -> Money:
    """Sum the amounts of all expense transactions."""
    return Money(sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE))


def net_profit(transactions: Iterable[Transaction]) -> Money:
    """Calculate income minus expenses.

    Args:
        transactions: Transactions to total.

    Returns:
        Net profit in centavos (negative when expenses exceed income).
    """
    income = 0
    expense = 0
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return Money(income - expense)


def unpaid_bills(bills: Iterable[Bill]) -> list[Bill]:
    """Get unpaid bills ordered by due date.

    YYYY-MM-DD strings sort chronologically, so the due date string is the
    sort key. Bills sharing a due date keep their input order.

    Args:
        bills: Bills to filter.

    Returns:
        Unpaid bills, earliest due date first.
    """
    return sorted((b for b in bills if not b.is_paid), key=lambda b: b.due_date)


def pending_bills_total(bills: Iterable[Bill]) -> Money:
    """Sum the amounts of all unpaid bills."""
    return Money(sum(b.amount for b in bills if not b.is_paid))


def parse_money(amount: float) -> Money:
    """Convert an amount in reais to centavos.

    The float is converted through its shortest decimal repr, so 1.005 is
    read as typed and rounds half up to 101 centavos.

    Args:
        amount: Amount in major units (e.g., 12.5 for R$ 12,50).

    Returns:
        Amount in centavos, rounded to the nearest centavo.

    Raises:
        ValueError: If the amount is negative, not finite, or too large to store.
    """
    if not math.isfinite(amount):
        raise ValueError(f"Amount must be a finite number, got {amount}")
    if amount < 0:
        raise ValueError("Amount must not be negative")

    centavos = int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if centavos > MAX_MONEY:
        raise ValueError(f"Amount is too large: {amount}")
    return Money(centavos)


def format_money(amount: Money, symbol: str = "R$", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in centavos.
        symbol: Currency symbol prefix.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "R$1,234.50" or "-R$12.00").
    """
    formatted = f"{symbol}{abs(amount) / 100:,.2f}"

    if include_sign:
        if amount < 0:
            return f"-{formatted}"
        return f"+{formatted}"

    if amount < 0:
        return f"-{formatted}"
    return formatted
