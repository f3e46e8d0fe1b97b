"""Helpers shared by command handlers."""

import sys
from pathlib import Path

import pandas as pd
from rich.console import Console

from finandrive.domain.ledger import Bill, Transaction, bill_from_row, transaction_from_row
from finandrive.domain.models import IsoDate
from finandrive.store.queries import get_all_bills, get_all_transactions
from finandrive.store.schema import database_exists, get_db_path

console = Console()


def require_database() -> Path:
    """Get the database path, exiting with a hint if it doesn't exist."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'finandrive init' first.[/red]", style="bold")
        sys.exit(1)
    return db_path


def normalize_date(value: str) -> IsoDate:
    """Normalize a user-entered date to YYYY-MM-DD.

    Args:
        value: Date such as "2025-01-31", "31/01/2025" or "31-01-2025".

    Returns:
        Date in YYYY-MM-DD format.

    Raises:
        ValueError: If the value cannot be parsed as a date.
    """
    text = value.strip()
    try:
        if len(text) == 10 and text[4] == "-":
            parsed = pd.to_datetime(text, format="%Y-%m-%d")
        else:
            parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e
    return IsoDate(parsed.strftime("%Y-%m-%d"))


def load_ledger(db_path: Path) -> tuple[list[Transaction], list[Bill]]:
    """Load the current transactions and bills snapshot.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    transactions = [transaction_from_row(row) for row in get_all_transactions(db_path)]
    bills = [bill_from_row(row) for row in get_all_bills(db_path)]
    return transactions, bills
