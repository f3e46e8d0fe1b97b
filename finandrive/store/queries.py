"""Database query functions."""

import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from finandrive.domain.models import CategoryName, Description, IsoDate, Money
from finandrive.store.schema import get_db_path

TRANSACTION_COLUMNS = "id, type, amount, description, date, category, mileage, duration_hours"
BILL_COLUMNS = "id, description, amount, due_date, is_paid, category"


@contextmanager
def _connect(db_path: Path | None = None) -> Iterator[sqlite3.Connection]:
    """Open a database connection with row factory, closing it on exit.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Yields:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def insert_transaction(
    txn_type: str,
    amount: Money,
    description: Description,
    date: IsoDate,
    db_path: Path | None = None,
    category: CategoryName | None = None,
    mileage: float | None = None,
    duration_hours: float | None = None,
) -> int:
    """Insert a transaction into the database.

    Args:
        txn_type: "INCOME" or "EXPENSE".
        amount: Transaction amount in centavos (non-negative).
        description: Transaction description.
        date: Transaction date (YYYY-MM-DD).
        db_path: Path to the database file. If None, uses default location.
        category: Optional category name.
        mileage: Optional kilometres driven.
        duration_hours: Optional hours worked.

    Returns:
        ID of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (type, amount, description, date, category, mileage, duration_hours) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (txn_type, amount, description, date, category, mileage, duration_hours),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_all_transactions(db_path: Path | None = None, limit: int | None = None) -> list[dict[str, Any]]:
    """Get all transactions.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        List of transaction dictionaries ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {TRANSACTION_COLUMNS} FROM transactions ORDER BY date DESC, id DESC"
        params: list[Any] = []

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        rows = cursor.fetchall()
        return [dict(row) for row in rows]


def get_transaction(txn_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a single transaction by ID.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Transaction dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = ?", (txn_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def delete_transaction(txn_id: int, db_path: Path | None = None) -> bool:
    """Delete a transaction.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a transaction was deleted, False if the ID was not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def insert_bill(
    description: Description,
    amount: Money,
    due_date: IsoDate,
    db_path: Path | None = None,
    category: CategoryName | None = None,
) -> int:
    """Insert an unpaid bill into the database.

    Args:
        description: Bill description.
        amount: Bill amount in centavos (non-negative).
        due_date: Due date (YYYY-MM-DD).
        db_path: Path to the database file. If None, uses default location.
        category: Optional category name.

    Returns:
        ID of the new bill.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO bills (description, amount, due_date, is_paid, category) VALUES (?, ?, ?, 0, ?)",
                (description, amount, due_date, category),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_all_bills(db_path: Path | None = None, unpaid_only: bool = False) -> list[dict[str, Any]]:
    """Get all bills.

    Args:
        db_path: Path to the database file. If None, uses default location.
        unpaid_only: If True, only return bills not yet paid.

    Returns:
        List of bill dictionaries ordered by due date ascending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {BILL_COLUMNS} FROM bills"
        if unpaid_only:
            query += " WHERE is_paid = 0"
        query += " ORDER BY due_date ASC, id ASC"

        cursor.execute(query)
        rows = cursor.fetchall()
        return [dict(row) for row in rows]


def get_bill(bill_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a single bill by ID.

    Args:
        bill_id: Bill ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Bill dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {BILL_COLUMNS} FROM bills WHERE id = ?", (bill_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def update_bill(
    bill_id: int,
    db_path: Path | None = None,
    description: Description | None = None,
    amount: Money | None = None,
    due_date: IsoDate | None = None,
    category: CategoryName | None = None,
) -> bool:
    """Update the editable fields of a bill.

    Fields left as None keep their current value.

    Args:
        bill_id: Bill ID.
        db_path: Path to the database file. If None, uses default location.
        description: New description.
        amount: New amount in centavos.
        due_date: New due date (YYYY-MM-DD).
        category: New category name.

    Returns:
        True if the bill exists, False otherwise.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    changes: dict[str, Any] = {
        "description": description,
        "amount": amount,
        "due_date": due_date,
        "category": category,
    }
    changes = {column: value for column, value in changes.items() if value is not None}

    if not changes:
        return get_bill(bill_id, db_path) is not None

    assignments = ", ".join(f"{column} = ?" for column in changes)

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                f"UPDATE bills SET {assignments} WHERE id = ?",
                (*changes.values(), bill_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def set_bill_paid(bill_id: int, is_paid: bool, db_path: Path | None = None) -> bool:
    """Mark a bill as paid or unpaid.

    Args:
        bill_id: Bill ID.
        is_paid: New paid status.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if the bill exists, False otherwise.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE bills SET is_paid = ? WHERE id = ?", (int(is_paid), bill_id))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_bill(bill_id: int, db_path: Path | None = None) -> bool:
    """Delete a bill.

    Args:
        bill_id: Bill ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a bill was deleted, False if the ID was not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM bills WHERE id = ?", (bill_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def open_shift(started_at: str, db_path: Path | None = None) -> None:
    """Start a new shift.

    Args:
        started_at: Start timestamp (ISO 8601, seconds precision).
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.IntegrityError: If a shift is already open.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("INSERT INTO shift (id, started_at) VALUES (1, ?)", (started_at,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def get_open_shift(db_path: Path | None = None) -> dict[str, Any] | None:
    """Get the open shift, or None when no shift is running."""
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT started_at, paused_at, paused_seconds, km FROM shift WHERE id = 1")
        row = cursor.fetchone()
        return dict(row) if row else None


def set_shift_pause(paused_at: str | None, paused_seconds: int, db_path: Path | None = None) -> bool:
    """Pause or resume the open shift.

    Args:
        paused_at: Pause timestamp, or None to resume.
        paused_seconds: Total seconds spent paused before the current pause.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a shift is open, False otherwise.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE shift SET paused_at = ?, paused_seconds = ? WHERE id = 1",
                (paused_at, paused_seconds),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def add_shift_km(km: float, db_path: Path | None = None) -> bool:
    """Add kilometres to the open shift.

    Returns:
        True if a shift is open, False otherwise.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE shift SET km = km + ? WHERE id = 1", (km,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def insert_shift_entry(
    kind: str,
    amount: Money,
    db_path: Path | None = None,
    description: Description | None = None,
    category: CategoryName | None = None,
) -> int:
    """Record platform earnings or an expense on the open shift.

    Args:
        kind: Platform name ("uber", "99", "indrive", "private") or "expense".
        amount: Amount in centavos (non-negative).
        db_path: Path to the database file. If None, uses default location.
        description: Expense description.
        category: Expense category.

    Returns:
        ID of the new entry.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO shift_entries (kind, amount, description, category) VALUES (?, ?, ?, ?)",
                (kind, amount, description, category),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_shift_entries(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get the entries of the open shift in the order they were added."""
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, kind, amount, description, category FROM shift_entries ORDER BY id ASC")
        return [dict(row) for row in cursor.fetchall()]


def close_shift(
    date: IsoDate,
    income: Money,
    description: Description,
    mileage: float,
    duration_hours: float,
    expenses: Sequence[tuple[Money, Description, CategoryName | None]],
    db_path: Path | None = None,
) -> list[int]:
    """Save the open shift as transactions and clear it.

    The income transaction, the expense transactions and the removal of the
    shift are committed together.

    Args:
        date: Transaction date (YYYY-MM-DD).
        income: Shift earnings in centavos.
        description: Description of the income transaction.
        mileage: Kilometres driven during the shift.
        duration_hours: Hours worked.
        expenses: (amount, description, category) of each expense transaction.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        IDs of the new transactions, income first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (type, amount, description, date, mileage, duration_hours) "
                "VALUES ('INCOME', ?, ?, ?, ?, ?)",
                (income, description, date, mileage, duration_hours),
            )
            txn_ids = [int(cursor.lastrowid or 0)]

            for amount, expense_description, category in expenses:
                cursor.execute(
                    "INSERT INTO transactions (type, amount, description, date, category) "
                    "VALUES ('EXPENSE', ?, ?, ?, ?)",
                    (amount, expense_description, date, category),
                )
                txn_ids.append(int(cursor.lastrowid or 0))

            cursor.execute("DELETE FROM shift_entries")
            cursor.execute("DELETE FROM shift")
            conn.commit()
            return txn_ids
        except sqlite3.Error:
            conn.rollback()
            raise


def discard_shift(db_path: Path | None = None) -> bool:
    """Drop the open shift without saving anything.

    Returns:
        True if a shift was open, False otherwise.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM shift")
            found = cursor.rowcount > 0
            cursor.execute("DELETE FROM shift_entries")
            conn.commit()
            return found
        except sqlite3.Error:
            conn.rollback()
            raise
