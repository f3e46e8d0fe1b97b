"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from finandrive.store.queries import (
    add_shift_km,
    close_shift,
    delete_bill,
    delete_transaction,
    discard_shift,
    get_all_bills,
    get_all_transactions,
    get_bill,
    get_open_shift,
    get_shift_entries,
    get_transaction,
    insert_bill,
    insert_shift_entry,
    insert_transaction,
    open_shift,
    set_bill_paid,
    set_shift_pause,
    update_bill,
)
from finandrive.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Transactions and bills
    "delete_bill",
    "delete_transaction",
    "get_all_bills",
    "get_all_transactions",
    "get_bill",
    "get_transaction",
    "insert_bill",
    "insert_transaction",
    "set_bill_paid",
    "update_bill",
    # Shift
    "add_shift_km",
    "close_shift",
    "discard_shift",
    "get_open_shift",
    "get_shift_entries",
    "insert_shift_entry",
    "open_shift",
    "set_shift_pause",
]
