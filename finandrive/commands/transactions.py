"""Transaction commands (add, delete, history)."""

import math
import sqlite3
import sys
from datetime import date

from rich.table import Table

from finandrive.commands.common import console, load_ledger, normalize_date, require_database
from finandrive.config import get_currency_symbol
from finandrive.dates import Period, format_date, parse_date, period_range
from finandrive.domain.ledger import TransactionType, format_money, parse_money
from finandrive.domain.models import CategoryName, Description
from finandrive.domain.stats import filter_by_period, summarize_period
from finandrive.store.queries import delete_transaction, get_transaction, insert_transaction


def add_command(
    kind: TransactionType,
    amount: float,
    description: str,
    date_str: str | None = None,
    category: str | None = None,
    km: float | None = None,
    hours: float | None = None,
) -> None:
    """Record an income or expense.

    Args:
        kind: INCOME or EXPENSE.
        amount: Amount in reais (non-negative).
        description: Transaction description.
        date_str: Transaction date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
        category: Optional category name.
        km: Optional kilometres driven (income only).
        hours: Optional hours worked (income only).
    """
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        amount_minor = parse_money(amount)
        txn_date = normalize_date(date_str) if date_str else format_date(date.today())

        if km is not None and (not math.isfinite(km) or km < 0):
            raise ValueError("Mileage must be a non-negative number")
        if hours is not None and (not math.isfinite(hours) or hours < 0):
            raise ValueError("Hours must be a non-negative number")
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted date formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    try:
        txn_id = insert_transaction(
            kind.value,
            amount_minor,
            Description(description),
            txn_date,
            db_path,
            category=CategoryName(category) if category else None,
            mileage=km,
            duration_hours=hours,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    label = "Income" if kind == TransactionType.INCOME else "Expense"
    console.print(f"[green]✓[/green] {label} added (ID: {txn_id}):")
    console.print(f"  Date: {txn_date}")
    console.print(f"  Description: {description}")
    console.print(f"  Amount: {format_money(amount_minor, symbol)}")
    if category:
        console.print(f"  Category: {category}")
    if km is not None:
        console.print(f"  Mileage: {km:g} km")
    if hours is not None:
        console.print(f"  Hours: {hours:g} h")


def delete_command(txn_id: int) -> None:
    """Delete a transaction by ID."""
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        txn = get_transaction(txn_id, db_path)
        if not txn:
            console.print(f"[red]Transaction {txn_id} not found[/red]")
            sys.exit(1)

        delete_transaction(txn_id, db_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted transaction {txn_id}:")
    console.print(f"  {txn['date']}  {txn['description']}  {format_money(txn['amount'], symbol)}")


def history_command(
    period: Period = "all",
    start: str | None = None,
    end: str | None = None,
) -> None:
    """List transactions for a period with an income/expense summary."""
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        start_date = parse_date(normalize_date(start)) if start else None
        end_date = parse_date(normalize_date(end)) if end else None
        bounds = period_range(period, date.today(), start_date, end_date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions, _ = load_ledger(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    since, until = bounds if bounds else (None, None)
    selected = filter_by_period(transactions, since, until, newest_first=True)

    if not selected:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Transactions ({len(selected)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in selected:
        if txn.type == TransactionType.INCOME:
            amount_display = f"[green]+{format_money(txn.amount, symbol)}[/green]"
        else:
            amount_display = f"[red]-{format_money(txn.amount, symbol)}[/red]"

        table.add_row(str(txn.id), txn.date, txn.description, txn.category or "[dim]-[/dim]", amount_display)

    console.print(table)

    summary = summarize_period(selected)
    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(f"\n[bold]Income:[/bold] [green]{format_money(summary.income, symbol)}[/green]")
    console.print(f"[bold]Expenses:[/bold] [red]{format_money(summary.expense, symbol)}[/red]")
    console.print(
        f"[bold]Balance:[/bold] [{balance_color}]{format_money(summary.balance, symbol)}[/{balance_color}]"
    )
