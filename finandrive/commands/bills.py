"""Bill commands (add, list, pay, edit, delete)."""

import sqlite3
import sys
from datetime import date

from rich.table import Table

from finandrive.commands.common import console, normalize_date, require_database
from finandrive.config import get_currency_symbol
from finandrive.dates import format_date
from finandrive.domain.ledger import bill_from_row, format_money, parse_money, pending_bills_total
from finandrive.domain.models import CategoryName, Description
from finandrive.store.queries import (
    delete_bill,
    get_all_bills,
    get_bill,
    insert_bill,
    set_bill_paid,
    update_bill,
)


def bill_add_command(
    description: str,
    amount: float,
    due: str,
    category: str | None = None,
) -> None:
    """Add an unpaid bill.

    Args:
        description: Bill description.
        amount: Bill amount in reais (non-negative).
        due: Due date (YYYY-MM-DD, DD/MM/YYYY, ...).
        category: Optional category name.
    """
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        amount_minor = parse_money(amount)
        due_date = normalize_date(due)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        bill_id = insert_bill(
            Description(description),
            amount_minor,
            due_date,
            db_path,
            category=CategoryName(category) if category else None,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Bill added (ID: {bill_id}):")
    console.print(f"  Description: {description}")
    console.print(f"  Amount: {format_money(amount_minor, symbol)}")
    console.print(f"  Due: {due_date}")


def bill_list_command(all: bool = False) -> None:
    """List bills, unpaid only unless all is set."""
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        bills = [bill_from_row(row) for row in get_all_bills(db_path, unpaid_only=not all)]
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not bills:
        console.print("[green]No pending bills[/green]" if not all else "[yellow]No bills found[/yellow]")
        return

    today = format_date(date.today())

    table = Table(title="Bills" if all else "Pending bills")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Due", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Status", justify="center")

    for bill in bills:
        if bill.is_paid:
            status = "[green]✓ paid[/green]"
        elif bill.due_date < today:
            status = "[red]overdue[/red]"
        elif bill.due_date == today:
            status = "[yellow]due today[/yellow]"
        else:
            status = "○"

        table.add_row(
            str(bill.id),
            bill.due_date,
            bill.description,
            bill.category or "[dim]-[/dim]",
            format_money(bill.amount, symbol),
            status,
        )

    console.print(table)
    console.print(f"\n[bold]Pending total:[/bold] {format_money(pending_bills_total(bills), symbol)}")


def bill_pay_command(bill_id: int, paid: bool = True) -> None:
    """Mark a bill as paid (or unpaid again)."""
    db_path = require_database()

    try:
        found = set_bill_paid(bill_id, paid, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not found:
        console.print(f"[red]Bill {bill_id} not found[/red]")
        sys.exit(1)

    status = "paid" if paid else "unpaid"
    console.print(f"[green]✓[/green] Bill {bill_id} marked as {status}")


def bill_edit_command(
    bill_id: int,
    description: str | None = None,
    amount: float | None = None,
    due: str | None = None,
    category: str | None = None,
) -> None:
    """Edit the description, amount, due date or category of a bill."""
    db_path = require_database()

    try:
        amount_minor = parse_money(amount) if amount is not None else None
        due_date = normalize_date(due) if due else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        found = update_bill(
            bill_id,
            db_path,
            description=Description(description) if description else None,
            amount=amount_minor,
            due_date=due_date,
            category=CategoryName(category) if category else None,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not found:
        console.print(f"[red]Bill {bill_id} not found[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Bill {bill_id} updated")


def bill_delete_command(bill_id: int) -> None:
    """Delete a bill by ID."""
    db_path = require_database()

    try:
        bill = get_bill(bill_id, db_path)
        if not bill:
            console.print(f"[red]Bill {bill_id} not found[/red]")
            sys.exit(1)

        delete_bill(bill_id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted bill {bill_id}: {bill['description']}")
