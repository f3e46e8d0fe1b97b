"""Shift commands (start, pause, resume, add, status, stop, discard)."""

import math
import sqlite3
import sys
from datetime import date, datetime
from pathlib import Path

from rich.table import Table

from finandrive.commands.common import console, normalize_date, require_database
from finandrive.config import get_currency_symbol
from finandrive.dates import format_date
from finandrive.domain.ledger import format_money, parse_money
from finandrive.domain.models import CategoryName, Description, Money
from finandrive.domain.shift import (
    EXPENSE_KIND,
    KM_KIND,
    SHIFT_INCOME_DESCRIPTION,
    Shift,
    elapsed_seconds,
    expense_description,
    format_elapsed,
    paused_seconds_after_resume,
    platform_totals,
    settle_shift,
    shift_expense,
    shift_from_rows,
    shift_income,
)
from finandrive.store.queries import (
    add_shift_km,
    close_shift,
    discard_shift,
    get_open_shift,
    get_shift_entries,
    insert_shift_entry,
    open_shift,
    set_shift_pause,
)


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


def _load_shift(db_path: Path) -> Shift | None:
    row = get_open_shift(db_path)
    if row is None:
        return None
    return shift_from_rows(row, get_shift_entries(db_path))


def _require_shift(db_path: Path) -> Shift:
    """Load the open shift, exiting with a hint when none is running."""
    try:
        shift = _load_shift(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if shift is None:
        console.print("[red]No shift running. Start one with 'finandrive shift start'.[/red]")
        sys.exit(1)
    return shift


def shift_start_command() -> None:
    """Start a shift."""
    db_path = require_database()

    try:
        if get_open_shift(db_path) is not None:
            console.print("[red]A shift is already running. Stop or discard it first.[/red]")
            sys.exit(1)

        started_at = _now()
        open_shift(started_at.isoformat(), db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Shift started at {started_at:%H:%M}")


def shift_pause_command() -> None:
    """Pause the running shift."""
    db_path = require_database()
    shift = _require_shift(db_path)

    if shift.is_paused:
        console.print("[yellow]Shift is already paused[/yellow]")
        return

    now = _now()
    try:
        set_shift_pause(now.isoformat(), shift.paused_seconds, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Shift paused at {format_elapsed(elapsed_seconds(shift, now))}")


def shift_resume_command() -> None:
    """Resume a paused shift."""
    db_path = require_database()
    shift = _require_shift(db_path)

    if not shift.is_paused:
        console.print("[yellow]Shift is not paused[/yellow]")
        return

    try:
        set_shift_pause(None, paused_seconds_after_resume(shift, _now()), db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Shift resumed")


def shift_add_command(
    kind: str,
    amount: float,
    description: str | None = None,
    category: str | None = None,
) -> None:
    """Add platform earnings, kilometres or an expense to the running shift.

    Args:
        kind: "uber", "99", "indrive", "private", "km" or "expense".
        amount: Amount in reais, or kilometres for "km".
        description: Expense description.
        category: Expense category.
    """
    db_path = require_database()
    shift = _require_shift(db_path)

    if shift.is_paused:
        console.print("[red]Shift is paused. Resume it before adding entries.[/red]")
        sys.exit(1)

    try:
        symbol = get_currency_symbol()

        if kind == KM_KIND:
            if not math.isfinite(amount) or amount < 0:
                raise ValueError("Kilometres must be a non-negative number")
            add_shift_km(amount, db_path)
            console.print(f"[green]✓[/green] Added {amount:g} km")
            return

        amount_minor = parse_money(amount)
        if kind == EXPENSE_KIND:
            label = description or "Expense"
            insert_shift_entry(
                kind,
                amount_minor,
                db_path,
                description=Description(label),
                category=CategoryName(category) if category else None,
            )
            console.print(f"[green]✓[/green] Expense added: {label} {format_money(amount_minor, symbol)}")
        else:
            insert_shift_entry(kind, amount_minor, db_path)
            console.print(f"[green]✓[/green] {kind} earnings added: {format_money(amount_minor, symbol)}")
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def shift_status_command() -> None:
    """Show the running shift."""
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        shift = _load_shift(db_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if shift is None:
        console.print("[yellow]No shift running[/yellow]")
        return

    state = "[yellow]paused[/yellow]" if shift.is_paused else "[green]running[/green]"
    console.print(f"[bold]Shift[/bold] {state}, started {shift.started_at:%Y-%m-%d %H:%M}")
    console.print(f"  Time worked: {format_elapsed(elapsed_seconds(shift, _now()))}")
    console.print(f"  Distance: {shift.km:g} km")

    table = Table(title="Earnings")
    table.add_column("Platform", style="cyan")
    table.add_column("Amount", justify="right")
    for platform, total in platform_totals(shift.entries).items():
        table.add_row(platform, format_money(total, symbol))
    console.print(table)

    income = shift_income(shift.entries)
    expense = shift_expense(shift.entries)
    net = Money(income - expense)
    net_color = "green" if net >= 0 else "red"
    console.print(f"[bold]Earnings:[/bold] [green]{format_money(income, symbol)}[/green]")
    console.print(f"[bold]Expenses:[/bold] [red]{format_money(expense, symbol)}[/red]")
    console.print(f"[bold]Net:[/bold] [{net_color}]{format_money(net, symbol)}[/{net_color}]")


def shift_stop_command(
    amount: float | None = None,
    km: float | None = None,
    hours: float | None = None,
    date_str: str | None = None,
) -> None:
    """End the running shift and save it as transactions.

    Args:
        amount: Earnings to save instead of the tracked platform total.
        km: Kilometres to save instead of the tracked ones.
        hours: Hours to save instead of the tracked working time.
        date_str: Transaction date. Defaults to today.
    """
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        amount_minor = parse_money(amount) if amount is not None else None
        txn_date = normalize_date(date_str) if date_str else format_date(date.today())

        for label, value in (("Kilometres", km), ("Hours", hours)):
            if value is not None and (not math.isfinite(value) or value < 0):
                raise ValueError(f"{label} must be a non-negative number")
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    shift = _require_shift(db_path)
    settlement = settle_shift(shift, _now(), amount=amount_minor, mileage=km, duration_hours=hours)

    try:
        txn_ids = close_shift(
            txn_date,
            settlement.income,
            SHIFT_INCOME_DESCRIPTION,
            settlement.mileage,
            settlement.duration_hours,
            [(e.amount, expense_description(e), e.category) for e in settlement.expenses],
            db_path,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Shift saved (income ID: {txn_ids[0]}):")
    console.print(f"  Date: {txn_date}")
    console.print(f"  Earnings: {format_money(settlement.income, symbol)}")
    console.print(f"  Mileage: {settlement.mileage:g} km")
    console.print(f"  Hours: {settlement.duration_hours:g} h")
    if settlement.expenses:
        total = Money(sum(e.amount for e in settlement.expenses))
        console.print(f"  Expenses: {len(settlement.expenses)} ({format_money(total, symbol)})")


def shift_discard_command() -> None:
    """Drop the running shift without saving it."""
    db_path = require_database()

    try:
        found = discard_shift(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not found:
        console.print("[red]No shift running[/red]")
        sys.exit(1)

    console.print("[green]✓[/green] Shift discarded")
