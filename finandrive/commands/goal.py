"""Daily goal and dashboard commands."""

import sqlite3
import sys
from datetime import date

from rich.table import Table

from finandrive.commands.common import console, load_ledger, normalize_date, require_database
from finandrive.config import get_currency_symbol, get_work_days
from finandrive.dates import format_work_days, parse_date
from finandrive.domain.goal import compute_daily_goal
from finandrive.domain.ledger import format_money
from finandrive.domain.models import Money
from finandrive.domain.stats import compute_dashboard_stats


def resolve_today(today: str | None) -> date:
    """Get the reference date, from the --today option or the clock.

    Raises:
        ValueError: If the option cannot be parsed as a date.
    """
    if today:
        return parse_date(normalize_date(today))
    return date.today()


def goal_command(today: str | None = None) -> None:
    """Show how much to earn today to pay every bill on time."""
    db_path = require_database()

    try:
        reference = resolve_today(today)
        work_days = get_work_days()
        symbol = get_currency_symbol()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions, bills = load_ledger(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    goal = compute_daily_goal(transactions, bills, work_days, reference)

    color = "green" if goal.daily_goal == 0 else "bold cyan"
    console.print(f"[bold]Daily goal:[/bold] [{color}]{format_money(goal.daily_goal, symbol)}[/{color}]")
    console.print(f"  {goal.explanation}")

    if goal.binding_bill is not None:
        console.print(f"[dim]  Binding bill due {goal.binding_bill.due_date}[/dim]")
    console.print(f"[dim]  Work days: {format_work_days(work_days)}[/dim]")


def dashboard_command(today: str | None = None) -> None:
    """Show totals, efficiency metrics and the daily goal."""
    db_path = require_database()

    try:
        reference = resolve_today(today)
        work_days = get_work_days()
        symbol = get_currency_symbol()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions, bills = load_ledger(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    stats = compute_dashboard_stats(transactions, bills, work_days, reference)

    net_color = "green" if stats.net_profit >= 0 else "red"
    margin_color = "green" if stats.profit_margin > 30 else "yellow"

    table = Table(title=f"Dashboard - {reference.isoformat()}", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Daily goal", f"[cyan]{format_money(stats.daily_goal, symbol)}[/cyan]")
    table.add_row("Earned today", format_money(stats.earnings_today, symbol))
    table.add_row("Total income", f"[green]{format_money(stats.total_income, symbol)}[/green]")
    table.add_row("Total expenses", f"[red]{format_money(stats.total_expense, symbol)}[/red]")
    table.add_row("Net profit", f"[{net_color}]{format_money(stats.net_profit, symbol)}[/{net_color}]")
    table.add_row("Profit margin", f"[{margin_color}]{stats.profit_margin:.0f}%[/{margin_color}]")
    table.add_row("Per km", format_money(Money(round(stats.earnings_per_km)), symbol))
    table.add_row("Per hour", format_money(Money(round(stats.earnings_per_hour)), symbol))
    table.add_row("Pending bills", format_money(stats.pending_bills_total, symbol))

    console.print(table)
    console.print(f"\n{stats.goal_explanation}")
