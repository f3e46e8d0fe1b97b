"""Report command for income, expenses and efficiency over a period."""

import sqlite3
import sys
from datetime import date

from finandrive.commands.common import console, load_ledger, normalize_date, require_database
from finandrive.config import get_currency_symbol
from finandrive.dates import Period, format_date, parse_date, period_range
from finandrive.domain.ledger import format_money
from finandrive.domain.models import Money
from finandrive.domain.stats import (
    DayTotals,
    calculate_histogram_bar_length,
    filter_by_period,
    group_by_day,
    summarize_period,
)


def describe_period(period: Period, bounds: tuple[date, date] | None) -> str:
    """Human-readable label for a report period."""
    if bounds is None:
        return "All Time"
    since, until = bounds
    if period == "today":
        return f"Today ({format_date(since)})"
    if period == "week":
        return f"This week ({format_date(since)} to {format_date(until)})"
    if period == "month":
        return f"This month ({since.strftime('%B %Y')})"
    return f"{format_date(since)} to {format_date(until)}"


def render_day_line(day: DayTotals, max_amount: Money, bar_width: int, symbol: str, histogram: bool) -> None:
    """Render one day of the daily breakdown.

    Args:
        day: Totals for the day.
        max_amount: Largest daily income or expense, for histogram scaling.
        bar_width: Maximum bar width in characters.
        symbol: Currency symbol.
        histogram: Whether to show histogram bars.
    """
    income_display = format_money(day.income, symbol)
    expense_display = format_money(day.expense, symbol)

    if histogram:
        income_bar = "█" * calculate_histogram_bar_length(day.income, max_amount, bar_width)
        expense_bar = "█" * calculate_histogram_bar_length(day.expense, max_amount, bar_width)
        console.print(f"  {day.date}  [green]{income_display:>12} {income_bar}[/green]")
        console.print(f"  {'':10}  [red]{expense_display:>12} {expense_bar}[/red]")
    else:
        console.print(f"  {day.date}: [green]+{income_display}[/green] [red]-{expense_display}[/red]")


def report_command(
    period: Period = "week",
    start: str | None = None,
    end: str | None = None,
    histogram: bool = True,
) -> None:
    """Show income, expenses and efficiency for a period."""
    db_path = require_database()

    try:
        symbol = get_currency_symbol()
        start_date = parse_date(normalize_date(start)) if start else None
        end_date = parse_date(normalize_date(end)) if end else None
        bounds = period_range(period, date.today(), start_date, end_date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if period == "custom" and bounds is None:
        console.print("[yellow]Custom period needs both --start and --end[/yellow]")
        sys.exit(1)

    try:
        transactions, _ = load_ledger(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    since, until = bounds if bounds else (None, None)
    selected = filter_by_period(transactions, since, until)

    console.print(f"[bold cyan]{describe_period(period, bounds)}[/bold cyan]\n")

    if not selected:
        console.print("[dim]No transactions in this period[/dim]")
        return

    summary = summarize_period(selected)
    balance_color = "green" if summary.balance >= 0 else "red"

    console.print(f"  [bold]Income:[/bold]   [green]{format_money(summary.income, symbol)}[/green]")
    console.print(f"  [bold]Expenses:[/bold] [red]{format_money(summary.expense, symbol)}[/red]")
    console.print(
        f"  [bold]Net:[/bold]      [{balance_color}]{format_money(summary.balance, symbol)}[/{balance_color}]"
    )
    console.print(f"  [bold]Distance:[/bold] {summary.km:,.1f} km")
    console.print(f"  [bold]Hours:[/bold]    {summary.hours:,.1f} h")
    console.print(f"  [bold]Per km:[/bold]   {format_money(Money(round(summary.earnings_per_km)), symbol)}")
    console.print(f"  [bold]Per hour:[/bold] {format_money(Money(round(summary.earnings_per_hour)), symbol)}\n")

    days = group_by_day(selected)
    max_amount = Money(max(max(day.income, day.expense) for day in days))

    console.print("[bold]Daily breakdown:[/bold]\n")
    for day in days:
        render_day_line(day, max_amount, 30, symbol, histogram)
