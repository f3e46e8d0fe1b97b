"""Pure functions for dashboard statistics and period reports.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in centavos (Money type).
"""

from collections.abc import Iterable, Sequence, Set
from dataclasses import dataclass
from datetime import date

from finandrive.dates import format_date
from finandrive.domain.goal import compute_daily_goal
from finandrive.domain.ledger import (
    Bill,
    Transaction,
    TransactionType,
    pending_bills_total,
    total_expense,
    total_income,
)
from finandrive.domain.models import IsoDate, Money


@dataclass(frozen=True)
class DashboardStats:
    """Immutable dashboard summary."""

    total_income: Money
    total_expense: Money
    net_profit: Money
    profit_margin: float
    earnings_per_km: float
    earnings_per_hour: float
    pending_bills_total: Money
    earnings_today: Money
    daily_goal: Money
    goal_explanation: str


@dataclass(frozen=True)
class PeriodSummary:
    """Immutable summary of transactions in a period."""

    income: Money
    expense: Money
    balance: Money
    km: float
    hours: float
    earnings_per_km: float
    earnings_per_hour: float


@dataclass(frozen=True)
class DayTotals:
    """Immutable income and expense totals for a single day."""

    date: IsoDate
    income: Money
    expense: Money


def calculate_profit_margin(income: Money, net: Money) -> float:
    """Calculate net profit as a percentage of income.

    Returns:
        Margin percentage, 0.0 when there is no income.
    """
    if income <= 0:
        return 0.0
    return (net / income) * 100


def calculate_rate(amount: Money, quantity: float) -> float:
    """Calculate amount per unit (per km, per hour).

    Returns:
        Centavos per unit, 0.0 when quantity is zero.
    """
    if quantity <= 0:
        return 0.0
    return amount / quantity


def income_efficiency(transactions: Sequence[Transaction]) -> tuple[float, float]:
    """Total mileage and hours recorded on income transactions.

    Returns:
        Tuple of (km, hours).
    """
    incomes = [t for t in transactions if t.type == TransactionType.INCOME]
    km = sum(t.mileage or 0.0 for t in incomes)
    hours = sum(t.duration_hours or 0.0 for t in incomes)
    return km, hours


def compute_dashboard_stats(
    transactions: Sequence[Transaction],
    bills: Sequence[Bill],
    work_days: Set[int],
    today: date,
) -> DashboardStats:
    """Compute every dashboard figure from the current ledger snapshot.

    Args:
        transactions: All recorded transactions.
        bills: All bills.
        work_days: Weekday indices (0 = Sunday) the user works on.
        today: Reference calendar date.

    Returns:
        DashboardStats including the daily goal.
    """
    income = total_income(transactions)
    expense = total_expense(transactions)
    net = Money(income - expense)
    km, hours = income_efficiency(transactions)

    today_str = format_date(today)
    earnings_today = Money(
        sum(t.amount for t in transactions if t.type == TransactionType.INCOME and t.date == today_str)
    )

    goal = compute_daily_goal(transactions, bills, work_days, today)

    return DashboardStats(
        total_income=income,
        total_expense=expense,
        net_profit=net,
        profit_margin=calculate_profit_margin(income, net),
        earnings_per_km=calculate_rate(income, km),
        earnings_per_hour=calculate_rate(income, hours),
        pending_bills_total=pending_bills_total(bills),
        earnings_today=earnings_today,
        daily_goal=goal.daily_goal,
        goal_explanation=goal.explanation,
    )


def filter_by_period(
    transactions: Iterable[Transaction],
    since: date | None,
    until: date | None,
    newest_first: bool = False,
) -> list[Transaction]:
    """Keep transactions dated within [since, until].

    Args:
        transactions: Transactions to filter.
        since: First day (inclusive), or None for no lower bound.
        until: Last day (inclusive), or None for no upper bound.
        newest_first: Sort descending by date instead of ascending.

    Returns:
        Matching transactions sorted by date.
    """
    since_str = format_date(since) if since else None
    until_str = format_date(until) if until else None

    selected = [
        t
        for t in transactions
        if (since_str is None or t.date >= since_str) and (until_str is None or t.date <= until_str)
    ]
    return sorted(selected, key=lambda t: t.date, reverse=newest_first)


def summarize_period(transactions: Sequence[Transaction]) -> PeriodSummary:
    """Summarize income, expenses and efficiency for a set of transactions."""
    income = total_income(transactions)
    expense = total_expense(transactions)
    km, hours = income_efficiency(transactions)

    return PeriodSummary(
        income=income,
        expense=expense,
        balance=Money(income - expense),
        km=km,
        hours=hours,
        earnings_per_km=calculate_rate(income, km),
        earnings_per_hour=calculate_rate(income, hours),
    )


def group_by_day(transactions: Iterable[Transaction]) -> list[DayTotals]:
    """Total income and expenses per day.

    Returns:
        One DayTotals per day with transactions, oldest first.
    """
    totals: dict[IsoDate, tuple[int, int]] = {}
    for txn in transactions:
        income, expense = totals.get(txn.date, (0, 0))
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
        totals[txn.date] = (income, expense)

    return [
        DayTotals(date=day, income=Money(income), expense=Money(expense))
        for day, (income, expense) in sorted(totals.items())
    ]


def calculate_histogram_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
