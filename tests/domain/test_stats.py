"""Tests for finandrive.domain.stats pure functions."""

from datetime import date

from finandrive.domain.ledger import Bill, Transaction, TransactionType
from finandrive.domain.models import Description, IsoDate, Money
from finandrive.domain.stats import (
    DayTotals,
    calculate_histogram_bar_length,
    calculate_profit_margin,
    compute_dashboard_stats,
    filter_by_period,
    group_by_day,
    summarize_period,
)


def income(txn_id: int, amount: int, day: str, km: float | None = None, hours: float | None = None) -> Transaction:
    return Transaction(
        id=txn_id,
        type=TransactionType.INCOME,
        amount=Money(amount),
        description=Description("Uber"),
        date=IsoDate(day),
        mileage=km,
        duration_hours=hours,
    )


def expense(txn_id: int, amount: int, day: str, km: float | None = None) -> Transaction:
    return Transaction(
        id=txn_id,
        type=TransactionType.EXPENSE,
        amount=Money(amount),
        description=Description("Fuel"),
        date=IsoDate(day),
        mileage=km,
    )


class TestComputeDashboardStats:
    """Tests for compute_dashboard_stats."""

    def test_totals_and_efficiency(self) -> None:
        """Should compute totals, margin and per km/hour from income only."""
        transactions = [
            income(1, 30000, "2025-01-06", km=100.0, hours=6.0),
            income(2, 10000, "2025-01-07", km=60.0, hours=2.0),
            expense(3, 10000, "2025-01-07", km=500.0),
        ]
        bills = [
            Bill(1, Description("Rent"), Money(20000), IsoDate("2025-01-10")),
            Bill(2, Description("Paid"), Money(99999), IsoDate("2025-01-08"), is_paid=True),
        ]

        stats = compute_dashboard_stats(transactions, bills, frozenset({1, 2, 3, 4, 5}), date(2025, 1, 7))

        assert stats.total_income == Money(40000)
        assert stats.total_expense == Money(10000)
        assert stats.net_profit == Money(30000)
        assert stats.profit_margin == 75.0
        assert stats.earnings_per_km == 250.0  # 40000 / 160 km
        assert stats.earnings_per_hour == 5000.0  # 40000 / 8 h
        assert stats.pending_bills_total == Money(20000)
        assert stats.earnings_today == Money(10000)
        assert stats.daily_goal == Money(0)

    def test_includes_daily_goal(self) -> None:
        """Should carry the daily goal and its explanation."""
        bills = [Bill(1, Description("Rent"), Money(20000), IsoDate("2025-01-07"))]

        stats = compute_dashboard_stats([], bills, frozenset({1, 2, 3, 4, 5}), date(2025, 1, 6))

        assert stats.daily_goal == Money(10000)
        assert stats.goal_explanation == "Focus: pay off Rent in 2 days."

    def test_no_data(self) -> None:
        """Should return zeros without dividing by zero."""
        stats = compute_dashboard_stats([], [], frozenset({1, 2, 3, 4, 5}), date(2025, 1, 6))

        assert stats.profit_margin == 0.0
        assert stats.earnings_per_km == 0.0
        assert stats.earnings_per_hour == 0.0
        assert stats.daily_goal == Money(0)


class TestProfitMargin:
    """Tests for calculate_profit_margin."""

    def test_negative_margin(self) -> None:
        """Should allow a negative margin when losing money."""
        assert calculate_profit_margin(Money(10000), Money(-5000)) == -50.0

    def test_no_income(self) -> None:
        """Should be zero without income."""
        assert calculate_profit_margin(Money(0), Money(-5000)) == 0.0


class TestFilterByPeriod:
    """Tests for filter_by_period."""

    def test_inclusive_bounds(self) -> None:
        """Should include both boundary days."""
        transactions = [
            income(1, 100, "2025-01-05"),
            income(2, 100, "2025-01-06"),
            income(3, 100, "2025-01-08"),
            income(4, 100, "2025-01-09"),
        ]

        selected = filter_by_period(transactions, date(2025, 1, 6), date(2025, 1, 8))

        assert [t.id for t in selected] == [2, 3]

    def test_unbounded_newest_first(self) -> None:
        """Should keep everything and sort descending when asked."""
        transactions = [income(1, 100, "2025-01-05"), income(2, 100, "2025-01-09")]

        selected = filter_by_period(transactions, None, None, newest_first=True)

        assert [t.id for t in selected] == [2, 1]


class TestSummarizePeriod:
    """Tests for summarize_period and group_by_day."""

    def test_summary(self) -> None:
        """Should total income, expenses and balance."""
        transactions = [
            income(1, 20000, "2025-01-06", km=80.0, hours=4.0),
            expense(2, 25000, "2025-01-06"),
        ]

        summary = summarize_period(transactions)

        assert summary.income == Money(20000)
        assert summary.expense == Money(25000)
        assert summary.balance == Money(-5000)
        assert summary.km == 80.0
        assert summary.earnings_per_km == 250.0
        assert summary.earnings_per_hour == 5000.0

    def test_group_by_day(self) -> None:
        """Should total each day separately, oldest first."""
        transactions = [
            income(1, 1000, "2025-01-07"),
            income(2, 2000, "2025-01-06"),
            expense(3, 500, "2025-01-06"),
            income(4, 300, "2025-01-07"),
        ]

        assert group_by_day(transactions) == [
            DayTotals(date=IsoDate("2025-01-06"), income=Money(2000), expense=Money(500)),
            DayTotals(date=IsoDate("2025-01-07"), income=Money(1300), expense=Money(0)),
        ]


class TestHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_scales_to_width(self) -> None:
        """Should scale relative to the maximum."""
        assert calculate_histogram_bar_length(Money(500), Money(1000), 30) == 15

    def test_zero_maximum(self) -> None:
        """Should return zero when the maximum is zero."""
        assert calculate_histogram_bar_length(Money(0), Money(0), 30) == 0
