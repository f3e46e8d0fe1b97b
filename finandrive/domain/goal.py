"""Pure functions for the daily earnings goal.

The daily goal is the smallest amount that, earned on every remaining work
day, keeps every unpaid bill payable by its due date. Bills are treated as
cumulative milestones: by a bill's due date, that bill and every bill due
before it must be covered by starting cash plus what was earned since today.
The binding milestone is the one demanding the steepest daily rate, which is
not necessarily the nearest bill.

All monetary amounts are in centavos (Money type).
"""

from collections.abc import Iterable, Set
from dataclasses import dataclass
from datetime import date
from fractions import Fraction
from math import ceil

from finandrive.dates import count_working_days, parse_date
from finandrive.domain.ledger import Bill, Transaction, net_profit, unpaid_bills
from finandrive.domain.models import Money

NO_PENDING_BILLS = "Congratulations! No pending bills."
CASH_COVERS_BILLS = "Congratulations! Your cash covers all upcoming bills."
COVER_ALL_BILLS = "Calculated to cover all upcoming bills."


@dataclass(frozen=True)
class DailyGoal:
    """Immutable daily goal result."""

    daily_goal: Money
    explanation: str
    binding_bill: Bill | None = None
    working_days: int | None = None


def starting_cash(transactions: Iterable[Transaction]) -> Money:
    """Calculate cash available to offset upcoming bills.

    A negative balance contributes nothing.

    Args:
        transactions: All recorded transactions.

    Returns:
        Net profit clamped to zero, in centavos.
    """
    return Money(max(0, net_profit(transactions)))


def working_days_until(due: date, today: date, work_days: Set[int]) -> int:
    """Count the work days left to pay a bill, never less than one.

    Args:
        due: Bill due date.
        today: Reference date.
        work_days: Weekday indices (0 = Sunday) the user works on.

    Returns:
        Work days in [today, due]. Overdue bills and ranges with no work
        day count as 1.
    """
    if due < today:
        return 1
    return max(1, count_working_days(today, due, work_days))


def explain_binding_bill(bill: Bill, working_days: int) -> str:
    """Describe the bill that sets the daily goal."""
    day_label = "day" if working_days == 1 else "days"
    return f"Focus: pay off {bill.description} in {working_days} {day_label}."


def compute_daily_goal(
    transactions: Iterable[Transaction],
    bills: Iterable[Bill],
    work_days: Set[int],
    today: date,
) -> DailyGoal:
    """Compute the minimum amount to earn today to pay every bill on time.

    Args:
        transactions: All recorded transactions (for the starting cash).
        bills: All bills; paid ones are ignored.
        work_days: Weekday indices (0 = Sunday) the user works on.
        today: Reference calendar date.

    Returns:
        DailyGoal with the goal in centavos (rounded up to a whole centavo)
        and an explanation naming the binding bill.
    """
    pending = unpaid_bills(bills)
    if not pending:
        return DailyGoal(daily_goal=Money(0), explanation=NO_PENDING_BILLS)

    cash = starting_cash(transactions)
    cumulative_total = 0
    max_rate = Fraction(0)
    explanation = ""
    binding_bill: Bill | None = None
    binding_days: int | None = None

    for bill in pending:
        cumulative_total += bill.amount
        needed = cumulative_total - cash
        if needed <= 0:
            continue

        days = working_days_until(parse_date(bill.due_date), today, work_days)
        rate = Fraction(needed, days)

        if rate > max_rate:
            max_rate = rate
            binding_bill = bill
            binding_days = days
            explanation = explain_binding_bill(bill, days)

    daily_goal = Money(ceil(max_rate))

    if daily_goal > 0 and not explanation:
        explanation = COVER_ALL_BILLS
    elif daily_goal == 0:
        explanation = CASH_COVERS_BILLS

    return DailyGoal(
        daily_goal=daily_goal,
        explanation=explanation,
        binding_bill=binding_bill,
        working_days=binding_days,
    )
