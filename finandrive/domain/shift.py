"""Pure functions for a driving shift in progress.

A shift collects earnings per platform, kilometres and itemised expenses
while the driver works. Closing it turns those into one income transaction
carrying mileage and hours, plus one expense transaction per expense.

All monetary amounts are in centavos (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from finandrive.domain.models import CategoryName, Description, Money

PLATFORMS = ("uber", "99", "indrive", "private")
EXPENSE_KIND = "expense"
KM_KIND = "km"
ENTRY_KINDS = (*PLATFORMS, KM_KIND, EXPENSE_KIND)

SHIFT_INCOME_DESCRIPTION = Description("Shift earnings")


@dataclass(frozen=True)
class ShiftEntry:
    """Earnings from one platform, or one expense."""

    id: int
    kind: str
    amount: Money
    description: Description | None = None
    category: CategoryName | None = None


@dataclass(frozen=True)
class Shift:
    """Immutable snapshot of the open shift."""

    started_at: datetime
    paused_at: datetime | None = None
    paused_seconds: int = 0
    km: float = 0.0
    entries: tuple[ShiftEntry, ...] = ()

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None


@dataclass(frozen=True)
class ShiftSettlement:
    """What gets saved when a shift ends."""

    income: Money
    mileage: float
    duration_hours: float
    expenses: tuple[ShiftEntry, ...]


def shift_from_rows(row: dict[str, Any], entry_rows: Iterable[dict[str, Any]]) -> Shift:
    """Build a Shift from the store rows."""
    entries = tuple(
        ShiftEntry(
            id=entry["id"],
            kind=entry["kind"],
            amount=Money(entry["amount"]),
            description=Description(entry["description"]) if entry.get("description") else None,
            category=CategoryName(entry["category"]) if entry.get("category") else None,
        )
        for entry in entry_rows
    )
    return Shift(
        started_at=datetime.fromisoformat(row["started_at"]),
        paused_at=datetime.fromisoformat(row["paused_at"]) if row.get("paused_at") else None,
        paused_seconds=row["paused_seconds"],
        km=row["km"],
        entries=entries,
    )


def elapsed_seconds(shift: Shift, now: datetime) -> int:
    """Calculate the working time of a shift, excluding pauses.

    A paused shift stops counting at the moment it was paused.

    Args:
        shift: Shift snapshot.
        now: Current time.

    Returns:
        Whole seconds worked, never negative.
    """
    end = shift.paused_at if shift.paused_at is not None else now
    worked = int((end - shift.started_at).total_seconds()) - shift.paused_seconds
    return max(0, worked)


def paused_seconds_after_resume(shift: Shift, now: datetime) -> int:
    """Total paused seconds once a paused shift resumes at now."""
    if shift.paused_at is None:
        return shift.paused_seconds
    return shift.paused_seconds + max(0, int((now - shift.paused_at).total_seconds()))


def platform_totals(entries: Iterable[ShiftEntry]) -> dict[str, Money]:
    """Sum earnings per platform, listing every platform even when zero."""
    totals = {platform: 0 for platform in PLATFORMS}
    for entry in entries:
        if entry.kind in totals:
            totals[entry.kind] += entry.amount
    return {platform: Money(total) for platform, total in totals.items()}


def shift_income(entries: Iterable[ShiftEntry]) -> Money:
    """Sum earnings across all platforms."""
    return Money(sum(e.amount for e in entries if e.kind in PLATFORMS))


def shift_expense(entries: Iterable[ShiftEntry]) -> Money:
    """Sum the expenses of a shift."""
    return Money(sum(e.amount for e in entries if e.kind == EXPENSE_KIND))


def expense_description(entry: ShiftEntry) -> Description:
    """Description of the expense transaction saved for a shift expense."""
    return Description(f"{entry.description or 'Expense'} (shift)")


def settle_shift(
    shift: Shift,
    now: datetime,
    amount: Money | None = None,
    mileage: float | None = None,
    duration_hours: float | None = None,
) -> ShiftSettlement:
    """Work out the transactions that end a shift.

    The driver can correct the tracked earnings, kilometres and hours before
    saving. Hours are rounded to two decimals and kilometres to one.

    Args:
        shift: Shift snapshot.
        now: Current time.
        amount: Earnings to save instead of the platform total.
        mileage: Kilometres to save instead of the tracked ones.
        duration_hours: Hours to save instead of the tracked working time.

    Returns:
        ShiftSettlement with the income, mileage, hours and expenses to save.
    """
    income = amount if amount is not None else shift_income(shift.entries)
    km = mileage if mileage is not None else shift.km
    hours = duration_hours if duration_hours is not None else elapsed_seconds(shift, now) / 3600

    return ShiftSettlement(
        income=income,
        mileage=round(km, 1),
        duration_hours=round(hours, 2),
        expenses=tuple(e for e in shift.entries if e.kind == EXPENSE_KIND),
    )


def format_elapsed(seconds: int) -> str:
    """Format working time as hours and zero-padded minutes (e.g., "2h 05m")."""
    hours, remainder = divmod(seconds, 3600)
    return f"{hours}h {remainder // 60:02d}m"
