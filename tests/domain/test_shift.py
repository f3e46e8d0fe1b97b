"""Tests for finandrive.domain.shift pure functions."""

from datetime import datetime

from finandrive.domain.models import CategoryName, Description, Money
from finandrive.domain.shift import (
    Shift,
    ShiftEntry,
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

START = datetime(2025, 1, 6, 8, 0, 0)

ENTRIES = (
    ShiftEntry(1, "uber", Money(3250)),
    ShiftEntry(2, "99", Money(1800)),
    ShiftEntry(3, "uber", Money(2000)),
    ShiftEntry(4, "expense", Money(4000), Description("Fuel"), CategoryName("Combustível")),
    ShiftEntry(5, "expense", Money(1500), Description("Lunch")),
)


class TestElapsedSeconds:
    """Tests for elapsed_seconds and paused_seconds_after_resume."""

    def test_running_shift(self) -> None:
        """Should count from the start to now."""
        shift = Shift(started_at=START)

        assert elapsed_seconds(shift, datetime(2025, 1, 6, 10, 30, 0)) == 9000

    def test_paused_shift_stops_counting(self) -> None:
        """Should stop at the pause time while paused."""
        shift = Shift(started_at=START, paused_at=datetime(2025, 1, 6, 9, 0, 0))

        assert elapsed_seconds(shift, datetime(2025, 1, 6, 18, 0, 0)) == 3600

    def test_excludes_previous_pauses(self) -> None:
        """Should subtract time already spent paused."""
        shift = Shift(started_at=START, paused_seconds=1800)

        assert elapsed_seconds(shift, datetime(2025, 1, 6, 10, 0, 0)) == 5400

    def test_never_negative(self) -> None:
        """Should clamp to zero when the clock is behind the start."""
        shift = Shift(started_at=START)

        assert elapsed_seconds(shift, datetime(2025, 1, 6, 7, 0, 0)) == 0

    def test_resume_adds_pause_length(self) -> None:
        """Should accumulate the pause when resuming."""
        shift = Shift(started_at=START, paused_at=datetime(2025, 1, 6, 9, 0, 0), paused_seconds=600)

        resumed = paused_seconds_after_resume(shift, datetime(2025, 1, 6, 9, 15, 0))

        assert resumed == 1500
        # Back to work: 2h after start minus 25 min paused
        running = Shift(started_at=START, paused_seconds=resumed)
        assert elapsed_seconds(running, datetime(2025, 1, 6, 10, 0, 0)) == 5700

    def test_resume_running_shift_keeps_total(self) -> None:
        """Should leave the total unchanged for a shift that is not paused."""
        shift = Shift(started_at=START, paused_seconds=600)

        assert paused_seconds_after_resume(shift, datetime(2025, 1, 6, 9, 0, 0)) == 600


class TestTotals:
    """Tests for platform_totals, shift_income and shift_expense."""

    def test_platform_totals_lists_every_platform(self) -> None:
        """Should sum per platform and report zero for unused ones."""
        assert platform_totals(ENTRIES) == {
            "uber": Money(5250),
            "99": Money(1800),
            "indrive": Money(0),
            "private": Money(0),
        }

    def test_income_and_expense(self) -> None:
        """Should separate earnings from expenses."""
        assert shift_income(ENTRIES) == Money(7050)
        assert shift_expense(ENTRIES) == Money(5500)

    def test_expense_description_marks_shift(self) -> None:
        """Should tag expense transactions as coming from a shift."""
        assert expense_description(ENTRIES[3]) == "Fuel (shift)"
        assert expense_description(ShiftEntry(9, "expense", Money(100))) == "Expense (shift)"


class TestSettleShift:
    """Tests for settle_shift."""

    def test_uses_tracked_values(self) -> None:
        """Should save the platform total, tracked km and worked hours."""
        shift = Shift(started_at=START, km=123.46, entries=ENTRIES)

        settlement = settle_shift(shift, datetime(2025, 1, 6, 13, 20, 0))

        assert settlement.income == Money(7050)
        assert settlement.mileage == 123.5
        assert settlement.duration_hours == 5.33
        assert [e.id for e in settlement.expenses] == [4, 5]

    def test_overrides(self) -> None:
        """Should prefer corrected values from the driver."""
        shift = Shift(started_at=START, km=50.0, entries=ENTRIES)

        settlement = settle_shift(
            shift,
            datetime(2025, 1, 6, 9, 0, 0),
            amount=Money(10000),
            mileage=80.0,
            duration_hours=4.0,
        )

        assert settlement.income == Money(10000)
        assert settlement.mileage == 80.0
        assert settlement.duration_hours == 4.0

    def test_empty_shift(self) -> None:
        """Should settle to zero earnings and no expenses."""
        settlement = settle_shift(Shift(started_at=START), START)

        assert settlement.income == Money(0)
        assert settlement.duration_hours == 0.0
        assert settlement.expenses == ()


class TestShiftFromRows:
    """Tests for shift_from_rows."""

    def test_builds_paused_shift(self) -> None:
        """Should parse timestamps and entries from store rows."""
        row = {
            "started_at": "2025-01-06T08:00:00",
            "paused_at": "2025-01-06T09:00:00",
            "paused_seconds": 60,
            "km": 12.5,
        }
        entry_rows = [
            {"id": 1, "kind": "indrive", "amount": 900, "description": None, "category": None},
            {"id": 2, "kind": "expense", "amount": 300, "description": "Water", "category": "Outros"},
        ]

        shift = shift_from_rows(row, entry_rows)

        assert shift.started_at == START
        assert shift.is_paused
        assert shift.km == 12.5
        assert shift.entries[0].description is None
        assert shift.entries[1].category == "Outros"

    def test_running_shift_is_not_paused(self) -> None:
        """Should leave paused_at empty for a running shift."""
        row = {"started_at": "2025-01-06T08:00:00", "paused_at": None, "paused_seconds": 0, "km": 0.0}

        assert not shift_from_rows(row, []).is_paused


class TestFormatElapsed:
    """Tests for format_elapsed."""

    def test_pads_minutes(self) -> None:
        """Should show hours and two-digit minutes."""
        assert format_elapsed(7500) == "2h 05m"
        assert format_elapsed(59) == "0h 00m"
