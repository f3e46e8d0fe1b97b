"""End-to-end tests for the finandrive CLI using isolated XDG directories."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from finandrive.cli import app

runner = CliRunner()


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path


@pytest.fixture
def initialized(xdg_dirs: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return xdg_dirs


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, xdg_dirs: Path) -> None:
        """Should create both files under the XDG directories."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (xdg_dirs / "data" / "finandrive" / "finandrive.db").exists()
        assert (xdg_dirs / "config" / "finandrive" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should fail without --force when files exist."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_keeps_existing_work_days(self, xdg_dirs: Path) -> None:
        """Should keep a config written before the database exists."""
        assert runner.invoke(app, ["workdays", "mon", "tue"]).exit_code == 0

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert "Keeping existing config" in result.output
        assert "Mon, Tue" in result.output

    def test_force_starts_over(self, initialized: Path) -> None:
        """Should empty the database and reset the config."""
        runner.invoke(app, ["add", "income", "100", "Uber"])
        runner.invoke(app, ["workdays", "sun"])

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0, result.output
        assert "Mon, Tue, Wed, Thu, Fri, Sat" in result.output
        assert "No transactions found" in runner.invoke(app, ["history"]).output

    def test_commands_need_database(self, xdg_dirs: Path) -> None:
        """Should exit with a hint before init."""
        result = runner.invoke(app, ["goal"])

        assert result.exit_code == 1
        assert "finandrive init" in result.output


class TestGoal:
    """Tests for the goal command."""

    def test_no_bills(self, initialized: Path) -> None:
        """Should congratulate when nothing is pending."""
        result = runner.invoke(app, ["goal", "--today", "2025-01-06"])

        assert result.exit_code == 0
        assert "R$0.00" in result.output
        assert "No pending bills" in result.output

    def test_binding_bill(self, initialized: Path) -> None:
        """Should report the cumulative milestone that needs the highest rate."""
        assert runner.invoke(app, ["workdays", "mon", "tue", "wed", "thu", "fri"]).exit_code == 0
        assert runner.invoke(app, ["bill", "add", "Phone", "100", "2025-01-07"]).exit_code == 0
        assert runner.invoke(app, ["bill", "add", "Car rental", "1000", "17/01/2025"]).exit_code == 0

        result = runner.invoke(app, ["goal", "--today", "2025-01-06"])

        assert result.exit_code == 0, result.output
        assert "R$110.00" in result.output
        assert "Focus: pay off Car rental in 10 days." in result.output

    def test_cash_and_paid_bills_lower_goal(self, initialized: Path) -> None:
        """Should use income as starting cash and skip paid bills."""
        runner.invoke(app, ["bill", "add", "Rent", "500", "2025-01-06"])
        runner.invoke(app, ["bill", "add", "Fuel card", "300", "2025-01-06"])
        runner.invoke(app, ["add", "income", "200", "Uber", "--date", "2025-01-05", "--km", "80"])

        result = runner.invoke(app, ["goal", "--today", "2025-01-06"])
        assert "R$600.00" in result.output

        assert runner.invoke(app, ["bill", "pay", "1"]).exit_code == 0

        result = runner.invoke(app, ["goal", "--today", "2025-01-06"])
        assert "R$100.00" in result.output


class TestTransactionsAndBills:
    """Tests for add, delete, history and bill commands."""

    def test_add_and_history(self, initialized: Path) -> None:
        """Should list added transactions with a balance."""
        runner.invoke(app, ["add", "INCOME", "150.50", "Uber", "--date", "2025-01-06"])
        runner.invoke(app, ["add", "expense", "50", "Fuel", "--date", "06/01/2025", "-c", "Combustível"])

        result = runner.invoke(app, ["history", "--period", "all"])

        assert result.exit_code == 0
        assert "Uber" in result.output
        assert "Fuel" in result.output
        assert "R$100.50" in result.output

    def test_rejects_negative_amount(self, initialized: Path) -> None:
        """Should refuse negative amounts."""
        result = runner.invoke(app, ["add", "expense", "--", "-5", "Fuel"])

        assert result.exit_code == 1

    def test_rejects_infinite_amount(self, initialized: Path) -> None:
        """Should print an error instead of crashing on infinity."""
        result = runner.invoke(app, ["add", "income", "inf", "Uber"])

        assert isinstance(result.exception, SystemExit)
        assert result.exit_code == 1
        assert "finite" in result.output

    def test_rejects_amount_too_large_to_store(self, initialized: Path) -> None:
        """Should print an error for amounts the database cannot hold."""
        for args in (["bill", "add", "Rent", "1e20", "2025-01-10"], ["add", "expense", "1e20", "Fuel"]):
            result = runner.invoke(app, args)

            assert isinstance(result.exception, SystemExit)
            assert result.exit_code == 1
            assert "too large" in result.output

    def test_bill_edit_rejects_infinite_amount(self, initialized: Path) -> None:
        """Should validate edited amounts the same way."""
        runner.invoke(app, ["bill", "add", "Rent", "500", "2025-01-10"])

        result = runner.invoke(app, ["bill", "edit", "1", "--amount", "inf"])

        assert isinstance(result.exception, SystemExit)
        assert result.exit_code == 1

    def test_keeps_typed_cents(self, initialized: Path) -> None:
        """Should store 1.005 as R$1.01."""
        runner.invoke(app, ["add", "income", "1.005", "Tip", "--date", "2025-01-06"])

        assert "R$1.01" in runner.invoke(app, ["history"]).output

    def test_corrupt_config_is_reported(self, initialized: Path) -> None:
        """Should report an unreadable config instead of crashing."""
        (initialized / "config" / "finandrive" / "config.toml").write_text("work_days = [1, 2\n")

        for args in (["bill", "list"], ["delete", "1"], ["history"], ["add", "income", "10", "Uber"]):
            result = runner.invoke(app, args)

            assert isinstance(result.exception, SystemExit), args
            assert result.exit_code == 1

    def test_delete_missing_transaction(self, initialized: Path) -> None:
        """Should fail for an unknown ID."""
        result = runner.invoke(app, ["delete", "42"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_bill_edit_and_delete(self, initialized: Path) -> None:
        """Should edit and delete bills by ID."""
        runner.invoke(app, ["bill", "add", "IPVA", "3558", "2025-01-10"])

        assert runner.invoke(app, ["bill", "edit", "1", "--amount", "1000"]).exit_code == 0
        listing = runner.invoke(app, ["bill", "list", "--all"])
        assert "R$1,000.00" in listing.output

        assert runner.invoke(app, ["bill", "delete", "1"]).exit_code == 0
        assert runner.invoke(app, ["bill", "delete", "1"]).exit_code == 1


class TestWorkdays:
    """Tests for the workdays command."""

    def test_shows_default(self, initialized: Path) -> None:
        """Should show Monday to Saturday by default."""
        result = runner.invoke(app, ["workdays"])

        assert "Mon, Tue, Wed, Thu, Fri, Sat" in result.output

    def test_rejects_unknown_day(self, initialized: Path) -> None:
        """Should reject unknown weekdays."""
        result = runner.invoke(app, ["workdays", "8"])

        assert result.exit_code == 1


class TestShift:
    """Tests for the shift commands."""

    def test_full_shift_saves_transactions(self, initialized: Path) -> None:
        """Should save platform earnings, km and hours as income plus expenses."""
        assert runner.invoke(app, ["shift", "start"]).exit_code == 0
        assert runner.invoke(app, ["shift", "add", "uber", "100"]).exit_code == 0
        assert runner.invoke(app, ["shift", "add", "99", "50"]).exit_code == 0
        assert runner.invoke(app, ["shift", "add", "km", "80"]).exit_code == 0
        result = runner.invoke(app, ["shift", "add", "expense", "30", "-d", "Fuel", "-c", "Combustível"])
        assert result.exit_code == 0, result.output

        status = runner.invoke(app, ["shift", "status"])
        assert "R$150.00" in status.output
        assert "80 km" in status.output

        result = runner.invoke(app, ["shift", "stop", "--hours", "4", "--date", "2025-01-06"])
        assert result.exit_code == 0, result.output

        history = runner.invoke(app, ["history"])
        assert "Shift earnings" in history.output
        assert "Fuel (shift)" in history.output
        assert "R$120.00" in history.output

        report = runner.invoke(app, ["report", "--period", "custom", "--start", "2025-01-06", "--end", "2025-01-06"])
        assert "R$1.88" in report.output  # 150.00 / 80 km
        assert "R$37.50" in report.output  # 150.00 / 4 h

        assert "No shift running" in runner.invoke(app, ["shift", "status"]).output

    def test_cannot_add_while_paused(self, initialized: Path) -> None:
        """Should refuse entries until the shift resumes."""
        runner.invoke(app, ["shift", "start"])
        assert runner.invoke(app, ["shift", "pause"]).exit_code == 0

        assert runner.invoke(app, ["shift", "add", "uber", "10"]).exit_code == 1

        assert runner.invoke(app, ["shift", "resume"]).exit_code == 0
        assert runner.invoke(app, ["shift", "add", "uber", "10"]).exit_code == 0

    def test_needs_running_shift(self, initialized: Path) -> None:
        """Should explain how to start a shift."""
        result = runner.invoke(app, ["shift", "add", "uber", "10"])

        assert result.exit_code == 1
        assert "shift start" in result.output

    def test_only_one_shift(self, initialized: Path) -> None:
        """Should refuse to start a second shift."""
        runner.invoke(app, ["shift", "start"])

        result = runner.invoke(app, ["shift", "start"])

        assert result.exit_code == 1
        assert "already running" in result.output

    def test_discard(self, initialized: Path) -> None:
        """Should drop the shift without writing transactions."""
        runner.invoke(app, ["shift", "start"])
        runner.invoke(app, ["shift", "add", "private", "40"])

        assert runner.invoke(app, ["shift", "discard"]).exit_code == 0
        assert "No transactions found" in runner.invoke(app, ["history"]).output
        assert runner.invoke(app, ["shift", "discard"]).exit_code == 1

    def test_rejects_infinite_entry(self, initialized: Path) -> None:
        """Should print an error for infinite amounts."""
        runner.invoke(app, ["shift", "start"])

        result = runner.invoke(app, ["shift", "add", "uber", "inf"])

        assert isinstance(result.exception, SystemExit)
        assert result.exit_code == 1
