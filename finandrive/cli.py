"""CLI entry point for finandrive."""

from enum import Enum

import typer

from finandrive.commands.bills import (
    bill_add_command,
    bill_delete_command,
    bill_edit_command,
    bill_list_command,
    bill_pay_command,
)
from finandrive.commands.goal import dashboard_command, goal_command
from finandrive.commands.report import report_command
from finandrive.commands.settings import workdays_command
from finandrive.commands.setup import init_command
from finandrive.commands.shift import (
    shift_add_command,
    shift_discard_command,
    shift_pause_command,
    shift_resume_command,
    shift_start_command,
    shift_status_command,
    shift_stop_command,
)
from finandrive.commands.transactions import add_command, delete_command, history_command
from finandrive.domain.ledger import TransactionType


class PeriodOption(str, Enum):
    """Report periods accepted on the command line."""

    today = "today"
    week = "week"
    month = "month"
    all = "all"
    custom = "custom"


class ShiftEntryKind(str, Enum):
    """What a shift entry records."""

    uber = "uber"
    n99 = "99"
    indrive = "indrive"
    private = "private"
    km = "km"
    expense = "expense"


app = typer.Typer(
    name="finandrive",
    help="FinanDrive - money tracking and daily earnings goals for drivers",
    add_completion=False,
)

bill_app = typer.Typer(help="Manage your bills.", add_completion=False)
app.add_typer(bill_app, name="bill")

shift_app = typer.Typer(help="Track a driving shift.", add_completion=False)
app.add_typer(shift_app, name="shift")


@app.callback()
def main() -> None:
    """FinanDrive - money tracking and daily earnings goals for drivers."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Delete the existing database and reset the config"),
) -> None:
    """Initialize finandrive database and configuration."""
    init_command(force)


@app.command()
def add(
    kind: TransactionType = typer.Argument(..., case_sensitive=False, help="income or expense"),
    amount: float = typer.Argument(..., help="Amount (e.g. 150.50)"),
    description: str = typer.Argument(..., help="What it was for"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD or DD/MM/YYYY, default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
    km: float = typer.Option(None, "--km", help="Kilometres driven"),
    hours: float = typer.Option(None, "--hours", help="Hours worked"),
) -> None:
    """Record an income or an expense."""
    add_command(kind, amount, description, date, category, km, hours)


@app.command()
def delete(
    transaction_id: int = typer.Argument(..., help="Transaction ID (from 'finandrive history')"),
) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


@app.command()
def history(
    period: PeriodOption = typer.Option(PeriodOption.all, "--period", "-p", help="Period to show"),
    start: str = typer.Option(None, "--start", help="First day of a custom period"),
    end: str = typer.Option(None, "--end", help="Last day of a custom period"),
) -> None:
    """List your transactions with an income/expense summary."""
    history_command(period.value, start, end)


@app.command()
def report(
    period: PeriodOption = typer.Option(PeriodOption.week, "--period", "-p", help="Period to report on"),
    start: str = typer.Option(None, "--start", help="First day of a custom period"),
    end: str = typer.Option(None, "--end", help="Last day of a custom period"),
    histogram: bool = typer.Option(True, help="Show histogram of daily income and expenses"),
) -> None:
    """Show income, expenses and earnings per km/hour for a period."""
    report_command(period.value, start, end, histogram)


@app.command()
def goal(
    today: str = typer.Option(None, "--today", help="Pretend today is this date"),
) -> None:
    """Show how much you need to earn today to pay every bill on time."""
    goal_command(today)


@app.command()
def dashboard(
    today: str = typer.Option(None, "--today", help="Pretend today is this date"),
) -> None:
    """Show your totals, efficiency and daily goal."""
    dashboard_command(today)


@app.command()
def workdays(
    days: list[str] = typer.Argument(None, help="Days you work (0-6 or names, 0 = Sunday), or 'none'"),
) -> None:
    """Show or set the days of the week you work."""
    workdays_command(days)


@bill_app.command(name="add")
def bill_add(
    description: str = typer.Argument(..., help="Bill description"),
    amount: float = typer.Argument(..., help="Amount (e.g. 1200.00)"),
    due: str = typer.Argument(..., help="Due date (YYYY-MM-DD or DD/MM/YYYY)"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
) -> None:
    """Add an unpaid bill."""
    bill_add_command(description, amount, due, category)


@bill_app.command(name="list")
def bill_list(
    all: bool = typer.Option(False, "--all", "-a", help="Include paid bills"),
) -> None:
    """List your pending bills."""
    bill_list_command(all)


@bill_app.command(name="pay")
def bill_pay(
    bill_id: int = typer.Argument(..., help="Bill ID"),
) -> None:
    """Mark a bill as paid."""
    bill_pay_command(bill_id, True)


@bill_app.command(name="unpay")
def bill_unpay(
    bill_id: int = typer.Argument(..., help="Bill ID"),
) -> None:
    """Mark a bill as unpaid again."""
    bill_pay_command(bill_id, False)


@bill_app.command(name="edit")
def bill_edit(
    bill_id: int = typer.Argument(..., help="Bill ID"),
    description: str = typer.Option(None, "--description", help="New description"),
    amount: float = typer.Option(None, "--amount", help="New amount"),
    due: str = typer.Option(None, "--due", help="New due date"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
) -> None:
    """Edit a bill."""
    bill_edit_command(bill_id, description, amount, due, category)


@bill_app.command(name="delete")
def bill_delete(
    bill_id: int = typer.Argument(..., help="Bill ID"),
) -> None:
    """Delete a bill."""
    bill_delete_command(bill_id)


@shift_app.command(name="start")
def shift_start() -> None:
    """Start a shift."""
    shift_start_command()


@shift_app.command(name="pause")
def shift_pause() -> None:
    """Pause the running shift."""
    shift_pause_command()


@shift_app.command(name="resume")
def shift_resume() -> None:
    """Resume a paused shift."""
    shift_resume_command()


@shift_app.command(name="add")
def shift_add(
    kind: ShiftEntryKind = typer.Argument(..., case_sensitive=False, help="uber, 99, indrive, private, km or expense"),
    amount: float = typer.Argument(..., help="Amount (e.g. 32.50), or kilometres for 'km'"),
    description: str = typer.Option(None, "--description", "-d", help="Expense description"),
    category: str = typer.Option(None, "--category", "-c", help="Expense category"),
) -> None:
    """Add earnings, kilometres or an expense to the running shift."""
    shift_add_command(kind.value, amount, description, category)


@shift_app.command(name="status")
def shift_status() -> None:
    """Show the running shift."""
    shift_status_command()


@shift_app.command(name="stop")
def shift_stop(
    amount: float = typer.Option(None, "--amount", help="Earnings to save (default: tracked total)"),
    km: float = typer.Option(None, "--km", help="Kilometres to save (default: tracked km)"),
    hours: float = typer.Option(None, "--hours", help="Hours to save (default: tracked time)"),
    date: str = typer.Option(None, "--date", help="Date of the transactions (default: today)"),
) -> None:
    """End the running shift and save it as transactions."""
    shift_stop_command(amount, km, hours, date)


@shift_app.command(name="discard")
def shift_discard() -> None:
    """Drop the running shift without saving it."""
    shift_discard_command()


if __name__ == "__main__":
    app()
