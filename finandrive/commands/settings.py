"""Work-day settings command."""

import sys

from finandrive.commands.common import console
from finandrive.config import get_config_path, get_work_days, set_work_days
from finandrive.dates import format_work_days, parse_weekday


def workdays_command(days: list[str] | None = None) -> None:
    """Show the work-day schedule, or replace it when days are given.

    Args:
        days: Weekdays as indices (0 = Sunday) or names ("mon", "Tuesday").
            Pass "none" to clear the schedule.
    """
    try:
        if not days:
            current = get_work_days()
            console.print(f"[bold]Work days:[/bold] {format_work_days(current)}")
            return

        if [d.lower() for d in days] == ["none"]:
            indices: list[int] = []
        else:
            indices = [parse_weekday(d) for d in days]

        stored = set_work_days(indices)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Work days set to: {format_work_days(stored)}")
    if not stored:
        console.print("[yellow]No work days: every bill will be treated as due in one day[/yellow]")
    console.print(f"[dim]Config: {get_config_path()}[/dim]")
