"""Setup command: create the database and the config file."""

import sqlite3
import sys

from finandrive.commands.common import console
from finandrive.config import create_default_config, get_config_path, get_work_days
from finandrive.dates import format_work_days
from finandrive.store.schema import get_db_path, init_database


def init_command(force: bool = False) -> None:
    """Create an empty database and, if missing, the default config.

    An existing config is kept so the work-day schedule survives a fresh
    database. With force, both are recreated from scratch.

    Args:
        force: Delete an existing database and reset the config.
    """
    db_path = get_db_path()
    config_path = get_config_path()

    if db_path.exists() and not force:
        console.print(f"[red]Database already exists: {db_path}[/red]", style="bold")
        console.print("[yellow]Use 'finandrive init --force' to start over with an empty database[/yellow]")
        sys.exit(1)

    write_config = force or not config_path.exists()

    try:
        if db_path.exists():
            db_path.unlink()
        init_database(db_path)

        if write_config:
            create_default_config(config_path)
        work_days = get_work_days(config_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid config file {config_path}: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Database ready: {db_path}")
    if write_config:
        console.print(f"[green]✓[/green] Config created (permissions: 600): {config_path}")
    else:
        console.print(f"[dim]Keeping existing config: {config_path}[/dim]")
    console.print(f"[bold]Work days:[/bold] {format_work_days(work_days)}")
