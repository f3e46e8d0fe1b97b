"""Configuration file management for finandrive."""

import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import tomli_w

# Monday to Saturday; Sunday (0) is off by default
DEFAULT_WORK_DAYS: frozenset[int] = frozenset({1, 2, 3, 4, 5, 6})

DEFAULT_CURRENCY_SYMBOL = "R$"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "finandrive" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "work_days": sorted(DEFAULT_WORK_DAYS),
        "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def validate_work_days(work_days: Iterable[int]) -> frozenset[int]:
    """Validate weekday indices.

    Args:
        work_days: Weekday indices, 0 = Sunday through 6 = Saturday.

    Returns:
        The indices as a frozenset.

    Raises:
        ValueError: If any index is outside 0-6.
    """
    days = frozenset(work_days)
    invalid = [day for day in days if not isinstance(day, int) or not 0 <= day <= 6]
    if invalid:
        raise ValueError(f"Invalid weekday index: {', '.join(str(day) for day in invalid)} (use 0-6, 0 = Sunday)")
    return days


def get_work_days(config_path: Path | None = None) -> frozenset[int]:
    """Get the configured work days.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Weekday indices the user works on. Defaults to Monday-Saturday when
        the config file or the key is missing.

    Raises:
        ValueError: If the stored work days are invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return DEFAULT_WORK_DAYS

    if "work_days" not in config:
        return DEFAULT_WORK_DAYS
    return validate_work_days(config["work_days"])


def set_work_days(work_days: Iterable[int], config_path: Path | None = None) -> frozenset[int]:
    """Store the work-day schedule.

    An empty schedule is accepted.

    Args:
        work_days: Weekday indices, 0 = Sunday through 6 = Saturday.
        config_path: Path to config file. If None, uses default location.

    Returns:
        The stored work days.

    Raises:
        ValueError: If any index is outside 0-6.
    """
    days = validate_work_days(work_days)

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    config["work_days"] = sorted(days)
    save_config(config, config_path)
    return days


def get_currency_symbol(config_path: Path | None = None) -> str:
    """Get the currency symbol used for display.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configured symbol, or "R$" when unset.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return DEFAULT_CURRENCY_SYMBOL
    return str(config.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL))
