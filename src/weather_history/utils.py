# Project: weather-history
# Owner: GreenUnicorn
"""
utils.py — Shared utilities: date labels and failure logging.
"""

from datetime import date, datetime
from pathlib import Path


DEFAULT_LOG_PATH = Path("logs/weather_history.log")
LOG_TAG = "[history]"


def fmt_short_date(date_str: str) -> str:
    """Format an ISO date as a chart axis label.

    Args:
        date_str: Date in 'YYYY-MM-DD' format.

    Returns:
        Formatted string like 'Jan 15'.
    """
    dt = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{dt.strftime('%b')} {dt.day}"


def fmt_table_date(date_str: str) -> str:
    """Format an ISO date for the data table, e.g. 'Mon, Jan 15, 2024'."""
    dt = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{dt.strftime('%a, %b')} {dt.day}, {dt.year}"


def fmt_period_date(d: date) -> str:
    """Format a date for the period banner, e.g. 'Jan 05, 2024'."""
    return d.strftime("%b %d, %Y")


def log_info(message: str) -> None:
    """Print a tagged progress line to the server console."""
    print(f"{LOG_TAG} {message}")


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Print a failure and append a timestamped ERROR line to the log file.

    Args:
        message: Error description to log.
        log_path: Destination log file path.
    """
    print(f"{LOG_TAG} {message}")
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [ERROR] {message}\n")
    except OSError:
        pass  # Never crash on logging failure
