# Project: weather-history
# Owner: GreenUnicorn
"""
table.py — Row building, pagination and CSV export for the data table.

Everything here works on the raw archive payload and returns plain
Python values; the Streamlit app only lays them out.
"""

import csv
import io
import math

from weather_history.history import daily_records
from weather_history.utils import fmt_table_date

ROWS_PER_PAGE_OPTIONS: tuple[int, ...] = (10, 20, 50)

# (field, column label) in display and export order
COLUMNS: list[tuple[str, str]] = [
    ("temperature_2m_max",       "Max Temp"),
    ("temperature_2m_min",       "Min Temp"),
    ("temperature_2m_mean",      "Mean Temp"),
    ("apparent_temperature_max",  "Max Apparent"),
    ("apparent_temperature_min",  "Min Apparent"),
    ("apparent_temperature_mean", "Mean Apparent"),
]


def format_temperature(value: float | None, unit: str) -> str:
    """Render one cell, e.g. '12.3°C'; missing readings show as 'N/A'."""
    if value is None:
        return "N/A"
    return f"{value:.1f}{unit}"


def table_rows(dataset: dict) -> list[dict]:
    """One dict per day: the daily record plus a 'formatted_date' label."""
    rows = daily_records(dataset)
    for row in rows:
        row["formatted_date"] = fmt_table_date(row["date"])
    return rows


# ─────────────────────────────────────────────────────────────
# Pagination
# ─────────────────────────────────────────────────────────────

def total_pages(n_rows: int, rows_per_page: int) -> int:
    """Number of pages needed for *n_rows*; an empty table still has page 1."""
    return max(1, math.ceil(n_rows / rows_per_page))


def clamp_page(page: int, pages: int) -> int:
    """Keep a requested page number inside [1, pages]."""
    return max(1, min(page, pages))


def paginate(rows: list[dict], page: int, rows_per_page: int) -> dict:
    """Slice out one page of rows.

    Returns dict with keys:
        rows (list[dict]), page (int, clamped), total_pages (int),
        first (1-based index of the first row shown), last, total
    """
    pages = total_pages(len(rows), rows_per_page)
    page = clamp_page(page, pages)
    start = (page - 1) * rows_per_page
    end = start + rows_per_page
    return {
        "rows":        rows[start:end],
        "page":        page,
        "total_pages": pages,
        "first":       start + 1 if rows else 0,
        "last":        min(end, len(rows)),
        "total":       len(rows),
    }


# ─────────────────────────────────────────────────────────────
# CSV export
# ─────────────────────────────────────────────────────────────

def csv_headers(units: dict) -> list[str]:
    """Header row: 'Date' then each measurement labelled with its unit."""
    return ["Date"] + [f"{label} ({units.get(name, '')})" for name, label in COLUMNS]


def to_csv(dataset: dict) -> str:
    """Serialise the whole dataset (not just the visible page) as CSV.

    One header line plus one line per day, every line ending in '\\n'.
    Missing readings are written as empty fields.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(csv_headers(dataset.get("daily_units", {})))
    for record in daily_records(dataset):
        writer.writerow([record["date"]] + [record[name] for name, _ in COLUMNS])
    return buf.getvalue()


def csv_filename(dataset: dict) -> str:
    """Download name, e.g. 'weather-data-2024-01-01-to-2024-01-31.csv'."""
    times = dataset["daily"]["time"]
    return f"weather-data-{times[0]}-to-{times[-1]}.csv"
