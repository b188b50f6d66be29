# Project: weather-history
# Owner: GreenUnicorn
"""
analysis.py — Summary statistics over a fetched archive dataset.

All calculations use the Python standard library only (no numpy/scipy).
"""

from __future__ import annotations


def _present(values: list) -> list[float]:
    """Drop the nulls the archive returns for days without a reading."""
    return [v for v in values if v is not None]


def _first_date_of(times: list[str], series: list, target: float) -> str | None:
    for date_str, value in zip(times, series):
        if value == target:
            return date_str
    return None


def summary_stats(dataset: dict) -> dict | None:
    """Compute the headline numbers shown in the stat cards.

    Input is the archive payload (see history.DAILY_VARIABLES). Null entries
    are filtered out of each series independently.

    Returns None if the max-temperature series has no values, otherwise a
    dict with keys:
        highest_temp, lowest_temp, avg_temp, temp_range, highest_apparent,
        total_days, hottest_date, coldest_date

    A statistic whose source series is entirely null is None.
    """
    daily = dataset["daily"]
    times = daily["time"]
    max_temps      = _present(daily["temperature_2m_max"])
    min_temps      = _present(daily["temperature_2m_min"])
    mean_temps     = _present(daily["temperature_2m_mean"])
    apparent_maxes = _present(daily["apparent_temperature_max"])

    if not max_temps:
        return None

    highest = max(max_temps)
    lowest  = min(min_temps) if min_temps else None

    return {
        "highest_temp":     highest,
        "lowest_temp":      lowest,
        "avg_temp":         sum(mean_temps) / len(mean_temps) if mean_temps else None,
        "temp_range":       highest - lowest if lowest is not None else None,
        "highest_apparent": max(apparent_maxes) if apparent_maxes else None,
        "total_days":       len(times),
        "hottest_date":     _first_date_of(times, daily["temperature_2m_max"], highest),
        "coldest_date":     (
            _first_date_of(times, daily["temperature_2m_min"], lowest)
            if lowest is not None else None
        ),
    }
