# Project: weather-history
# Owner: GreenUnicorn
"""
history.py — Request daily temperature history from the Open-Meteo Archive API.
API docs: https://open-meteo.com/en/docs/historical-weather-api

This module only talks HTTP and inspects payloads. Deciding what a given
response means for the dashboard (error text, whether to keep the data) is
done in pipeline.py.
"""

from datetime import date

import requests

ARCHIVE_API_URL = "https://archive-api.open-meteo.com/v1/archive"
DEFAULT_TIMEOUT = 30

DAILY_VARIABLES = [
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "apparent_temperature_mean",
]


def build_params(
    latitude: float,
    longitude: float,
    start: date,
    end: date,
) -> dict:
    """Build the query string for one archive request."""
    return {
        "latitude": latitude,
        "longitude": longitude,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "daily": ",".join(DAILY_VARIABLES),
        "timezone": "auto",
    }


def request_archive(
    latitude: float,
    longitude: float,
    start: date,
    end: date,
    url: str = ARCHIVE_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    """Issue a single GET against the archive endpoint.

    There is deliberately no retry here: one user action, one request.

    Returns:
        The raw response; the caller checks the status and decodes JSON.

    Raises:
        requests.RequestException: On connection failures and timeouts.
    """
    params = build_params(latitude, longitude, start, end)
    return requests.get(url, params=params, timeout=timeout)


def error_reason(payload: dict) -> str | None:
    """Return the error envelope's reason, '' if it has none, or None if
    the payload is not an error envelope."""
    if not payload.get("error"):
        return None
    return payload.get("reason") or ""


def has_daily_data(payload: dict) -> bool:
    """True if the payload carries a non-empty daily.time list."""
    daily = payload.get("daily")
    if not isinstance(daily, dict):
        return False
    times = daily.get("time")
    return isinstance(times, list) and len(times) > 0


def is_complete(payload: dict) -> bool:
    """True if every requested series is present and as long as daily.time."""
    if not has_daily_data(payload):
        return False
    daily = payload["daily"]
    n = len(daily["time"])
    for name in DAILY_VARIABLES:
        series = daily.get(name)
        if not isinstance(series, list) or len(series) != n:
            return False
    return True


def daily_records(payload: dict) -> list[dict]:
    """Turn the parallel daily lists into one dict per day.

    Each record has 'date' (ISO string) plus one key per DAILY_VARIABLES
    entry. Missing values stay None; nothing is coerced to 0.
    """
    daily = payload["daily"]
    records = []
    for i, date_str in enumerate(daily["time"]):
        record = {"date": date_str}
        for name in DAILY_VARIABLES:
            record[name] = daily[name][i]
        records.append(record)
    return records
