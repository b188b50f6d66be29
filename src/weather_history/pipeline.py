# Project: weather-history
# Owner: GreenUnicorn
"""
pipeline.py — Dashboard state and the fetch pipeline.

The Streamlit app keeps one DashboardState in st.session_state and hands it
to fetch_weather() when the user presses the button. fetch_weather() is the
only writer of dataset/error/loading/last_fetch_key; everything else reads.

Every failure is turned into a message on state.error. Nothing is raised
to the caller.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path

import requests

from weather_history import history
from weather_history.utils import DEFAULT_LOG_PATH, log_error, log_info
from weather_history.validation import can_submit, parse_coordinate


DEFAULT_LATITUDE = "40.7128"
DEFAULT_LONGITUDE = "-74.0060"
DEFAULT_LOOKBACK_DAYS = 30

INVALID_INPUT_MESSAGE = "Please fill in all fields with valid values"
GENERIC_API_MESSAGE = "Failed to fetch weather data"
NO_DATA_MESSAGE = "No weather data available for the selected period"
INCOMPLETE_DATA_MESSAGE = "Incomplete weather data received for the selected period"
CONNECTION_MESSAGE = (
    "Failed to fetch weather data. "
    "Please check your internet connection and try again."
)


def default_date_range(
    today: date | None = None,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> tuple[date, date]:
    """Return (start, end) covering the last *lookback_days* days ending yesterday."""
    if today is None:
        today = date.today()
    return today - timedelta(days=lookback_days), today - timedelta(days=1)


@dataclass
class DashboardState:
    """Everything the dashboard remembers between reruns of one session."""

    latitude: str = DEFAULT_LATITUDE
    longitude: str = DEFAULT_LONGITUDE
    start_date: date | None = field(default_factory=lambda: default_date_range()[0])
    end_date: date | None = field(default_factory=lambda: default_date_range()[1])

    loading: bool = False
    error: str | None = None
    dataset: dict | None = None
    last_fetch_key: str | None = None
    # (latitude, longitude) as requested for the dataset on screen
    location: tuple[float, float] | None = None

    chart_type: str = "line"
    table_page: int = 1
    rows_per_page: int = 10

    def can_submit(self) -> bool:
        return can_submit(self.latitude, self.longitude, self.start_date, self.end_date)

    def location_label(self) -> str | None:
        """Requested coordinates of the loaded dataset, e.g. '40.7128°, -74.0060°'."""
        if self.location is None:
            return None
        latitude, longitude = self.location
        return f"{latitude:.4f}°, {longitude:.4f}°"


def fetch_key(latitude: float, longitude: float, start: date, end: date) -> str:
    """Serialise request parameters so duplicates compare equal."""
    return f"{latitude},{longitude},{start.isoformat()},{end.isoformat()}"


def _fail(state: DashboardState, message: str) -> None:
    state.error = message
    state.dataset = None
    state.location = None
    # nothing is shown, so no request counts as a duplicate any more
    state.last_fetch_key = None


def fetch_weather(
    state: DashboardState,
    force: bool = False,
    url: str = history.ARCHIVE_API_URL,
    timeout: float = history.DEFAULT_TIMEOUT,
    log_path: Path = DEFAULT_LOG_PATH,
) -> None:
    """Fetch the archive data for the current form values into *state*.

    Args:
        state: Session state; read for inputs, written with the outcome.
        force: Re-request even if the parameters match the last successful
            fetch (the dashboard's Refresh button).
        url: Archive endpoint.
        timeout: Socket timeout in seconds for the single GET.
        log_path: Where transport failures are recorded.
    """
    if not state.can_submit():
        state.error = INVALID_INPUT_MESSAGE
        return

    latitude = parse_coordinate(state.latitude)
    longitude = parse_coordinate(state.longitude)
    key = fetch_key(latitude, longitude, state.start_date, state.end_date)

    if key == state.last_fetch_key and not force:
        return

    state.loading = True
    state.error = None
    try:
        log_info(
            f"Fetching {state.start_date} to {state.end_date} "
            f"for {latitude}, {longitude}..."
        )
        response = history.request_archive(
            latitude,
            longitude,
            state.start_date,
            state.end_date,
            url=url,
            timeout=timeout,
        )

        if not response.ok:
            _fail(state, f"HTTP error! status: {response.status_code}")
            return

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected API response structure: {type(data).__name__}")

        reason = history.error_reason(data)
        if reason is not None:
            _fail(state, reason or GENERIC_API_MESSAGE)
            return

        if not history.has_daily_data(data):
            _fail(state, NO_DATA_MESSAGE)
            return

        if not history.is_complete(data):
            _fail(state, INCOMPLETE_DATA_MESSAGE)
            return

        state.dataset = data
        state.location = (latitude, longitude)
        state.last_fetch_key = key
    except (requests.RequestException, ValueError) as e:
        log_error(f"Weather API error: {e}", log_path=log_path)
        _fail(state, CONNECTION_MESSAGE)
    finally:
        state.loading = False
