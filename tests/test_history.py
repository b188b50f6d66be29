# Project: weather-history
# Owner: GreenUnicorn
"""Tests for history.py — request params, payload checks, daily_records."""

import copy
from datetime import date
from unittest.mock import MagicMock, patch

from weather_history.history import (
    ARCHIVE_API_URL,
    DAILY_VARIABLES,
    build_params,
    daily_records,
    error_reason,
    has_daily_data,
    is_complete,
    request_archive,
)


# ---------------------------------------------------------------------------
# Shared mock API response
# ---------------------------------------------------------------------------

MOCK_API_RESPONSE = {
    "latitude": 40.710335,
    "longitude": -73.99307,
    "timezone": "America/New_York",
    "daily_units": {name: "°C" for name in DAILY_VARIABLES},
    "daily": {
        "time": ["2024-01-01", "2024-01-02"],
        "temperature_2m_max":        [4.0,  5.0],
        "temperature_2m_min":        [-1.0, None],
        "temperature_2m_mean":       [1.5,  2.5],
        "apparent_temperature_max":  [1.0,  2.0],
        "apparent_temperature_min":  [-4.0, -3.0],
        "apparent_temperature_mean": [-1.5, -0.5],
    },
}


# ---------------------------------------------------------------------------
# build_params / request_archive
# ---------------------------------------------------------------------------

class TestBuildParams:

    def setup_method(self):
        self.params = build_params(51.5, -0.12, date(2024, 1, 1), date(2024, 1, 31))

    def test_coordinates_passed_through(self):
        assert self.params["latitude"] == 51.5
        assert self.params["longitude"] == -0.12

    def test_dates_are_iso_strings(self):
        assert self.params["start_date"] == "2024-01-01"
        assert self.params["end_date"] == "2024-01-31"

    def test_daily_lists_all_six_fields_comma_joined(self):
        assert self.params["daily"] == (
            "temperature_2m_max,temperature_2m_min,temperature_2m_mean,"
            "apparent_temperature_max,apparent_temperature_min,apparent_temperature_mean"
        )

    def test_timezone_is_auto(self):
        assert self.params["timezone"] == "auto"


@patch("weather_history.history.requests.get")
def test_request_archive_single_get_to_archive_url(mock_get):
    mock_get.return_value = MagicMock(ok=True)

    request_archive(40.0, -74.0, date(2024, 1, 1), date(2024, 1, 2), timeout=5)

    assert mock_get.call_count == 1
    args, kwargs = mock_get.call_args
    assert args[0] == ARCHIVE_API_URL
    assert kwargs["params"]["latitude"] == 40.0
    assert kwargs["timeout"] == 5


@patch("weather_history.history.requests.get")
def test_request_archive_custom_url(mock_get):
    request_archive(1.0, 2.0, date(2024, 1, 1), date(2024, 1, 2), url="http://localhost/archive")
    assert mock_get.call_args[0][0] == "http://localhost/archive"


# ---------------------------------------------------------------------------
# error_reason
# ---------------------------------------------------------------------------

def test_error_reason_none_for_normal_payload():
    assert error_reason(MOCK_API_RESPONSE) is None


def test_error_reason_returns_reason():
    payload = {"error": True, "reason": "Parameter 'start_date' is out of range"}
    assert error_reason(payload) == "Parameter 'start_date' is out of range"


def test_error_reason_empty_string_when_reason_missing():
    assert error_reason({"error": True}) == ""


# ---------------------------------------------------------------------------
# has_daily_data / is_complete
# ---------------------------------------------------------------------------

def test_has_daily_data_true_for_mock():
    assert has_daily_data(MOCK_API_RESPONSE) is True


def test_has_daily_data_false_without_daily():
    assert has_daily_data({"latitude": 1.0}) is False


def test_has_daily_data_false_for_empty_time():
    payload = copy.deepcopy(MOCK_API_RESPONSE)
    payload["daily"]["time"] = []
    assert has_daily_data(payload) is False


def test_is_complete_true_for_mock():
    assert is_complete(MOCK_API_RESPONSE) is True


def test_is_complete_false_when_series_shorter():
    payload = copy.deepcopy(MOCK_API_RESPONSE)
    payload["daily"]["temperature_2m_mean"] = [1.5]
    assert is_complete(payload) is False


def test_is_complete_false_when_series_missing():
    payload = copy.deepcopy(MOCK_API_RESPONSE)
    del payload["daily"]["apparent_temperature_min"]
    assert is_complete(payload) is False


# ---------------------------------------------------------------------------
# daily_records
# ---------------------------------------------------------------------------

class TestDailyRecords:

    def test_one_record_per_day(self):
        assert len(daily_records(MOCK_API_RESPONSE)) == 2

    def test_record_keys(self):
        record = daily_records(MOCK_API_RESPONSE)[0]
        assert set(record) == {"date", *DAILY_VARIABLES}

    def test_values_line_up_by_index(self):
        second = daily_records(MOCK_API_RESPONSE)[1]
        assert second["date"] == "2024-01-02"
        assert second["temperature_2m_max"] == 5.0
        assert second["apparent_temperature_mean"] == -0.5

    def test_none_is_preserved(self):
        """Missing readings must not be coerced to 0 — 0°C is a real value."""
        second = daily_records(MOCK_API_RESPONSE)[1]
        assert second["temperature_2m_min"] is None
