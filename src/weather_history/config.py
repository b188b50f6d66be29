# Project: weather-history
# Owner: GreenUnicorn
"""
config.py — Load and validate the optional TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The dashboard runs without a config file; one only overrides the defaults
below. The path defaults to "config.toml" in the current working directory.
"""

import copy
import tomllib
from pathlib import Path

from weather_history.history import ARCHIVE_API_URL, DEFAULT_TIMEOUT
from weather_history.table import ROWS_PER_PAGE_OPTIONS
from weather_history.chart import CHART_TYPES
from weather_history.utils import DEFAULT_LOG_PATH, log_error
from weather_history.validation import LATITUDE_BOUNDS, LONGITUDE_BOUNDS, MAX_RANGE_DAYS


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULT_CONFIG: dict = {
    "location": {
        "latitude": 40.7128,
        "longitude": -74.0060,
    },
    "dashboard": {
        "lookback_days": 30,
        "rows_per_page": 10,
        "chart_type": "line",
    },
    "api": {
        "archive_url": ARCHIVE_API_URL,
        "timeout": DEFAULT_TIMEOUT,
    },
    "log": {
        "path": str(DEFAULT_LOG_PATH),
    },
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load a TOML config file and merge it over DEFAULT_CONFIG.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict with every section of DEFAULT_CONFIG present.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If a section is unknown or a value is out of range.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml to change the defaults."
        )

    with open(path, "rb") as f:
        user = tomllib.load(f)

    config = _merge(user)
    _validate(config)
    return config


def load_config_or_default(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Like load_config, but return a copy of DEFAULT_CONFIG if the file is absent."""
    try:
        return load_config(path)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)


def load_dashboard_config(
    path: Path = DEFAULT_CONFIG_PATH,
    log_path: Path = DEFAULT_LOG_PATH,
) -> tuple[dict, str | None]:
    """Load config for the dashboard, which must start even with a bad file.

    Returns:
        (config, problem). On a malformed or invalid file, config is a copy
        of DEFAULT_CONFIG and problem describes what was wrong; otherwise
        problem is None.
    """
    try:
        return load_config_or_default(path), None
    except ValueError as e:
        problem = f"Ignoring {path}: {e}"
        log_error(problem, log_path=log_path)
        return copy.deepcopy(DEFAULT_CONFIG), problem


def _merge(user: dict) -> dict:
    config = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in user.items():
        if section not in config:
            raise ValueError(f"Unknown config section: [{section}]")
        if not isinstance(values, dict):
            raise ValueError(f"Config section [{section}] must be a table")
        config[section].update(values)
    return config


def _validate(config: dict) -> None:
    """Validate value types and ranges.

    Expected config schema::

        [location]
        latitude  = <float>   # -90 to 90
        longitude = <float>   # -180 to 180

        [dashboard]
        lookback_days = <int>   # 1-366, default range shown on first load
        rows_per_page = <int>   # 10, 20 or 50
        chart_type    = <str>   # "line" or "area"

        [api]
        archive_url = <str>
        timeout     = <float>   # seconds, > 0

        [log]
        path = <str>   # relative or absolute path to the log file

    Raises:
        ValueError: If any value has the wrong type or is out of range.
    """
    location = config["location"]
    for key, (low, high) in (("latitude", LATITUDE_BOUNDS), ("longitude", LONGITUDE_BOUNDS)):
        value = location[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"[location].{key} must be a number")
        if not low <= value <= high:
            raise ValueError(f"[location].{key} must be between {low:g} and {high:g}")

    dashboard = config["dashboard"]
    lookback = dashboard["lookback_days"]
    if isinstance(lookback, bool) or not isinstance(lookback, int) or not 1 <= lookback <= MAX_RANGE_DAYS:
        raise ValueError(f"[dashboard].lookback_days must be an integer from 1 to {MAX_RANGE_DAYS}")
    if dashboard["rows_per_page"] not in ROWS_PER_PAGE_OPTIONS:
        raise ValueError(
            f"[dashboard].rows_per_page must be one of {', '.join(map(str, ROWS_PER_PAGE_OPTIONS))}"
        )
    if dashboard["chart_type"] not in CHART_TYPES:
        raise ValueError(f"[dashboard].chart_type must be one of {', '.join(CHART_TYPES)}")

    api = config["api"]
    if not isinstance(api["archive_url"], str) or not api["archive_url"]:
        raise ValueError("[api].archive_url must be a non-empty string")
    timeout = api["timeout"]
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("[api].timeout must be a positive number")

    if not isinstance(config["log"]["path"], str) or not config["log"]["path"]:
        raise ValueError("[log].path must be a non-empty string")
