"""
test_config.py — Tests for config loading and validation.

We write a temporary TOML file in each test so we don't depend on
a real config.toml existing in the project.
"""

import pytest
from weather_history.config import (
    DEFAULT_CONFIG,
    load_config,
    load_config_or_default,
    load_dashboard_config,
)


VALID_TOML = """
[location]
latitude = 51.5074
longitude = -0.1278

[dashboard]
lookback_days = 90
rows_per_page = 20
chart_type = "area"

[api]
timeout = 15

[log]
path = "logs/custom.log"
"""


def test_load_valid_config(tmp_path):
    """A valid config file should load and override the defaults."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(VALID_TOML)

    config = load_config(config_file)

    assert config["location"]["latitude"] == 51.5074
    assert config["dashboard"]["rows_per_page"] == 20
    assert config["dashboard"]["chart_type"] == "area"
    assert config["api"]["timeout"] == 15
    # untouched keys keep their defaults
    assert config["api"]["archive_url"] == DEFAULT_CONFIG["api"]["archive_url"]


def test_partial_config_fills_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[dashboard]\nlookback_days = 7\n")

    config = load_config(config_file)

    assert config["dashboard"]["lookback_days"] == 7
    assert config["dashboard"]["rows_per_page"] == 10
    assert config["location"] == DEFAULT_CONFIG["location"]


def test_missing_file_raises(tmp_path):
    """A missing config file should raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nonexistent.toml")


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = load_config_or_default(tmp_path / "nonexistent.toml")
    assert config == DEFAULT_CONFIG
    config["location"]["latitude"] = 0.0
    assert DEFAULT_CONFIG["location"]["latitude"] == 40.7128


def test_unknown_section_raises(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[alerts]\nwind = 3\n")

    with pytest.raises(ValueError, match="Unknown config section"):
        load_config(config_file)


@pytest.mark.parametrize("toml_text, match", [
    ("[location]\nlatitude = 95.0\n", "latitude"),
    ("[location]\nlongitude = -200\n", "longitude"),
    ("[location]\nlatitude = \"north\"\n", "latitude"),
    ("[dashboard]\nlookback_days = 400\n", "lookback_days"),
    ("[dashboard]\nlookback_days = 0\n", "lookback_days"),
    ("[dashboard]\nrows_per_page = 15\n", "rows_per_page"),
    ("[dashboard]\nchart_type = \"pie\"\n", "chart_type"),
    ("[api]\ntimeout = 0\n", "timeout"),
    ("[api]\narchive_url = \"\"\n", "archive_url"),
    ("[log]\npath = \"\"\n", "path"),
])
def test_invalid_values_raise(tmp_path, toml_text, match):
    config_file = tmp_path / "config.toml"
    config_file.write_text(toml_text)

    with pytest.raises(ValueError, match=match):
        load_config(config_file)


def test_invalid_file_is_not_masked_by_fallback(tmp_path):
    """load_config_or_default only tolerates a missing file, not a bad one."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("[dashboard]\nrows_per_page = 15\n")

    with pytest.raises(ValueError):
        load_config_or_default(config_file)


def test_dashboard_config_survives_invalid_file(tmp_path):
    """A bad value should fall back to defaults and report the problem."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("[dashboard]\nrows_per_page = 15\n")
    log_path = tmp_path / "weather_history.log"

    config, problem = load_dashboard_config(config_file, log_path=log_path)

    assert config == DEFAULT_CONFIG
    assert "rows_per_page" in problem
    assert "rows_per_page" in log_path.read_text()


def test_dashboard_config_survives_malformed_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[location\nlatitude = \n")

    config, problem = load_dashboard_config(config_file, log_path=tmp_path / "x.log")

    assert config == DEFAULT_CONFIG
    assert problem is not None


def test_dashboard_config_valid_file_has_no_problem(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text(VALID_TOML)

    config, problem = load_dashboard_config(config_file, log_path=tmp_path / "x.log")

    assert problem is None
    assert config["dashboard"]["chart_type"] == "area"
