# Project: weather-history
# Owner: GreenUnicorn
"""Tests for chart.py — figure construction (no rendering)."""

import pytest

from weather_history.chart import CHART_VIEWS, SERIES, _rgba, build_chart


DATASET = {
    "daily_units": {name: "°C" for name in SERIES},
    "daily": {
        "time": ["2024-01-15", "2024-01-16"],
        "temperature_2m_max":        [4.0,  5.0],
        "temperature_2m_min":        [-1.0, None],
        "temperature_2m_mean":       [1.5,  2.5],
        "apparent_temperature_max":  [1.0,  2.0],
        "apparent_temperature_min":  [-4.0, -3.0],
        "apparent_temperature_mean": [-1.5, -0.5],
    },
}


def test_views_cover_expected_series():
    assert len(CHART_VIEWS["Temperature"][1]) == 3
    assert len(CHART_VIEWS["Apparent Temperature"][1]) == 3
    assert CHART_VIEWS["All Data"][1] == list(SERIES)


@pytest.mark.parametrize("view", list(CHART_VIEWS))
def test_one_trace_per_field(view):
    title, fields = CHART_VIEWS[view]
    fig = build_chart(DATASET, fields, title)
    assert len(fig.data) == len(fields)
    assert [t.name for t in fig.data] == [SERIES[f]["label"] for f in fields]


def test_x_axis_uses_short_dates():
    fig = build_chart(DATASET, ["temperature_2m_max"], "t")
    assert list(fig.data[0].x) == ["Jan 15", "Jan 16"]


def test_none_values_passed_through_as_gaps():
    fig = build_chart(DATASET, ["temperature_2m_min"], "t")
    assert list(fig.data[0].y) == [-1.0, None]


def test_line_chart_has_markers_and_no_fill():
    fig = build_chart(DATASET, ["temperature_2m_max"], "t", chart_type="line")
    trace = fig.data[0]
    assert trace.mode == "lines+markers"
    assert trace.fill is None


def test_area_chart_fills_with_series_colour():
    fig = build_chart(DATASET, ["temperature_2m_max"], "t", chart_type="area")
    trace = fig.data[0]
    assert trace.fill == "tozeroy"
    assert trace.fillcolor == "rgba(239,68,68,0.3)"


def test_title_and_unit_suffix():
    fig = build_chart(DATASET, ["temperature_2m_max"], "Temperature Trends")
    assert fig.layout.title.text == "Temperature Trends"
    assert fig.layout.yaxis.ticksuffix == "°C"


def test_unknown_chart_type_raises():
    with pytest.raises(ValueError, match="Unknown chart type"):
        build_chart(DATASET, ["temperature_2m_max"], "t", chart_type="bar")


def test_rgba_conversion():
    assert _rgba("#3b82f6", 0.5) == "rgba(59,130,246,0.5)"
