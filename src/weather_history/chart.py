# Project: weather-history
# Owner: GreenUnicorn
"""
chart.py — Plotly figures for the temperature trend tabs.

Figures are built here rather than in app.py so they can be unit tested
without a running Streamlit server.
"""

import plotly.graph_objects as go

from weather_history.utils import fmt_short_date

CHART_TYPES = ("line", "area")

# Per-series display label and colour
SERIES: dict[str, dict[str, str]] = {
    "temperature_2m_max":        {"label": "Max Temp",      "color": "#ef4444"},
    "temperature_2m_min":        {"label": "Min Temp",      "color": "#3b82f6"},
    "temperature_2m_mean":       {"label": "Mean Temp",     "color": "#10b981"},
    "apparent_temperature_max":  {"label": "Max Apparent",  "color": "#f59e0b"},
    "apparent_temperature_min":  {"label": "Min Apparent",  "color": "#8b5cf6"},
    "apparent_temperature_mean": {"label": "Mean Apparent", "color": "#06b6d4"},
}

# Tab name -> (chart title, fields plotted)
CHART_VIEWS: dict[str, tuple[str, list[str]]] = {
    "Temperature": (
        "Temperature Trends",
        ["temperature_2m_max", "temperature_2m_min", "temperature_2m_mean"],
    ),
    "Apparent Temperature": (
        "Apparent Temperature Trends",
        ["apparent_temperature_max", "apparent_temperature_min", "apparent_temperature_mean"],
    ),
    "All Data": (
        "All Temperature Data",
        list(SERIES),
    ),
}

PLOTLY_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(family="-apple-system, BlinkMacSystemFont, 'SF Pro Display', sans-serif",
              color="#8e8e93", size=12),
    margin=dict(l=8, r=8, t=40, b=8),
    legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(color="#8e8e93"), orientation="h"),
    xaxis=dict(showgrid=False, zeroline=False, tickfont=dict(color="#636366")),
    yaxis=dict(gridcolor="#2c2c2e", zeroline=False, tickfont=dict(color="#636366")),
)


def _rgba(hex_color: str, alpha: float) -> str:
    """Convert '#rrggbb' to an rgba() string with the given opacity."""
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r},{g},{b},{alpha})"


def build_chart(
    dataset: dict,
    fields: list[str],
    title: str,
    chart_type: str = "line",
    height: int = 400,
) -> go.Figure:
    """Build a multi-series temperature chart.

    Args:
        dataset: Archive payload with 'daily' and 'daily_units'.
        fields: Keys of SERIES to plot, in legend order.
        title: Chart title.
        chart_type: 'line' for lines with markers, 'area' for filled areas.
        height: Figure height in pixels.

    Returns:
        A plotly Figure with one trace per field.

    Raises:
        ValueError: If chart_type is not one of CHART_TYPES.
    """
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type: {chart_type!r}")

    daily = dataset["daily"]
    labels = [fmt_short_date(d) for d in daily["time"]]
    unit = dataset.get("daily_units", {}).get("temperature_2m_max", "")

    fig = go.Figure()
    for name in fields:
        style = SERIES[name]
        if chart_type == "line":
            fig.add_trace(go.Scatter(
                x=labels, y=daily[name],
                name=style["label"],
                mode="lines+markers",
                line=dict(color=style["color"], width=2),
                marker=dict(color=style["color"], size=5),
            ))
        else:
            fig.add_trace(go.Scatter(
                x=labels, y=daily[name],
                name=style["label"],
                mode="lines",
                line=dict(color=style["color"], width=2),
                fill="tozeroy",
                fillcolor=_rgba(style["color"], 0.3),
            ))

    fig.update_layout(
        **PLOTLY_LAYOUT,
        height=height,
        hovermode="x unified",
    )
    fig.update_layout(
        title=dict(text=title, font=dict(color="#8e8e93", size=13)),
        yaxis=dict(**PLOTLY_LAYOUT["yaxis"], ticksuffix=unit),
    )
    return fig
