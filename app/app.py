# Project: weather-history
# Owner: GreenUnicorn
"""
app.py — Streamlit historical temperature dashboard with Apple-inspired dark UI.

Run with: streamlit run app/app.py
Requires: pip install -e ".[ui]"
Data source: ERA5 reanalysis via Open-Meteo Historical Weather API (free, no key).
"""

import sys
from datetime import date
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import streamlit as st

from weather_history.analysis import summary_stats
from weather_history.chart import CHART_TYPES, CHART_VIEWS, build_chart
from weather_history.config import load_dashboard_config
from weather_history.pipeline import DashboardState, default_date_range, fetch_weather
from weather_history.table import (
    COLUMNS,
    ROWS_PER_PAGE_OPTIONS,
    csv_filename,
    format_temperature,
    paginate,
    table_rows,
    to_csv,
)
from weather_history.utils import fmt_period_date
from weather_history.validation import (
    MIN_DATE,
    accept_latitude_edit,
    accept_longitude_edit,
    validate_date_range,
    validate_latitude,
    validate_longitude,
)


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Weather History",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection
# ─────────────────────────────────────────────────────────────

CUSTOM_CSS = """
<style>
  /* ── Reset Streamlit chrome ── */
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 1200px; }

  /* ── Typography & base ── */
  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }

  /* ── Text inputs ── */
  .stTextInput > div > div > input {
    background: #1c1c1e !important;
    border: 1px solid #3a3a3c !important;
    border-radius: 12px !important;
    color: #f5f5f7 !important;
    font-size: 1rem !important;
  }
  .stTextInput > div > div > input:focus {
    border-color: #0a84ff !important;
    box-shadow: 0 0 0 3px rgba(10,132,255,0.2) !important;
  }

  /* ── Primary button ── */
  .stButton > button, .stDownloadButton > button {
    background: #0a84ff !important;
    color: #ffffff !important;
    border: none !important;
    border-radius: 980px !important;
    font-weight: 600 !important;
    letter-spacing: -0.01em;
    transition: opacity 0.15s ease;
  }
  .stButton > button:hover { opacity: 0.85; }
  .stButton > button:disabled { background: #3a3a3c !important; color: #8e8e93 !important; }

  /* ── Cards ── */
  .wa-card {
    background: #1c1c1e;
    border: 1px solid #2c2c2e;
    border-radius: 16px;
    padding: 28px 32px;
    margin-bottom: 1.5rem;
  }
  .banner-card {
    background: linear-gradient(90deg, #0a84ff 0%, #5e5ce6 100%);
    border-radius: 16px;
    padding: 24px 32px;
    margin: 1rem 0 1.5rem;
    color: #ffffff;
  }
  .banner-title { font-size: 1.5rem; font-weight: 700; letter-spacing: -0.02em; }
  .banner-line  { color: rgba(255,255,255,0.8); font-size: 0.95rem; }
  .banner-badge {
    float: right;
    background: rgba(255,255,255,0.2);
    border: 1px solid rgba(255,255,255,0.3);
    border-radius: 980px;
    padding: 4px 14px;
    font-size: 0.85rem;
  }

  /* ── Stat pills ── */
  .stat-pill {
    background: #2c2c2e;
    border-radius: 12px;
    padding: 14px 18px;
    display: inline-block;
    width: 100%;
  }
  .stat-label {
    font-size: 0.68rem;
    text-transform: uppercase;
    letter-spacing: 0.08em;
    color: #8e8e93;
    font-weight: 500;
  }
  .stat-value {
    font-size: 1.6rem;
    font-weight: 700;
    letter-spacing: -0.03em;
    color: #f5f5f7;
    line-height: 1.2;
  }
  .stat-unit {
    font-size: 0.8rem;
    color: #8e8e93;
    font-weight: 400;
  }

  /* ── Field hints ── */
  .field-hint  { font-size: 0.75rem; color: #636366; margin-top: -0.5rem; }
  .field-error { font-size: 0.75rem; color: #ff453a; }

  /* ── Error card ── */
  .error-card {
    background: rgba(255, 69, 58, 0.1);
    border: 1px solid rgba(255, 69, 58, 0.3);
    border-radius: 12px;
    color: #ff453a;
    font-size: 1rem;
    padding: 20px 24px;
    text-align: center;
    margin: 1rem 0;
  }

  /* ── Section heading ── */
  .section-label {
    font-size: 0.72rem;
    text-transform: uppercase;
    letter-spacing: 0.1em;
    color: #636366;
    font-weight: 600;
    margin: 1.5rem 0 0.75rem;
  }

  /* ── Data table ── */
  .wa-table { width: 100%; border-collapse: collapse; font-size: 0.9rem; }
  .wa-table th {
    font-size: 0.65rem;
    text-transform: uppercase;
    letter-spacing: 0.1em;
    color: #636366;
    font-weight: 600;
    padding: 8px 12px;
    text-align: center;
    border-bottom: 1px solid #2c2c2e;
  }
  .wa-table th:first-child { text-align: left; }
  .wa-table td {
    padding: 10px 12px;
    color: #f5f5f7;
    text-align: center;
    border-bottom: 1px solid #1c1c1e;
    font-variant-numeric: tabular-nums;
  }
  .wa-table td:first-child { text-align: left; font-weight: 500; }
  .wa-table tr:hover td { background: #2c2c2e; }

  .page-info { color: #8e8e93; font-size: 0.85rem; padding-top: 0.5rem; }

  /* ── Footer ── */
  .wa-footer {
    text-align: center;
    color: #48484a;
    font-size: 0.8rem;
    padding: 3rem 0 1rem;
    letter-spacing: -0.005em;
  }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────

def stat_html(label: str, value: str, unit: str = "") -> str:
    """Render a stat pill as HTML."""
    return f"""
    <div class="stat-pill">
      <div class="stat-label">{label}</div>
      <div class="stat-value">{value}<span class="stat-unit"> {unit}</span></div>
    </div>
    """


def _fmt_stat(value: float | None) -> str:
    return "—" if value is None else f"{value:.1f}"


# ─────────────────────────────────────────────────────────────
# Session state initialisation
# ─────────────────────────────────────────────────────────────

CONFIG, CONFIG_PROBLEM = load_dashboard_config()

if "dashboard" not in st.session_state:
    start, end = default_date_range(lookback_days=CONFIG["dashboard"]["lookback_days"])
    st.session_state.dashboard = DashboardState(
        latitude=str(CONFIG["location"]["latitude"]),
        longitude=str(CONFIG["location"]["longitude"]),
        start_date=start,
        end_date=end,
        chart_type=CONFIG["dashboard"]["chart_type"],
        rows_per_page=CONFIG["dashboard"]["rows_per_page"],
    )
    st.session_state.latitude_input = st.session_state.dashboard.latitude
    st.session_state.longitude_input = st.session_state.dashboard.longitude
    st.session_state.date_range_input = (start, end)
    st.session_state.chart_type_input = st.session_state.dashboard.chart_type
    st.session_state.rows_per_page_input = st.session_state.dashboard.rows_per_page

state: DashboardState = st.session_state.dashboard


def _filter_latitude() -> None:
    """Keep the edit if it is a plausible in-progress latitude, else revert."""
    text = st.session_state.latitude_input
    if accept_latitude_edit(text):
        state.latitude = text
    else:
        st.session_state.latitude_input = state.latitude


def _filter_longitude() -> None:
    text = st.session_state.longitude_input
    if accept_longitude_edit(text):
        state.longitude = text
    else:
        st.session_state.longitude_input = state.longitude


def _set_rows_per_page() -> None:
    state.rows_per_page = st.session_state.rows_per_page_input
    state.table_page = 1


def _go_to_page(page: int) -> None:
    state.table_page = page


def _run_fetch(force: bool = False) -> None:
    before = state.last_fetch_key
    fetch_weather(
        state,
        force=force,
        url=CONFIG["api"]["archive_url"],
        timeout=CONFIG["api"]["timeout"],
        log_path=Path(CONFIG["log"]["path"]),
    )
    if force or state.last_fetch_key != before:
        state.table_page = 1


# ─────────────────────────────────────────────────────────────
# SECTION 1: Header + input form
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<h1 style="text-align:center;font-size:2.4rem;font-weight:700;'
    'letter-spacing:-0.03em;margin-bottom:0.25rem;">📈 Weather History Dashboard</h1>'
    '<div style="text-align:center;color:#8e8e93;margin-bottom:2rem;">'
    "Explore historical weather patterns with interactive charts and detailed data analysis"
    "</div>",
    unsafe_allow_html=True,
)

st.markdown('<div class="section-label">📍 Location & Date Selection</div>', unsafe_allow_html=True)

lat_col, lon_col, date_col = st.columns([1, 1, 2])

with lat_col:
    st.text_input(
        "Latitude",
        placeholder="e.g., 40.7128",
        key="latitude_input",
        on_change=_filter_latitude,
    )
    st.markdown('<div class="field-hint">Range: -90 to 90</div>', unsafe_allow_html=True)
    if state.latitude and not validate_latitude(state.latitude):
        st.markdown('<div class="field-error">Invalid latitude</div>', unsafe_allow_html=True)

with lon_col:
    st.text_input(
        "Longitude",
        placeholder="e.g., -74.0060",
        key="longitude_input",
        on_change=_filter_longitude,
    )
    st.markdown('<div class="field-hint">Range: -180 to 180</div>', unsafe_allow_html=True)
    if state.longitude and not validate_longitude(state.longitude):
        st.markdown('<div class="field-error">Invalid longitude</div>', unsafe_allow_html=True)

with date_col:
    picked = st.date_input(
        "Date Range",
        key="date_range_input",
        min_value=MIN_DATE,
        max_value=date.today(),
        format="YYYY-MM-DD",
    )
    # Mid-selection the widget returns a 1-tuple
    picked = tuple(picked) if isinstance(picked, (tuple, list)) else (picked,)
    state.start_date = picked[0] if len(picked) > 0 else None
    state.end_date = picked[1] if len(picked) > 1 else None
    st.markdown('<div class="field-hint">Maximum range: 1 year</div>', unsafe_allow_html=True)
    if state.start_date and state.end_date and not validate_date_range(state.start_date, state.end_date):
        st.markdown('<div class="field-error">Invalid date range</div>', unsafe_allow_html=True)

_, btn_col, refresh_col, _ = st.columns([2, 1, 1, 2])
with btn_col:
    fetch_clicked = st.button(
        "Fetch Weather Data",
        use_container_width=True,
        disabled=state.loading or not state.can_submit(),
    )
with refresh_col:
    refresh_clicked = st.button(
        "Refresh",
        use_container_width=True,
        disabled=state.loading or not state.can_submit(),
        help="Fetch again even if the inputs have not changed",
    )

if fetch_clicked or refresh_clicked:
    with st.spinner("Fetching Data..."):
        _run_fetch(force=refresh_clicked)

if CONFIG_PROBLEM:
    st.markdown(
        f'<div class="error-card">⚠️ {CONFIG_PROBLEM}. Using default settings.</div>',
        unsafe_allow_html=True,
    )

if state.error:
    st.markdown(
        f'<div class="error-card">⚠️ {state.error}</div>',
        unsafe_allow_html=True,
    )


# ─────────────────────────────────────────────────────────────
# SECTION 2: Results
# ─────────────────────────────────────────────────────────────

if state.dataset is not None:
    data = state.dataset
    units = data.get("daily_units", {})
    times = data["daily"]["time"]
    first_day = date.fromisoformat(times[0])
    last_day = date.fromisoformat(times[-1])

    # ── Location banner
    st.markdown(
        f'<div class="banner-card">'
        f'<span class="banner-badge">{len(times)} days of data</span>'
        f'<div class="banner-title">Weather Data Retrieved</div>'
        f'<div class="banner-line">Location: {state.location_label()}'
        f' &nbsp;•&nbsp; Timezone: {data.get("timezone", "—")}</div>'
        f'<div class="banner-line">Period: {fmt_period_date(first_day)} - {fmt_period_date(last_day)}</div>'
        f"</div>",
        unsafe_allow_html=True,
    )

    # ── Stat pills
    stats = summary_stats(data)
    if stats:
        pills = [
            ("Highest Temperature", _fmt_stat(stats["highest_temp"]), units.get("temperature_2m_max", "")),
            ("Lowest Temperature", _fmt_stat(stats["lowest_temp"]), units.get("temperature_2m_min", "")),
            ("Average Temperature", _fmt_stat(stats["avg_temp"]), units.get("temperature_2m_mean", "")),
            (
                f"Temperature Range · {stats['total_days']} days",
                _fmt_stat(stats["temp_range"]),
                units.get("temperature_2m_max", ""),
            ),
        ]
        for col, (label, value, unit) in zip(st.columns(4), pills):
            with col:
                st.markdown(stat_html(label, value, unit), unsafe_allow_html=True)

    # ── Chart
    st.markdown('<div class="section-label">Weather Trends</div>', unsafe_allow_html=True)
    state.chart_type = st.radio(
        "Chart Type",
        options=list(CHART_TYPES),
        key="chart_type_input",
        format_func=str.title,
        horizontal=True,
    )
    for tab, (title, fields) in zip(st.tabs(list(CHART_VIEWS)), CHART_VIEWS.values()):
        with tab:
            fig = build_chart(data, fields, title, chart_type=state.chart_type)
            st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    # ── Table
    st.markdown('<div class="section-label">Detailed Weather Data</div>', unsafe_allow_html=True)
    rows = table_rows(data)

    ctrl_l, ctrl_c, ctrl_r = st.columns([1, 2, 1])
    with ctrl_l:
        st.selectbox(
            "Rows per page",
            options=list(ROWS_PER_PAGE_OPTIONS),
            key="rows_per_page_input",
            on_change=_set_rows_per_page,
        )
    with ctrl_c:
        st.markdown(f'<div class="page-info">{len(rows)} total records</div>', unsafe_allow_html=True)
    with ctrl_r:
        st.download_button(
            "Export CSV",
            data=to_csv(data),
            file_name=csv_filename(data),
            mime="text/csv",
            use_container_width=True,
        )

    page = paginate(rows, state.table_page, state.rows_per_page)
    state.table_page = page["page"]

    header_cells = "".join(
        f"<th>{label}<br><span style='text-transform:none'>({units.get(name, '')})</span></th>"
        for name, label in COLUMNS
    )
    table_html = f'<table class="wa-table"><thead><tr><th>Date</th>{header_cells}</tr></thead><tbody>'
    for row in page["rows"]:
        cells = "".join(
            f"<td>{format_temperature(row[name], units.get(name, ''))}</td>"
            for name, _ in COLUMNS
        )
        table_html += f"<tr><td>{row['formatted_date']}</td>{cells}</tr>"
    table_html += "</tbody></table>"

    st.markdown('<div class="wa-card">', unsafe_allow_html=True)
    st.markdown(table_html, unsafe_allow_html=True)
    st.markdown("</div>", unsafe_allow_html=True)

    # ── Pagination
    info_col, first_col, prev_col, label_col, next_col, last_col = st.columns([3, 1, 1, 2, 1, 1])
    with info_col:
        st.markdown(
            f'<div class="page-info">Showing {page["first"]} to {page["last"]} '
            f'of {page["total"]} entries</div>',
            unsafe_allow_html=True,
        )
    on_first = page["page"] == 1
    on_last = page["page"] == page["total_pages"]
    with first_col:
        st.button("«", key="page_first", disabled=on_first,
                  on_click=_go_to_page, args=(1,), help="First page")
    with prev_col:
        st.button("‹", key="page_prev", disabled=on_first,
                  on_click=_go_to_page, args=(page["page"] - 1,), help="Previous page")
    with label_col:
        st.markdown(
            f'<div class="page-info" style="text-align:center">'
            f'Page {page["page"]} of {page["total_pages"]}</div>',
            unsafe_allow_html=True,
        )
    with next_col:
        st.button("›", key="page_next", disabled=on_last,
                  on_click=_go_to_page, args=(page["page"] + 1,), help="Next page")
    with last_col:
        st.button("»", key="page_last", disabled=on_last,
                  on_click=_go_to_page, args=(page["total_pages"],), help="Last page")


# ─────────────────────────────────────────────────────────────
# Footer
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<div class="wa-footer">'
    'Powered by <a href="https://open-meteo.com" style="color:#0a84ff;text-decoration:none;">Open-Meteo</a>'
    " Historical Weather API &nbsp;·&nbsp; ERA5 reanalysis &nbsp;·&nbsp; No API key required"
    "</div>",
    unsafe_allow_html=True,
)
