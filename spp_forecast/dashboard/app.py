"""
Dashboard - Streamlit page

Forecast vs actuals chart, summary cards and the 96-interval table for one
selectable day. Reads everything from the forecast API.

Run with ``spp-forecast-dashboard`` or ``streamlit run spp_forecast/dashboard/app.py``.
"""

from typing import Any, Dict, List, Tuple

import plotly.graph_objects as go
import streamlit as st

from spp_forecast.dashboard.client import DashboardApiError, ForecastApiClient
from spp_forecast.dashboard.view_model import (
    actuals_caption,
    backtest_rows,
    chart_frame,
    date_options,
    default_date_index,
    interval_table,
    stat_rows,
)
from spp_forecast.main.config import DashboardSettings

FORECAST_COLOR = "#f5a623"
ACTUAL_COLOR = "rgba(74,163,255,0.9)"


def _client() -> ForecastApiClient:
    settings = DashboardSettings()
    return ForecastApiClient(settings.api_base_url, timeout=settings.request_timeout)


@st.cache_data(ttl=DashboardSettings().refresh_seconds, show_spinner=False)
def load_forecast(day: str) -> Dict[str, Any]:
    return _client().forecast(day)


@st.cache_data(ttl=300, show_spinner=False)
def load_dates() -> Dict[str, Any]:
    return _client().selectable_dates()


def _stat_card(title: str, caption: str, rows: List[Tuple[str, str]]) -> None:
    st.markdown(f"**{title}**")
    if caption:
        st.caption(caption)
    for label, value in rows:
        left, right = st.columns([1, 1])
        left.write(label)
        right.markdown(f"`{value}`")


def forecast_figure(payload: Dict[str, Any]) -> go.Figure:
    frame = chart_frame(payload)
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["time"],
            y=frame["forecast"],
            mode="lines",
            name="forecast",
            line=dict(color=FORECAST_COLOR),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=frame["time"],
            y=frame["actual"],
            mode="lines",
            name="actual",
            line=dict(color=ACTUAL_COLOR),
            connectgaps=False,
        )
    )
    fig.update_layout(
        xaxis_title="Interval start",
        yaxis_title="$/MWh",
        hovermode="x unified",
        margin=dict(l=10, r=10, t=10, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render() -> None:
    st.set_page_config(
        page_title="ERCOT 15-Minute Forecast", page_icon="⚡", layout="wide"
    )
    st.title("ERCOT 15-Minute Forecast")
    st.markdown(
        "NP6-905-CD settlement point prices. The forecast is a seasonal "
        "baseline from recent history."
    )

    try:
        dates = load_dates()
    except DashboardApiError as exc:
        st.error(exc.message)
        st.stop()

    options = date_options(dates)
    if not options:
        st.warning("No selectable dates returned by the forecast API.")
        st.stop()

    selected = st.radio(
        f"Date ({dates['min']} to {dates['max']})",
        options,
        index=default_date_index(options, str(dates.get("today", ""))),
        format_func=lambda option: option.caption,
        horizontal=True,
    )

    with st.spinner("Loading…"):
        try:
            data = load_forecast(selected.value)
        except DashboardApiError as exc:
            st.error(exc.message)
            st.stop()

    st.caption(f"Region: {data['settlement_point']} • Mode: {data['data_mode']}")

    forecast_col, actuals_col, backtest_col = st.columns(3)
    with forecast_col:
        _stat_card("Forecast stats", "", stat_rows(data["stats"]["forecast"]))
    with actuals_col:
        _stat_card("Actuals", actuals_caption(data), stat_rows(data["stats"]["actuals"]))
    with backtest_col:
        _stat_card(
            "Backtest",
            f"{data['backtest']['date']} • actuals vs seasonal baseline",
            backtest_rows(data["backtest"]),
        )

    st.subheader("Forecast vs Actuals")
    st.caption(
        f"Actuals are the same weekday from last week ({data['actuals']['date']})."
    )
    st.plotly_chart(forecast_figure(data), use_container_width=True)

    st.subheader("96 intervals")
    st.dataframe(interval_table(data), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    render()
