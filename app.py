"""
GFMAM Society Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import asyncio
import sys
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go

sys.path.insert(0, str(Path(__file__).resolve().parent))

from gfmam_dashboard.config import (
    KPI_REGISTRY,
    SCALE_MAX,
    SERIES_COLORS,
    SHEET_URL,
    SPIDER_CHART_ID,
    chart_kpis,
)
from gfmam_dashboard.dashboard import DashboardSession, kpi_tooltip
from gfmam_dashboard.loaders import fetch_csv_text, normalize_csv
from gfmam_dashboard.simulator import generate_society_csv

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="GFMAM Society Dashboard",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ---------------------------------------------------------------------------
# Data loading (cached)
# ---------------------------------------------------------------------------
@st.cache_data(ttl=300)
def load_csv_text(use_simulated: bool) -> str:
    if use_simulated:
        return generate_society_csv()
    return asyncio.run(fetch_csv_text(SHEET_URL))


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("GFMAM")
st.sidebar.markdown("Society KPI Dashboard")
st.sidebar.divider()

use_simulated = st.sidebar.toggle("Use simulated data", value=False)
if st.sidebar.button("Refresh data"):
    load_csv_text.clear()

session = DashboardSession(normalize_csv(load_csv_text(use_simulated), extended=True))

if session.is_empty:
    st.error("No data fetched to initialize dashboard.")
    st.stop()

selected = st.sidebar.multiselect(
    "Select societies to compare...",
    session.entity_names(),
)

st.sidebar.divider()
st.sidebar.caption("Data: GFMAM member societies (published Google Sheet)")


# ---------------------------------------------------------------------------
# KPI cards
# ---------------------------------------------------------------------------
st.title("Society KPIs")

cards = session.kpi_cards()
cols = st.columns(4)
for i, card in enumerate(cards):
    with cols[i % 4]:
        st.metric(card["title"], card["display"], help=card["tooltip"])

st.divider()


# ---------------------------------------------------------------------------
# Bar charts with average line
# ---------------------------------------------------------------------------
st.subheader("Comparison")

series_by_kpi = session.chart_series(selected)
chart_cols = st.columns(2)

for i, kpi in enumerate(chart_kpis()):
    series = series_by_kpi[kpi.id]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=series.labels,
        y=series.values,
        name=kpi.title,
        marker_color=[SERIES_COLORS[c] for c in series.color_classes],
    ))
    fig.add_trace(go.Scatter(
        x=series.labels,
        y=series.baseline,
        name="Average",
        mode="lines",
        line=dict(color=SERIES_COLORS["baseline"], width=2, dash="dash"),
    ))
    fig.update_layout(
        title=f"{kpi.title}<br><sup>{kpi.unit}</sup>",
        yaxis=dict(rangemode="tozero"),
        height=380,
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=60, b=40),
    )
    with chart_cols[i % 2]:
        st.plotly_chart(fig, use_container_width=True)


# ---------------------------------------------------------------------------
# Radar chart
# ---------------------------------------------------------------------------
radar_meta = next(k for k in KPI_REGISTRY if k.id == SPIDER_CHART_ID)
st.subheader(radar_meta.title, help=kpi_tooltip(SPIDER_CHART_ID))

org = st.selectbox("Organization", session.entity_names())
radar = session.radar(org)

if radar is not None:
    fig = go.Figure(go.Scatterpolar(
        r=radar.values + radar.values[:1],
        theta=radar.labels + radar.labels[:1],
        fill="toself",
        fillcolor=SERIES_COLORS["radar_fill"],
        line=dict(color=SERIES_COLORS["baseline"], width=2),
        marker=dict(color=SERIES_COLORS["above"]),
        name=radar.entity,
    ))
    fig.update_layout(
        polar=dict(radialaxis=dict(range=[0, SCALE_MAX], dtick=1)),
        showlegend=False,
        height=500,
    )
    st.plotly_chart(fig, use_container_width=True)
