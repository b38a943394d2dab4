from __future__ import annotations

from typing import Tuple

import streamlit as st

from config import ChartConfig, Variant
from simulator import TemperatureSimulator


def render_sidebar(chart: ChartConfig) -> Tuple[Variant, int, int]:
    st.sidebar.header("Settings")
    variant = st.sidebar.radio(
        "Behaviour",
        options=[Variant.A, Variant.B],
        format_func=lambda v: {
            Variant.A: "A: regime walk, 30/35°C thresholds, smoothed",
            Variant.B: "B: uniform walk, 0/35/40°C thresholds, straight",
        }[v],
        key="variant",
    )
    width = st.sidebar.number_input("Chart width (px)", min_value=400, max_value=2000, value=chart.width, step=50)
    height = st.sidebar.number_input("Chart height (px)", min_value=250, max_value=1200, value=chart.height, step=50)
    return variant, int(width), int(height)


def render_controls(sim: TemperatureSimulator) -> None:
    st.subheader("Controls")
    col_start, col_stop, col_reset = st.columns(3)
    with col_start:
        if st.button("Start", disabled=sim.running, use_container_width=True):
            sim.start()
            st.rerun()
    with col_stop:
        if st.button("Stop", disabled=not sim.running, use_container_width=True):
            sim.stop()
            st.rerun()
    with col_reset:
        if st.button("Reset", type="primary", use_container_width=True):
            sim.reset()
            st.rerun()
    st.download_button(
        "Download data CSV",
        data=sim.export_csv(),
        file_name="temperature_data.csv",
        mime="text/csv",
        use_container_width=True,
    )
