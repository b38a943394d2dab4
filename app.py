from __future__ import annotations

import functools
import logging
import time
from typing import Optional

import streamlit as st

from charts import build_temperature_figure
from config import Variant, load_config
from constants import ERROR_NOTICE_SECONDS, LOG_LEVEL, POLL_TOLERANCE_S
from controls import render_controls, render_sidebar
from scheduler import PolledTimer
from simulator import DisplayState, TemperatureSimulator
from utils.logging import setup_logging

logger = logging.getLogger(__name__)

_INDICATOR_STYLES = {
    "normal": "background:#E8F5E9;color:#2E7D32;",
    "warning": "background:#FFF8E1;color:#F57F17;",
    "danger": "background:#FFEBEE;color:#C62828;",
}


def show_transient_error(message: str, seconds: float = ERROR_NOTICE_SECONDS) -> None:
    slot = st.empty()
    slot.error(message)
    time.sleep(seconds)
    slot.empty()


def get_simulator(variant: Variant) -> TemperatureSimulator:
    sim: Optional[TemperatureSimulator] = st.session_state.get("simulator")
    if sim is not None and sim.config.variant == variant:
        return sim
    if sim is not None:
        sim.stop()
    # Ticks only happen when this session's live panel polls, so an
    # abandoned session leaves no timer thread behind.
    sim = TemperatureSimulator(
        load_config(variant),
        timer_factory=functools.partial(PolledTimer, tolerance=POLL_TOLERANCE_S),
    )
    st.session_state["simulator"] = sim
    st.session_state["started"] = False
    return sim


def _render_readout(state: DisplayState) -> None:
    col_value, col_status = st.columns(2)
    with col_value:
        st.caption("Current temperature")
        st.markdown(
            f"<span style='color:{state.value_color};font-size:2.5rem;font-weight:700'>"
            f"{state.value_text} °C</span>",
            unsafe_allow_html=True,
        )
    with col_status:
        st.caption("Status")
        style = _INDICATOR_STYLES[state.indicator]
        st.markdown(
            f"<span class='status-indicator {state.indicator}' "
            f"style='{style}padding:6px 14px;border-radius:12px;font-weight:600'>"
            f"<span style='color:{state.status_color}'>●</span> {state.status_text}</span>",
            unsafe_allow_html=True,
        )


def render_live_panel(sim: TemperatureSimulator, width: int, height: int) -> None:
    interval = sim.config.series.update_interval_ms / 1000 if sim.running else None

    @st.fragment(run_every=interval)
    def _panel() -> None:
        sim.poll()
        samples, current = sim.view()
        fig = build_temperature_figure(samples, current, sim.config, width=width, height=height)
        if fig is None:
            st.warning("Chart could not be drawn; showing nothing this cycle.")
            return
        _render_readout(sim.display_state())
        st.plotly_chart(fig, use_container_width=False, config={"displayModeBar": False})

    _panel()


def main() -> None:
    st.set_page_config(page_title="Temperature Simulator", page_icon="🌡️", layout="wide")
    setup_logging(LOG_LEVEL)
    st.title("🌡️ Temperature Simulator")
    st.caption("A rolling synthetic temperature series with threshold colouring.")

    variant, width, height = render_sidebar(load_config().chart)
    sim = get_simulator(variant)

    if not st.session_state.get("started"):
        samples, current = sim.view()
        if build_temperature_figure(samples, current, sim.config, width=width, height=height) is None:
            show_transient_error("Startup failed: no drawing surface is available.")
            st.stop()
        sim.start()
        st.session_state["started"] = True

    render_live_panel(sim, width, height)
    render_controls(sim)


if __name__ == "__main__":
    main()
