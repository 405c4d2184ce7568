"""Countdown and running score display for the playing phase."""

from __future__ import annotations

import math

import streamlit as st

from drill_engine.engine.session import DrillSession
from drill_engine.models.constants import PulseIntensity

_PULSE_COLORS = {
    PulseIntensity.NONE: "green",
    PulseIntensity.LOW: "orange",
    PulseIntensity.MEDIUM: "orange",
    PulseIntensity.HIGH: "red",
    PulseIntensity.CRITICAL: "red",
}


def render_dashboard(session: DrillSession) -> None:
    """Render the countdown, pulse tier and progress counters."""

    remaining = session.time_remaining_ms
    duration = session.timer_duration_ms
    pulse = session.pulse_intensity()

    c1, c2, c3 = st.columns(3)

    with c1:
        st.metric("Time Left", f"{math.ceil(remaining / 1000)} s")

    with c2:
        st.metric("Decisions", len(session.decisions))

    with c3:
        st.metric("Timeouts", session.timeouts_count)

    st.progress(max(0.0, min(1.0, remaining / duration if duration else 0.0)))
    if pulse is not PulseIntensity.NONE:
        color = _PULSE_COLORS[pulse]
        st.markdown(f":{color}[**{pulse.value.upper()}** time pressure]")
