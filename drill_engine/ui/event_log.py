"""Decision log for the current session."""

from __future__ import annotations

from typing import List

import streamlit as st

from drill_engine.models.attempt import DecisionRecord


def render_event_log(records: List[DecisionRecord], max_display: int = 20) -> None:
    """Render the decisions made so far, most recent first."""

    st.markdown("### Decision Log")

    if not records:
        st.caption("No decisions recorded yet.")
        return

    recent = list(records[-max_display:])
    recent.reverse()

    for rec in recent:
        if rec.timed_out:
            st.markdown(f"` {rec.decision_point_id} ` :red[**TIMEOUT** {rec.option_chosen}]")
        else:
            seconds = rec.time_taken_ms / 1000
            st.markdown(f"` {rec.decision_point_id} ` {rec.option_chosen} in {seconds:.1f}s")
