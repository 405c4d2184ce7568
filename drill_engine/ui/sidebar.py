"""Sidebar: scenario selection, difficulty choice, and session reset."""

from __future__ import annotations

from typing import Callable, List, Tuple

import streamlit as st

from drill_engine.models.constants import Difficulty
from drill_engine.models.scenario import Scenario
from drill_engine.scenarios.library import SCENARIO_LIBRARY


def render_sidebar(
    unlocked_for: Callable[[Scenario], List[Difficulty]],
) -> Tuple[Scenario, Difficulty, bool]:
    """Render the sidebar and return (scenario, difficulty, exit_requested)."""

    st.sidebar.header("Scenario")

    titles = [s.title for s in SCENARIO_LIBRARY]
    selected = st.sidebar.selectbox(
        "Drill",
        titles,
        index=0,
        help="Choose a branching interpreting scenario.",
    )
    scenario = next(s for s in SCENARIO_LIBRARY if s.title == selected)

    st.sidebar.markdown(f"**Category:** {scenario.category}")
    st.sidebar.markdown(f"*{scenario.setup.context}*")
    if scenario.ecci_focus:
        st.sidebar.markdown("Focus: " + ", ".join(f.replace("_", " ") for f in scenario.ecci_focus))

    st.sidebar.divider()

    unlocked = unlocked_for(scenario)
    st.sidebar.header("Difficulty")
    difficulty = st.sidebar.radio(
        "Timer",
        unlocked,
        index=0,
        format_func=lambda d: f"{d.label} ({scenario.timer_settings.seconds(d):g}s)",
        help="Score 70% or more to unlock the next tier.",
    )
    locked = [d for d in Difficulty if d not in unlocked]
    if locked:
        st.sidebar.caption("Locked: " + ", ".join(d.label for d in locked))

    st.sidebar.divider()

    exit_requested = st.sidebar.button(
        "Exit Drill", type="secondary", use_container_width=True
    )

    return scenario, difficulty, exit_requested
