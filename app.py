"""Interpreter Scenario Drills.

A timed, branching-narrative decision simulator for interpreter training.
Each decision point runs on a countdown; the choices made accumulate a
competency score across the ECCI rubric and resolve a narrative ending.
"""

from __future__ import annotations

import json
import time
from typing import Dict, List

import streamlit as st

from drill_engine.engine import DrillDriver, DrillSession
from drill_engine.models import AttemptResult, Difficulty, Phase, Step
from drill_engine.scoring import DrillProgress, summarize_skill_areas
from drill_engine.ui.controls import render_feedback, render_options
from drill_engine.ui.dashboard import render_dashboard
from drill_engine.ui.event_log import render_event_log
from drill_engine.ui.layout import render_header, render_intro
from drill_engine.ui.sidebar import render_sidebar
from drill_engine.ui.trends import render_history, render_result, render_skill_summary
from logger import get_logger

logger = get_logger("scenario-drill.app")


# ---------------------------------------------------------------------------
# Session state initialization
# ---------------------------------------------------------------------------

def _init_session() -> None:
    """Set up session state on first load."""
    if "progress" not in st.session_state:
        st.session_state.progress: Dict[str, DrillProgress] = {}
    if "history" not in st.session_state:
        st.session_state.history: Dict[str, List[AttemptResult]] = {}
    if "drill" not in st.session_state:
        st.session_state.drill = None
    if "driver" not in st.session_state:
        st.session_state.driver = None
    if "recorded" not in st.session_state:
        st.session_state.recorded = False


def _progress_for(slug: str) -> DrillProgress:
    return st.session_state.progress.setdefault(slug, DrillProgress())


def _new_drill(scenario, difficulty: Difficulty, progress: DrillProgress) -> DrillSession:
    session = DrillSession(scenario, difficulty, unlocked=progress.unlocked_difficulties)
    st.session_state.drill = session
    st.session_state.driver = DrillDriver(session)
    st.session_state.recorded = False
    return session


# ---------------------------------------------------------------------------
# Main app
# ---------------------------------------------------------------------------

def main() -> None:
    st.set_page_config(page_title="Scenario Drills", page_icon="🎧", layout="wide")

    _init_session()

    scenario, difficulty, exit_requested = render_sidebar(
        lambda s: _progress_for(s.slug).unlocked_difficulties
    )
    progress = _progress_for(scenario.slug)

    session: DrillSession | None = st.session_state.drill

    if exit_requested and session is not None:
        session.exit()
        session = None
        st.session_state.drill = None
        st.session_state.driver = None

    stale = session is None or (
        session.phase is Phase.INTRO
        and (session.scenario.slug != scenario.slug or session.difficulty is not difficulty)
    )
    if stale:
        session = _new_drill(scenario, difficulty, progress)

    # A running drill keeps its own scenario even if the sidebar changes
    scenario, difficulty = session.scenario, session.difficulty
    progress = _progress_for(scenario.slug)
    driver: DrillDriver = st.session_state.driver

    if session.phase is Phase.INTRO:
        if render_intro(scenario, scenario.timer_settings.seconds(difficulty)):
            session.start()
            progress.begin(difficulty)
            st.rerun()
        return

    if session.phase is Phase.PLAYING:
        render_header(scenario.title, f"{difficulty.label} difficulty")
        driver.pump()

        col_left, col_right = st.columns([3, 2])
        with col_left:
            if session.step is Step.AWAITING_CHOICE:
                render_dashboard(session)
                clicked = render_options(session.current_point)
                if clicked is not None:
                    session.choose(clicked)
                    st.rerun()
            else:
                last = session.decisions[-1]
                if render_feedback(session.last_option, last.timed_out):
                    session.continue_()
                    st.rerun()
        with col_right:
            render_event_log(session.decisions)

        if session.awaiting_choice:
            time.sleep(session.settings.tick_interval_ms / 1000)
            st.rerun()
        return

    if session.phase is Phase.RESULT:
        result = session.result
        if not st.session_state.recorded:
            history = st.session_state.history.setdefault(scenario.slug, [])
            history.insert(0, result)
            unlocked_tier = progress.record(session.difficulty, result)
            if unlocked_tier is not None:
                st.toast(f"{unlocked_tier.label} difficulty unlocked")
            st.session_state.recorded = True

        render_header(scenario.title, "Debrief")
        resolution = session.last_resolution
        if result.fallback_ending and resolution is not None:
            st.caption(
                f"Ending chosen from your score; the scenario path pointed at "
                f"'{resolution.reference}', which does not exist."
            )
        render_result(result, scenario)
        st.download_button(
            "Download attempt",
            data=json.dumps(result.to_dict(), indent=2),
            file_name=f"{scenario.slug}-{difficulty.value}.json",
            mime="application/json",
        )

        history = st.session_state.history.get(scenario.slug, [])
        render_history(list(reversed(history)))
        render_skill_summary(summarize_skill_areas(history, scenario.scoring_rubric))

        if st.button("Try Again", type="primary"):
            st.session_state.drill = None
            st.rerun()


if __name__ == "__main__":
    main()
