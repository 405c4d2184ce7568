"""Result breakdown and attempt history charts."""

from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st

from drill_engine.models.attempt import AttemptResult
from drill_engine.models.scenario import Scenario
from drill_engine.scoring.analysis import SkillSummary


def render_result(result: AttemptResult, scenario: Scenario) -> None:
    """Render the final score, ending and category breakdown."""

    ending = scenario.endings.get(result.ending_id)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Score", f"{result.percentage_score:.0f}% ({result.grade})")
    with c2:
        st.metric("Time", f"{result.total_time_ms / 1000:.0f} s")
    with c3:
        st.metric("Timeouts", result.timeouts_count)

    st.markdown(f"### Ending: {result.ending_id}")
    if ending:
        st.markdown(ending.description)

    st.markdown("### Category Breakdown")
    shares = result.category_percentages()
    rows = [
        {
            "Category": cat.label,
            "Score": result.scores.get(cat.id, 0.0),
            "Max": cat.max,
        }
        for cat in scenario.scoring_rubric.categories
    ]
    df = pd.DataFrame(rows).set_index("Category")
    st.bar_chart(df, height=240)
    st.caption(
        " · ".join(
            f"{cat.label}: {shares.get(cat.id, 0.0):.0f}%"
            for cat in scenario.scoring_rubric.categories
        )
    )


def render_history(results: List[AttemptResult]) -> None:
    """Render the percentage score across completed attempts."""

    if len(results) < 2:
        return

    st.markdown("### Attempt History")
    df = pd.DataFrame({"Score %": [r.percentage_score for r in results]})
    df.index.name = "Attempt"
    st.line_chart(df, height=180)


def render_skill_summary(summary: SkillSummary) -> None:
    if not summary.skill_areas:
        return

    st.markdown("### Skill Areas")
    df = pd.DataFrame(
        [{"Category": a.category, "Average": a.average, "Max": a.max} for a in summary.skill_areas]
    ).set_index("Category")
    st.dataframe(df, use_container_width=True)
    if summary.needs_improvement:
        st.caption("Needs work: " + ", ".join(summary.needs_improvement))
