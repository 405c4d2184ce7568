"""Decision controls: option buttons and the feedback/continue panel."""

from __future__ import annotations

from typing import Optional

import streamlit as st

from drill_engine.models.scenario import DecisionPoint, Option


def render_options(point: DecisionPoint) -> Optional[str]:
    """Render the scene and one button per option.

    Returns:
        The id of the clicked option, or None.
    """

    st.markdown("### What do you do?")
    st.markdown(point.scene)

    clicked = None
    for opt in point.options:
        if st.button(
            f"{opt.id}. {opt.text}",
            key=f"opt_{point.id}_{opt.id}",
            use_container_width=True,
        ):
            clicked = opt.id
    return clicked


def render_feedback(option: Option, timed_out: bool) -> bool:
    """Render feedback for the last choice. Returns True on continue."""

    if timed_out:
        st.warning(f"Time ran out. You froze and went with option {option.id}.")

    if option.is_optimal:
        st.success(option.feedback)
    else:
        st.error(option.feedback)

    return st.button("Continue", type="primary", use_container_width=True)
