"""Small layout utilities used across the Streamlit application."""

from __future__ import annotations

import streamlit as st

from drill_engine.models.scenario import Scenario


def render_header(title: str, subtitle: str | None = None) -> None:
    """Render a page header with an optional subtitle."""
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def render_intro(scenario: Scenario, seconds_per_choice: float) -> bool:
    """Render the scenario briefing. Returns True when the drill is started."""

    setup = scenario.setup
    render_header(scenario.title, scenario.subtitle)

    st.markdown(f"**Setting:** {setup.setting}")
    st.markdown(setup.context)

    if setup.characters:
        st.markdown("### Characters")
        for character in setup.characters.values():
            age = f", {character.age}" if character.age else ""
            st.markdown(f"- **{character.name}** ({character.role}{age}): {character.background}")

    st.info(f"Timed decisions: {seconds_per_choice:g} seconds per choice")
    return st.button("Begin Drill", type="primary", use_container_width=True)
