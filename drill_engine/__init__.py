"""Timed branching-scenario drills for interpreter training.

The engine packages (models, engine, scoring, scenarios) have no dependency
on Streamlit; only drill_engine.ui does.
"""

__version__ = "0.1.0"
