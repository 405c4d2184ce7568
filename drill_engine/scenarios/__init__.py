from drill_engine.scenarios.library import SCENARIO_LIBRARY, SCENARIO_PAYLOADS, get_scenario
from drill_engine.scenarios.loader import load_scenario, save_scenario

__all__ = ["SCENARIO_LIBRARY", "SCENARIO_PAYLOADS", "get_scenario", "load_scenario", "save_scenario"]
