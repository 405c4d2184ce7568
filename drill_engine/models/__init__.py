from drill_engine.models.constants import (
    DEFAULT_SETTINGS,
    Difficulty,
    DrillSettings,
    Phase,
    PulseIntensity,
    Step,
    parse_difficulty,
)
from drill_engine.models.scenario import (
    Character,
    DecisionPoint,
    Ending,
    Option,
    Scenario,
    ScenarioSetup,
    ScoringCategory,
    ScoringRubric,
    TimerSettings,
)
from drill_engine.models.attempt import AttemptResult, DecisionRecord

__all__ = [
    "DEFAULT_SETTINGS",
    "Difficulty",
    "DrillSettings",
    "Phase",
    "PulseIntensity",
    "Step",
    "parse_difficulty",
    "Character",
    "DecisionPoint",
    "Ending",
    "Option",
    "Scenario",
    "ScenarioSetup",
    "ScoringCategory",
    "ScoringRubric",
    "TimerSettings",
    "AttemptResult",
    "DecisionRecord",
]
