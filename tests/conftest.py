import copy

import pytest

from drill_engine.engine.clock import ManualClock
from drill_engine.models.constants import ECCI_CATEGORIES
from drill_engine.models.scenario import Scenario

DRILL_PAYLOAD = {
    "id": "drill-test",
    "slug": "drill-test",
    "title": "Test Drill",
    "scenario_data": {
        "setup": {"context": "A test", "setting": "Nowhere", "characters": {}},
        "decision_points": [
            {
                "id": "dp1",
                "scene": "Opening",
                "options": [
                    {
                        "id": "A",
                        "text": "Go on",
                        "is_optimal": True,
                        "consequences": {"went_on": True},
                        "score_impact": {"linguistic_accuracy": 10},
                        "next_point": "dp2",
                        "feedback": "Good call",
                    },
                    {
                        "id": "B",
                        "text": "Stop here",
                        "consequences": {"went_on": False, "stopped": True},
                        "score_impact": {"linguistic_accuracy": 2},
                        "next_point": "ending_good",
                        "feedback": "Early exit",
                    },
                ],
            },
            {
                "id": "dp2",
                "scene": "Middle",
                "options": [
                    {
                        "id": "A",
                        "text": "Continue",
                        "consequences": {"went_on": False},
                        "score_impact": {"role_space_management": 15, "cultural_competence": 5},
                        "next_point": "dp3",
                    },
                    {
                        "id": "B",
                        "text": "Wander off",
                        "score_impact": {"linguistic_accuracy": -20, "equipartial_fidelity": -5},
                        "next_point": "dp_missing",
                    },
                ],
            },
            {
                "id": "dp3",
                "scene": "Last",
                "options": [
                    {
                        "id": "A",
                        "text": "Finish",
                        "score_impact": {"interaction_management": 12},
                        "next_point": "ending_optimal",
                    }
                ],
            },
        ],
        "endings": {
            "good": {"description": "Fine", "score_modifier": 5},
            "optimal": {"description": "Great", "score_modifier": 10},
            "failed": {"description": "Bad", "score_modifier": -50},
        },
    },
    "timer_settings": {"practice": 30, "standard": 20, "pressure": 10, "expert": 5},
    "scoring_rubric": {
        "categories": [{"id": c, "label": c, "max": 20} for c in ECCI_CATEGORIES],
        "total_max_score": 100,
    },
}


def drill_payload() -> dict:
    return copy.deepcopy(DRILL_PAYLOAD)


@pytest.fixture()
def scenario() -> Scenario:
    return Scenario.from_dict(drill_payload())


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(start=1000.0)


@pytest.fixture()
def payload() -> dict:
    return drill_payload()
