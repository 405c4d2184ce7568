"""Load scenario payloads from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from drill_engine.errors import ScenarioValidationError
from drill_engine.models.scenario import Scenario
from logger import get_logger

logger = get_logger(__name__)


def load_scenario(path: Union[str, Path]) -> Scenario:
    """Read, parse and validate a scenario JSON file.

    Raises:
        ScenarioValidationError: The file is not valid JSON or the content
            is malformed.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ScenarioValidationError([f"{path.name}: invalid JSON ({exc.msg})"]) from exc

    if not isinstance(payload, dict):
        raise ScenarioValidationError([f"{path.name}: expected a JSON object"])

    scenario = Scenario.from_dict(payload)
    logger.info(
        "Loaded scenario %s (%d decision points) from %s",
        scenario.id,
        len(scenario.decision_points),
        path,
    )
    return scenario


def save_scenario(scenario: Scenario, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(json.dumps(scenario.to_dict(), indent=2), encoding="utf-8")
    return path
