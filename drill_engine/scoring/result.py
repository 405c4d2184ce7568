"""Final score and attempt result calculation."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

import numpy as np

from drill_engine.models.attempt import AttemptResult, DecisionRecord
from drill_engine.models.scenario import Scenario
from logger import get_logger

logger = get_logger(__name__)


def final_score(
    totals: Mapping[str, float], score_modifier: float, total_max_score: float
) -> float:
    """Sum category totals plus the ending modifier, clamped to [0, max]."""
    raw = float(np.sum(list(totals.values()))) + float(score_modifier)
    return float(np.clip(raw, 0.0, total_max_score))


def percentage(score: float, total_max_score: float) -> float:
    if total_max_score <= 0:
        return 0.0
    return round(score / total_max_score * 100.0, 2)


def calculate_result(
    scenario: Scenario,
    *,
    decisions: Iterable[DecisionRecord],
    consequence_flags: Mapping[str, bool],
    totals: Mapping[str, float],
    ending_id: str,
    total_time_ms: int,
    timeouts_count: int,
    fallback_ending: bool = False,
    difficulty: str = "",
) -> AttemptResult:
    """Combine accumulated scores and the resolved ending into an AttemptResult.

    An ending id absent from the scenario contributes no modifier.
    """
    rubric = scenario.scoring_rubric
    ending = scenario.endings.get(ending_id)
    modifier = ending.score_modifier if ending else 0.0
    if ending is None:
        logger.warning(
            "Scenario %s has no ending %r; applying no score modifier",
            scenario.id,
            ending_id,
        )

    score = final_score(totals, modifier, rubric.total_max_score)
    category_max: Dict[str, float] = {c.id: c.max for c in rubric.categories}

    result = AttemptResult(
        decisions_made=tuple(decisions),
        consequence_flags=dict(consequence_flags),
        scores=dict(totals),
        total_score=score,
        percentage_score=percentage(score, rubric.total_max_score),
        ending_id=ending_id,
        total_time_ms=max(0, int(total_time_ms)),
        timeouts_count=timeouts_count,
        fallback_ending=fallback_ending,
        difficulty=difficulty,
        scenario_id=scenario.id,
        category_max=category_max,
    )
    logger.info(
        "Attempt finished: scenario=%s ending=%s score=%.1f/%.0f (%s) timeouts=%d",
        scenario.id,
        ending_id,
        score,
        rubric.total_max_score,
        result.grade,
        timeouts_count,
    )
    return result
