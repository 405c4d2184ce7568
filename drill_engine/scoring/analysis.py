"""Cross-attempt skill area analysis for debriefs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import pandas as pd

from drill_engine.models.attempt import AttemptResult
from drill_engine.models.constants import DEFAULT_SETTINGS, DrillSettings
from drill_engine.models.scenario import ScoringRubric

# Category max assumed when no rubric is supplied
DEFAULT_CATEGORY_MAX = 20.0


@dataclass(frozen=True)
class SkillArea:
    category: str
    average: float
    max: float
    attempts: int

    @property
    def ratio(self) -> float:
        return self.average / self.max if self.max > 0 else 0.0


@dataclass(frozen=True)
class SkillSummary:
    skill_areas: List[SkillArea] = field(default_factory=list)
    needs_improvement: List[str] = field(default_factory=list)
    attempts: int = 0
    average_percentage: float = 0.0

    @property
    def weakest(self) -> Optional[SkillArea]:
        return self.skill_areas[0] if self.skill_areas else None


def scores_frame(results: Sequence[AttemptResult]) -> pd.DataFrame:
    """One row per attempt, one column per category seen in any attempt."""
    df = pd.DataFrame([r.scores for r in results])
    df.index.name = "Attempt"
    return df


def summarize_skill_areas(
    results: Sequence[AttemptResult],
    rubric: Optional[ScoringRubric] = None,
    limit: int = 10,
    settings: DrillSettings = DEFAULT_SETTINGS,
) -> SkillSummary:
    """Average each category over the most recent attempts, weakest first.

    Args:
        results: Completed attempts, most recent first.
        rubric: Supplies per-category max values; otherwise DEFAULT_CATEGORY_MAX.
        limit: Number of recent attempts considered.
        settings: Provides the improvement ratio.
    """
    recent = list(results)[:limit]
    if not recent:
        return SkillSummary()

    df = scores_frame(recent)
    averages = df.mean(axis=0, skipna=True)
    counts = df.count(axis=0)

    maxes: Dict[str, float] = {}
    if rubric is not None:
        maxes = {c.id: c.max for c in rubric.categories}

    areas = [
        SkillArea(
            category=str(cat),
            average=round(float(avg), 1),
            max=maxes.get(str(cat), DEFAULT_CATEGORY_MAX),
            attempts=int(counts[cat]),
        )
        for cat, avg in averages.items()
    ]
    areas.sort(key=lambda a: a.average)

    needs = [a.category for a in areas if a.average < a.max * settings.improvement_ratio]
    avg_pct = round(float(pd.Series([r.percentage_score for r in recent]).mean()), 1)

    return SkillSummary(
        skill_areas=areas,
        needs_improvement=needs,
        attempts=len(recent),
        average_percentage=avg_pct,
    )
