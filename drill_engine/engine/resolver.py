"""Next-step resolution through the decision point graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from drill_engine.models.constants import DEFAULT_SETTINGS, DrillSettings
from drill_engine.models.scenario import DecisionPoint, Option, Scenario
from logger import get_logger

logger = get_logger(__name__)


class ResolutionKind(str, Enum):
    POINT = "point"
    ENDING = "ending"


@dataclass(frozen=True)
class Resolution:
    """Where the session goes after a chosen option."""

    kind: ResolutionKind
    point: Optional[DecisionPoint] = None
    ending_id: str = ""
    fallback: bool = False
    reference: str = ""

    @property
    def is_ending(self) -> bool:
        return self.kind is ResolutionKind.ENDING


def fallback_ending(
    total_score: float, total_max_score: float, settings: DrillSettings = DEFAULT_SETTINGS
) -> str:
    """Bucket a running score into one of the threshold endings."""
    pct = total_score / total_max_score * 100.0 if total_max_score > 0 else 0.0
    for lower, ending_id in settings.fallback_thresholds:
        if pct >= lower:
            return ending_id
    return settings.fallback_floor


class PathResolver:
    """Resolves an option's next_point against a scenario."""

    def __init__(self, scenario: Scenario, settings: DrillSettings = DEFAULT_SETTINGS):
        self.scenario = scenario
        self.settings = settings
        self._points = scenario.points_by_id

    def is_ending_marker(self, reference: str) -> bool:
        return reference.startswith(self.settings.ending_prefix)

    def resolve(self, option: Option, totals: Mapping[str, float]) -> Resolution:
        """Resolve the chosen option to the next decision point or an ending.

        Args:
            option: The option just chosen.
            totals: Current per-category totals, used only by the fallback.
        """
        ref = option.next_point

        if self.is_ending_marker(ref):
            ending_id = ref[len(self.settings.ending_prefix):]
            if ending_id not in self.scenario.endings:
                logger.warning(
                    "Scenario %s: option %r names undeclared ending %r",
                    self.scenario.id,
                    option.id,
                    ending_id,
                )
            return Resolution(ResolutionKind.ENDING, ending_id=ending_id, reference=ref)

        point = self._points.get(ref)
        if point is not None:
            return Resolution(ResolutionKind.POINT, point=point, reference=ref)

        total = sum(totals.values())
        ending_id = fallback_ending(total, self.scenario.scoring_rubric.total_max_score, self.settings)
        logger.warning(
            "Scenario %s: option %r points to unknown next_point %r; "
            "using score fallback ending %r (total=%.1f)",
            self.scenario.id,
            option.id,
            ref,
            ending_id,
            total,
        )
        return Resolution(
            ResolutionKind.ENDING, ending_id=ending_id, fallback=True, reference=ref
        )
