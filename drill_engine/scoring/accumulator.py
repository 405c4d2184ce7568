"""Running competency totals for a drill session.

One total per rubric category. Deltas from each chosen option are added as
they arrive; totals may go negative mid-run and are only clamped when the
final result is calculated.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from logger import get_logger

logger = get_logger(__name__)


class ScoreAccumulator:
    """Accumulates option score impacts across the rubric categories."""

    def __init__(self, categories: Iterable[str]):
        self._categories = list(categories)
        self._totals: Dict[str, float] = {c: 0.0 for c in self._categories}

    @property
    def totals(self) -> Dict[str, float]:
        return dict(self._totals)

    def apply(self, score_impact: Mapping[str, float]) -> Dict[str, float]:
        """Add one option's deltas and return the updated totals.

        Categories missing from the impact count as zero. Keys outside the
        rubric are ignored.
        """
        for cat in self._categories:
            self._totals[cat] += float(score_impact.get(cat, 0) or 0)

        unknown = set(score_impact) - set(self._categories)
        if unknown:
            logger.debug("Ignoring score impact for unknown categories: %s", sorted(unknown))

        return self.totals

    def reset(self) -> None:
        self._totals = {c: 0.0 for c in self._categories}
