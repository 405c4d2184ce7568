"""Per-decision records and the final attempt result."""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class DecisionRecord:
    """One resolved decision. Immutable once appended to a session."""

    decision_point_id: str
    option_chosen: str
    time_taken_ms: int
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of a completed drill session."""

    decisions_made: Tuple[DecisionRecord, ...]
    consequence_flags: Dict[str, bool]
    scores: Dict[str, float]
    total_score: float          # clamped to [0, rubric max]
    percentage_score: float     # 0-100
    ending_id: str
    total_time_ms: int
    timeouts_count: int
    fallback_ending: bool = False
    difficulty: str = ""
    scenario_id: str = ""
    category_max: Dict[str, float] = field(default_factory=dict)

    @property
    def grade(self) -> str:
        if self.percentage_score >= 90:
            return "A"
        if self.percentage_score >= 80:
            return "B"
        if self.percentage_score >= 70:
            return "C"
        if self.percentage_score >= 60:
            return "D"
        return "F"

    @property
    def decision_count(self) -> int:
        return len(self.decisions_made)

    def category_percentages(self) -> Dict[str, float]:
        """Category totals as a share of each category max (0-100)."""
        out: Dict[str, float] = {}
        for cat, score in self.scores.items():
            cat_max = self.category_max.get(cat) or 0.0
            out[cat] = round(score / cat_max * 100.0, 1) if cat_max > 0 else 0.0
        return out

    def to_dict(self) -> Dict[str, Any]:
        """Payload handed to the persistence layer."""
        return {
            "decisions_made": [d.to_dict() for d in self.decisions_made],
            "consequence_flags": dict(self.consequence_flags),
            "scores": dict(self.scores),
            "total_score": self.total_score,
            "percentage_score": self.percentage_score,
            "ending_id": self.ending_id,
            "total_time_ms": self.total_time_ms,
            "timeouts_count": self.timeouts_count,
        }
