"""Per-scenario difficulty progression for a learner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from drill_engine.errors import DifficultyLockedError
from drill_engine.models.attempt import AttemptResult
from drill_engine.models.constants import DEFAULT_SETTINGS, Difficulty, DrillSettings, parse_difficulty
from logger import get_logger

logger = get_logger(__name__)


@dataclass
class DrillProgress:
    """Unlocked tiers, best scores and attempt counts for one scenario."""

    unlocked_difficulties: List[Difficulty] = field(
        default_factory=lambda: [DEFAULT_SETTINGS.starting_difficulty]
    )
    best_scores: Dict[Difficulty, float] = field(default_factory=dict)
    total_attempts: int = 0
    total_completions: int = 0
    settings: DrillSettings = field(default=DEFAULT_SETTINGS, repr=False)

    def is_unlocked(self, difficulty: Difficulty | str) -> bool:
        return parse_difficulty(difficulty) in self.unlocked_difficulties

    def begin(self, difficulty: Difficulty | str) -> Difficulty:
        """Count a started attempt. Abandoned runs still count here."""
        tier = parse_difficulty(difficulty)
        if tier not in self.unlocked_difficulties:
            raise DifficultyLockedError(tier.value)
        self.total_attempts += 1
        return tier

    def record(self, difficulty: Difficulty | str, result: AttemptResult) -> Difficulty | None:
        """Fold a completed attempt into the progress.

        Returns the newly unlocked difficulty, if the attempt earned one.
        """
        tier = parse_difficulty(difficulty)
        self.total_completions += 1

        best = self.best_scores.get(tier)
        if best is None or result.percentage_score > best:
            self.best_scores[tier] = result.percentage_score

        if result.percentage_score < self.settings.unlock_threshold:
            return None

        nxt = tier.next_tier()
        if nxt is None or nxt in self.unlocked_difficulties:
            return None

        self.unlocked_difficulties.append(nxt)
        logger.info("Unlocked %s after scoring %.1f on %s", nxt.value, result.percentage_score, tier.value)
        return nxt

    def to_dict(self) -> Dict[str, object]:
        return {
            "unlocked_difficulties": [d.value for d in self.unlocked_difficulties],
            "best_scores": {d.value: s for d, s in self.best_scores.items()},
            "total_attempts": self.total_attempts,
            "total_completions": self.total_completions,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, object]) -> DrillProgress:
        unlocked = [parse_difficulty(x) for x in d.get("unlocked_difficulties") or ()]
        return cls(
            unlocked_difficulties=unlocked or [DEFAULT_SETTINGS.starting_difficulty],
            best_scores={
                parse_difficulty(k): float(v) for k, v in (d.get("best_scores") or {}).items()
            },
            total_attempts=int(d.get("total_attempts", 0)),
            total_completions=int(d.get("total_completions", 0)),
        )
