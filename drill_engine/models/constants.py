"""Difficulty tiers, feedback intensities, and engine tuning values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from drill_engine.errors import UnknownDifficultyError


class Difficulty(str, Enum):
    """Timer difficulty tiers, ordered from most to least forgiving."""

    PRACTICE = "practice"
    STANDARD = "standard"
    PRESSURE = "pressure"
    EXPERT = "expert"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def next_tier(self) -> "Difficulty | None":
        tiers = list(Difficulty)
        idx = tiers.index(self)
        if idx + 1 < len(tiers):
            return tiers[idx + 1]
        return None


class PulseIntensity(str, Enum):
    """Feedback severity derived from the time left on a decision."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Phase(str, Enum):
    INTRO = "intro"
    PLAYING = "playing"
    RESULT = "result"
    EXITED = "exited"


class Step(str, Enum):
    """Sub-state of the playing phase."""

    AWAITING_CHOICE = "awaiting_choice"
    SHOWING_FEEDBACK = "showing_feedback"


@dataclass(frozen=True)
class DrillSettings:
    """Engine tuning values shared by every session."""

    # Timer tick interval (ms)
    tick_interval_ms: int = 100

    # next_point values starting with this prefix name an ending
    ending_prefix: str = "ending_"

    # Fallback ending buckets, checked in order (percentage lower bound, ending id)
    fallback_thresholds: Tuple[Tuple[float, str], ...] = field(
        default=(
            (90.0, "optimal"),
            (70.0, "good"),
            (50.0, "mixed"),
            (30.0, "poor"),
        )
    )
    fallback_floor: str = "failed"

    # Percentage score needed to unlock the next difficulty tier
    unlock_threshold: float = 70.0

    # Category averages below this share of the category max need work
    improvement_ratio: float = 0.75

    # Difficulty every new learner starts with
    starting_difficulty: Difficulty = Difficulty.PRACTICE


DEFAULT_SETTINGS = DrillSettings()


# Reference rubric used by the built-in interpreter scenarios
ECCI_CATEGORIES = (
    "linguistic_accuracy",
    "role_space_management",
    "equipartial_fidelity",
    "interaction_management",
    "cultural_competence",
)


def parse_difficulty(value: "Difficulty | str") -> Difficulty:
    """Coerce a difficulty key into the enum, raising on unknown keys."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        raise UnknownDifficultyError(value) from None
