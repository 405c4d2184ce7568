"""Exceptions raised by the drill engine."""

from __future__ import annotations

from typing import Iterable, List


class DrillError(Exception):
    """Base class for all drill engine errors."""


class ScenarioValidationError(DrillError, ValueError):
    """Scenario content is malformed and cannot be played."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("Invalid scenario: " + "; ".join(self.errors))


class UnknownDifficultyError(DrillError, ValueError):
    def __init__(self, difficulty: object):
        self.difficulty = difficulty
        super().__init__(f"Unknown difficulty: {difficulty!r}")


class DifficultyLockedError(DrillError):
    def __init__(self, difficulty: object):
        self.difficulty = difficulty
        super().__init__(f"Difficulty {difficulty!s} is not yet unlocked")


class InvalidTransitionError(DrillError):
    """An operation was requested in a phase that does not allow it."""


class UnknownOptionError(DrillError, KeyError):
    def __init__(self, point_id: str, option_id: str):
        self.point_id = point_id
        self.option_id = option_id
        super().__init__(f"Option {option_id!r} not found on decision point {point_id!r}")
