"""Immutable scenario definitions.

A scenario is parsed once from its stored payload and never mutated during a
session. The payload shape matches what the content service stores:

    {
        "id": ..., "slug": ..., "title": ...,
        "scenario_data": {"setup": {...}, "decision_points": [...], "endings": {...}},
        "timer_settings": {"practice": 30, ...},
        "scoring_rubric": {"categories": [...], "total_max_score": 100},
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from drill_engine.errors import ScenarioValidationError
from drill_engine.models.constants import Difficulty, parse_difficulty


@dataclass(frozen=True)
class Character:
    name: str
    role: str
    background: str = ""
    age: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Character:
        return cls(
            name=str(d.get("name", "")),
            role=str(d.get("role", "")),
            background=str(d.get("background", "")),
            age=d.get("age"),
        )


@dataclass(frozen=True)
class ScenarioSetup:
    context: str = ""
    setting: str = ""
    characters: Dict[str, Character] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> ScenarioSetup:
        return cls(
            context=str(d.get("context", "")),
            setting=str(d.get("setting", "")),
            characters={
                key: Character.from_dict(c)
                for key, c in (d.get("characters") or {}).items()
            },
        )


@dataclass(frozen=True)
class Option:
    """A response available at a decision point."""

    id: str
    text: str
    next_point: str
    is_optimal: bool = False
    consequences: Dict[str, bool] = field(default_factory=dict)
    score_impact: Dict[str, float] = field(default_factory=dict)
    feedback: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Option:
        return cls(
            id=str(d["id"]),
            text=str(d.get("text", "")),
            next_point=str(d.get("next_point") or ""),
            is_optimal=bool(d.get("is_optimal", False)),
            consequences={k: bool(v) for k, v in (d.get("consequences") or {}).items()},
            score_impact={k: float(v) for k, v in (d.get("score_impact") or {}).items()},
            feedback=str(d.get("feedback", "")),
        )


@dataclass(frozen=True)
class DecisionPoint:
    id: str
    scene: str
    options: Tuple[Option, ...]

    def option(self, option_id: str) -> Optional[Option]:
        """Look up an option by id."""
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    @property
    def timeout_option(self) -> Option:
        """Option picked when the countdown expires.

        The second option is treated as the more passive response; a
        single-option point falls back to its only option.
        """
        if len(self.options) >= 2:
            return self.options[1]
        return self.options[0]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> DecisionPoint:
        return cls(
            id=str(d["id"]),
            scene=str(d.get("scene", "")),
            options=tuple(Option.from_dict(o) for o in d.get("options") or ()),
        )


@dataclass(frozen=True)
class Ending:
    description: str
    score_modifier: float = 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Ending:
        return cls(
            description=str(d.get("description", "")),
            score_modifier=float(d.get("score_modifier", 0) or 0),
        )


@dataclass(frozen=True)
class TimerSettings:
    """Countdown per decision, in seconds, for each difficulty tier."""

    practice: float
    standard: float
    pressure: float
    expert: float

    def seconds(self, difficulty: Difficulty | str) -> float:
        return float(getattr(self, parse_difficulty(difficulty).value))

    def duration_ms(self, difficulty: Difficulty | str) -> int:
        return int(round(self.seconds(difficulty) * 1000))

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> TimerSettings:
        missing = [t.value for t in Difficulty if t.value not in d]
        if missing:
            raise ScenarioValidationError(
                [f"timer_settings missing duration for {m}" for m in missing]
            )
        return cls(**{t.value: float(d[t.value]) for t in Difficulty})


@dataclass(frozen=True)
class ScoringCategory:
    id: str
    label: str = ""
    max: float = 20.0
    description: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> ScoringCategory:
        return cls(
            id=str(d["id"]),
            label=str(d.get("label") or d["id"]),
            max=float(d.get("max", 20)),
            description=str(d.get("description", "")),
        )


@dataclass(frozen=True)
class ScoringRubric:
    categories: Tuple[ScoringCategory, ...]
    total_max_score: float = 100.0

    @property
    def category_ids(self) -> List[str]:
        return [c.id for c in self.categories]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> ScoringRubric:
        return cls(
            categories=tuple(ScoringCategory.from_dict(c) for c in d.get("categories") or ()),
            total_max_score=float(d.get("total_max_score", 100)),
        )


@dataclass(frozen=True)
class Scenario:
    """A complete, playable drill scenario."""

    id: str
    title: str
    setup: ScenarioSetup
    decision_points: Tuple[DecisionPoint, ...]
    endings: Dict[str, Ending]
    timer_settings: TimerSettings
    scoring_rubric: ScoringRubric
    slug: str = ""
    subtitle: Optional[str] = None
    category: str = ""
    difficulty_base: str = ""
    ecci_focus: Tuple[str, ...] = ()
    estimated_duration_minutes: int = 0

    @property
    def entry_point(self) -> DecisionPoint:
        return self.decision_points[0]

    def point(self, point_id: str) -> Optional[DecisionPoint]:
        """Return the decision point with this id, or None if it does not exist."""
        return self.points_by_id.get(point_id)

    @property
    def points_by_id(self) -> Dict[str, DecisionPoint]:
        return {dp.id: dp for dp in self.decision_points}

    def validate(self) -> None:
        """Raise ScenarioValidationError listing every structural problem."""
        errors = validation_errors(self)
        if errors:
            raise ScenarioValidationError(errors)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        return {
            "id": d["id"],
            "slug": d["slug"],
            "title": d["title"],
            "subtitle": d["subtitle"],
            "category": d["category"],
            "difficulty_base": d["difficulty_base"],
            "ecci_focus": list(d["ecci_focus"]),
            "estimated_duration_minutes": d["estimated_duration_minutes"],
            "scenario_data": {
                "setup": d["setup"],
                "decision_points": [
                    {**dp, "options": list(dp["options"])} for dp in d["decision_points"]
                ],
                "endings": d["endings"],
            },
            "timer_settings": d["timer_settings"],
            "scoring_rubric": {
                "categories": list(d["scoring_rubric"]["categories"]),
                "total_max_score": d["scoring_rubric"]["total_max_score"],
            },
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any], validate: bool = True) -> Scenario:
        """Parse a stored scenario payload.

        Args:
            d: Scenario payload as stored by the content service.
            validate: Reject malformed content immediately.

        Raises:
            ScenarioValidationError: If required sections are missing or the
                content fails structural validation.
        """
        data = d.get("scenario_data") or {}
        problems = [
            f"missing {key}"
            for key in ("timer_settings", "scoring_rubric")
            if key not in d
        ]
        if "decision_points" not in data:
            problems.append("missing scenario_data.decision_points")
        if problems:
            raise ScenarioValidationError(problems)

        try:
            scenario = cls(
                id=str(d.get("id", "")),
                slug=str(d.get("slug", "")),
                title=str(d.get("title", "")),
                subtitle=d.get("subtitle"),
                category=str(d.get("category", "")),
                difficulty_base=str(d.get("difficulty_base", "")),
                ecci_focus=tuple(d.get("ecci_focus") or ()),
                estimated_duration_minutes=int(d.get("estimated_duration_minutes", 0) or 0),
                setup=ScenarioSetup.from_dict(data.get("setup") or {}),
                decision_points=tuple(
                    DecisionPoint.from_dict(dp) for dp in data["decision_points"]
                ),
                endings={
                    key: Ending.from_dict(e) for key, e in (data.get("endings") or {}).items()
                },
                timer_settings=TimerSettings.from_dict(d["timer_settings"]),
                scoring_rubric=ScoringRubric.from_dict(d["scoring_rubric"]),
            )
        except ScenarioValidationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise ScenarioValidationError([f"malformed scenario payload: {exc}"]) from exc

        if validate:
            scenario.validate()
        return scenario


def validation_errors(scenario: Scenario) -> List[str]:
    """Collect structural problems that would make a session unplayable."""
    errors: List[str] = []

    if not scenario.decision_points:
        errors.append("scenario has no decision points")

    seen_points = set()
    for dp in scenario.decision_points:
        if dp.id in seen_points:
            errors.append(f"duplicate decision point id {dp.id!r}")
        seen_points.add(dp.id)

        if not dp.options:
            errors.append(f"decision point {dp.id!r} has no options")
            continue

        option_ids = [o.id for o in dp.options]
        dupes = sorted({o for o in option_ids if option_ids.count(o) > 1})
        for dupe in dupes:
            errors.append(f"decision point {dp.id!r} has duplicate option id {dupe!r}")

    rubric = scenario.scoring_rubric
    if not rubric.categories:
        errors.append("scoring rubric has no categories")
    if rubric.total_max_score <= 0:
        errors.append("scoring rubric total_max_score must be > 0")

    for difficulty in Difficulty:
        if scenario.timer_settings.seconds(difficulty) <= 0:
            errors.append(f"timer duration for {difficulty.value} must be > 0")

    return errors
