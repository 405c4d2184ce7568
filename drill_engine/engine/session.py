"""Drill session controller.

Phases run intro -> playing -> result. While playing, the session alternates
between awaiting a choice and showing feedback for the choice just made.
All session state lives here and only changes inside start(), choose(),
tick(), continue_() and exit().
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from drill_engine.engine.clock import Clock, MonotonicClock, to_ms
from drill_engine.engine.resolver import PathResolver, Resolution
from drill_engine.engine.timer import DecisionTimer
from drill_engine.errors import DifficultyLockedError, InvalidTransitionError, UnknownOptionError
from drill_engine.models.attempt import AttemptResult, DecisionRecord
from drill_engine.models.constants import (
    DEFAULT_SETTINGS,
    Difficulty,
    DrillSettings,
    Phase,
    PulseIntensity,
    Step,
    parse_difficulty,
)
from drill_engine.models.scenario import DecisionPoint, Option, Scenario
from drill_engine.scoring.accumulator import ScoreAccumulator
from drill_engine.scoring.pulse import pulse_intensity
from drill_engine.scoring.result import calculate_result
from logger import get_logger

logger = get_logger(__name__)


class DrillSession:
    """One run through a scenario at a fixed difficulty."""

    def __init__(
        self,
        scenario: Scenario,
        difficulty: Difficulty | str,
        unlocked: Optional[Iterable[Difficulty | str]] = None,
        clock: Optional[Clock] = None,
        settings: DrillSettings = DEFAULT_SETTINGS,
    ):
        self.difficulty = parse_difficulty(difficulty)
        if unlocked is not None:
            allowed = {parse_difficulty(d) for d in unlocked}
            if self.difficulty not in allowed:
                raise DifficultyLockedError(self.difficulty.value)

        scenario.validate()

        self.scenario = scenario
        self.settings = settings
        self.clock: Clock = clock or MonotonicClock()

        self._timer = DecisionTimer(
            scenario.timer_settings.duration_ms(self.difficulty),
            settings.tick_interval_ms,
        )
        self._resolver = PathResolver(scenario, settings)
        self._phase = Phase.INTRO
        self._step: Optional[Step] = None
        self._reset_state()

    def _reset_state(self) -> None:
        self._scores = ScoreAccumulator(self.scenario.scoring_rubric.category_ids)
        self._decisions: List[DecisionRecord] = []
        self._flags: Dict[str, bool] = {}
        self._current_point: Optional[DecisionPoint] = None
        self._last_option: Optional[Option] = None
        self._last_resolution: Optional[Resolution] = None
        self._timeouts = 0
        self._started_at: Optional[float] = None
        self._decision_started_at: Optional[float] = None
        self._result: Optional[AttemptResult] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def step(self) -> Optional[Step]:
        return self._step

    @property
    def awaiting_choice(self) -> bool:
        return self._phase is Phase.PLAYING and self._step is Step.AWAITING_CHOICE

    @property
    def current_point(self) -> Optional[DecisionPoint]:
        return self._current_point

    @property
    def last_option(self) -> Optional[Option]:
        return self._last_option

    @property
    def last_resolution(self) -> Optional[Resolution]:
        """Where the most recent continue_() led, including any fallback."""
        return self._last_resolution

    @property
    def decisions(self) -> List[DecisionRecord]:
        return list(self._decisions)

    @property
    def consequence_flags(self) -> Dict[str, bool]:
        return dict(self._flags)

    @property
    def scores(self) -> Dict[str, float]:
        return self._scores.totals

    @property
    def timeouts_count(self) -> int:
        return self._timeouts

    @property
    def result(self) -> Optional[AttemptResult]:
        return self._result

    @property
    def timer_generation(self) -> int:
        return self._timer.generation

    @property
    def timer_duration_ms(self) -> int:
        return self._timer.duration_ms

    @property
    def time_remaining_ms(self) -> int:
        if self._phase is not Phase.PLAYING:
            return 0
        return self._timer.remaining_ms

    @property
    def decision_started_at(self) -> Optional[float]:
        return self._decision_started_at

    def pulse_intensity(self) -> PulseIntensity:
        if self._phase is not Phase.PLAYING:
            return PulseIntensity.NONE
        return pulse_intensity(self._timer.remaining_ms, self._timer.duration_ms)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> DecisionPoint:
        """Leave the intro and present the entry decision point."""
        if self._phase is not Phase.INTRO:
            raise InvalidTransitionError(f"cannot start a session in phase {self._phase.value}")

        self._started_at = self.clock.now()
        self._scores.reset()
        self._current_point = self.scenario.entry_point
        self._phase = Phase.PLAYING
        self._begin_decision()

        logger.info(
            "Started scenario %s at %s (%d ms per decision)",
            self.scenario.id,
            self.difficulty.value,
            self._timer.duration_ms,
        )
        return self._current_point

    def choose(self, option_id: str) -> Optional[Option]:
        """Record a manual choice. Ignored unless a choice is awaited."""
        if not self.awaiting_choice:
            return None

        point = self._current_point
        option = point.option(option_id)
        if option is None:
            raise UnknownOptionError(point.id, option_id)

        self._timer.disarm()
        return self._apply(option, timed_out=False)

    def tick(self, generation: int, elapsed_ms: Optional[int] = None) -> Optional[Option]:
        """Forward a timer tick; returns the forced option if the timer expired."""
        if not self.awaiting_choice:
            return None
        if not self._timer.tick(generation, elapsed_ms):
            return None

        option = self._current_point.timeout_option
        self._timeouts += 1
        logger.info(
            "Decision %s timed out; forcing option %s",
            self._current_point.id,
            option.id,
        )
        return self._apply(option, timed_out=True)

    def continue_(self) -> Optional[AttemptResult]:
        """Move past the feedback for the last choice.

        Returns the AttemptResult when the run reaches an ending, otherwise
        None after presenting the next decision point.
        """
        if self._phase is not Phase.PLAYING or self._step is not Step.SHOWING_FEEDBACK:
            return None

        resolution = self._resolver.resolve(self._last_option, self._scores.totals)
        self._last_resolution = resolution

        if not resolution.is_ending:
            self._current_point = resolution.point
            self._last_option = None
            self._begin_decision()
            return None

        self._result = calculate_result(
            self.scenario,
            decisions=self._decisions,
            consequence_flags=self._flags,
            totals=self._scores.totals,
            ending_id=resolution.ending_id,
            total_time_ms=to_ms(self.clock.now() - self._started_at),
            timeouts_count=self._timeouts,
            fallback_ending=resolution.fallback,
            difficulty=self.difficulty.value,
        )
        self._phase = Phase.RESULT
        self._step = None
        return self._result

    def exit(self) -> None:
        """Abandon the session. Nothing is produced and all progress is dropped."""
        if self._phase is Phase.RESULT:
            return

        self._timer.disarm()
        visited = len(self._decisions)
        self._reset_state()
        self._phase = Phase.EXITED
        self._step = None
        logger.info("Exited scenario %s after %d decision(s)", self.scenario.id, visited)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_decision(self) -> None:
        self._decision_started_at = self.clock.now()
        self._timer.arm()
        self._step = Step.AWAITING_CHOICE

    def _apply(self, option: Option, timed_out: bool) -> Option:
        elapsed = max(0, to_ms(self.clock.now() - self._decision_started_at))
        record = DecisionRecord(
            decision_point_id=self._current_point.id,
            option_chosen=option.id,
            time_taken_ms=elapsed,
            timed_out=timed_out,
        )
        self._decisions.append(record)
        self._flags.update(option.consequences)
        self._scores.apply(option.score_impact)
        self._last_option = option
        self._step = Step.SHOWING_FEEDBACK

        logger.debug(
            "Decision %s -> %s in %d ms%s",
            record.decision_point_id,
            record.option_chosen,
            record.time_taken_ms,
            " (timed out)" if timed_out else "",
        )
        return option
