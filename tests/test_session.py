"""Tests for the drill session state machine."""

import pytest

from drill_engine.engine.session import DrillSession
from drill_engine.errors import (
    DifficultyLockedError,
    InvalidTransitionError,
    ScenarioValidationError,
    UnknownDifficultyError,
    UnknownOptionError,
)
from drill_engine.models.constants import Difficulty, Phase, PulseIntensity, Step
from drill_engine.models.scenario import Scenario


def _make_session(scenario, clock, difficulty="practice", **kwargs) -> DrillSession:
    return DrillSession(scenario, difficulty, clock=clock, **kwargs)


def _run_out_clock(session, clock, ticks: int):
    """Deliver ticks at the fixed interval, advancing the clock alongside."""
    gen = session.timer_generation
    forced = None
    for _ in range(ticks):
        clock.advance_ms(session.settings.tick_interval_ms)
        forced = session.tick(gen) or forced
    return forced


class TestConstruction:
    def test_starts_in_intro(self, scenario, clock):
        session = _make_session(scenario, clock)
        assert session.phase is Phase.INTRO
        assert session.step is None
        assert session.difficulty is Difficulty.PRACTICE
        assert session.timer_duration_ms == 30_000

    def test_unknown_difficulty_rejected(self, scenario, clock):
        with pytest.raises(UnknownDifficultyError):
            _make_session(scenario, clock, difficulty="impossible")

    def test_locked_difficulty_rejected(self, scenario, clock):
        with pytest.raises(DifficultyLockedError):
            _make_session(scenario, clock, difficulty="expert", unlocked=["practice", "standard"])

    def test_unlocked_difficulty_accepted(self, scenario, clock):
        session = _make_session(scenario, clock, difficulty="standard", unlocked=["practice", "standard"])
        assert session.timer_duration_ms == 20_000

    def test_malformed_scenario_rejected_before_start(self, payload, clock):
        payload["scoring_rubric"]["categories"] = []
        bad = Scenario.from_dict(payload, validate=False)
        with pytest.raises(ScenarioValidationError):
            _make_session(bad, clock)


class TestStart:
    def test_start_presents_entry_point(self, scenario, clock):
        session = _make_session(scenario, clock)
        point = session.start()
        assert point.id == "dp1"
        assert session.phase is Phase.PLAYING
        assert session.step is Step.AWAITING_CHOICE
        assert session.time_remaining_ms == 30_000
        assert all(v == 0.0 for v in session.scores.values())

    def test_start_twice_rejected(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        with pytest.raises(InvalidTransitionError):
            session.start()

    def test_choose_before_start_ignored(self, scenario, clock):
        session = _make_session(scenario, clock)
        assert session.choose("A") is None
        assert session.decisions == []


class TestManualChoice:
    def test_choose_ending_option(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        clock.advance_ms(1200)
        option = session.choose("B")

        assert option.id == "B"
        assert session.step is Step.SHOWING_FEEDBACK
        [record] = session.decisions
        assert record.decision_point_id == "dp1"
        assert record.option_chosen == "B"
        assert record.time_taken_ms == 1200
        assert record.timed_out is False

        result = session.continue_()
        assert session.phase is Phase.RESULT
        assert result is session.result
        assert result.ending_id == "good"
        assert result.scores["linguistic_accuracy"] == 2.0
        assert result.timeouts_count == 0
        assert result.total_score == 7.0
        assert len(result.decisions_made) == 1

    def test_second_choice_ignored(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("B")
        assert session.choose("A") is None
        assert len(session.decisions) == 1
        assert session.scores["linguistic_accuracy"] == 2.0

    def test_unknown_option_raises(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        with pytest.raises(UnknownOptionError):
            session.choose("Z")
        assert session.awaiting_choice

    def test_continue_while_awaiting_ignored(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        assert session.continue_() is None
        assert session.step is Step.AWAITING_CHOICE

    def test_advancing_rearms_timer(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        first_gen = session.timer_generation
        session.tick(first_gen, elapsed_ms=10_000)
        session.choose("A")
        assert session.continue_() is None
        assert session.current_point.id == "dp2"
        assert session.step is Step.AWAITING_CHOICE
        assert session.time_remaining_ms == 30_000
        assert session.timer_generation > first_gen


class TestTimeout:
    def test_timeout_forces_second_option(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        forced = _run_out_clock(session, clock, 300)

        assert forced.id == "B"
        [record] = session.decisions
        assert record.option_chosen == "B"
        assert record.timed_out is True
        assert record.time_taken_ms == 30_000
        assert session.timeouts_count == 1

        result = session.continue_()
        assert result.ending_id == "good"
        assert result.timeouts_count == 1
        assert result.scores["linguistic_accuracy"] == 2.0

    def test_timeout_fires_once(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        _run_out_clock(session, clock, 400)
        assert len(session.decisions) == 1
        assert session.timeouts_count == 1

    def test_single_option_point_forces_first(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("A")
        session.continue_()
        session.choose("A")
        session.continue_()
        assert session.current_point.id == "dp3"
        forced = _run_out_clock(session, clock, 300)
        assert forced.id == "A"
        assert session.decisions[-1].timed_out is True

    def test_manual_choice_beats_late_tick(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        gen = session.timer_generation

        session.tick(gen, elapsed_ms=29_999)
        clock.advance_ms(29_999)
        session.choose("A")
        assert session.tick(gen, elapsed_ms=1) is None

        [record] = session.decisions
        assert record.option_chosen == "A"
        assert record.timed_out is False
        assert session.timeouts_count == 0

    def test_stale_tick_does_not_touch_next_point(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        old_gen = session.timer_generation
        session.choose("A")
        session.continue_()
        assert session.tick(old_gen, elapsed_ms=60_000) is None
        assert session.time_remaining_ms == 30_000
        assert len(session.decisions) == 1


class TestTraversal:
    def test_full_path(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        for option_id in ("A", "A", "A"):
            clock.advance(2)
            session.choose(option_id)
            result = session.continue_()

        assert [r.decision_point_id for r in result.decisions_made] == ["dp1", "dp2", "dp3"]
        assert result.ending_id == "optimal"
        assert result.scores == {
            "linguistic_accuracy": 10.0,
            "role_space_management": 15.0,
            "equipartial_fidelity": 0.0,
            "interaction_management": 12.0,
            "cultural_competence": 5.0,
        }
        assert result.total_score == 52.0
        assert result.total_time_ms == 6000
        assert result.consequence_flags == {"went_on": False}
        assert result.fallback_ending is False
        assert all(r.time_taken_ms >= 0 for r in result.decisions_made)

    def test_dangling_reference_falls_back(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("A")
        session.continue_()
        session.choose("B")
        result = session.continue_()

        assert result.fallback_ending is True
        assert result.ending_id == "failed"
        assert result.scores["linguistic_accuracy"] == -10.0
        assert result.total_score == 0.0
        assert len(result.decisions_made) == 2
        assert session.last_resolution.fallback is True
        assert session.last_resolution.reference == "dp_missing"

    def test_last_resolution_tracks_next_point(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        assert session.last_resolution is None
        session.choose("A")
        session.continue_()
        assert session.last_resolution.is_ending is False
        assert session.last_resolution.point.id == "dp2"
        session.exit()
        assert session.last_resolution is None

    def test_visited_count_not_scenario_size(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("B")
        result = session.continue_()
        assert len(result.decisions_made) == 1
        assert len(scenario.decision_points) == 3


class TestExit:
    def test_exit_mid_session_discards_state(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("A")
        session.exit()

        assert session.phase is Phase.EXITED
        assert session.result is None
        assert session.decisions == []
        assert session.consequence_flags == {}
        assert session.continue_() is None

    def test_exit_halts_timer(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        gen = session.timer_generation
        session.exit()
        assert session.tick(gen, elapsed_ms=60_000) is None
        assert session.timeouts_count == 0
        assert session.time_remaining_ms == 0

    def test_exit_from_intro(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.exit()
        assert session.phase is Phase.EXITED
        with pytest.raises(InvalidTransitionError):
            session.start()

    def test_exit_after_result_keeps_result(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        session.choose("B")
        result = session.continue_()
        session.exit()
        assert session.phase is Phase.RESULT
        assert session.result is result


class TestPulse:
    def test_none_outside_play(self, scenario, clock):
        session = _make_session(scenario, clock)
        assert session.pulse_intensity() is PulseIntensity.NONE

    def test_follows_remaining_time(self, scenario, clock):
        session = _make_session(scenario, clock)
        session.start()
        gen = session.timer_generation
        assert session.pulse_intensity() is PulseIntensity.NONE
        session.tick(gen, elapsed_ms=15_000)
        assert session.pulse_intensity() is PulseIntensity.LOW
        session.tick(gen, elapsed_ms=7_500)
        assert session.pulse_intensity() is PulseIntensity.MEDIUM
        session.tick(gen, elapsed_ms=4_500)
        assert session.pulse_intensity() is PulseIntensity.HIGH
