"""Tests for the decision countdown and its generation counter."""

import pytest

from drill_engine.engine.timer import DecisionTimer


class TestArming:
    def test_arm_sets_full_duration(self):
        timer = DecisionTimer(30_000)
        gen = timer.arm()
        assert timer.remaining_ms == 30_000
        assert timer.armed
        assert gen == timer.generation == 1

    def test_generation_increases(self):
        timer = DecisionTimer(1000)
        g1 = timer.arm()
        timer.disarm()
        g2 = timer.arm()
        assert g2 == g1 + 2
        assert timer.generation == 3

    def test_invalid_duration(self):
        with pytest.raises(ValueError):
            DecisionTimer(0)


class TestTicking:
    def test_tick_decrements_by_interval(self):
        timer = DecisionTimer(1000, tick_interval_ms=100)
        gen = timer.arm()
        assert timer.tick(gen) is False
        assert timer.remaining_ms == 900

    def test_fires_exactly_once(self):
        timer = DecisionTimer(300, tick_interval_ms=100)
        gen = timer.arm()
        fired = [timer.tick(gen) for _ in range(6)]
        assert fired == [False, False, True, False, False, False]
        assert timer.remaining_ms == 0
        assert timer.fired

    def test_custom_elapsed(self):
        timer = DecisionTimer(1000)
        gen = timer.arm()
        assert timer.tick(gen, elapsed_ms=1500) is True
        assert timer.remaining_ms == 0

    def test_stale_generation_ignored(self):
        timer = DecisionTimer(200)
        old = timer.arm()
        timer.disarm()
        assert timer.tick(old, elapsed_ms=500) is False
        assert timer.fired is False

    def test_rearm_invalidates_previous_ticks(self):
        timer = DecisionTimer(200)
        old = timer.arm()
        new = timer.arm()
        assert timer.tick(old, elapsed_ms=500) is False
        assert timer.remaining_ms == 200
        assert timer.tick(new, elapsed_ms=200) is True

    def test_disarm_stops_ticks(self):
        timer = DecisionTimer(1000)
        gen = timer.arm()
        timer.tick(gen)
        timer.disarm()
        assert timer.tick(gen) is False
        assert timer.remaining_ms == 900
        assert not timer.armed
