"""Per-decision countdown with generation-based cancellation.

Every arm() and disarm() advances a generation counter. A tick carries the
generation it was scheduled under; ticks from an older generation are stale
and ignored. This settles the race between a late tick and a manual choice
without cancelling anything that is already in flight.
"""

from __future__ import annotations

from drill_engine.models.constants import DEFAULT_SETTINGS


class DecisionTimer:
    """Countdown for a single decision point."""

    def __init__(self, duration_ms: int, tick_interval_ms: int = DEFAULT_SETTINGS.tick_interval_ms):
        if duration_ms <= 0:
            raise ValueError("duration_ms must be > 0")
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be > 0")
        self.duration_ms = int(duration_ms)
        self.tick_interval_ms = int(tick_interval_ms)
        self._generation = 0
        self._remaining_ms = 0
        self._armed = False
        self._fired = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def remaining_ms(self) -> int:
        return self._remaining_ms

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def fired(self) -> bool:
        return self._fired

    def arm(self) -> int:
        """Start a fresh countdown and return its generation."""
        self._generation += 1
        self._remaining_ms = self.duration_ms
        self._armed = True
        self._fired = False
        return self._generation

    def disarm(self) -> None:
        """Stop the countdown; any tick already scheduled becomes stale."""
        self._generation += 1
        self._armed = False

    def is_current(self, generation: int) -> bool:
        return self._armed and generation == self._generation

    def tick(self, generation: int, elapsed_ms: int | None = None) -> bool:
        """Advance the countdown. Returns True exactly once, on expiry."""
        if not self.is_current(generation) or self._fired:
            return False

        step = self.tick_interval_ms if elapsed_ms is None else int(elapsed_ms)
        self._remaining_ms = max(0, self._remaining_ms - max(0, step))
        if self._remaining_ms > 0:
            return False

        self._fired = True
        self._armed = False
        return True
