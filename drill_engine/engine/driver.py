"""Real-time driver that feeds clock ticks into a session."""

from __future__ import annotations

from typing import Optional

from drill_engine.engine.clock import Clock, to_ms
from drill_engine.engine.session import DrillSession
from drill_engine.models.scenario import Option


class DrillDriver:
    """Pumps fixed-interval ticks for the decision currently on screen.

    Ticks are counted from the moment the decision was armed and carry the
    generation captured at that moment, so a late pump after a manual choice
    only produces stale ticks.
    """

    def __init__(self, session: DrillSession, clock: Optional[Clock] = None):
        self.session = session
        self.clock: Clock = clock or session.clock
        self._generation: Optional[int] = None
        self._ticks_sent = 0

    def pump(self) -> Optional[Option]:
        """Deliver every tick due since the last pump.

        Returns the forced option if the countdown expired.
        """
        session = self.session
        if not session.awaiting_choice:
            return None

        gen = session.timer_generation
        if gen != self._generation:
            self._generation = gen
            self._ticks_sent = 0

        interval = session.settings.tick_interval_ms
        elapsed = to_ms(self.clock.now() - session.decision_started_at)
        due = max(0, elapsed // interval - self._ticks_sent)

        for _ in range(due):
            self._ticks_sent += 1
            forced = session.tick(self._generation)
            if forced is not None:
                return forced
            if not session.awaiting_choice:
                break
        return None
