"""Time-pressure feedback tiers for the decision countdown."""

from __future__ import annotations

from drill_engine.models.constants import PulseIntensity

# (exclusive lower bound on remaining %, intensity), checked in order
_BANDS = (
    (50.0, PulseIntensity.NONE),
    (25.0, PulseIntensity.LOW),
    (10.0, PulseIntensity.MEDIUM),
    (0.0, PulseIntensity.HIGH),
)


def remaining_percentage(time_remaining_ms: float, timer_duration_ms: float) -> float:
    if timer_duration_ms <= 0:
        return 0.0
    return time_remaining_ms / timer_duration_ms * 100.0


def pulse_intensity(time_remaining_ms: float, timer_duration_ms: float) -> PulseIntensity:
    """Map time left on a decision to a feedback severity.

    A percentage equal to a band boundary falls into the lower band, so
    exactly 50% remaining is LOW and exactly 0% is CRITICAL.
    """
    if timer_duration_ms <= 0:
        return PulseIntensity.NONE

    pct = remaining_percentage(time_remaining_ms, timer_duration_ms)
    for lower, intensity in _BANDS:
        if pct > lower:
            return intensity
    return PulseIntensity.CRITICAL
