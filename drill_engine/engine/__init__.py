from drill_engine.engine.clock import Clock, ManualClock, MonotonicClock
from drill_engine.engine.timer import DecisionTimer
from drill_engine.engine.resolver import PathResolver, Resolution, ResolutionKind, fallback_ending
from drill_engine.engine.session import DrillSession
from drill_engine.engine.driver import DrillDriver

__all__ = [
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "DecisionTimer",
    "PathResolver",
    "Resolution",
    "ResolutionKind",
    "fallback_ending",
    "DrillSession",
    "DrillDriver",
]
