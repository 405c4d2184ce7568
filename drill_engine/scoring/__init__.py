from drill_engine.scoring.accumulator import ScoreAccumulator
from drill_engine.scoring.pulse import pulse_intensity
from drill_engine.scoring.result import calculate_result, final_score
from drill_engine.scoring.progress import DrillProgress
from drill_engine.scoring.analysis import SkillArea, SkillSummary, summarize_skill_areas

__all__ = [
    "ScoreAccumulator",
    "pulse_intensity",
    "calculate_result",
    "final_score",
    "DrillProgress",
    "SkillArea",
    "SkillSummary",
    "summarize_skill_areas",
]
