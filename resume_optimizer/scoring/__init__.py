from .engine import (
    calculate_detailed_ats_score,
    calculate_keyword_point_impact,
    calculate_potential_points,
    calculate_suggestion_point_impact,
)
from .impact import ImpactLevel, analyze_keyword_impact, analyze_suggestion_impact, get_impact_level
from .sections import evaluate_resume_sections
from .session import ScoreSession

__all__ = [
    "ImpactLevel",
    "analyze_suggestion_impact",
    "analyze_keyword_impact",
    "get_impact_level",
    "calculate_suggestion_point_impact",
    "calculate_keyword_point_impact",
    "calculate_potential_points",
    "calculate_detailed_ats_score",
    "evaluate_resume_sections",
    "ScoreSession",
]
