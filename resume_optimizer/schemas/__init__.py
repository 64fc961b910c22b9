from .resume import (
    Keyword,
    OptimizationOptions,
    OptimizationResult,
    ReoptimizationRequest,
    ScoreBreakdown,
    SimulationResult,
    Suggestion,
)

__all__ = [
    "Suggestion",
    "Keyword",
    "ScoreBreakdown",
    "SimulationResult",
    "OptimizationOptions",
    "OptimizationResult",
    "ReoptimizationRequest",
]
