from __future__ import annotations

from pydantic import BaseModel, Field


class Suggestion(BaseModel):
    id: str = ""
    category: str = "general"
    text: str = ""
    impact_description: str = ""
    is_applied: bool = False
    section: str | None = None
    # Memoized; always recomputable from category + impact_description.
    impact_score: int | None = None
    point_impact: float | None = None


class Keyword(BaseModel):
    id: str = ""
    text: str
    is_applied: bool = False
    # Memoized; depends on the resume content the keyword was analyzed against.
    category: str | None = None
    impact: float | None = None
    point_impact: float | None = None


class ScoreBreakdown(BaseModel):
    base: float
    suggestion_points: int
    keyword_points: int
    total: int = Field(ge=0, le=100)
    potential: int = Field(ge=0, le=100)
    section_scores: dict[str, int] = Field(default_factory=dict)


class SimulationResult(BaseModel):
    new_score: int
    point_impact: float
    description: str


class OptimizationOptions(BaseModel):
    language: str | None = None
    target_role: str | None = None
    industry_sector: str | None = None
    job_description_text: str | None = None
    max_suggestions: int = Field(default=5, ge=1, le=5)
    max_keywords: int = Field(default=10, ge=1, le=10)
    include_ats_instructions: bool = True
    custom_instructions: list[str] = Field(default_factory=list)
    focus_sections: list[str] = Field(default_factory=list)


class OptimizationResult(BaseModel):
    optimized_text: str
    suggestions: list[Suggestion] = Field(default_factory=list)
    keyword_suggestions: list[str] = Field(default_factory=list)
    ats_score: int = Field(default=65, ge=0, le=100)
    provider_id: str
    resume_id: str | None = None
    language: str | None = None


class ReoptimizationRequest(BaseModel):
    resume_id: str | None = None
    original_text: str
    optimized_text: str = ""
    language: str = "English"
    provider: str | None = None
    ats_score: int | None = Field(default=None, ge=0, le=100)
    applied_keywords: list[str] = Field(default_factory=list)
    applied_suggestions: list[Suggestion] = Field(default_factory=list)
