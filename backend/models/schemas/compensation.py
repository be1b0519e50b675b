"""Penalty and compensation records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SkillMatchLevel(str, Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    NONE = "none"


class PenaltyReason(BaseModel):
    """A minimum penalty that compensation may not reduce below."""
    model_config = ConfigDict(frozen=True)

    code: str
    category: str  # penalty category the floor applies to
    description: str
    suggestion: str
    minimum_penalty: float


class ProjectRelevance(BaseModel):
    name: str = ""
    relevance_score: float = 0.0  # technology 60% + key phrases 40%
    technology_score: float = 0.0
    keyword_score: float = 0.0
    matched_technologies: list[str] = []

    @property
    def is_highly_relevant(self) -> bool:
        return self.relevance_score >= 0.7

    @property
    def is_relevant(self) -> bool:
        return self.relevance_score >= 0.4


class CompensationResult(BaseModel):
    """Per-request snapshot of how penalties were reduced."""
    model_config = ConfigDict(frozen=True)

    skill_match_level: SkillMatchLevel = SkillMatchLevel.NONE
    compensation_power: float = 0.0
    original_penalties: dict[str, float] = {}
    compensated_penalties: dict[str, float] = {}  # after the years-of-experience table
    adjusted_penalties: dict[str, float] = {}  # after stacked reductions
    reductions: dict[str, float] = {}  # combined, capped reduction per category
    analysis: list[str] = []
