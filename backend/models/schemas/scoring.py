"""Terminal pipeline output."""

from pydantic import BaseModel

from models.schemas.assessment import AssessmentResult
from models.schemas.components import ComponentScores
from models.schemas.compensation import CompensationResult, PenaltyReason, ProjectRelevance
from models.schemas.experience import ExperienceProfile
from models.schemas.skills import SkillMatchQuality, SkillMatchResult


class ScoringAnalytics(BaseModel):
    policy: str = "standard"
    component_scores: ComponentScores = ComponentScores()
    weights: dict[str, float] = {}
    is_technical_role: bool = False
    skill_match: SkillMatchResult = SkillMatchResult()
    skill_match_quality: SkillMatchQuality = SkillMatchQuality()
    experience: ExperienceProfile = ExperienceProfile()
    required_years: float = 0.0
    project_relevance: list[ProjectRelevance] = []
    compensation: CompensationResult = CompensationResult()
    floors_applied: list[PenaltyReason] = []
    final_penalties: dict[str, float] = {}
    weighted_score: float = 0.0  # before title bonus, 0-10
    title_bonus: float = 0.0


class ScoringResult(BaseModel):
    final_score: float = 0.0  # 0-10
    explanation: str = ""
    assessment: AssessmentResult = AssessmentResult()
    analytics: ScoringAnalytics | None = None  # None when blocked or on input errors
    input_error: str | None = None

    @property
    def is_compatible(self) -> bool:
        return self.assessment.is_compatible
