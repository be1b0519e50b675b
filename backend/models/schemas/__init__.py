"""Pydantic contracts shared by the scoring stages."""

from models.schemas.assessment import AssessmentResult, Suggestion
from models.schemas.components import ComponentResult, ComponentScores
from models.schemas.compensation import CompensationResult, PenaltyReason, ProjectRelevance
from models.schemas.density import DensityResult
from models.schemas.experience import ExperienceProfile, SeniorityLevel
from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from models.schemas.scoring import ScoringAnalytics, ScoringResult
from models.schemas.skills import SkillMatch, SkillMatchQuality, SkillMatchResult, TechnologyGroup

__all__ = [
    "AssessmentResult",
    "Suggestion",
    "ComponentResult",
    "ComponentScores",
    "CompensationResult",
    "PenaltyReason",
    "ProjectRelevance",
    "DensityResult",
    "ExperienceProfile",
    "SeniorityLevel",
    "JobDetails",
    "ResumeData",
    "ScoringAnalytics",
    "ScoringResult",
    "SkillMatch",
    "SkillMatchQuality",
    "SkillMatchResult",
    "TechnologyGroup",
]
