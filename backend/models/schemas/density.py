"""Technical density and role classification outputs."""

from enum import Enum

from pydantic import BaseModel


class CategoryScore(BaseModel):
    score: float = 0.0  # matched / keywords in category
    matches: list[str] = []


class DensityResult(BaseModel):
    score: float = 0.0  # |all matches| / |all keywords|
    matches: list[str] = []
    category_scores: dict[str, CategoryScore] = {}


class RoleAssessment(BaseModel):
    is_technical: bool = False
    confidence: float = 0.0
    matched_role: str | None = None  # exact technical role phrase, if any


class JobCategory(str, Enum):
    TECHNICAL = "technical"
    MANAGEMENT = "management"
    CREATIVE = "creative"
    GENERAL = "general"


class JobClassification(BaseModel):
    category: JobCategory = JobCategory.GENERAL
    confidence: float = 0.0
    related_skills: list[str] = []
