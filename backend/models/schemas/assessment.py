"""Compatibility gate output."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


class Severity(str, Enum):
    BLOCKING = "blocking"
    WARNING = "warning"


class CompatibilityLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    POTENTIAL = "potential"
    POOR = "poor"
    INCOMPATIBLE = "incompatible"


class Suggestion(BaseModel):
    type: str  # critical_skills, role_type, experience, skills_match
    message: str
    severity: Severity = Severity.BLOCKING


class ExperienceMismatch(BaseModel):
    required_years: float
    actual_years: float
    ratio: float


class RoleTypeMismatch(BaseModel):
    job_category: str | None = None
    resume_categories: list[str] = []


class AssessmentMetadata(BaseModel):
    skills_match: int | None = None  # 0-100, set once the skills gate runs
    missing_critical_skills: list[str] = []
    experience_mismatch: ExperienceMismatch | None = None
    role_type_mismatch: RoleTypeMismatch | None = None
    assessment_details: dict[str, Any] = {}
    has_warnings: bool = False
    assessment_timestamp: datetime | None = None
    assessment_version: str = "2.0"


class AssessmentResult(BaseModel):
    is_compatible: bool = False
    compatibility_score: int = 0  # 0-100
    compatibility_level: CompatibilityLevel = CompatibilityLevel.INCOMPATIBLE
    suggestions: list[Suggestion] = []
    metadata: AssessmentMetadata = AssessmentMetadata()

    @property
    def blockers(self) -> list[Suggestion]:
        return [s for s in self.suggestions if s.severity == Severity.BLOCKING]
