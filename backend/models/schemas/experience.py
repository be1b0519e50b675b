"""Experience and seniority analysis outputs."""

from enum import Enum

from pydantic import BaseModel


class SeniorityLevel(str, Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    EXPERT = "expert"


SENIORITY_ORDER: list[SeniorityLevel] = [
    SeniorityLevel.JUNIOR,
    SeniorityLevel.MID,
    SeniorityLevel.SENIOR,
    SeniorityLevel.EXPERT,
]


class SeniorityAssessment(BaseModel):
    level: SeniorityLevel = SeniorityLevel.MID
    confidence: float = 0.6
    indicators: list[str] = []


class IndustryAssessment(BaseModel):
    industry: str | None = None
    confidence: float = 0.0


class EntryAnalysis(BaseModel):
    """Derived view of one work-history entry."""
    title: str = ""
    company: str = ""
    months: int = 0
    is_current: bool = False
    recency: float = 0.0  # exp(-months_since_end / 24)
    seniority: SeniorityAssessment = SeniorityAssessment()
    industry: IndustryAssessment = IndustryAssessment()


class EntryRelevance(BaseModel):
    title: str = ""
    skill_overlap: float = 0.0
    industry_match: float = 0.0
    seniority_alignment: float = 0.0
    recency: float = 0.0
    relevance: float = 0.0  # weighted blend


class ExperienceProfile(BaseModel):
    total_years: float = 0.0
    entries: list[EntryAnalysis] = []  # valid entries only
    invalid_entries: int = 0  # entries excluded for unparsable dates
    seniority: SeniorityAssessment = SeniorityAssessment()
