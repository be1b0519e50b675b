"""Skill catalog records and skill-matching results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TechnologyGroup(BaseModel):
    """A primary technology plus the related technologies that partly stand in for it."""
    model_config = ConfigDict(frozen=True)

    primary_name: str
    related_names: frozenset[str] = frozenset()
    compensation_factor: float = 0.5  # how much a related skill counts toward the primary
    context_tags: frozenset[str] = frozenset()
    category: str = ""  # frontend, backend, devops, mobile
    subcategory: str = ""  # frameworks, languages, databases, ...

    @property
    def members(self) -> frozenset[str]:
        return self.related_names | {self.primary_name}


class MatchType(str, Enum):
    DIRECT = "direct"
    RELATED = "related"
    POTENTIAL = "potential"


class SkillMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill: str  # required skill
    matched_with: str = ""  # candidate skill that satisfied it
    confidence: float = 0.0  # 0.0-1.0
    match_type: MatchType = MatchType.DIRECT
    context: str | None = None


class SkillCompensation(BaseModel):
    """A required skill covered by a related candidate skill."""
    model_config = ConfigDict(frozen=True)

    required_skill: str
    compensating_skill: str
    factor: float


class MatchConfig(BaseModel):
    base_weight: float = 1.0  # confidence of a direct match
    context_multiplier: float = 1.2  # boost when the job context mentions the group
    compensation_factor: float = 0.8  # used for related matches without a catalog factor
    min_threshold: float = 0.6  # related matches below this count as missing


class SkillMatchResult(BaseModel):
    score: float = 0.0  # 0.0-1.0
    matches: list[SkillMatch] = []
    compensations: list[SkillCompensation] = []
    missing_critical: list[str] = []
    suggestions: list[str] = []


class SkillMatchQuality(BaseModel):
    """Aggregate match quality of a candidate's skills against one job's core/peripheral split."""
    overall_match: float = 0.0
    core_skill_match: float = 0.0
    matched_core_skills: list[str] = []
    missing_core_skills: list[str] = []
    matched_peripheral_skills: list[str] = []
    missing_peripheral_skills: list[str] = []
    compensation_power: float = 0.0  # 0.0-1.0
