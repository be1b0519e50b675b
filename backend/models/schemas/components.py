"""Component scorer output."""

from pydantic import BaseModel

from models.schemas.experience import EntryRelevance


class ComponentScores(BaseModel):
    """Raw, pre-penalty sub-scores, each 0.0-1.0."""
    skills: float = 0.0
    experience: float = 0.0
    projects: float = 0.0
    education: float = 0.0
    job_title: float = 0.0


class ComponentAnalysis(BaseModel):
    required_keywords: list[str] = []  # technical keywords found in the job
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    missing_critical_skills: list[str] = []
    entry_relevance: list[EntryRelevance] = []
    project_overlap: dict[str, float] = {}
    education_relevance: list[float] = []
    best_matching_title: str = ""


class ComponentResult(BaseModel):
    score: float = 0.0  # weighted sum, 0.0-1.0
    component_scores: ComponentScores = ComponentScores()
    analysis: ComponentAnalysis = ComponentAnalysis()
