from pydantic import BaseModel

from models.schemas.assessment import CompatibilityLevel, Suggestion
from models.schemas.scoring import ScoringAnalytics, ScoringResult


class HealthResponse(BaseModel):
    status: str = "ok"
    scoring_policy: str = "standard"


class ScoreResponse(BaseModel):
    is_compatible: bool = False
    final_score: float = 0.0
    explanation: str = ""
    compatibility_level: CompatibilityLevel = CompatibilityLevel.INCOMPATIBLE
    compatibility_score: int = 0
    suggestions: list[Suggestion] = []
    input_error: str | None = None
    analytics: ScoringAnalytics | None = None

    @classmethod
    def from_result(cls, result: ScoringResult) -> "ScoreResponse":
        return cls(
            is_compatible=result.is_compatible,
            final_score=result.final_score,
            explanation=result.explanation,
            compatibility_level=result.assessment.compatibility_level,
            compatibility_score=result.assessment.compatibility_score,
            suggestions=result.assessment.suggestions,
            input_error=result.input_error,
            analytics=result.analytics,
        )
