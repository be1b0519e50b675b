"""Plain-text explanations for scored and blocked results."""

from models.schemas.assessment import AssessmentResult, Severity
from models.schemas.components import ComponentScores
from models.schemas.compensation import PenaltyReason
from models.schemas.skills import SkillMatchQuality

MAX_LISTED_SKILLS = 5

# (component, threshold, message)
STRENGTH_RULES: list[tuple[str, float, str]] = [
    ("skills", 0.8, "Strong skill match with the job requirements"),
    ("experience", 0.7, "Relevant work experience"),
    ("projects", 0.7, "Relevant projects that demonstrate required skills"),
    ("education", 0.7, "Education aligned with the role"),
]
TITLE_STRENGTH_ABOVE = 0.5

IMPROVEMENT_RULES: list[tuple[str, float, str]] = [
    ("skills", 0.5, "Strengthen your skills section with technologies from the job description"),
    ("experience", 0.4, "Highlight experience that is more closely related to this role"),
    ("projects", 0.4, "Add projects that use the job's core technologies"),
    ("education", 0.3, "Add relevant education, courses or certifications"),
]


def build_strengths(scores: ComponentScores) -> list[str]:
    strengths = [msg for name, threshold, msg in STRENGTH_RULES if getattr(scores, name) >= threshold]
    if scores.job_title > TITLE_STRENGTH_ABOVE:
        strengths.append("Highly relevant job title")
    return strengths


def build_improvements(
    scores: ComponentScores,
    quality: SkillMatchQuality,
    floors: list[PenaltyReason] | None = None,
) -> list[str]:
    improvements: list[str] = []
    if quality.missing_core_skills:
        listed = ", ".join(quality.missing_core_skills[:MAX_LISTED_SKILLS])
        improvements.append(f"Consider acquiring these key skills: {listed}")
    improvements.extend(
        msg for name, threshold, msg in IMPROVEMENT_RULES if getattr(scores, name) < threshold
    )
    for reason in floors or []:
        if reason.suggestion not in improvements:
            improvements.append(reason.suggestion)
    return improvements


def _section(title: str, items: list[str]) -> str:
    return f"{title}:\n" + "\n".join(f"- {item}" for item in items)


def build_explanation(
    final_score: float,
    scores: ComponentScores,
    quality: SkillMatchQuality,
    floors: list[PenaltyReason] | None = None,
) -> str:
    parts = [f"Job Fit Score: {final_score:.1f}/10.0"]
    strengths = build_strengths(scores)
    if strengths:
        parts.append(_section("Strengths", strengths))
    improvements = build_improvements(scores, quality, floors)
    if improvements:
        parts.append(_section("Areas for Improvement", improvements))
    return "\n\n".join(parts)


def build_blocked_explanation(assessment: AssessmentResult) -> str:
    blockers = [s.message for s in assessment.suggestions if s.severity == Severity.BLOCKING]
    warnings = [s.message for s in assessment.suggestions if s.severity == Severity.WARNING]
    parts = ["This job is not a good match for your current profile."]
    if blockers:
        parts.append(_section("Blocking issues", blockers))
    if warnings:
        parts.append(_section("Warnings", warnings))
    return "\n\n".join(parts)


def build_input_error_explanation(reason: str) -> str:
    return f"Unable to score this job: {reason}"
