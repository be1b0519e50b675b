"""Penalty compensation and minimum penalty floors.

Penalties are reduction fractions per category (1 - component score, plus
technical and seniority penalties). They are adjusted in three steps:

    original ──(years-of-experience table)──> compensated
             ──(stacked skill/project/synergy reductions)──> adjusted
             ──(minimum floors, always win)──> final

Reductions in one category combine multiplicatively, 1 - (1-r1)(1-r2)...,
are capped per category (education 0.8, experience 0.7, technical 0.6),
and are rescaled together if the largest one exceeds 0.85.
"""

import logging
from collections import defaultdict
from typing import Any

from models.schemas.compensation import (
    CompensationResult,
    PenaltyReason,
    ProjectRelevance,
    SkillMatchLevel,
)
from models.schemas.resume import ProjectEntry
from models.schemas.skills import SkillMatchQuality
from services.scoring.base import BaseScoringService
from services.skill_extractor import extract_skills
from services.skill_normalizer import are_similar_skills, normalize_skills
from services.text_parsing import extract_key_phrases

logger = logging.getLogger(__name__)

# years -> (education reduction, reduction for every other category)
EXPERIENCE_POWER_TABLE: list[tuple[float, float, float]] = [
    (7.0, 1.0, 0.5),
    (5.0, 1.0, 0.25),
    (3.0, 1.0, 0.0),
    (1.0, 0.5, 0.0),
]

SKILL_MATCH_LEVELS: list[tuple[float, SkillMatchLevel]] = [
    (0.85, SkillMatchLevel.VERY_HIGH),
    (0.70, SkillMatchLevel.HIGH),
    (0.40, SkillMatchLevel.MODERATE),
]

EXPERIENCE_FAMILY: tuple[str, ...] = ("experience", "seniority", "leadership")
MINIMUM_PENALTY_THRESHOLD = 0.1

CATEGORY_REDUCTION_CAPS: dict[str, float] = {
    "education": 0.8,
    "experience": 0.7,
    "technical": 0.6,
}
OVERALL_REDUCTION_CAP = 0.85

# Project-based compensation
HIGHLY_RELEVANT_EXPERIENCE_REDUCTION = 0.2
MULTI_PROJECT_EXPERIENCE_REDUCTION = 0.15
MULTI_PROJECT_EDUCATION_REDUCTION = 0.15
MIN_RELEVANT_PROJECTS = 2
PROJECT_TECH_WEIGHT = 0.6
PROJECT_KEYWORD_WEIGHT = 0.4

# Skill-project synergy
SYNERGY_REDUCTION = 0.1
SYNERGY_MIN_OVERALL_MATCH = 0.7

# ---------------------------------------------------------------------------
# Minimum penalty floors
# ---------------------------------------------------------------------------
SEVERE_SKILL_MISMATCH_BELOW = 0.2
TECH_ROLE_CORE_MATCH_BELOW = 0.3
EXPERIENCE_GAP_REQUIRED_YEARS = 5.0
EXPERIENCE_GAP_ACTUAL_BELOW = 2.0

PENALTY_REASONS: dict[str, PenaltyReason] = {
    "SKILL_MISMATCH": PenaltyReason(
        code="SKILL_MISMATCH",
        category="skills",
        description="Severe mismatch between your skills and the job requirements",
        suggestion="Focus on acquiring the core skills listed in the job description",
        minimum_penalty=0.3,
    ),
    "TECH_ROLE_MISMATCH": PenaltyReason(
        code="TECH_ROLE_MISMATCH",
        category="technical",
        description="Core technical skills for this role are largely missing",
        suggestion="Build hands-on experience with the role's core technologies",
        minimum_penalty=0.4,
    ),
    "EXPERIENCE_GAP": PenaltyReason(
        code="EXPERIENCE_GAP",
        category="experience",
        description="Significant gap between required and actual years of experience",
        suggestion="Consider roles closer to your experience level or highlight equivalent work",
        minimum_penalty=0.25,
    ),
    "EDUCATION_MISMATCH": PenaltyReason(
        code="EDUCATION_MISMATCH",
        category="education",
        description="The role asks for a degree and no education is listed",
        suggestion="Add your education or relevant certifications",
        minimum_penalty=0.2,
    ),
}


def stack_reductions(reductions: list[float]) -> float:
    """Combine reductions multiplicatively: 1 - prod(1 - r)."""
    remaining = 1.0
    for r in reductions:
        remaining *= 1.0 - max(0.0, min(1.0, r))
    return 1.0 - remaining


def skill_match_level(overall_match: float) -> SkillMatchLevel:
    for threshold, level in SKILL_MATCH_LEVELS:
        if overall_match >= threshold:
            return level
    return SkillMatchLevel.NONE


def experience_compensation_power(years: float) -> tuple[float, float]:
    """(education reduction, other-category reduction) earned by years of experience."""
    for min_years, education, others in EXPERIENCE_POWER_TABLE:
        if years >= min_years:
            return education, others
    return 0.0, 0.0


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class CompensationService(BaseScoringService):
    service_name = "compensation"

    def load(self) -> None:
        logger.info("Compensation caps: %s, overall %.2f", CATEGORY_REDUCTION_CAPS, OVERALL_REDUCTION_CAP)

    def predict(self, **kwargs: Any) -> CompensationResult:
        self.ensure_loaded()
        return self.compensate(
            kwargs["penalties"],
            kwargs["quality"],
            kwargs.get("years_of_experience", 0.0),
            projects=kwargs.get("projects"),
        )

    # ------------------------------------------------------------------
    # Project relevance
    # ------------------------------------------------------------------

    def assess_project_relevance(
        self,
        projects: list[ProjectEntry],
        job_text: str,
        job_skills: list[str],
    ) -> list[ProjectRelevance]:
        job_words = extract_key_phrases(job_text)
        results: list[ProjectRelevance] = []
        for project in projects:
            technologies = normalize_skills(
                list(project.technologies) + sorted(extract_skills(project.description))
            )
            matched = [t for t in technologies if any(are_similar_skills(t, j) for j in job_skills)]
            tech_score = len(matched) / len(technologies) if technologies else 0.0

            phrases = extract_key_phrases(f"{project.name} {project.description}")
            keyword_score = len(phrases & job_words) / len(phrases) if phrases else 0.0

            relevance = PROJECT_TECH_WEIGHT * tech_score + PROJECT_KEYWORD_WEIGHT * keyword_score
            results.append(ProjectRelevance(
                name=project.name,
                relevance_score=round(relevance, 4),
                technology_score=round(tech_score, 4),
                keyword_score=round(keyword_score, 4),
                matched_technologies=matched,
            ))
        return results

    # ------------------------------------------------------------------
    # Compensation
    # ------------------------------------------------------------------

    def _collect_reductions(
        self,
        penalties: dict[str, float],
        quality: SkillMatchQuality,
        projects: list[ProjectRelevance],
        analysis: list[str],
    ) -> dict[str, list[float]]:
        reductions: dict[str, list[float]] = defaultdict(list)

        if quality.compensation_power > 0:
            for category in EXPERIENCE_FAMILY:
                if category in penalties:
                    reductions[category].append(quality.compensation_power)
            analysis.append(
                f"Skill match {quality.overall_match:.0%} reduces experience-related penalties "
                f"by up to {quality.compensation_power:.0%}"
            )

        highly_relevant = [p for p in projects if p.is_highly_relevant]
        relevant = [p for p in projects if p.is_relevant]
        project_experience = 0.0
        if highly_relevant:
            project_experience = HIGHLY_RELEVANT_EXPERIENCE_REDUCTION
            analysis.append(f"{len(highly_relevant)} highly relevant project(s) offset the experience gap")
        if len(relevant) >= MIN_RELEVANT_PROJECTS:
            project_experience = max(project_experience, MULTI_PROJECT_EXPERIENCE_REDUCTION)
            reductions["education"].append(MULTI_PROJECT_EDUCATION_REDUCTION)
            analysis.append(f"{len(relevant)} relevant projects offset the education gap")
        if project_experience:
            reductions["experience"].append(project_experience)

        core = set(quality.matched_core_skills)
        if quality.overall_match >= SYNERGY_MIN_OVERALL_MATCH and any(
            core & set(p.matched_technologies) for p in projects
        ):
            reductions["experience"].append(SYNERGY_REDUCTION)
            reductions["technical"].append(SYNERGY_REDUCTION)
            analysis.append("Projects apply your matched core skills (synergy bonus)")

        return reductions

    def _cap_reductions(self, reductions: dict[str, list[float]]) -> dict[str, float]:
        combined = {
            category: min(stack_reductions(values), CATEGORY_REDUCTION_CAPS.get(category, 1.0))
            for category, values in reductions.items()
        }
        largest = max(combined.values(), default=0.0)
        if largest > OVERALL_REDUCTION_CAP:
            scale = OVERALL_REDUCTION_CAP / largest
            combined = {category: value * scale for category, value in combined.items()}
        return combined

    def compensate(
        self,
        penalties: dict[str, float],
        quality: SkillMatchQuality,
        years_of_experience: float,
        projects: list[ProjectRelevance] | None = None,
    ) -> CompensationResult:
        original = {category: _clamp(value) for category, value in penalties.items()}
        analysis: list[str] = []

        education_power, other_power = experience_compensation_power(years_of_experience)
        compensated = {
            category: value * (1.0 - (education_power if category == "education" else other_power))
            for category, value in original.items()
        }
        if education_power or other_power:
            analysis.append(
                f"{years_of_experience:g} years of experience: education penalty reduced by "
                f"{education_power:.0%}, other penalties by {other_power:.0%}"
            )

        reductions = self._cap_reductions(
            self._collect_reductions(original, quality, projects or [], analysis)
        )

        adjusted: dict[str, float] = {}
        for category, value in compensated.items():
            reduced = value * (1.0 - reductions.get(category, 0.0))
            if category in EXPERIENCE_FAMILY:
                reduced = max(reduced, original[category] * MINIMUM_PENALTY_THRESHOLD)
            adjusted[category] = round(reduced, 4)

        return CompensationResult(
            skill_match_level=skill_match_level(quality.overall_match),
            compensation_power=quality.compensation_power,
            original_penalties=original,
            compensated_penalties={k: round(v, 4) for k, v in compensated.items()},
            adjusted_penalties=adjusted,
            reductions={k: round(v, 4) for k, v in reductions.items()},
            analysis=analysis,
        )

    # ------------------------------------------------------------------
    # Floors
    # ------------------------------------------------------------------

    def enforce_floors(
        self,
        penalties: dict[str, float],
        quality: SkillMatchQuality,
        is_technical_role: bool,
        required_years: float,
        actual_years: float,
        requires_degree: bool = False,
        has_education: bool = True,
    ) -> tuple[dict[str, float], list[PenaltyReason]]:
        """Raise penalties to their minimums for severe mismatches. Floors always win."""
        triggered: list[PenaltyReason] = []
        if quality.overall_match < SEVERE_SKILL_MISMATCH_BELOW:
            triggered.append(PENALTY_REASONS["SKILL_MISMATCH"])
        if is_technical_role and quality.core_skill_match < TECH_ROLE_CORE_MATCH_BELOW:
            triggered.append(PENALTY_REASONS["TECH_ROLE_MISMATCH"])
        if required_years >= EXPERIENCE_GAP_REQUIRED_YEARS and actual_years < EXPERIENCE_GAP_ACTUAL_BELOW:
            triggered.append(PENALTY_REASONS["EXPERIENCE_GAP"])
        if requires_degree and not has_education:
            triggered.append(PENALTY_REASONS["EDUCATION_MISMATCH"])

        floored = dict(penalties)
        for reason in triggered:
            current = floored.get(reason.category, 0.0)
            floored[reason.category] = max(current, reason.minimum_penalty)
            logger.debug("Penalty floor %s applied to %s", reason.code, reason.category)
        return floored, triggered
