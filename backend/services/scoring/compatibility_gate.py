"""Compatibility gate: ordered blocking checks run before full scoring.

States, strictly in order, each terminal on failure:
    1. critical skills   - emphasized / frequently mentioned job skills the resume lacks
    2. role type         - job vs. candidate role family (technical, management, hr, ...)
    3. experience level  - candidate years vs. required years (warning band 50-70%)
    4. skills match      - 70% exact + 30% including related skills, 0-100

A failed state appends one blocking suggestion and stops; later states never run.
"""

import logging
import re
from datetime import datetime
from typing import Any, Callable

from config import settings
from models.schemas.assessment import (
    AssessmentMetadata,
    AssessmentResult,
    CompatibilityLevel,
    ExperienceMismatch,
    RoleTypeMismatch,
    Severity,
    Suggestion,
)
from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from services import technology_catalog as catalog
from services.scoring.base import BaseScoringService
from services.scoring.registry import get_service
from services.skill_extractor import (
    TECH_SKILLS,
    collect_resume_skills,
    count_skill_mentions,
    find_emphasized_skills,
)
from services.skill_normalizer import are_similar_skills, normalize_skill
from services.text_parsing import extract_required_years, months_between, parse_date

logger = logging.getLogger(__name__)

ASSESSMENT_VERSION = "2.0"

# Checked in order; the first category matching the job title wins
ROLE_CATEGORIES: dict[str, list[str]] = {
    "technical": [
        "developer", "engineer", "programmer", "analyst", "architect",
        "software", "data scientist", "devops",
    ],
    "management": ["manager", "director", "lead", "head", "supervisor", "coordinator"],
    "hr": ["hr", "human resources", "recruiter", "talent", "people operations"],
    "design": ["designer", "ux", "ui", "creative", "graphic"],
    "administrative": ["coordinator", "assistant", "secretary", "admin"],
    "marketing": ["marketing", "seo", "content", "social media", "brand"],
    "sales": ["sales", "account executive", "business development"],
}

TECHNICAL_EVIDENCE_KEYWORDS: list[str] = [
    "programming", "software development", "coding", "engineering", "database",
    "api", "backend", "frontend", "full stack", "algorithms", "data structures",
    "system design",
]
MIN_TECHNICAL_SKILLS = 2

# Skills treated as partial matches for the key on the left
RELATED_SKILLS_MAP: dict[str, list[str]] = {
    "react": ["javascript", "jsx", "redux", "hooks", "frontend", "front-end", "web"],
    "javascript": ["typescript", "js", "es6", "frontend", "node.js", "react", "vue", "angular"],
    "frontend": ["front-end", "react", "vue", "angular", "javascript", "html", "css"],
    "backend": ["back-end", "node.js", "express", "java", "python", "php"],
    "database": ["sql", "mysql", "postgresql", "mongodb", "oracle"],
}

COMPATIBILITY_LEVELS: list[tuple[int, CompatibilityLevel]] = [
    (85, CompatibilityLevel.EXCELLENT),
    (70, CompatibilityLevel.GOOD),
    (55, CompatibilityLevel.POTENTIAL),
    (40, CompatibilityLevel.POOR),
]

EXACT_MATCH_WEIGHT = 70
COVERAGE_WEIGHT = 30


def compatibility_level(score: int) -> CompatibilityLevel:
    for threshold, level in COMPATIBILITY_LEVELS:
        if score >= threshold:
            return level
    return CompatibilityLevel.INCOMPATIBLE


def _fmt_years(years: float) -> str:
    return f"{years:g}"


class _GateInput:
    """Request-scoped values shared by the gate states."""

    def __init__(self, resume: ResumeData, job: JobDetails, resume_skills: list[str], now: datetime) -> None:
        self.resume = resume
        self.job = job
        self.job_text = job.full_text
        self.resume_skills = resume_skills
        self.now = now
        self.job_skill_counts = count_skill_mentions(self.job_text)

    def has_skill(self, skill: str) -> bool:
        return any(are_similar_skills(skill, r) for r in self.resume_skills)


class CompatibilityGateService(BaseScoringService):
    service_name = "compatibility_gate"

    def __init__(self) -> None:
        self._role_patterns: dict[str, list[re.Pattern]] = {}
        self._evidence_patterns: list[re.Pattern] = []
        self._experience = None

    def load(self) -> None:
        self._role_patterns = {
            category: [re.compile(rf"\b{re.escape(kw)}\b") for kw in keywords]
            for category, keywords in ROLE_CATEGORIES.items()
        }
        self._evidence_patterns = [
            re.compile(rf"\b{re.escape(kw)}\b") for kw in TECHNICAL_EVIDENCE_KEYWORDS
        ]
        self._experience = get_service("experience_analyzer")

    def predict(self, **kwargs: Any) -> AssessmentResult:
        self.ensure_loaded()
        return self.assess(
            kwargs["resume"],
            kwargs["job"],
            resume_skills=kwargs.get("resume_skills"),
            now=kwargs.get("now"),
        )

    def assess(
        self,
        resume: ResumeData,
        job: JobDetails,
        resume_skills: list[str] | None = None,
        now: datetime | None = None,
    ) -> AssessmentResult:
        self.ensure_loaded()
        now = now or datetime.now()
        if resume_skills is None:
            resume_skills = collect_resume_skills(resume)
        gate = _GateInput(resume, job, resume_skills, now)
        metadata = AssessmentMetadata(assessment_timestamp=now, assessment_version=ASSESSMENT_VERSION)
        suggestions: list[Suggestion] = []

        states: list[Callable[[_GateInput, AssessmentMetadata, list[Suggestion]], Suggestion | None]] = [
            self.check_critical_skills,
            self.check_role_type,
            self.check_experience_level,
            self.check_skills_match,
        ]
        for state in states:
            blocker = state(gate, metadata, suggestions)
            if blocker is not None:
                suggestions.append(blocker)
                logger.info("Compatibility gate blocked at %s: %s", blocker.type, blocker.message)
                return self._finalize(False, 0, suggestions, metadata)

        score = metadata.skills_match if metadata.skills_match is not None else 0
        return self._finalize(True, score, suggestions, metadata)

    def _finalize(
        self,
        is_compatible: bool,
        score: int,
        suggestions: list[Suggestion],
        metadata: AssessmentMetadata,
    ) -> AssessmentResult:
        metadata.has_warnings = any(s.severity == Severity.WARNING for s in suggestions)
        return AssessmentResult(
            is_compatible=is_compatible,
            compatibility_score=score,
            compatibility_level=compatibility_level(score) if is_compatible else CompatibilityLevel.INCOMPATIBLE,
            suggestions=suggestions,
            metadata=metadata,
        )

    # ------------------------------------------------------------------
    # 1. Critical skills
    # ------------------------------------------------------------------

    def check_critical_skills(
        self, gate: _GateInput, metadata: AssessmentMetadata, suggestions: list[Suggestion]
    ) -> Suggestion | None:
        job_skills = set(gate.job_skill_counts)
        emphasized = find_emphasized_skills(gate.job_text, job_skills)
        frequent = {s for s, n in gate.job_skill_counts.items() if n >= 2}

        missing_required = sorted(s for s in emphasized if not gate.has_skill(s))
        missing_critical = sorted(s for s in emphasized | frequent if not gate.has_skill(s))
        metadata.missing_critical_skills = missing_critical
        metadata.assessment_details["critical_skills"] = sorted(emphasized | frequent)

        if (
            len(missing_required) > settings.max_missing_required_skills
            or len(missing_critical) > settings.max_missing_critical_skills
        ):
            return Suggestion(
                type="critical_skills",
                message=f"This role requires expertise in: {', '.join(missing_critical)}",
            )
        return None

    # ------------------------------------------------------------------
    # 2. Role type
    # ------------------------------------------------------------------

    def _categories_of(self, text: str) -> list[str]:
        lower = (text or "").lower()
        return [
            category for category, patterns in self._role_patterns.items()
            if any(p.search(lower) for p in patterns)
        ]

    def job_category(self, job_title: str) -> str | None:
        categories = self._categories_of(job_title)
        return categories[0] if categories else None

    def resume_categories(self, resume: ResumeData) -> list[str]:
        found: dict[str, None] = {}
        for title in [resume.title] + [e.title for e in resume.work_experience]:
            for category in self._categories_of(title):
                found.setdefault(category, None)
        return list(found)

    def has_strong_technical_background(self, resume: ResumeData, resume_skills: list[str]) -> bool:
        text = " ".join(
            [", ".join(resume.skills)]
            + [p.description for p in resume.projects]
            + [e.description for e in resume.work_experience]
        ).lower()
        if any(p.search(text) for p in self._evidence_patterns):
            return True
        technical = {normalize_skill(s) for s in resume_skills} & TECH_SKILLS
        return len(technical) >= MIN_TECHNICAL_SKILLS

    def management_years(self, resume: ResumeData, now: datetime) -> float:
        patterns = self._role_patterns["management"]
        months = 0
        for entry in resume.work_experience:
            if not any(p.search(entry.title.lower()) for p in patterns):
                continue
            start = parse_date(entry.start_date, now)
            end = parse_date(entry.end_date, now) if entry.end_date else (now.year, now.month)
            if start and end and months_between(start, end) > 0:
                months += months_between(start, end)
        return months / 12

    def check_role_type(
        self, gate: _GateInput, metadata: AssessmentMetadata, suggestions: list[Suggestion]
    ) -> Suggestion | None:
        job_category = self.job_category(gate.job.job_title)
        resume_categories = self.resume_categories(gate.resume)
        metadata.assessment_details["job_category"] = job_category
        metadata.assessment_details["resume_categories"] = resume_categories

        def _block(message: str) -> Suggestion:
            metadata.role_type_mismatch = RoleTypeMismatch(
                job_category=job_category, resume_categories=resume_categories
            )
            return Suggestion(type="role_type", message=message)

        if job_category is None:
            return _block("Unable to determine the role category. Please check the job title.")
        if not resume_categories:
            return _block("Unable to determine your professional background from your experience.")

        if job_category == "technical":
            if "technical" in resume_categories or self.has_strong_technical_background(
                gate.resume, gate.resume_skills
            ):
                return None
            return _block(
                "This technical role requires a strong technical background, "
                "which is not evident in your profile."
            )

        if job_category == "management":
            years = self.management_years(gate.resume, gate.now)
            metadata.assessment_details["management_years"] = round(years, 1)
            if "management" in resume_categories and years >= settings.min_management_years:
                return None
            return _block("This management role requires previous management experience.")

        if job_category in resume_categories:
            return None
        return _block(
            f"Your background is primarily in {resume_categories[0]}, "
            f"which doesn't align with this {job_category} role."
        )

    # ------------------------------------------------------------------
    # 3. Experience level
    # ------------------------------------------------------------------

    def check_experience_level(
        self, gate: _GateInput, metadata: AssessmentMetadata, suggestions: list[Suggestion]
    ) -> Suggestion | None:
        required = extract_required_years(gate.job_text)
        if required <= 0:
            return None
        actual = self._experience.total_years(gate.resume.work_experience, gate.now)
        if actual >= settings.experienced_years:
            return None
        ratio = actual / required
        if ratio >= settings.min_experience_ratio:
            return None

        metadata.experience_mismatch = ExperienceMismatch(
            required_years=required, actual_years=actual, ratio=round(ratio, 2)
        )
        if ratio < settings.blocking_experience_ratio:
            return Suggestion(
                type="experience",
                message=(
                    f"This role requires {_fmt_years(required)} years of experience, but your profile "
                    f"shows {round(actual)} years. Consider roles better aligned with your experience level."
                ),
            )
        suggestions.append(Suggestion(
            type="experience",
            message=(
                f"This role typically requires {_fmt_years(required)} years of experience, and you have "
                f"{_fmt_years(actual)} years. However, your skills and background may compensate for this gap."
            ),
            severity=Severity.WARNING,
        ))
        return None

    # ------------------------------------------------------------------
    # 4. Skills match
    # ------------------------------------------------------------------

    def _has_related(self, skill: str, resume_skills: list[str]) -> bool:
        related = RELATED_SKILLS_MAP.get(skill, [])
        for candidate in resume_skills:
            norm = normalize_skill(candidate)
            if norm in related or skill in RELATED_SKILLS_MAP.get(norm, []):
                return True
            if catalog.are_skills_related(skill, norm):
                return True
        return False

    def skills_match_score(self, job_skills: list[str], resume_skills: list[str]) -> tuple[int, list[str]]:
        """(0-100 score, matched skills with related matches marked '*')."""
        if not job_skills:
            return 100, []
        exact, related = 0, 0
        matched: list[str] = []
        for skill in job_skills:
            if any(are_similar_skills(skill, r) for r in resume_skills):
                exact += 1
                matched.append(skill)
            elif self._has_related(skill, resume_skills):
                related += 1
                matched.append(f"{skill}*")
        n = len(job_skills)
        score = round(exact / n * EXACT_MATCH_WEIGHT + (exact + related) / n * COVERAGE_WEIGHT)
        return score, matched

    def check_skills_match(
        self, gate: _GateInput, metadata: AssessmentMetadata, suggestions: list[Suggestion]
    ) -> Suggestion | None:
        score, matched = self.skills_match_score(sorted(gate.job_skill_counts), gate.resume_skills)
        metadata.skills_match = score
        metadata.assessment_details["matched_skills"] = matched
        if score < settings.min_skills_match_score:
            return Suggestion(
                type="skills_match",
                message=f"Your skills alignment ({score}%) is below our threshold for this role.",
            )
        return None
