"""Component scorer: five raw sub-scores and their weighted sum.

    skills      30%  sqrt(matched / required technical keywords) - 0.1 per missing critical skill
    experience  25%  sqrt(mean entry relevance) * years bonus (up to 1.2x, capped at 1.0)
    projects    20%  sqrt(mean project keyword overlap with the job)
    education   15%  field relevance, +0.2 if graduated within 5 years
    job_title   10%  1.0 exact match, else shared-word fraction capped at 0.5
"""

import logging
import math
import re
from datetime import datetime
from typing import Any

import numpy as np

from config import settings
from models.schemas.components import ComponentAnalysis, ComponentResult, ComponentScores
from models.schemas.density import DensityResult
from models.schemas.experience import EntryRelevance
from models.schemas.job import JobDetails
from models.schemas.resume import EducationEntry, ProjectEntry, ResumeData
from services.scoring.base import BaseScoringService
from services.scoring.registry import get_service
from services.skill_extractor import collect_resume_skills, extract_skills
from services.skill_normalizer import normalize_skills
from services.text_parsing import extract_required_years, parse_date

logger = logging.getLogger(__name__)

COMPONENT_WEIGHTS: dict[str, float] = {
    "skills": 0.30,
    "experience": 0.25,
    "projects": 0.20,
    "education": 0.15,
    "job_title": 0.10,
}

NEUTRAL_SCORE = 0.5
MISSING_CRITICAL_DEDUCTION = 0.1
EXPERIENCE_MAX_BONUS = 0.2
EDUCATION_RECENCY_BONUS = 0.2
EDUCATION_RECENT_YEARS = 5
TECHNICAL_FIELD_RELEVANCE = 0.8
TITLE_PARTIAL_CAP = 0.5

TECHNICAL_FIELDS: frozenset[str] = frozenset({
    "computer science", "software engineering", "computer engineering",
    "information technology", "information systems", "data science",
    "electrical engineering", "mathematics", "statistics", "physics",
    "artificial intelligence", "cybersecurity",
})

_TITLE_STOPWORDS: frozenset[str] = frozenset({
    "a", "an", "and", "at", "for", "in", "of", "on", "the", "to", "with", "-",
})
_FIELD_STOPWORDS: frozenset[str] = frozenset({"and", "of", "in", "the", "with", "for", "degree"})
_WORD_RE = re.compile(r"[a-z0-9+#]+(?:\.[a-z0-9]+)*")


def _words(text: str) -> list[str]:
    return _WORD_RE.findall((text or "").lower())


def normalize_title(title: str) -> str:
    return " ".join(_words(title))


class ComponentScorerService(BaseScoringService):
    service_name = "component_scorer"

    def __init__(self) -> None:
        self._density = None
        self._experience = None
        self._matcher = None

    def load(self) -> None:
        self._density = get_service("density_analyzer")
        self._experience = get_service("experience_analyzer")
        self._matcher = get_service("skill_matcher")

    def predict(self, **kwargs: Any) -> ComponentResult:
        self.ensure_loaded()
        return self.score(
            kwargs["resume"],
            kwargs["job"],
            resume_skills=kwargs.get("resume_skills"),
            job_skills=kwargs.get("job_skills"),
            missing_critical=kwargs.get("missing_critical"),
            required_years=kwargs.get("required_years"),
            now=kwargs.get("now"),
        )

    def score(
        self,
        resume: ResumeData,
        job: JobDetails,
        resume_skills: list[str] | None = None,
        job_skills: list[str] | None = None,
        missing_critical: list[str] | None = None,
        required_years: float | None = None,
        now: datetime | None = None,
    ) -> ComponentResult:
        self.ensure_loaded()
        now = now or datetime.now()
        job_text = job.full_text
        if resume_skills is None:
            resume_skills = collect_resume_skills(resume)
        if job_skills is None:
            job_skills = sorted(extract_skills(job_text))
        if missing_critical is None:
            missing_critical = self._matcher.match_skills(job_skills, resume_skills).missing_critical
        if required_years is None:
            required_years = extract_required_years(job_text)

        job_density = self._density.analyze(job_text)
        analysis = ComponentAnalysis(
            required_keywords=job_density.matches,
            missing_critical_skills=list(missing_critical),
        )

        skills = self.score_skills(resume, resume_skills, job_density, missing_critical, analysis)
        experience = self.score_experience(resume, job_text, job_skills, required_years, now, analysis)
        projects = self.score_projects(resume.projects, job_density, job_skills, analysis)
        education = self.score_education(resume.education, job, job_density, now, analysis)
        title = self.score_title(resume, job.job_title, analysis)

        component_scores = ComponentScores(
            skills=round(skills, 4),
            experience=round(experience, 4),
            projects=round(projects, 4),
            education=round(education, 4),
            job_title=round(title, 4),
        )
        total = sum(
            getattr(component_scores, name) * weight for name, weight in COMPONENT_WEIGHTS.items()
        )
        return ComponentResult(
            score=round(min(1.0, total), 4),
            component_scores=component_scores,
            analysis=analysis,
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _resume_density(self, resume: ResumeData, resume_skills: list[str]) -> DensityResult:
        parts = [", ".join(resume_skills)]
        parts.extend(f"{e.title}\n{e.description}" for e in resume.work_experience)
        parts.extend(f"{p.name}\n{p.description}\n{', '.join(p.technologies)}" for p in resume.projects)
        return self._density.analyze("\n".join(parts))

    def score_skills(
        self,
        resume: ResumeData,
        resume_skills: list[str],
        job_density: DensityResult,
        missing_critical: list[str],
        analysis: ComponentAnalysis,
    ) -> float:
        required = set(job_density.matches)
        resume_keywords = set(self._resume_density(resume, resume_skills).matches)
        matched = required & resume_keywords
        analysis.matched_keywords = sorted(matched)
        analysis.missing_keywords = sorted(required - matched)

        base = math.sqrt(len(matched) / len(required)) if required else NEUTRAL_SCORE
        return max(0.0, base - MISSING_CRITICAL_DEDUCTION * len(missing_critical))

    def score_experience(
        self,
        resume: ResumeData,
        job_text: str,
        job_skills: list[str],
        required_years: float,
        now: datetime,
        analysis: ComponentAnalysis,
    ) -> float:
        relevance: list[EntryRelevance] = self._experience.score_relevance(
            resume.work_experience, job_text, job_skills, now=now
        )
        analysis.entry_relevance = relevance
        if not relevance:
            return 0.0

        base = math.sqrt(float(np.mean([r.relevance for r in relevance])))
        total_years = self._experience.total_years(resume.work_experience, now)
        reference = required_years if required_years > 0 else settings.experienced_years
        multiplier = 1.0 + EXPERIENCE_MAX_BONUS * min(1.0, total_years / reference)
        return min(1.0, base * multiplier)

    def _project_keywords(self, project: ProjectEntry) -> set[str]:
        text = f"{project.name}\n{project.description}\n{', '.join(project.technologies)}"
        keywords = set(self._density.analyze(text).matches)
        keywords.update(normalize_skills(project.technologies))
        keywords.update(extract_skills(text))
        return keywords

    def score_projects(
        self,
        projects: list[ProjectEntry],
        job_density: DensityResult,
        job_skills: list[str],
        analysis: ComponentAnalysis,
    ) -> float:
        if not projects:
            return 0.0
        job_keywords = set(job_density.matches) | set(job_skills)
        if not job_keywords:
            return NEUTRAL_SCORE

        overlaps: list[float] = []
        for project in projects:
            overlap = len(self._project_keywords(project) & job_keywords) / len(job_keywords)
            analysis.project_overlap[project.name or f"project {len(overlaps) + 1}"] = round(overlap, 4)
            overlaps.append(overlap)
        return math.sqrt(float(np.mean(overlaps)))

    def _education_relevance(
        self,
        entry: EducationEntry,
        job_words: set[str],
        job_is_technical: bool,
        now: datetime,
    ) -> float:
        field = " ".join(_words(entry.field))
        field_words = {w for w in _words(f"{entry.degree} {entry.field}") if w not in _FIELD_STOPWORDS and len(w) > 2}
        relevance = len(field_words & job_words) / len(field_words) if field_words else 0.0
        if job_is_technical and any(tf in field for tf in TECHNICAL_FIELDS):
            relevance = max(relevance, TECHNICAL_FIELD_RELEVANCE)

        graduated = parse_date(entry.end_date, now)
        if graduated is not None and now.year - graduated[0] <= EDUCATION_RECENT_YEARS:
            relevance += EDUCATION_RECENCY_BONUS
        return min(1.0, relevance)

    def score_education(
        self,
        education: list[EducationEntry],
        job: JobDetails,
        job_density: DensityResult,
        now: datetime,
        analysis: ComponentAnalysis,
    ) -> float:
        if not education:
            return 0.0
        job_words = set(_words(job.full_text))
        job_is_technical = bool(job_density.matches) or self._density.is_technical_role(job.job_title).is_technical
        scores = [self._education_relevance(e, job_words, job_is_technical, now) for e in education]
        analysis.education_relevance = [round(s, 4) for s in scores]
        return float(np.mean(scores))

    def score_title(self, resume: ResumeData, job_title: str, analysis: ComponentAnalysis) -> float:
        target = normalize_title(job_title)
        if not target:
            return 0.0
        held = [resume.title] + [e.title for e in resume.work_experience]
        held = [t for t in held if t and t.strip()]

        target_words = {w for w in target.split() if w not in _TITLE_STOPWORDS}
        best, best_title = 0.0, ""
        for title in held:
            if normalize_title(title) == target:
                analysis.best_matching_title = title
                return 1.0
            words = {w for w in normalize_title(title).split() if w not in _TITLE_STOPWORDS}
            if target_words:
                fraction = len(words & target_words) / len(target_words)
                if fraction > best:
                    best, best_title = fraction, title
        analysis.best_matching_title = best_title
        return min(TITLE_PARTIAL_CAP, best)
