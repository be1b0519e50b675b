"""Experience and seniority analyzer.

Derives an ExperienceProfile from dated work history and scores each entry's
relevance to a job:

    relevance = 0.4 * skill overlap
              + 0.3 * industry match
              + 0.2 * seniority alignment
              + 0.1 * recency           (exp(-months since end / 24))

Entries with unparsable or non-positive date spans are excluded from totals
and averages; they never count as zero-length valid entries.
"""

import logging
import math
import re
from datetime import datetime
from typing import Any

from models.schemas.experience import (
    SENIORITY_ORDER,
    EntryAnalysis,
    EntryRelevance,
    ExperienceProfile,
    IndustryAssessment,
    SeniorityAssessment,
    SeniorityLevel,
)
from models.schemas.resume import WorkExperienceEntry
from services.scoring.base import BaseScoringService
from services.skill_extractor import extract_skills
from services.skill_normalizer import are_similar_skills, normalize_skills
from services.text_parsing import months_between, parse_date

logger = logging.getLogger(__name__)

RECENCY_DECAY_MONTHS = 24.0

RELEVANCE_WEIGHTS: dict[str, float] = {
    "skill_overlap": 0.4,
    "industry_match": 0.3,
    "seniority_alignment": 0.2,
    "recency": 0.1,
}

# ---------------------------------------------------------------------------
# Seniority indicators
# ---------------------------------------------------------------------------
SENIORITY_INDICATORS: dict[SeniorityLevel, list[str]] = {
    SeniorityLevel.EXPERT: ["principal", "distinguished", "chief", "fellow", "head of", "vp", "vice president"],
    SeniorityLevel.SENIOR: ["senior", "sr.", "lead", "architect", "manager", "staff"],
    SeniorityLevel.JUNIOR: ["junior", "jr.", "entry", "associate", "intern", "trainee", "graduate"],
}
DEFAULT_SENIORITY_CONFIDENCE = 0.6
SENIOR_CONFIDENCE_DIVISOR = 6
JUNIOR_CONFIDENCE_DIVISOR = 5

# ---------------------------------------------------------------------------
# Industries
# ---------------------------------------------------------------------------
INDUSTRY_KEYWORDS: dict[str, list[str]] = {
    "technology": [
        "software", "technology", "information technology", "digital",
        "web", "cloud", "data", "saas", "platform",
    ],
    "finance": ["banking", "bank", "financial", "finance", "investment", "trading", "fintech", "insurance"],
    "healthcare": ["medical", "health", "healthcare", "clinical", "patient", "pharmaceutical", "hospital"],
    "education": ["education", "school", "university", "learning", "edtech", "teaching", "academic"],
    "retail": ["retail", "e-commerce", "ecommerce", "store", "shopping", "merchandise"],
    "manufacturing": ["manufacturing", "factory", "production", "industrial", "supply chain"],
    "consulting": ["consulting", "consultancy", "advisory", "professional services"],
}

RELATED_INDUSTRIES: dict[str, set[str]] = {
    "technology": {"finance", "healthcare", "education", "retail"},
    "finance": {"technology", "consulting"},
    "healthcare": {"technology"},
    "education": {"technology"},
    "retail": {"technology", "manufacturing"},
    "manufacturing": {"retail"},
    "consulting": {"finance", "technology"},
}

SAME_INDUSTRY_BASE = 0.7
RELATED_INDUSTRY_SCORE = 0.5
UNKNOWN_INDUSTRY_SCORE = 0.5
UNRELATED_INDUSTRY_SCORE = 0.2
INDUSTRY_CONFIDENCE_DIVISOR = 3

NEUTRAL_SKILL_OVERLAP = 0.5

# Experience mismatch penalties
SENIOR_ROLE_MIN_YEARS = 5.0
SENIOR_ROLE_SHORTFALL_PENALTY = 0.4
JUNIOR_ROLE_MAX_YEARS = 8.0
JUNIOR_ROLE_OVERQUALIFIED_PENALTY = 0.2


def _compile_terms(terms: list[str]) -> list[tuple[str, re.Pattern]]:
    return [
        (term, re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])"))
        for term in terms
    ]


class ExperienceAnalyzerService(BaseScoringService):
    service_name = "experience_analyzer"

    def __init__(self) -> None:
        self._seniority_patterns: dict[SeniorityLevel, list[tuple[str, re.Pattern]]] = {}
        self._industry_patterns: dict[str, list[tuple[str, re.Pattern]]] = {}

    def load(self) -> None:
        self._seniority_patterns = {
            level: _compile_terms(terms) for level, terms in SENIORITY_INDICATORS.items()
        }
        self._industry_patterns = {
            industry: _compile_terms(terms) for industry, terms in INDUSTRY_KEYWORDS.items()
        }

    def predict(self, **kwargs: Any) -> ExperienceProfile:
        self.ensure_loaded()
        return self.analyze(kwargs["entries"], now=kwargs.get("now"))

    # ------------------------------------------------------------------
    # Durations
    # ------------------------------------------------------------------

    def entry_span(
        self, entry: WorkExperienceEntry, now: datetime | None = None
    ) -> tuple[int, int] | None:
        """(months worked, months since end) or None if the dates are unusable."""
        now = now or datetime.now()
        start = parse_date(entry.start_date, now)
        if start is None:
            return None
        if entry.end_date is None:
            end = (now.year, now.month)
        else:
            end = parse_date(entry.end_date, now)
            if end is None:
                return None
        months = months_between(start, end)
        if months <= 0:
            return None
        since_end = max(0, months_between(end, (now.year, now.month)))
        return months, since_end

    def total_years(self, entries: list[WorkExperienceEntry], now: datetime | None = None) -> float:
        total_months = 0
        for entry in entries:
            span = self.entry_span(entry, now)
            if span is not None:
                total_months += span[0]
        return round(total_months / 12, 1)

    @staticmethod
    def recency_score(months_since_end: float) -> float:
        return math.exp(-max(0.0, months_since_end) / RECENCY_DECAY_MONTHS)

    # ------------------------------------------------------------------
    # Seniority / industry
    # ------------------------------------------------------------------

    def _hits(self, patterns: list[tuple[str, re.Pattern]], lower: str) -> list[str]:
        return [term for term, pattern in patterns if pattern.search(lower)]

    def detect_seniority(self, text: str) -> SeniorityAssessment:
        self.ensure_loaded()
        lower = (text or "").lower()
        expert = self._hits(self._seniority_patterns[SeniorityLevel.EXPERT], lower)
        senior = self._hits(self._seniority_patterns[SeniorityLevel.SENIOR], lower)
        junior = self._hits(self._seniority_patterns[SeniorityLevel.JUNIOR], lower)

        senior_total = len(expert) + len(senior)
        if senior_total > len(junior):
            level = SeniorityLevel.EXPERT if expert else SeniorityLevel.SENIOR
            return SeniorityAssessment(
                level=level,
                confidence=round(min(1.0, senior_total / SENIOR_CONFIDENCE_DIVISOR), 4),
                indicators=expert + senior,
            )
        if junior:
            return SeniorityAssessment(
                level=SeniorityLevel.JUNIOR,
                confidence=round(min(1.0, len(junior) / JUNIOR_CONFIDENCE_DIVISOR), 4),
                indicators=junior,
            )
        return SeniorityAssessment(level=SeniorityLevel.MID, confidence=DEFAULT_SENIORITY_CONFIDENCE)

    @staticmethod
    def seniority_alignment(candidate: SeniorityAssessment, job: SeniorityAssessment) -> float:
        if candidate.level == job.level:
            return 0.7 + 0.3 * min(candidate.confidence, job.confidence)
        distance = abs(SENIORITY_ORDER.index(candidate.level) - SENIORITY_ORDER.index(job.level))
        return max(0.2, 0.5 - distance * 0.2)

    def detect_industry(self, text: str) -> IndustryAssessment:
        self.ensure_loaded()
        lower = (text or "").lower()
        best: IndustryAssessment = IndustryAssessment()
        best_hits = 0
        for industry, patterns in self._industry_patterns.items():
            hits = len(self._hits(patterns, lower))
            if hits > best_hits:
                best_hits = hits
                best = IndustryAssessment(
                    industry=industry,
                    confidence=round(min(1.0, hits / INDUSTRY_CONFIDENCE_DIVISOR), 4),
                )
        return best

    @staticmethod
    def industry_match(candidate: IndustryAssessment, job: IndustryAssessment) -> float:
        if candidate.industry is None or job.industry is None:
            return UNKNOWN_INDUSTRY_SCORE
        if candidate.industry == job.industry:
            return SAME_INDUSTRY_BASE + 0.3 * candidate.confidence
        if job.industry in RELATED_INDUSTRIES.get(candidate.industry, set()):
            return RELATED_INDUSTRY_SCORE
        return UNRELATED_INDUSTRY_SCORE

    # ------------------------------------------------------------------
    # Profile and relevance
    # ------------------------------------------------------------------

    def analyze_entry(self, entry: WorkExperienceEntry, now: datetime | None = None) -> EntryAnalysis | None:
        span = self.entry_span(entry, now)
        if span is None:
            return None
        months, since_end = span
        return EntryAnalysis(
            title=entry.title,
            company=entry.company,
            months=months,
            is_current=since_end == 0,
            recency=round(self.recency_score(since_end), 4),
            seniority=self.detect_seniority(entry.title),
            industry=self.detect_industry(f"{entry.company} {entry.title}\n{entry.description}"),
        )

    def analyze(self, entries: list[WorkExperienceEntry], now: datetime | None = None) -> ExperienceProfile:
        self.ensure_loaded()
        now = now or datetime.now()
        analyzed = [self.analyze_entry(entry, now) for entry in entries]
        valid = [a for a in analyzed if a is not None]
        invalid = len(analyzed) - len(valid)
        if invalid:
            logger.debug("Skipped %d work entries with unusable dates", invalid)

        titles = " ".join(e.title for e in entries if e.title)
        return ExperienceProfile(
            total_years=round(sum(a.months for a in valid) / 12, 1),
            entries=valid,
            invalid_entries=invalid,
            seniority=self.detect_seniority(titles),
        )

    def score_entry(
        self,
        entry: WorkExperienceEntry,
        analysis: EntryAnalysis,
        job_skills: list[str],
        job_seniority: SeniorityAssessment,
        job_industry: IndustryAssessment,
    ) -> EntryRelevance:
        if job_skills:
            entry_skills = normalize_skills(
                list(entry.skills) + sorted(extract_skills(f"{entry.title}\n{entry.description}"))
            )
            matched = sum(1 for s in job_skills if any(are_similar_skills(s, e) for e in entry_skills))
            skill_overlap = matched / len(job_skills)
        else:
            skill_overlap = NEUTRAL_SKILL_OVERLAP

        industry = self.industry_match(analysis.industry, job_industry)
        seniority = self.seniority_alignment(analysis.seniority, job_seniority)
        relevance = (
            RELEVANCE_WEIGHTS["skill_overlap"] * skill_overlap
            + RELEVANCE_WEIGHTS["industry_match"] * industry
            + RELEVANCE_WEIGHTS["seniority_alignment"] * seniority
            + RELEVANCE_WEIGHTS["recency"] * analysis.recency
        )
        return EntryRelevance(
            title=entry.title,
            skill_overlap=round(skill_overlap, 4),
            industry_match=round(industry, 4),
            seniority_alignment=round(seniority, 4),
            recency=analysis.recency,
            relevance=round(min(1.0, relevance), 4),
        )

    def score_relevance(
        self,
        entries: list[WorkExperienceEntry],
        job_text: str,
        job_skills: list[str],
        now: datetime | None = None,
    ) -> list[EntryRelevance]:
        """Relevance of every valid entry to the job, in input order."""
        self.ensure_loaded()
        now = now or datetime.now()
        job_seniority = self.detect_seniority(job_text)
        job_industry = self.detect_industry(job_text)
        results: list[EntryRelevance] = []
        for entry in entries:
            analysis = self.analyze_entry(entry, now)
            if analysis is None:
                continue
            results.append(self.score_entry(entry, analysis, job_skills, job_seniority, job_industry))
        return results

    def experience_mismatch_penalty(self, job_seniority: SeniorityAssessment, total_years: float) -> float:
        """Penalty for a senior role held by a short career or a junior role by a long one."""
        if job_seniority.level in (SeniorityLevel.SENIOR, SeniorityLevel.EXPERT):
            return SENIOR_ROLE_SHORTFALL_PENALTY if total_years < SENIOR_ROLE_MIN_YEARS else 0.0
        if job_seniority.level == SeniorityLevel.JUNIOR:
            return JUNIOR_ROLE_OVERQUALIFIED_PENALTY if total_years > JUNIOR_ROLE_MAX_YEARS else 0.0
        return 0.0
