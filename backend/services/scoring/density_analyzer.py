"""Technical density analyzer and role classification.

Density scores any text by how many catalog keywords it mentions:
    category score = matched / keywords in category
    overall score  = |all matched| / |all keywords|

Single-token keywords must match a whole token; multi-word keywords match
as substrings of the lowercased text.
"""

import logging
import re
from typing import Any

from models.schemas.density import (
    CategoryScore,
    DensityResult,
    JobCategory,
    JobClassification,
    RoleAssessment,
)
from services.scoring.base import BaseScoringService
from services.technology_catalog import (
    ALL_TECHNICAL_KEYWORDS,
    TECHNICAL_KEYWORD_LIBRARY,
    TECHNICAL_ROLE_INDICATORS,
    TECHNICAL_ROLES,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9+#./-]*")

# Broad job families used by classify_job
JOB_CATEGORY_KEYWORDS: dict[JobCategory, dict[str, list[str]]] = {
    JobCategory.TECHNICAL: {
        "keywords": [
            "developer", "engineer", "programmer", "software", "devops",
            "architect", "data scientist", "frontend", "backend", "full stack",
            "qa", "sre", "technical",
        ],
        "related_skills": ["programming", "algorithms", "system design", "testing", "version control"],
    },
    JobCategory.MANAGEMENT: {
        "keywords": [
            "manager", "director", "head of", "lead", "supervisor",
            "vp", "chief", "executive", "coordinator",
        ],
        "related_skills": ["leadership", "planning", "budgeting", "stakeholder management", "mentoring"],
    },
    JobCategory.CREATIVE: {
        "keywords": [
            "designer", "ux", "ui", "creative", "artist", "writer",
            "content", "graphic", "illustrator", "brand",
        ],
        "related_skills": ["design thinking", "prototyping", "visual design", "storytelling"],
    },
}

INDICATOR_CONFIDENCE_BASE = 0.4
INDICATOR_CONFIDENCE_STEP = 0.2
INDICATOR_CONFIDENCE_CAP = 0.8
CLASSIFY_MULTI_HIT_BONUS = 0.3


def _tokenize(text: str) -> set[str]:
    tokens: set[str] = set()
    for raw in _TOKEN_RE.findall(text.lower()):
        token = raw.rstrip(".-/")
        if not token:
            continue
        tokens.add(token)
        if "/" in token:
            tokens.update(part for part in token.split("/") if part)
    return tokens


def _keyword_in(keyword: str, tokens: set[str], lower: str) -> bool:
    if " " in keyword:
        return keyword in lower
    return keyword in tokens


class DensityAnalyzerService(BaseScoringService):
    service_name = "density_analyzer"

    def __init__(self) -> None:
        self._category_patterns: dict[JobCategory, list[re.Pattern]] = {}

    def load(self) -> None:
        self._category_patterns = {
            category: [re.compile(rf"\b{re.escape(kw)}\b") for kw in spec["keywords"]]
            for category, spec in JOB_CATEGORY_KEYWORDS.items()
        }

    def predict(self, **kwargs: Any) -> DensityResult:
        self.ensure_loaded()
        return self.analyze(kwargs["text"])

    def analyze(self, text: str) -> DensityResult:
        if not text or not text.strip():
            return DensityResult(category_scores={
                name: CategoryScore() for name in TECHNICAL_KEYWORD_LIBRARY
            })

        lower = " ".join(text.lower().split())
        tokens = _tokenize(lower)

        all_matches: set[str] = set()
        category_scores: dict[str, CategoryScore] = {}
        for name, keywords in TECHNICAL_KEYWORD_LIBRARY.items():
            matched = sorted(kw for kw in keywords if _keyword_in(kw, tokens, lower))
            all_matches.update(matched)
            category_scores[name] = CategoryScore(
                score=round(len(matched) / len(keywords), 4),
                matches=matched,
            )

        return DensityResult(
            score=round(len(all_matches) / len(ALL_TECHNICAL_KEYWORDS), 4),
            matches=sorted(all_matches),
            category_scores=category_scores,
        )

    def is_technical_role(self, title: str) -> RoleAssessment:
        lower = " ".join((title or "").lower().split())
        if not lower:
            return RoleAssessment()

        for role in sorted(TECHNICAL_ROLES, key=len, reverse=True):
            if re.search(rf"\b{re.escape(role)}\b", lower):
                return RoleAssessment(is_technical=True, confidence=1.0, matched_role=role)

        tokens = _tokenize(lower)
        hits = sum(1 for indicator in TECHNICAL_ROLE_INDICATORS if indicator in tokens)
        confidence = min(
            INDICATOR_CONFIDENCE_CAP,
            INDICATOR_CONFIDENCE_BASE + INDICATOR_CONFIDENCE_STEP * hits,
        )
        return RoleAssessment(is_technical=confidence > INDICATOR_CONFIDENCE_BASE, confidence=confidence)

    def classify_job(self, title: str, description: str = "") -> JobClassification:
        self.ensure_loaded()
        text = f"{title} {description}".lower()
        best: JobClassification | None = None
        for category, patterns in self._category_patterns.items():
            hits = sum(1 for p in patterns if p.search(text))
            if hits == 0:
                continue
            confidence = hits / len(patterns)
            if hits > 2:
                confidence += CLASSIFY_MULTI_HIT_BONUS
            confidence = round(min(1.0, confidence), 4)
            if best is None or confidence > best.confidence:
                best = JobClassification(
                    category=category,
                    confidence=confidence,
                    related_skills=list(JOB_CATEGORY_KEYWORDS[category]["related_skills"]),
                )
        return best or JobClassification()
