"""Skill matcher: direct vs. catalog-related coverage of required skills.

For each required skill:
    1. direct   - synonym-aware / near-identical spelling of a candidate skill
    2. related  - a candidate skill in the required skill's technology group
                  or subcategory, worth the group's compensation factor
    3. missing  - neither; reported with a learning suggestion

score = (direct count + sum of related confidences) / required count
"""

import logging
from collections.abc import Sequence
from typing import Any

from models.schemas.skills import (
    MatchConfig,
    MatchType,
    SkillCompensation,
    SkillMatch,
    SkillMatchQuality,
    SkillMatchResult,
)
from services import technology_catalog as catalog
from services.scoring.base import BaseScoringService
from services.skill_extractor import count_skill_mentions, detect_core_skills
from services.skill_normalizer import are_similar_skills, normalize_skill, normalize_skills

logger = logging.getLogger(__name__)

MAX_SUGGESTED_ALTERNATIVES = 3
UNKNOWN_SKILL_RELEVANCE = 0.5
CONTEXT_SKILL_RELEVANCE = 1.0
DEFAULT_SKILL_RELEVANCE = 0.7
POTENTIAL_MATCH_DISCOUNT = 0.5
CORE_WEIGHT = 0.7
PERIPHERAL_WEIGHT = 0.3

# overall skill match -> fraction of experience-family penalty that may be waived
COMPENSATION_POWER_STEPS: list[tuple[float, float]] = [
    (0.95, 0.7),
    (0.90, 0.5),
    (0.80, 0.3),
]


def compensation_power_for(overall_match: float) -> float:
    for threshold, power in COMPENSATION_POWER_STEPS:
        if overall_match >= threshold:
            return power
    return 0.0


def is_valid_skill(skill: Any) -> bool:
    if not isinstance(skill, str):
        return False
    norm = normalize_skill(skill)
    return 0 < len(norm) <= 50 and any(c.isalpha() for c in norm)


def _check_sequence(value: Any, name: str) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"{name} must be a list of skills, got {type(value).__name__}")


class SkillMatcherService(BaseScoringService):
    service_name = "skill_matcher"

    def __init__(self) -> None:
        self._default_config = MatchConfig()

    def load(self) -> None:
        # Catalog tables are built at import time; nothing else to prepare
        logger.info("Skill matcher using %d technology groups", len(catalog.TECHNOLOGY_GROUPS))

    def predict(self, **kwargs: Any) -> SkillMatchResult:
        self.ensure_loaded()
        return self.match_skills(
            kwargs["required_skills"],
            kwargs["candidate_skills"],
            config=kwargs.get("config"),
            context=kwargs.get("context"),
        )

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match_skills(
        self,
        required_skills: Sequence[str],
        candidate_skills: Sequence[str],
        config: MatchConfig | None = None,
        context: str | None = None,
    ) -> SkillMatchResult:
        _check_sequence(required_skills, "required_skills")
        _check_sequence(candidate_skills, "candidate_skills")
        config = config or self._default_config

        required = normalize_skills([s for s in required_skills if is_valid_skill(s)])
        candidates = normalize_skills([s for s in candidate_skills if is_valid_skill(s)])
        if not required:
            return SkillMatchResult(score=1.0)

        context_lower = context.lower() if context else ""
        matches: list[SkillMatch] = []
        compensations: list[SkillCompensation] = []
        missing: list[str] = []
        suggestions: list[str] = []
        earned = 0.0

        for skill in required:
            direct = next((c for c in candidates if are_similar_skills(skill, c)), None)
            if direct is not None:
                confidence = min(1.0, config.base_weight)
                matches.append(SkillMatch(
                    skill=skill, matched_with=direct, confidence=confidence, match_type=MatchType.DIRECT,
                ))
                earned += confidence
                continue

            related = self._find_related(skill, candidates)
            if related is not None:
                confidence = self._related_confidence(skill, config, context_lower)
                if confidence >= config.min_threshold:
                    group = catalog.find_group(skill)
                    matches.append(SkillMatch(
                        skill=skill,
                        matched_with=related,
                        confidence=confidence,
                        match_type=MatchType.RELATED,
                        context=group.category if group else None,
                    ))
                    compensations.append(SkillCompensation(
                        required_skill=skill, compensating_skill=related, factor=confidence,
                    ))
                    earned += confidence
                    continue

            missing.append(skill)
            suggestions.append(self.build_suggestion(skill))

        score = max(0.0, min(1.0, earned / len(required)))
        return SkillMatchResult(
            score=round(score, 4),
            matches=matches,
            compensations=compensations,
            missing_critical=missing,
            suggestions=suggestions,
        )

    def _find_related(self, skill: str, candidates: list[str]) -> str | None:
        related = catalog.get_related_skills(skill)
        if not related:
            return None
        return next((c for c in candidates if c in related), None)

    def _related_confidence(self, skill: str, config: MatchConfig, context_lower: str) -> float:
        factor = catalog.get_compensation_factor(skill)
        if factor is None:
            factor = config.compensation_factor
        if context_lower and any(tag in context_lower for tag in catalog.get_skill_context(skill)):
            factor = min(1.0, factor * config.context_multiplier)
        return factor

    def build_suggestion(self, skill: str) -> str:
        alternatives = sorted(catalog.get_related_skills(skill))[:MAX_SUGGESTED_ALTERNATIVES]
        if alternatives:
            return f"Consider learning {skill} or related technologies like {', '.join(alternatives)}"
        return f"Consider learning {skill}"

    def find_matches(self, required_skills: Sequence[str], candidate_skills: Sequence[str]) -> list[SkillMatch]:
        """Best match per required skill, including same-category POTENTIAL matches."""
        _check_sequence(required_skills, "required_skills")
        _check_sequence(candidate_skills, "candidate_skills")
        candidates = normalize_skills(list(candidate_skills))
        results: list[SkillMatch] = []
        for skill in normalize_skills(list(required_skills)):
            direct = next((c for c in candidates if are_similar_skills(skill, c)), None)
            if direct is not None:
                results.append(SkillMatch(skill=skill, matched_with=direct, confidence=1.0))
                continue
            related = self._find_related(skill, candidates)
            factor = catalog.get_compensation_factor(skill) or self._default_config.compensation_factor
            if related is not None:
                results.append(SkillMatch(
                    skill=skill, matched_with=related, confidence=factor, match_type=MatchType.RELATED,
                ))
                continue
            category = catalog.get_skill_category(skill)
            potential = next(
                (c for c in candidates if category and catalog.get_skill_category(c) == category),
                None,
            )
            if potential is not None:
                results.append(SkillMatch(
                    skill=skill,
                    matched_with=potential,
                    confidence=round(factor * POTENTIAL_MATCH_DISCOUNT, 4),
                    match_type=MatchType.POTENTIAL,
                    context=category,
                ))
        return results

    def calculate_skill_relevance(self, skill: str, context: str = "") -> float:
        group = catalog.find_group(skill)
        if group is None:
            return UNKNOWN_SKILL_RELEVANCE
        lower = context.lower()
        if group.primary_name in lower or any(tag in lower for tag in group.context_tags):
            return CONTEXT_SKILL_RELEVANCE
        return DEFAULT_SKILL_RELEVANCE

    # ------------------------------------------------------------------
    # Core / peripheral quality
    # ------------------------------------------------------------------

    def assess_match_quality(
        self,
        job_text: str,
        candidate_skills: Sequence[str],
        job_skills: Sequence[str] | None = None,
    ) -> SkillMatchQuality:
        """Split the job's skills into core and peripheral and measure coverage of each."""
        _check_sequence(candidate_skills, "candidate_skills")
        if job_skills is None:
            job_skills = sorted(count_skill_mentions(job_text))
        skills = set(normalize_skills(list(job_skills)))
        core = detect_core_skills(job_text, skills) & skills
        peripheral = skills - core
        candidates = normalize_skills(list(candidate_skills))

        def _covered(skill: str) -> bool:
            return any(are_similar_skills(skill, c) for c in candidates)

        matched_core = sorted(s for s in core if _covered(s))
        missing_core = sorted(s for s in core if not _covered(s))
        matched_peripheral = sorted(s for s in peripheral if _covered(s))
        missing_peripheral = sorted(s for s in peripheral if not _covered(s))

        core_match = len(matched_core) / len(core) if core else 1.0
        peripheral_match = len(matched_peripheral) / len(peripheral) if peripheral else 1.0
        if core:
            overall = core_match * CORE_WEIGHT + peripheral_match * PERIPHERAL_WEIGHT
        else:
            overall = peripheral_match
        overall = round(overall, 4)

        return SkillMatchQuality(
            overall_match=overall,
            core_skill_match=round(core_match, 4),
            matched_core_skills=matched_core,
            missing_core_skills=missing_core,
            matched_peripheral_skills=matched_peripheral,
            missing_peripheral_skills=missing_peripheral,
            compensation_power=compensation_power_for(overall),
        )
