"""Tests for the skill matcher stage."""

import pytest

from models.schemas.skills import MatchConfig, MatchType
from services.scoring.skill_matcher import (
    SkillMatcherService,
    compensation_power_for,
    is_valid_skill,
)


@pytest.fixture
def matcher():
    svc = SkillMatcherService()
    svc.ensure_loaded()
    return svc


class TestMatchSkills:
    def test_exact_match_scores_one(self, matcher):
        result = matcher.match_skills(["python", "django"], ["Python", "Django"])
        assert result.score == 1.0
        assert result.missing_critical == []
        assert all(m.match_type == MatchType.DIRECT for m in result.matches)

    def test_empty_required_scores_one(self, matcher):
        assert matcher.match_skills([], ["python"]).score == 1.0

    def test_related_match_uses_group_factor(self, matcher):
        result = matcher.match_skills(["react"], ["vue"])
        assert result.score == pytest.approx(0.8)
        assert result.matches[0].match_type == MatchType.RELATED
        assert result.compensations[0].compensating_skill == "vue"

    def test_context_boosts_related_confidence(self, matcher):
        result = matcher.match_skills(["react"], ["vue"], context="Build a SPA for our customers")
        assert result.score == pytest.approx(0.96)

    def test_related_match_without_catalog_factor_uses_config(self, matcher, monkeypatch):
        monkeypatch.setattr("services.technology_catalog.get_compensation_factor", lambda skill: None)
        result = matcher.match_skills(["react"], ["vue"], config=MatchConfig(compensation_factor=0.7))
        assert result.score == pytest.approx(0.7)
        assert result.matches[0].match_type == MatchType.RELATED

    def test_related_below_threshold_is_missing(self, matcher):
        result = matcher.match_skills(["react"], ["vue"], config=MatchConfig(min_threshold=0.9))
        assert result.score == 0.0
        assert result.missing_critical == ["react"]

    def test_missing_skill_gets_suggestion(self, matcher):
        result = matcher.match_skills(["kubernetes"], ["python"])
        assert result.missing_critical == ["kubernetes"]
        assert result.suggestions[0].startswith("Consider learning kubernetes or related technologies like")

    def test_invalid_skills_are_ignored(self, matcher):
        result = matcher.match_skills(["python", "", "1234", None], ["python"])
        assert result.score == 1.0

    @pytest.mark.parametrize("required,candidates", [
        ("python", ["python"]),
        (["python"], None),
        (["python"], "python"),
    ])
    def test_non_sequences_raise(self, matcher, required, candidates):
        with pytest.raises(TypeError):
            matcher.match_skills(required, candidates)


class TestFindMatches:
    def test_potential_match_in_same_category(self, matcher):
        matches = matcher.find_matches(["react"], ["webpack"])
        assert len(matches) == 1
        assert matches[0].match_type == MatchType.POTENTIAL
        assert matches[0].confidence == pytest.approx(0.4)

    def test_no_match_for_unknown_skill(self, matcher):
        assert matcher.find_matches(["cobol"], ["python"]) == []


class TestRelevance:
    def test_unknown_skill(self, matcher):
        assert matcher.calculate_skill_relevance("cobol") == 0.5

    def test_context_tag_mentioned(self, matcher):
        assert matcher.calculate_skill_relevance("docker", "containers everywhere") == 1.0

    def test_default(self, matcher):
        assert matcher.calculate_skill_relevance("docker", "finance reporting") == 0.7


class TestMatchQuality:
    JOB = "Required: Python and Django. Nice: Docker."

    def test_core_and_peripheral_split(self, matcher):
        quality = matcher.assess_match_quality(self.JOB, ["python", "django"])
        assert quality.matched_core_skills == ["django", "python"]
        assert quality.missing_peripheral_skills == ["docker"]
        assert quality.core_skill_match == 1.0
        assert quality.overall_match == pytest.approx(0.7)
        assert quality.compensation_power == 0.0

    def test_full_coverage_earns_compensation_power(self, matcher):
        quality = matcher.assess_match_quality(self.JOB, ["python", "django", "docker"])
        assert quality.overall_match == 1.0
        assert quality.compensation_power == 0.7


def test_compensation_power_steps():
    assert compensation_power_for(0.96) == 0.7
    assert compensation_power_for(0.9) == 0.5
    assert compensation_power_for(0.85) == 0.3
    assert compensation_power_for(0.5) == 0.0


def test_is_valid_skill():
    assert is_valid_skill("python")
    assert not is_valid_skill("")
    assert not is_valid_skill("2024")
    assert not is_valid_skill("x" * 51)
    assert not is_valid_skill(42)
