"""Tests for technical density and role classification."""

import pytest

from models.schemas.density import JobCategory
from services.scoring.density_analyzer import DensityAnalyzerService
from services.technology_catalog import TECHNICAL_KEYWORD_LIBRARY


@pytest.fixture
def density():
    svc = DensityAnalyzerService()
    svc.ensure_loaded()
    return svc


class TestAnalyze:
    def test_empty_text(self, density):
        result = density.analyze("")
        assert result.score == 0.0
        assert set(result.category_scores) == set(TECHNICAL_KEYWORD_LIBRARY)

    def test_single_token_keywords(self, density):
        result = density.analyze("Python developer using React, Docker and REST APIs")
        assert {"python", "react", "docker", "developer", "rest"} <= set(result.matches)
        assert result.category_scores["programming_languages"].matches == ["python"]
        assert 0 < result.score < 1

    def test_multi_word_keywords(self, density):
        result = density.analyze("Strong on data structures and   algorithms")
        assert {"data structures", "algorithms"} <= set(result.matches)

    def test_slash_tokens(self, density):
        assert "ci/cd" in density.analyze("Owns the CI/CD pipeline").matches

    def test_no_partial_tokens(self, density):
        assert "java" not in density.analyze("JavaScript only").matches


class TestTechnicalRole:
    def test_exact_role_phrase(self, density):
        role = density.is_technical_role("Senior Software Engineer")
        assert role.is_technical
        assert role.confidence == 1.0
        assert role.matched_role == "software engineer"

    def test_indicator_word(self, density):
        role = density.is_technical_role("Data Analyst")
        assert role.is_technical
        assert role.confidence == pytest.approx(0.6)

    def test_non_technical(self, density):
        role = density.is_technical_role("Sales Manager")
        assert not role.is_technical
        assert role.confidence == pytest.approx(0.4)

    def test_empty_title(self, density):
        assert not density.is_technical_role("").is_technical


class TestClassifyJob:
    def test_management(self, density):
        result = density.classify_job("Engineering Manager", "Lead the group as head of platform")
        assert result.category == JobCategory.MANAGEMENT
        assert "leadership" in result.related_skills

    def test_technical(self, density):
        assert density.classify_job("Backend Developer").category == JobCategory.TECHNICAL

    def test_general(self, density):
        result = density.classify_job("Chef", "Cook food")
        assert result.category == JobCategory.GENERAL
        assert result.confidence == 0.0
