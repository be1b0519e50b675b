"""Tests for the experience / seniority analyzer."""

import math
from datetime import datetime

import pytest

from models.schemas.experience import IndustryAssessment, SeniorityAssessment, SeniorityLevel
from models.schemas.resume import WorkExperienceEntry
from services.scoring.experience_analyzer import ExperienceAnalyzerService

NOW = datetime(2025, 6, 1)


@pytest.fixture
def analyzer():
    svc = ExperienceAnalyzerService()
    svc.ensure_loaded()
    return svc


def _entry(title="Developer", start="2020-01", end="2022-01", description=""):
    return WorkExperienceEntry(title=title, start_date=start, end_date=end, description=description)


class TestDurations:
    def test_total_years(self, analyzer):
        assert analyzer.total_years([_entry()], NOW) == 2.0

    def test_invalid_entries_excluded(self, analyzer):
        entries = [_entry(), _entry(start="2023-01", end="2022-01"), _entry(start="someday")]
        profile = analyzer.analyze(entries, NOW)
        assert profile.total_years == 2.0
        assert profile.invalid_entries == 2

    def test_total_years_never_decreases_as_entries_are_added(self, analyzer):
        entries = [
            _entry(start="2015-01", end="2016-07"),
            _entry(start="someday"),
            _entry(start="2017-01", end="2019-01"),
            _entry(start="2021-03", end="2020-01"),
            _entry(start="2020-01", end=None),
        ]
        totals = [analyzer.total_years(entries[:n], NOW) for n in range(len(entries) + 1)]
        assert totals == sorted(totals)
        assert totals == [0.0, 1.5, 1.5, 3.5, 3.5, 8.9]

    def test_open_ended_entry_is_current(self, analyzer):
        analysis = analyzer.analyze_entry(_entry(start="2024-06", end=None), NOW)
        assert analysis.is_current
        assert analysis.months == 12
        assert analysis.recency == 1.0

    def test_recency_decay(self, analyzer):
        assert analyzer.recency_score(0) == 1.0
        assert analyzer.recency_score(24) == pytest.approx(math.exp(-1))


class TestSeniority:
    @pytest.mark.parametrize("title,level", [
        ("Senior Software Engineer", SeniorityLevel.SENIOR),
        ("Principal Engineer", SeniorityLevel.EXPERT),
        ("Junior Developer", SeniorityLevel.JUNIOR),
        ("Developer", SeniorityLevel.MID),
    ])
    def test_detect(self, analyzer, title, level):
        assert analyzer.detect_seniority(title).level == level

    def test_alignment_same_level(self, analyzer):
        a = SeniorityAssessment(level=SeniorityLevel.SENIOR, confidence=0.5)
        b = SeniorityAssessment(level=SeniorityLevel.SENIOR, confidence=1.0)
        assert analyzer.seniority_alignment(a, b) == pytest.approx(0.85)

    def test_alignment_distance(self, analyzer):
        junior = SeniorityAssessment(level=SeniorityLevel.JUNIOR)
        expert = SeniorityAssessment(level=SeniorityLevel.EXPERT)
        mid = SeniorityAssessment(level=SeniorityLevel.MID)
        assert analyzer.seniority_alignment(junior, expert) == pytest.approx(0.2)
        assert analyzer.seniority_alignment(junior, mid) == pytest.approx(0.3)

    def test_mismatch_penalty(self, analyzer):
        senior = SeniorityAssessment(level=SeniorityLevel.SENIOR)
        junior = SeniorityAssessment(level=SeniorityLevel.JUNIOR)
        assert analyzer.experience_mismatch_penalty(senior, 3.0) == 0.4
        assert analyzer.experience_mismatch_penalty(senior, 6.0) == 0.0
        assert analyzer.experience_mismatch_penalty(junior, 10.0) == 0.2
        assert analyzer.experience_mismatch_penalty(SeniorityAssessment(), 10.0) == 0.0


class TestIndustry:
    def test_unknown_is_neutral(self, analyzer):
        assert analyzer.industry_match(IndustryAssessment(), IndustryAssessment(industry="finance")) == 0.5

    def test_same_industry(self, analyzer):
        a = IndustryAssessment(industry="finance", confidence=1.0)
        assert analyzer.industry_match(a, IndustryAssessment(industry="finance")) == pytest.approx(1.0)

    def test_detect_industry(self, analyzer):
        assert analyzer.detect_industry("Hospital patient records and clinical systems").industry == "healthcare"


class TestRelevance:
    def test_entries_scored_in_order(self, analyzer):
        entries = [
            _entry(title="Python Developer", description="Django services", start="2021-01", end=None),
            _entry(title="Barista", description="Coffee", start="2015-01", end="2016-01"),
        ]
        scores = analyzer.score_relevance(entries, "Python Developer with Django", ["python", "django"], NOW)
        assert [s.title for s in scores] == ["Python Developer", "Barista"]
        assert scores[0].relevance > scores[1].relevance
        assert all(0.0 <= s.relevance <= 1.0 for s in scores)
        assert scores[0].skill_overlap == 1.0
