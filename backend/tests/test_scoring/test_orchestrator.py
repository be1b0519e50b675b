"""Tests for the scoring pipeline."""

import pytest

from models.schemas.components import ComponentScores
from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from services.result_cache import TTLResultCache
from services.scoring.component_scorer import COMPONENT_WEIGHTS
from services.scoring.errors import ScoringError
from services.scoring.orchestrator import ScoringPipeline, build_penalties, weighted_score


class TestWeightedScore:
    def test_perfect_scores(self):
        scores = ComponentScores(skills=1, experience=1, projects=1, education=1, job_title=1)
        assert weighted_score(scores, {}) == pytest.approx(10.0)

    def test_linked_penalties_multiply(self):
        scores = ComponentScores(skills=1, experience=1, projects=1, education=1, job_title=1)
        penalties = {"skills": 0.5, "technical": 0.5}
        assert weighted_score(scores, penalties) == pytest.approx(7.75)

    def test_build_penalties(self):
        scores = ComponentScores(skills=0.8, experience=0.5, projects=0.0, education=1.0)
        penalties = build_penalties(scores, core_skill_match=0.6, is_technical_role=True, seniority_penalty=0.4)
        assert penalties == pytest.approx({
            "skills": 0.2, "experience": 0.5, "projects": 1.0, "education": 0.0,
            "technical": 0.4, "seniority": 0.4,
        })
        assert build_penalties(scores, 0.6, False, 0.0)["technical"] == 0.0


@pytest.mark.integration
class TestScoringPipeline:
    def test_compatible_resume_scores_in_range(self, python_resume, python_job, now):
        result = ScoringPipeline(policy="standard").score(python_resume, python_job, now=now)
        assert result.is_compatible
        assert 0.0 <= result.final_score <= 10.0
        assert result.analytics is not None
        assert sum(result.analytics.weights.values()) == pytest.approx(1.0)
        assert result.analytics.weights == COMPONENT_WEIGHTS
        assert result.explanation.startswith("Job Fit Score:")

    def test_deterministic(self, python_resume, python_job, now):
        pipeline = ScoringPipeline(policy="standard")
        assert pipeline.score(python_resume, python_job, now=now) == pipeline.score(
            python_resume, python_job, now=now
        )

    def test_floors_hold_in_final_penalties(self, python_resume, now):
        job = JobDetails(
            job_title="Python Developer",
            job_description="Python developer with Python. Bachelor's degree in Computer Science required.",
        )
        resume = python_resume.model_copy(update={"education": []})
        result = ScoringPipeline(policy="standard").score(resume, job, now=now)
        assert result.is_compatible
        for reason in result.analytics.floors_applied:
            assert result.analytics.final_penalties[reason.category] >= reason.minimum_penalty
        assert "EDUCATION_MISMATCH" in [r.code for r in result.analytics.floors_applied]

    def test_blocked_result(self, now):
        resume = ResumeData(title="Frontend Developer", skills=["javascript"])
        job = JobDetails(job_title="Frontend Developer", job_description="Required: React.")
        result = ScoringPipeline().score(resume, job, now=now)
        assert not result.is_compatible
        assert result.final_score == 0.0
        assert result.analytics is None
        assert "This role requires expertise in: react" in result.explanation

    def test_lenient_policy_caps_penalties(self, python_resume, python_job, now):
        result = ScoringPipeline(policy="lenient").score(python_resume, python_job, now=now)
        assert result.analytics.policy == "lenient"
        assert all(p <= 0.8 for p in result.analytics.final_penalties.values())
        assert result.final_score >= 1.0

    def test_lenient_floor_lifts_weak_compatible_resume(self, now):
        resume = ResumeData(title="Account Executive", skills=["Salesforce"])
        job = JobDetails(
            job_title="Sales Representative",
            job_description="Call new clients and grow regional revenue.",
        )
        standard = ScoringPipeline(policy="standard").score(resume, job, now=now)
        lenient = ScoringPipeline(policy="lenient").score(resume, job, now=now)

        assert standard.is_compatible and lenient.is_compatible
        assert standard.analytics.weighted_score == pytest.approx(0.75)
        assert lenient.analytics.weighted_score == pytest.approx(0.75)
        assert 0.0 < standard.final_score < 1.0
        assert lenient.final_score == 1.0


class TestInputErrors:
    def test_empty_job_description(self, python_resume, now):
        result = ScoringPipeline().score(python_resume, JobDetails(job_title="Developer"), now=now)
        assert result.input_error == "Job description is required"
        assert result.final_score == 0.0
        assert not result.is_compatible

    def test_resume_without_skills(self, python_job, now):
        result = ScoringPipeline().score(ResumeData(title="Developer"), python_job, now=now)
        assert result.input_error == "Resume has no skills"


class TestCaching:
    def test_second_call_is_served_from_cache(self, python_resume, python_job, now):
        cache = TTLResultCache(ttl_seconds=60)
        pipeline = ScoringPipeline(cache=cache)
        first = pipeline.score(python_resume, python_job, now=now)
        assert len(cache) == 1
        assert pipeline.score(python_resume, python_job, now=now) is first

    def test_resume_without_id_is_not_cached(self, python_resume, python_job, now):
        cache = TTLResultCache(ttl_seconds=60)
        resume = python_resume.model_copy(update={"id": None})
        ScoringPipeline(cache=cache).score(resume, python_job, now=now)
        assert len(cache) == 0


def test_stage_failure_is_wrapped(python_resume, python_job, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("stage exploded")

    monkeypatch.setattr(ScoringPipeline, "_run", _boom)
    with pytest.raises(ScoringError) as exc_info:
        ScoringPipeline().score(python_resume, python_job)
    assert exc_info.value.message == "Failed to calculate job fit score"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
