"""Tests for the async matching service."""

import asyncio
import threading
import time

import pytest

from models.schemas.scoring import ScoringResult
from services.matching_service import MatchingIntegrationError, MatchingService
from services.scoring.orchestrator import ScoringPipeline

RESUME = {
    "id": 7,
    "title": "Python Developer",
    "skills": {"skills_": "Python, Django"},
    "workExperience": [
        {"jobtitle": "Python Developer", "companyName": "Acme", "startDate": "2019-01", "endDate": "present"},
    ],
}
JOB = {
    "company": "Acme",
    "jobTitle": "Python Developer",
    "jobDescription": "Required: Python and Django.",
}


class RecordingPipeline:
    """Tracks how many scoring calls run at once."""

    def __init__(self):
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def score(self, resume, job, now=None):
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(0.05)
        with self._lock:
            self.active -= 1
        return ScoringResult(final_score=5.0)


class TestAdapt:
    def test_legacy_shapes_are_normalized(self):
        resume, job = MatchingService.adapt(RESUME, JOB)
        assert resume.id == "7"
        assert resume.skills == ["Python", "Django"]
        assert resume.work_experience[0].title == "Python Developer"
        assert job.job_title == "Python Developer"

    def test_invalid_resume(self):
        with pytest.raises(MatchingIntegrationError) as exc_info:
            MatchingService.adapt({"workExperience": "not a list"}, JOB)
        assert exc_info.value.code == "INVALID_RESUME"
        assert exc_info.value.details

    def test_invalid_job(self):
        with pytest.raises(MatchingIntegrationError) as exc_info:
            MatchingService.adapt(RESUME, {"jobTitle": ["not", "a", "string"]})
        assert exc_info.value.code == "INVALID_JOB"


class TestScore:
    @pytest.mark.asyncio
    async def test_scores_with_real_pipeline(self):
        service = MatchingService(pipeline=ScoringPipeline(policy="standard"))
        result = await service.score(RESUME, JOB)
        assert result.is_compatible
        assert 0.0 <= result.final_score <= 10.0

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        pipeline = RecordingPipeline()
        service = MatchingService(pipeline=pipeline, max_concurrency=2)
        results = await service.score_many(RESUME, [JOB] * 6)
        assert len(results) == 6
        assert pipeline.peak <= 2

    @pytest.mark.asyncio
    async def test_invalid_input_raises_before_scoring(self):
        pipeline = RecordingPipeline()
        service = MatchingService(pipeline=pipeline)
        with pytest.raises(MatchingIntegrationError):
            await service.score({"workExperience": 5}, JOB)
        assert pipeline.peak == 0
