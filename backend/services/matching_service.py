"""Async integration layer between callers and the synchronous scoring pipeline."""

import asyncio
import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from config import settings
from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from models.schemas.scoring import ScoringResult
from services.result_cache import TTLResultCache
from services.scoring.orchestrator import ScoringPipeline

logger = logging.getLogger(__name__)


class MatchingIntegrationError(Exception):
    """Raised when a resume or job record cannot be adapted for scoring."""

    def __init__(self, message: str, code: str = "INVALID_INPUT", details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class MatchingService:
    """Validates raw records and scores them with bounded concurrency."""

    def __init__(self, pipeline: ScoringPipeline | None = None, max_concurrency: int | None = None) -> None:
        self.pipeline = pipeline or ScoringPipeline(
            cache=TTLResultCache(settings.result_cache_ttl_seconds)
        )
        self.max_concurrency = max_concurrency or settings.max_concurrent_matches
        self._semaphore = asyncio.Semaphore(self.max_concurrency)

    @staticmethod
    def adapt(resume: dict[str, Any], job: dict[str, Any]) -> tuple[ResumeData, JobDetails]:
        try:
            resume_data = ResumeData.model_validate(resume)
        except ValidationError as exc:
            raise MatchingIntegrationError(
                "Invalid resume data", code="INVALID_RESUME", details=exc.errors(include_url=False)
            ) from exc
        try:
            job_details = JobDetails.model_validate(job)
        except ValidationError as exc:
            raise MatchingIntegrationError(
                "Invalid job data", code="INVALID_JOB", details=exc.errors(include_url=False)
            ) from exc
        return resume_data, job_details

    async def score(
        self,
        resume: dict[str, Any],
        job: dict[str, Any],
        now: datetime | None = None,
    ) -> ScoringResult:
        resume_data, job_details = self.adapt(resume, job)
        async with self._semaphore:
            return await asyncio.to_thread(self.pipeline.score, resume_data, job_details, now)

    async def score_many(
        self,
        resume: dict[str, Any],
        jobs: list[dict[str, Any]],
        now: datetime | None = None,
    ) -> list[ScoringResult]:
        """Score one resume against several jobs, at most max_concurrency at a time."""
        logger.info("Scoring resume against %d jobs", len(jobs))
        return list(await asyncio.gather(*(self.score(resume, job, now) for job in jobs)))
