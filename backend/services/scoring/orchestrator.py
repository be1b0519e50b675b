"""Scoring pipeline: wires the stage services together.

Flow:
    ResumeData + JobDetails
      ├─ input checks                  → ScoringResult(input_error) on empty inputs
      ├─ cache lookup                  → cached ScoringResult
      ├─ CompatibilityGate.assess      → AssessmentResult
      │       └─ blocked               → ScoringResult(score 0, blockers)
      ├─ ComponentScorer.score         → ComponentResult (five sub-scores)
      ├─ SkillMatcher.assess_match_quality + project relevance
      ├─ Compensation.compensate       → CompensationResult
      ├─ Compensation.enforce_floors   → final penalties (floors always win)
      └─ Σ score_i × (1 - penalty_i) × weight_i × 10 + title bonus
                       ↓
         policy clamp + explanation → ScoringResult
"""

import logging
from datetime import datetime

from models.schemas.assessment import AssessmentResult
from models.schemas.components import ComponentResult, ComponentScores
from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from models.schemas.scoring import ScoringAnalytics, ScoringResult
from services.result_cache import ResultCache, make_cache_key
from services.scoring import explanation
from services.scoring.component_scorer import COMPONENT_WEIGHTS
from services.scoring.errors import ScoringError
from services.scoring.policy import PolicyConfig, ScoringPolicy, get_policy
from services.scoring.registry import get_service
from services.skill_extractor import collect_resume_skills, extract_skills
from services.text_parsing import extract_required_years, requires_degree

logger = logging.getLogger(__name__)

# Extra penalty categories folded into a component's term
LINKED_PENALTIES: dict[str, str] = {
    "skills": "technical",
    "experience": "seniority",
}
TITLE_BONUS_MAX = 1.0
MAX_SCORE = 10.0


def build_penalties(
    scores: ComponentScores,
    core_skill_match: float,
    is_technical_role: bool,
    seniority_penalty: float,
) -> dict[str, float]:
    """Raw penalties: 1 - sub-score per component, plus technical and seniority."""
    return {
        "skills": 1.0 - scores.skills,
        "experience": 1.0 - scores.experience,
        "projects": 1.0 - scores.projects,
        "education": 1.0 - scores.education,
        "technical": 1.0 - core_skill_match if is_technical_role else 0.0,
        "seniority": seniority_penalty,
    }


def weighted_score(scores: ComponentScores, penalties: dict[str, float]) -> float:
    """Σ score_i × (1 - penalty_i) × weight_i on a 0-10 scale, before the title bonus."""
    total = 0.0
    for name, weight in COMPONENT_WEIGHTS.items():
        term = getattr(scores, name) * (1.0 - penalties.get(name, 0.0))
        linked = LINKED_PENALTIES.get(name)
        if linked:
            term *= 1.0 - penalties.get(linked, 0.0)
        total += term * weight
    return total * MAX_SCORE


class ScoringPipeline:
    """Scores one resume against one job.

    The policy (standard or lenient) is fixed at construction. The cache is
    optional and owned by the caller.
    """

    def __init__(self, policy: ScoringPolicy | str | None = None, cache: ResultCache | None = None) -> None:
        self.policy: PolicyConfig = get_policy(policy)
        self.cache = cache

    def score(self, resume: ResumeData, job: JobDetails, now: datetime | None = None) -> ScoringResult:
        now = now or datetime.now()

        # --- Stage 0: Input checks (modeled outcomes, never raised) ---
        resume_skills = collect_resume_skills(resume)
        input_error = self._input_error(resume_skills, job)
        if input_error:
            logger.info("Scoring skipped for resume %r: %s", resume.id, input_error)
            return ScoringResult(
                explanation=explanation.build_input_error_explanation(input_error),
                input_error=input_error,
            )

        key = make_cache_key(resume.id, job.job_title, job.company) if resume.id else None
        if key is not None and self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Cache hit: %s", key)
                return cached
            logger.debug("Cache miss: %s", key)

        try:
            result = self._run(resume, job, resume_skills, now)
        except Exception as exc:
            logger.exception("Scoring failed for resume %r / job %r", resume.id, job.job_title)
            raise ScoringError() from exc

        if key is not None and self.cache is not None:
            self.cache.set(key, result)
        return result

    @staticmethod
    def _input_error(resume_skills: list[str], job: JobDetails) -> str | None:
        if not job.job_description.strip():
            return "Job description is required"
        if not resume_skills:
            return "Resume has no skills"
        return None

    def _run(
        self,
        resume: ResumeData,
        job: JobDetails,
        resume_skills: list[str],
        now: datetime,
    ) -> ScoringResult:
        job_text = job.full_text

        # --- Stage 1: Compatibility gate ---
        gate = get_service("compatibility_gate")
        assessment: AssessmentResult = gate.assess(resume, job, resume_skills=resume_skills, now=now)
        if not assessment.is_compatible:
            blocker = assessment.blockers[-1] if assessment.blockers else None
            logger.info(
                "Resume %r blocked for %r: %s",
                resume.id, job.job_title, blocker.message if blocker else "incompatible",
            )
            return ScoringResult(
                final_score=0.0,
                explanation=explanation.build_blocked_explanation(assessment),
                assessment=assessment,
            )

        # --- Stage 2: Component scores ---
        job_skills = sorted(extract_skills(job_text))
        required_years = extract_required_years(job_text)
        matcher = get_service("skill_matcher")
        skill_match = matcher.match_skills(job_skills, resume_skills, context=job_text)

        scorer = get_service("component_scorer")
        components: ComponentResult = scorer.score(
            resume,
            job,
            resume_skills=resume_skills,
            job_skills=job_skills,
            missing_critical=assessment.metadata.missing_critical_skills,
            required_years=required_years,
            now=now,
        )
        scores = components.component_scores

        # --- Stage 3: Skill-match quality and project relevance ---
        quality = matcher.assess_match_quality(job_text, resume_skills, job_skills=job_skills)
        compensation = get_service("compensation")
        projects = compensation.assess_project_relevance(resume.projects, job_text, job_skills)

        density = get_service("density_analyzer")
        is_technical = density.is_technical_role(job.job_title).is_technical

        experience = get_service("experience_analyzer")
        profile = experience.analyze(resume.work_experience, now)
        seniority_penalty = experience.experience_mismatch_penalty(
            experience.detect_seniority(job_text), profile.total_years
        )

        # --- Stage 4: Compensation and floors ---
        penalties = build_penalties(scores, quality.core_skill_match, is_technical, seniority_penalty)
        compensated = compensation.compensate(
            penalties, quality, profile.total_years, projects=projects
        )
        floored, floors = compensation.enforce_floors(
            compensated.adjusted_penalties,
            quality,
            is_technical_role=is_technical,
            required_years=required_years,
            actual_years=profile.total_years,
            requires_degree=requires_degree(job_text),
            has_education=bool(resume.education),
        )
        final_penalties = self.policy.cap_penalties(floored)

        # --- Stage 5: Final score ---
        base = weighted_score(scores, final_penalties)
        title_bonus = min(TITLE_BONUS_MAX, scores.job_title)
        final_score = round(self.policy.clamp_score(base + title_bonus), 1)

        logger.info(
            "Resume %r scored %.1f for %r (%s policy)",
            resume.id, final_score, job.job_title, self.policy.policy.value,
        )
        return ScoringResult(
            final_score=final_score,
            explanation=explanation.build_explanation(final_score, scores, quality, floors),
            assessment=assessment,
            analytics=ScoringAnalytics(
                policy=self.policy.policy.value,
                component_scores=scores,
                weights=dict(COMPONENT_WEIGHTS),
                is_technical_role=is_technical,
                skill_match=skill_match,
                skill_match_quality=quality,
                experience=profile,
                required_years=required_years,
                project_relevance=projects,
                compensation=compensated,
                floors_applied=floors,
                final_penalties=final_penalties,
                weighted_score=round(base, 4),
                title_bonus=round(title_bonus, 4),
            ),
        )
