"""Scoring policies selected once when the pipeline is built."""

from dataclasses import dataclass
from enum import Enum

from config import settings


class ScoringPolicy(str, Enum):
    STANDARD = "standard"
    LENIENT = "lenient"


@dataclass(frozen=True)
class PolicyConfig:
    policy: ScoringPolicy
    score_floor: float  # lowest score a scored (non-blocked) result can get
    max_penalty: float  # cap on every adjusted penalty

    def clamp_score(self, score: float) -> float:
        return max(self.score_floor, min(10.0, score))

    def cap_penalties(self, penalties: dict[str, float]) -> dict[str, float]:
        return {k: round(min(self.max_penalty, max(0.0, v)), 4) for k, v in penalties.items()}


STANDARD_POLICY = PolicyConfig(policy=ScoringPolicy.STANDARD, score_floor=0.0, max_penalty=1.0)


def lenient_policy() -> PolicyConfig:
    return PolicyConfig(
        policy=ScoringPolicy.LENIENT,
        score_floor=settings.lenient_score_floor,
        max_penalty=settings.lenient_max_penalty,
    )


def get_policy(policy: ScoringPolicy | str | None = None) -> PolicyConfig:
    """Resolve a policy name, falling back to settings.enable_lenient_scoring."""
    if policy is None:
        policy = ScoringPolicy.LENIENT if settings.enable_lenient_scoring else ScoringPolicy.STANDARD
    policy = ScoringPolicy(policy)
    if policy == ScoringPolicy.LENIENT:
        return lenient_policy()
    return STANDARD_POLICY
