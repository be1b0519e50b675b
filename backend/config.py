import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    rate_limit: str = "30/minute"

    # Scoring policy
    enable_lenient_scoring: bool = False  # env ENABLE_LENIENT_SCORING
    lenient_score_floor: float = 1.0
    lenient_max_penalty: float = 0.8

    # Compatibility gate thresholds
    max_missing_required_skills: int = 0  # skills explicitly emphasized as required
    max_missing_critical_skills: int = 2  # skills mentioned 2+ times in the job text
    min_skills_match_score: int = 50  # 0-100
    min_experience_ratio: float = 0.7
    blocking_experience_ratio: float = 0.5
    experienced_years: float = 5.0  # always passes the experience gate
    min_management_years: float = 2.0

    # Skill matching
    skill_similarity_threshold: float = 0.85

    # Result cache and matching concurrency
    result_cache_ttl_seconds: float = 3600.0
    max_concurrent_matches: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
