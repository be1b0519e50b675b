"""Lazy-loading registry of the scoring stage services.

Stage services are stateless; one instance per process is shared by every
request, created and loaded on first use.
"""

import logging
import threading

from services.scoring.base import BaseScoringService

logger = logging.getLogger(__name__)

_registry: dict[str, BaseScoringService] = {}
_lock = threading.Lock()


def _create_service(name: str) -> BaseScoringService:
    """Factory: create a stage service by name with deferred imports."""
    if name == "skill_matcher":
        from services.scoring.skill_matcher import SkillMatcherService
        return SkillMatcherService()
    elif name == "density_analyzer":
        from services.scoring.density_analyzer import DensityAnalyzerService
        return DensityAnalyzerService()
    elif name == "experience_analyzer":
        from services.scoring.experience_analyzer import ExperienceAnalyzerService
        return ExperienceAnalyzerService()
    elif name == "component_scorer":
        from services.scoring.component_scorer import ComponentScorerService
        return ComponentScorerService()
    elif name == "compatibility_gate":
        from services.scoring.compatibility_gate import CompatibilityGateService
        return CompatibilityGateService()
    elif name == "compensation":
        from services.scoring.compensation import CompensationService
        return CompensationService()
    else:
        raise ValueError(f"Unknown scoring service: {name}")


def get_service(name: str) -> BaseScoringService:
    """Get a stage service by name, creating and loading it on first access."""
    with _lock:
        if name not in _registry:
            _registry[name] = _create_service(name)
        svc = _registry[name]
    svc.ensure_loaded()
    return svc


def clear() -> None:
    """Drop all services. Useful for testing."""
    with _lock:
        _registry.clear()
