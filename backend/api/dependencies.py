"""Shared dependencies for API routes."""

from functools import lru_cache

from services.matching_service import MatchingService


@lru_cache
def get_matching_service() -> MatchingService:
    return MatchingService()
