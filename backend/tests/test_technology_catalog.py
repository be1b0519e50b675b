"""Tests for the technology catalog lookups."""

from services.technology_catalog import (
    ALL_TECHNICAL_KEYWORDS,
    TECHNICAL_KEYWORD_LIBRARY,
    TECHNOLOGY_GROUPS,
    are_skills_related,
    find_group,
    get_compensation_factor,
    get_related_skills,
    get_skill_category,
    get_skill_context,
)


class TestGroups:
    def test_find_group_by_alias(self):
        assert find_group("ReactJS").primary_name == "react"

    def test_find_group_by_related_name(self):
        assert find_group("next.js").primary_name == "react"

    def test_primary_name_wins_over_related_membership(self):
        # django is a primary and also related to python
        assert find_group("django").primary_name == "django"

    def test_unknown_skill(self):
        assert find_group("cobol") is None
        assert get_related_skills("cobol") == set()

    def test_factors_in_range(self):
        assert all(0 < g.compensation_factor <= 1 for g in TECHNOLOGY_GROUPS)


class TestRelations:
    def test_related_skills_share_subcategory(self):
        related = get_related_skills("react")
        assert {"vue", "angular", "redux"} <= related
        assert "react" not in related

    def test_are_skills_related(self):
        assert are_skills_related("react", "vue")
        assert not are_skills_related("react", "react")
        assert not are_skills_related("react", "docker")

    def test_compensation_factor(self):
        assert get_compensation_factor("python") == 0.9
        assert get_compensation_factor("cobol") is None

    def test_context_and_category(self):
        assert "containers" in get_skill_context("docker")
        assert get_skill_category("mongodb") == "backend"


class TestKeywordLibrary:
    def test_six_categories(self):
        assert len(TECHNICAL_KEYWORD_LIBRARY) == 6

    def test_all_keywords_is_union(self):
        union = set().union(*TECHNICAL_KEYWORD_LIBRARY.values())
        assert ALL_TECHNICAL_KEYWORDS == union
