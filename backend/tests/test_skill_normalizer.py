"""Tests for skill normalization and fuzzy similarity."""

from services.skill_normalizer import (
    are_similar_skills,
    find_closest_skill,
    normalize_skill,
    normalize_skills,
)


class TestNormalizeSkill:
    def test_variations_map_to_canonical(self):
        assert normalize_skill("JS") == "javascript"
        assert normalize_skill("  Postgres ") == "postgresql"
        assert normalize_skill("k8s") == "kubernetes"
        assert normalize_skill("NodeJS") == "node.js"

    def test_strips_qualifier_prefixes(self):
        assert normalize_skill("Senior Python") == "python"
        assert normalize_skill("Certified AWS") == "aws"

    def test_lone_qualifier_is_kept(self):
        assert normalize_skill("Lead") == "lead"

    def test_collapses_whitespace(self):
        assert normalize_skill("machine    learning") == "machine learning"

    def test_empty(self):
        assert normalize_skill("") == ""

    def test_normalize_skills_dedupes_in_order(self):
        assert normalize_skills(["JS", "javascript", "React", "reactjs", ""]) == ["javascript", "react"]


class TestSimilarity:
    def test_synonyms_are_similar(self):
        assert are_similar_skills("React.js", "react")
        assert are_similar_skills("golang", "Go")

    def test_spelling_variant_is_similar(self):
        assert are_similar_skills("kubernets", "kubernetes")

    def test_short_skills_need_exact_match(self):
        assert not are_similar_skills("go", "js")
        assert not are_similar_skills("c#", "c++")

    def test_unrelated_skills(self):
        assert not are_similar_skills("python", "django")

    def test_explicit_threshold(self):
        assert not are_similar_skills("kubernets", "kubernetes", threshold=0.95)

    def test_empty_never_similar(self):
        assert not are_similar_skills("", "")


class TestFindClosestSkill:
    def test_finds_near_spelling(self):
        assert find_closest_skill("kubernets", ["docker", "kubernetes"]) == "kubernetes"

    def test_resolves_alias_through_processor(self):
        assert find_closest_skill("js", ["python", "JavaScript"]) == "JavaScript"

    def test_no_candidate_above_cutoff(self):
        assert find_closest_skill("cobol", ["python", "rust"]) is None

    def test_empty_candidates(self):
        assert find_closest_skill("python", []) is None
