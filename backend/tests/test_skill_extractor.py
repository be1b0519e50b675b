"""Tests for pattern-based skill extraction and emphasis detection."""

from services.skill_extractor import (
    collect_resume_skills,
    count_skill_mentions,
    detect_core_skills,
    extract_skills,
    find_emphasized_skills,
    frequent_skills,
)


def test_extract_skills_finds_python_and_javascript():
    skills = extract_skills("Experience with Python and JavaScript")
    assert "python" in skills
    assert "javascript" in skills


def test_extract_skills_java_not_in_javascript():
    skills = extract_skills("Proficient in JavaScript and TypeScript")
    assert "javascript" in skills
    assert "java" not in skills


def test_extract_skills_avoids_substring_false_positives():
    skills = extract_skills("Senior engineer who built scalable systems")
    assert "scala" not in skills


def test_extract_skills_prefers_longest_alias():
    skills = extract_skills("Shipped apps in React Native")
    assert "react-native" in skills
    assert "react" not in skills


def test_extract_skills_dotted_names_and_aliases():
    skills = extract_skills("APIs with Node.js, Postgres and k8s")
    assert {"node.js", "postgresql", "kubernetes"} <= skills


def test_count_skill_mentions_is_case_insensitive():
    assert count_skill_mentions("Python, python and PYTHON")["python"] == 3


def test_count_skill_mentions_empty():
    assert count_skill_mentions("") == {}


def test_frequent_skills():
    assert frequent_skills("Docker here, Docker there, Python once") == {"docker"}


def test_emphasis_before_skill():
    assert find_emphasized_skills("Required: React. Nice to have: Vue.") == {"react"}


def test_emphasis_after_skill():
    assert "python" in find_emphasized_skills("Python is essential for this role.")


def test_emphasis_must_have_list():
    emphasized = find_emphasized_skills("Must have: Docker, Kubernetes")
    assert {"docker", "kubernetes"} <= emphasized


def test_core_skills_fall_back_to_frequency():
    text = "Python scripts every day. More Python. Some Docker."
    assert detect_core_skills(text) == {"python"}


def test_collect_resume_skills(python_resume):
    skills = collect_resume_skills(python_resume)
    assert skills[:4] == ["python", "django", "postgresql", "docker"]
    assert len(skills) == len(set(skills))


def test_emphasis_list_after_colon():
    text = "Required: Python, Django and PostgreSQL. Nice to have: Docker. Must have: CI/CD"
    assert find_emphasized_skills(text) == {"python", "django", "postgresql", "ci/cd"}


def test_emphasis_list_stops_at_first_non_skill_item():
    assert find_emphasized_skills("Must have: Docker experience and Kubernetes") == {"docker"}


def test_emphasis_word_in_prose_is_not_a_requirement():
    assert find_emphasized_skills("Our primary cloud is AWS. Build Python and Django services.") == set()
    assert find_emphasized_skills("You will be a key contributor to our React frontend.") == set()


def test_emphasis_word_directly_before_skill():
    assert find_emphasized_skills("Strong core Python and some Docker.") == {"python"}


def test_plain_english_words_are_not_skills():
    assert extract_skills("Please express interest; Spring hiring") == set()
    assert extract_skills("Please express interest; cloud experience is a plus. Spring hiring.") == set()


def test_plain_word_skills_match_in_qualified_form():
    assert extract_skills("APIs in Express.js and Spring Boot") == {"express", "spring"}
