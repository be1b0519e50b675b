"""Pattern-based technical skill extraction.

Finds known technical skills (and their aliases) in free text with
word-boundary matching, counts mentions, and detects which skills a job
description emphasizes as required.
"""

import logging
import re
from collections import Counter

from models.schemas.resume import ResumeData
from services.skill_normalizer import SKILL_VARIATIONS, normalize_skill
from services.technology_catalog import TECHNOLOGY_GROUPS, TECHNICAL_KEYWORD_LIBRARY

logger = logging.getLogger(__name__)

# Known technical skill vocabulary
TECH_SKILLS: frozenset[str] = frozenset({
    # Languages
    "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "php",
    "swift", "kotlin", "rust", "scala", "perl", "dart", "html", "css",
    # Frameworks and libraries
    "react", "angular", "vue", "node.js", "express", "django", "flask",
    "fastapi", "spring", "rails", "laravel", "next.js", "svelte", "redux",
    "jquery", "bootstrap", "tailwind", "graphql",
    # Data and storage
    "sql", "mongodb", "postgresql", "mysql", "redis", "elasticsearch",
    "dynamodb", "cassandra", "oracle", "firebase", "sqlite",
    # Cloud and DevOps
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
    "jenkins", "ci/cd", "git", "github", "gitlab", "linux", "devops",
    # Data science
    "machine learning", "ai", "data science", "nlp", "pandas", "numpy",
    "tensorflow", "pytorch", "scikit-learn",
    # Practices
    "agile", "scrum", "kanban", "jira", "microservices", "tdd",
}) | frozenset(
    name for g in TECHNOLOGY_GROUPS for name in g.members
) | (TECHNICAL_KEYWORD_LIBRARY["programming_languages"] - {"r", "go"})

# Aliases too ambiguous to search for in prose
_UNSEARCHABLE_ALIASES: frozenset[str] = frozenset({"ts", "py", "ci", "cd", "go", "golang", "next", "mui"})

# Skill names that are also everyday words; prose matches them only through
# qualified aliases ("express.js", "spring boot")
PLAIN_WORD_SKILLS: frozenset[str] = frozenset({
    "cloud", "express", "spring", "parcel", "rollup", "babel", "expo", "mocha",
})

_ALIASES: dict[str, str] = {skill: skill for skill in TECH_SKILLS if skill not in PLAIN_WORD_SKILLS}
for _canonical, _variants in SKILL_VARIATIONS.items():
    if _canonical in TECH_SKILLS:
        for _variant in _variants:
            if _variant not in _UNSEARCHABLE_ALIASES:
                _ALIASES[_variant] = _canonical


def _alias_pattern(alias: str) -> str:
    escaped = re.escape(alias).replace(r"\ ", r"\s+")
    return rf"(?<![a-z0-9.#]){escaped}(?![a-z0-9+#])"


# Longest aliases first so "react native" is consumed before "react"
_ALIAS_PATTERNS: list[tuple[str, str, re.Pattern]] = [
    (alias, canonical, re.compile(_alias_pattern(alias), re.IGNORECASE))
    for alias, canonical in sorted(_ALIASES.items(), key=lambda kv: (-len(kv[0]), kv[0]))
]

# ---------------------------------------------------------------------------
# Emphasis detection
# ---------------------------------------------------------------------------
EMPHASIS_INDICATORS: tuple[str, ...] = (
    "required", "must have", "must-have", "essential", "core", "key",
    "primary", "fundamental", "critical",
)
_EMPHASIS_ALT = "|".join(re.escape(i).replace(r"\ ", r"\s+") for i in EMPHASIS_INDICATORS)

# "Must have: Docker, Kubernetes and Helm" - the lookahead keeps overlapping
# lists ("Required: React. Must have: Docker") visible to finditer
_EMPHASIS_LIST_RE = re.compile(rf"\b(?:{_EMPHASIS_ALT})\s*:\s*(?=([^\n]*))")
_LIST_END_RE = re.compile(r"\.(?:\s|$)|[;:()]")
_LIST_SEPARATOR_RE = re.compile(r"\s*(?:,|\band\b|\bor\b)\s*")


def count_skill_mentions(text: str) -> Counter:
    """Count mentions per canonical skill. Each span of text counts once."""
    counts: Counter = Counter()
    if not text:
        return counts
    working = text.lower()
    for _alias, canonical, pattern in _ALIAS_PATTERNS:
        found = pattern.findall(working)
        if found:
            counts[canonical] += len(found)
            working = pattern.sub(" ", working)
    return counts


def extract_skills(text: str) -> set[str]:
    """Canonical technical skills mentioned in text."""
    return set(count_skill_mentions(text))


def frequent_skills(text: str, min_mentions: int = 2) -> set[str]:
    """Skills mentioned at least `min_mentions` times."""
    return {skill for skill, n in count_skill_mentions(text).items() if n >= min_mentions}


def _emphasized_list_items(lower: str) -> list[str]:
    """Canonical skills listed right after "indicator:", up to the first non-skill item."""
    items: list[str] = []
    for match in _EMPHASIS_LIST_RE.finditer(lower):
        segment = _LIST_END_RE.split(match.group(1), maxsplit=1)[0]
        for item in _LIST_SEPARATOR_RE.split(segment):
            item = " ".join(item.split())
            if not item:
                continue
            canonical = _ALIASES.get(item)
            if canonical is None:
                break
            items.append(canonical)
    return items


def find_emphasized_skills(text: str, skills: set[str] | None = None) -> set[str]:
    """Skills the text flags with emphasis words.

    Three forms count: an indicator directly before the skill ("core python",
    "required: react"), a skill list directly after "indicator:" ("must have:
    docker, kubernetes"), and "skill is/are indicator" ("python is essential").
    """
    if not text:
        return set()
    lower = text.lower()
    if skills is None:
        skills = extract_skills(text)
    emphasized = {s for s in _emphasized_list_items(lower) if s in skills}
    for _alias, canonical, _pattern in _ALIAS_PATTERNS:
        if canonical not in skills or canonical in emphasized:
            continue
        skill_pat = _alias_pattern(_alias)
        before = rf"\b(?:{_EMPHASIS_ALT})\b\s*:?\s*{skill_pat}"
        after = rf"{skill_pat}\s+(?:is|are)\s+(?:an?\s+)?(?:{_EMPHASIS_ALT})\b"
        if re.search(before, lower) or re.search(after, lower):
            emphasized.add(canonical)
    return emphasized


def detect_core_skills(text: str, skills: set[str] | None = None) -> set[str]:
    """Emphasized skills, or - absent emphasis words - skills mentioned 2+ times."""
    if skills is None:
        skills = extract_skills(text)
    emphasized = find_emphasized_skills(text, skills)
    if emphasized:
        return emphasized
    return frequent_skills(text) & skills


def collect_resume_skills(resume: ResumeData) -> list[str]:
    """Explicit skills plus skills mentioned in work history and projects, de-duplicated."""
    found: dict[str, None] = {}
    for skill in resume.skills:
        norm = normalize_skill(skill)
        if norm:
            found.setdefault(norm, None)
    for entry in resume.work_experience:
        for skill in entry.skills:
            found.setdefault(normalize_skill(skill), None)
        for skill in sorted(extract_skills(f"{entry.title}\n{entry.description}")):
            found.setdefault(skill, None)
    for project in resume.projects:
        for skill in project.technologies:
            found.setdefault(normalize_skill(skill), None)
        for skill in sorted(extract_skills(project.description)):
            found.setdefault(skill, None)
    found.pop("", None)
    return list(found)
