"""Skill string canonicalization and similarity.

Resolves aliases ("JS", "Postgres", "k8s") to one canonical name, strips
qualifier prefixes ("Senior Python" -> "python"), and falls back to
Levenshtein similarity for spelling variants.
"""

import logging
import re

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Canonical name -> known variations
# ---------------------------------------------------------------------------
SKILL_VARIATIONS: dict[str, list[str]] = {
    "javascript": ["js", "ecmascript", "es6", "es2015+", "vanilla js"],
    "typescript": ["ts"],
    "python": ["py", "python3", "python 3"],
    "react": ["reactjs", "react.js"],
    "react-native": ["react native"],
    "vue": ["vuejs", "vue.js", "vue 3"],
    "angular": ["angularjs", "angular.js"],
    "node.js": ["nodejs", "node", "node js"],
    "next.js": ["nextjs"],
    "express": ["expressjs", "express.js"],
    "spring": ["spring boot", "spring framework"],
    "babel": ["babeljs", "babel.js"],
    "parcel": ["parceljs", "parcel.js"],
    "rollup": ["rollupjs", "rollup.js"],
    "mocha": ["mochajs", "mocha.js"],
    "postgresql": ["postgres", "psql"],
    "mongodb": ["mongo"],
    "kubernetes": ["k8s"],
    "aws": ["amazon web services"],
    "gcp": ["google cloud platform", "google cloud"],
    "azure": ["microsoft azure"],
    "ci/cd": ["ci", "cd", "continuous integration", "continuous deployment", "cicd"],
    "devops": ["dev ops", "development operations"],
    "machine learning": ["ml"],
    "ai": ["artificial intelligence"],
    "tailwind": ["tailwindcss", "tailwind css"],
    "material-ui": ["mui", "material ui"],
    "go": ["golang"],
    "c#": ["csharp", "c sharp"],
    "c++": ["cpp"],
    "sql": ["structured query language"],
}

# Reverse lookup: variation -> canonical
_VARIATION_INDEX: dict[str, str] = {
    variant: canonical
    for canonical, variants in SKILL_VARIATIONS.items()
    for variant in variants
}

QUALIFIER_PREFIXES: frozenset[str] = frozenset({
    "senior", "junior", "lead", "principal", "expert",
    "certified", "professional", "advanced",
})

CLOSEST_SKILL_THRESHOLD = 0.8

_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_PUNCT_RE = re.compile(r"^[\s,;:()\[\]\"']+|[\s,;:()\[\]\"'.]+$")


def normalize_skill(skill: str) -> str:
    """Lowercase, strip qualifiers, and map known variations to the canonical name."""
    if not skill:
        return ""
    text = _WHITESPACE_RE.sub(" ", skill.lower())
    text = _EDGE_PUNCT_RE.sub("", text)

    words = text.split(" ")
    while len(words) > 1 and words[0] in QUALIFIER_PREFIXES:
        words = words[1:]
    text = " ".join(words)

    return _VARIATION_INDEX.get(text, text)


def are_similar_skills(a: str, b: str, threshold: float | None = None) -> bool:
    """True for identical, synonymous, or near-identical spellings of one skill."""
    norm_a, norm_b = normalize_skill(a), normalize_skill(b)
    if not norm_a or not norm_b:
        return False
    if norm_a == norm_b:
        return True
    # Short tokens (go, c#, r) differ by one character from unrelated skills
    if min(len(norm_a), len(norm_b)) <= 3:
        return False
    if threshold is None:
        threshold = settings.skill_similarity_threshold
    return Levenshtein.normalized_similarity(norm_a, norm_b) >= threshold


def find_closest_skill(skill: str, candidates: list[str]) -> str | None:
    """Best candidate with similarity >= 0.8, or None."""
    norm = normalize_skill(skill)
    if not norm or not candidates:
        return None
    best = process.extractOne(
        norm,
        candidates,
        scorer=Levenshtein.normalized_similarity,
        processor=normalize_skill,
        score_cutoff=CLOSEST_SKILL_THRESHOLD,
    )
    return best[0] if best else None


def normalize_skills(skills: list[str]) -> list[str]:
    """Normalize and de-duplicate, preserving first-seen order."""
    seen: dict[str, None] = {}
    for skill in skills:
        norm = normalize_skill(skill)
        if norm:
            seen.setdefault(norm, None)
    return list(seen)
