"""Static technology taxonomy.

Three read-only tables built once at import time:

1. TECHNOLOGY_GROUPS - primary technologies with the related technologies
   that partly substitute for them, each with a compensation factor.
2. TECHNICAL_KEYWORD_LIBRARY - six keyword categories used for technical
   density scoring.
3. TECHNICAL_ROLES / TECHNICAL_ROLE_INDICATORS - role-title vocabulary used
   to decide whether a job is technical.
"""

import logging

from models.schemas.skills import TechnologyGroup
from services.skill_normalizer import normalize_skill

logger = logging.getLogger(__name__)


def _group(
    primary: str,
    related: list[str],
    factor: float,
    context: list[str],
    category: str,
    subcategory: str,
) -> TechnologyGroup:
    return TechnologyGroup(
        primary_name=primary,
        related_names=frozenset(related),
        compensation_factor=factor,
        context_tags=frozenset(context),
        category=category,
        subcategory=subcategory,
    )


# ---------------------------------------------------------------------------
# Technology groups: category -> subcategory -> groups
# ---------------------------------------------------------------------------
TECHNOLOGY_GROUPS: tuple[TechnologyGroup, ...] = (
    # Frontend frameworks
    _group("react", ["react-router", "redux", "next.js", "gatsby"], 0.8,
           ["spa", "component-based", "frontend", "ui"], "frontend", "frameworks"),
    _group("vue", ["vuex", "nuxt", "vue-router", "pinia"], 0.8,
           ["spa", "progressive", "frontend", "ui"], "frontend", "frameworks"),
    _group("angular", ["rxjs", "ngrx", "typescript"], 0.8,
           ["spa", "enterprise", "frontend", "ui"], "frontend", "frameworks"),
    # Frontend libraries
    _group("tailwind", ["css", "bootstrap", "sass"], 0.7,
           ["styling", "responsive", "ui"], "frontend", "libraries"),
    _group("material-ui", ["chakra-ui", "ant design", "styled-components"], 0.7,
           ["component library", "design system", "ui"], "frontend", "libraries"),
    # Frontend tools
    _group("webpack", ["vite", "babel", "parcel", "rollup"], 0.6,
           ["bundling", "build tools"], "frontend", "tools"),
    _group("jest", ["mocha", "cypress", "testing-library", "vitest"], 0.6,
           ["testing", "unit tests", "tdd"], "frontend", "tools"),
    # Backend languages
    _group("node.js", ["javascript", "typescript", "deno"], 0.9,
           ["server-side", "backend", "runtime"], "backend", "languages"),
    _group("python", ["django", "flask", "fastapi"], 0.9,
           ["scripting", "backend", "data"], "backend", "languages"),
    # Backend frameworks
    _group("express", ["koa", "nestjs", "fastify"], 0.8,
           ["rest api", "middleware", "backend"], "backend", "frameworks"),
    _group("django", ["flask", "fastapi", "django rest framework"], 0.8,
           ["orm", "mvc", "backend"], "backend", "frameworks"),
    # Databases
    _group("postgresql", ["mysql", "sql", "relational database", "sqlite"], 0.8,
           ["rdbms", "sql", "database"], "backend", "databases"),
    _group("mongodb", ["nosql", "mongoose", "dynamodb", "couchdb"], 0.8,
           ["document store", "nosql", "database"], "backend", "databases"),
    # DevOps
    _group("docker", ["kubernetes", "containerization", "docker-compose", "podman"], 0.8,
           ["containers", "deployment", "devops"], "devops", "core"),
    _group("aws", ["azure", "gcp", "cloud"], 0.8,
           ["cloud", "infrastructure", "devops"], "devops", "core"),
    _group("ci/cd", ["jenkins", "github actions", "gitlab ci", "circleci"], 0.7,
           ["automation", "pipelines", "devops"], "devops", "core"),
    # Mobile
    _group("react-native", ["expo", "mobile development", "react"], 0.8,
           ["mobile", "cross-platform"], "mobile", "core"),
    _group("flutter", ["dart", "mobile development"], 0.8,
           ["mobile", "cross-platform"], "mobile", "core"),
)

# Primary names win over related memberships when a skill appears in both.
_GROUP_INDEX: dict[str, TechnologyGroup] = {}
for _g in TECHNOLOGY_GROUPS:
    _GROUP_INDEX[_g.primary_name] = _g
for _g in TECHNOLOGY_GROUPS:
    for _name in sorted(_g.related_names):
        _GROUP_INDEX.setdefault(_name, _g)

_SUBCATEGORY_MEMBERS: dict[tuple[str, str], frozenset[str]] = {}
for _g in TECHNOLOGY_GROUPS:
    _key = (_g.category, _g.subcategory)
    _SUBCATEGORY_MEMBERS[_key] = _SUBCATEGORY_MEMBERS.get(_key, frozenset()) | _g.members


def find_group(skill: str) -> TechnologyGroup | None:
    """Return the technology group a skill belongs to, or None."""
    return _GROUP_INDEX.get(normalize_skill(skill))


def get_related_skills(skill: str) -> set[str]:
    """All skills sharing the skill's group or subcategory, excluding the skill itself."""
    norm = normalize_skill(skill)
    group = _GROUP_INDEX.get(norm)
    if group is None:
        return set()
    related = set(group.members) | _SUBCATEGORY_MEMBERS[(group.category, group.subcategory)]
    related.discard(norm)
    return related


def get_compensation_factor(skill: str) -> float | None:
    group = find_group(skill)
    return group.compensation_factor if group else None


def get_skill_context(skill: str) -> frozenset[str]:
    group = find_group(skill)
    return group.context_tags if group else frozenset()


def get_skill_category(skill: str) -> str | None:
    group = find_group(skill)
    return group.category if group else None


def are_skills_related(a: str, b: str) -> bool:
    norm_b = normalize_skill(b)
    return norm_b != normalize_skill(a) and norm_b in get_related_skills(a)


# ---------------------------------------------------------------------------
# Technical keyword library (density scoring)
# ---------------------------------------------------------------------------
TECHNICAL_KEYWORD_LIBRARY: dict[str, frozenset[str]] = {
    "programming_languages": frozenset({
        "javascript", "python", "java", "c++", "c#", "ruby", "php", "swift",
        "kotlin", "go", "rust", "typescript", "scala", "perl", "r", "matlab",
    }),
    "frameworks": frozenset({
        "react", "angular", "vue", "django", "flask", "spring", "express",
        "laravel", "rails", "asp.net", "node.js", "next.js", "nuxt", "svelte",
        "fastapi",
    }),
    "databases": frozenset({
        "sql", "mysql", "postgresql", "mongodb", "redis", "elasticsearch",
        "dynamodb", "cassandra", "oracle", "firebase", "neo4j", "graphql",
    }),
    "cloud_devops": frozenset({
        "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "terraform",
        "ansible", "circleci", "gitlab", "github actions", "prometheus", "grafana",
    }),
    "technical_concepts": frozenset({
        "api", "rest", "microservices", "ci/cd", "tdd", "agile", "scrum",
        "algorithms", "data structures", "design patterns", "architecture",
    }),
    "technical_roles": frozenset({
        "software engineer", "developer", "programmer", "architect", "devops",
        "full stack", "frontend", "backend", "sre", "data scientist",
        "ml engineer", "qa engineer", "security engineer", "cloud engineer",
        "systems engineer",
    }),
}

ALL_TECHNICAL_KEYWORDS: frozenset[str] = frozenset().union(*TECHNICAL_KEYWORD_LIBRARY.values())

# Exact phrases that mark a title as technical with full confidence
TECHNICAL_ROLES: frozenset[str] = TECHNICAL_KEYWORD_LIBRARY["technical_roles"]

TECHNICAL_ROLE_INDICATORS: frozenset[str] = frozenset({
    "engineer", "developer", "programmer", "architect", "analyst",
    "administrator", "technician", "specialist", "consultant",
})
