"""Date, requirement, degree and key-phrase parsing for resumes and job descriptions."""

import re
from datetime import date, datetime

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_MONTH_MAP = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?(?:[T ].*)?$")
_MONTH_YEAR_RE = re.compile(r"^([a-z]+)\.?,?\s+(\d{4})$")
_SLASH_DATE_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_PRESENT_WORDS = frozenset({"present", "current", "now", "ongoing"})


def parse_date(value: str | date | None, now: datetime | None = None) -> tuple[int, int] | None:
    """Parse a date into (year, month).

    Accepts ISO `YYYY-MM[-DD]`, "Mon YYYY", "MM/YYYY", bare `YYYY`,
    date objects, and "present"/"current" (resolved to `now`).
    Returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.year, value.month

    text = value.strip().lower().rstrip(".")
    if not text:
        return None
    if text in _PRESENT_WORDS:
        now = now or datetime.now()
        return now.year, now.month

    year: int | None = None
    month = 1
    if m := _ISO_DATE_RE.match(text):
        year, month = int(m.group(1)), int(m.group(2))
    elif m := _MONTH_YEAR_RE.match(text):
        if m.group(1) not in _MONTH_MAP:
            return None
        year, month = int(m.group(2)), _MONTH_MAP[m.group(1)]
    elif m := _SLASH_DATE_RE.match(text):
        year, month = int(m.group(2)), int(m.group(1))
    elif text.isdigit() and len(text) == 4:
        year = int(text)

    if year is None or not (1950 <= year <= 2100) or not (1 <= month <= 12):
        return None
    return year, month


def months_between(start: tuple[int, int], end: tuple[int, int]) -> int:
    return (end[0] - start[0]) * 12 + (end[1] - start[1])


# ---------------------------------------------------------------------------
# Required experience
# ---------------------------------------------------------------------------

# Checked in order; first match wins
REQUIRED_YEARS_PATTERNS: list[re.Pattern] = [
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:experience|exp\b)", re.IGNORECASE),
    re.compile(r"(?:experience|exp)(?:\s*:)?\s*(\d+)\+?\s*(?:years?|yrs?)", re.IGNORECASE),
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:relevant|professional)", re.IGNORECASE),
]

# Seniority words -> implied years, highest first
SENIORITY_YEARS: list[tuple[re.Pattern, float]] = [
    (re.compile(r"\b(?:senior|sr\.?)(?![a-z])", re.IGNORECASE), 4.0),
    (re.compile(r"\blead\b", re.IGNORECASE), 3.0),
    (re.compile(r"\b(?:junior|jr\.?)(?![a-z])", re.IGNORECASE), 1.0),
]


def extract_required_years(job_text: str) -> float:
    """Required years from explicit phrasing, else implied by seniority words, else 0."""
    for pattern in REQUIRED_YEARS_PATTERNS:
        match = pattern.search(job_text)
        if match:
            return float(match.group(1))
    for pattern, years in SENIORITY_YEARS:
        if pattern.search(job_text):
            return years
    return 0.0


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------

_DEGREE_REQUIREMENT_RE = re.compile(
    r"\b(?:degree|diploma|bachelor'?s|master'?s|ph\.?d|b\.?s\.?|m\.?s\.?)\b"
    r"[^.\n]{0,60}\b(?:required|in\b|or\s+equivalent)"
    r"|\b(?:requires?|required)\b[^.\n]{0,40}\bdegree\b",
    re.IGNORECASE,
)


def requires_degree(job_text: str) -> bool:
    """True when the job text asks for a formal degree."""
    return bool(_DEGREE_REQUIREMENT_RE.search(job_text))


# ---------------------------------------------------------------------------
# Key phrases
# ---------------------------------------------------------------------------

# Job-description boilerplate that carries no requirement signal
JD_STOPWORDS: frozenset[str] = frozenset({
    "about", "above", "after", "also", "applicant", "applicants", "apply",
    "benefits", "best", "both", "candidate", "candidates", "company",
    "competitive", "could", "culture", "each", "equal", "employer",
    "experience", "from", "good", "great", "have", "help", "including",
    "into", "join", "just", "like", "looking", "more", "most", "must",
    "need", "offer", "opportunity", "other", "our", "over", "preferred",
    "required", "requirements", "responsibilities", "role", "salary",
    "should", "some", "strong", "such", "team", "than", "that", "their",
    "them", "then", "there", "these", "they", "this", "those", "through",
    "very", "want", "well", "were", "what", "when", "where", "which",
    "while", "will", "with", "within", "work", "working", "would", "year",
    "years", "your", "ability", "able", "skills", "knowledge", "plus",
})

_WORD_RE = re.compile(r"[a-z][a-z0-9+#.]*[a-z0-9+#]|[a-z]")


def extract_key_phrases(text: str) -> set[str]:
    """Significant words (longer than 3 characters, not boilerplate)."""
    return {
        w for w in _WORD_RE.findall(text.lower())
        if len(w) > 3 and w not in JD_STOPWORDS
    }
