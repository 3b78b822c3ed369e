from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence

from report_card_parser.credits import format_credits, in_credit_range, resolve_credits
from report_card_parser.levels import detect_level
from report_card_parser.models import CourseRecord, Row

logger = logging.getLogger(__name__)

# ---------- Grade tables ----------
VALID_GRADES = ("A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "D-", "F")
# Non-letter marks (pass, withdrawn, medical, ...) that never start a course name
SKIP_GRADES = ("P", "W", "I", "AUD", "MED", "CD", "XMT", "N", "O", "S")

# Fewer letter grades than this means a single marking-period summary row.
MIN_GRADE_TOKENS = 2

# ---------- Row-level boilerplate ----------
COMMENT_OPENERS = (
    "Shows|Should|Is a|Works|Takes|Displays|Strong|Active|Consistent|Demonstrates|"
    "Excellent|Enthusiastic|Highly|Good|Not enough|Needs|Pleasure|Outstanding"
)

SKIP_ROW_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Subject", re.I),
    re.compile(r"Report Card", re.I),
    re.compile(r"Student No", re.I),
    re.compile(r"Student Name", re.I),
    re.compile(r"Grading System", re.I),
    re.compile(r"Attendance", re.I),
    re.compile(r"Comments", re.I),
    re.compile(r"Glen Rock", re.I),
    re.compile(r"Parent/Guardian", re.I),
    re.compile(r"Total Credits", re.I),
    re.compile(r"Additional Information", re.I),
    re.compile(r"Congratulations", re.I),
    re.compile(r"Phone", re.I),
    re.compile(r"School\s+Phone", re.I),
    re.compile(r"Counselor", re.I),
    re.compile(r"Homeroom", re.I),
    re.compile(rf"^\d+\s+({COMMENT_OPENERS})", re.I),  # numbered report comments
    re.compile(r"^[A-Z][+-]?\s*=\s*\d"),  # grading scale, "A+ = 97-100"
    re.compile(r"Earned\s+Credits", re.I),
    re.compile(r"^#$"),
    re.compile(r"^\d{6}$"),  # student id
    re.compile(r"Iris Circle", re.I),  # school address
    re.compile(r"07452"),
)

# ---------- First-fragment disqualifiers ----------
COURSE_CODE_PAT = re.compile(r"^\d{4}-\d+$")
DECIMAL_PAT = re.compile(r"^\d+\.\d+$")
INTEGER_PAT = re.compile(r"^\d+$")

# ---------- Course names, most specific first ----------
_NAME_CHARS = r"[\w\s&:./]"

COURSE_NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"^(AP\s+{_NAME_CHARS}+)", re.I),
    re.compile(rf"^(Hon\s+{_NAME_CHARS}+)", re.I),
    re.compile(rf"^(H\s+{_NAME_CHARS}+)", re.I),
    re.compile(rf"^(Adv[.\s]+{_NAME_CHARS}+)", re.I),
    re.compile(r"^(Physical\s+Ed[.\s]*\d*)", re.I),
    re.compile(r"^(Health\s*\d*)", re.I),
    re.compile(r"^(Drivers\s+Ed[.\s]*\d*)", re.I),
    re.compile(r"^(English\s*\d*)", re.I),
    re.compile(r"^(French\s+[IVX\d]+)", re.I),
    re.compile(r"^(Spanish\s+[IVX\d]+)", re.I),
    re.compile(r"^(Latin\s+[IVX\d]+)", re.I),
    re.compile(r"^(Algebra\s+[\w\s]+)", re.I),
    re.compile(r"^(Geometry[\w\s]*)", re.I),
    re.compile(r"^(Pre-?Calc[\w\s]*)", re.I),
    re.compile(r"^(Calculus[\w\s]*)", re.I),
    re.compile(r"^(Chemistry[\w\s]*)", re.I),
    re.compile(r"^(Biology[\w\s]*)", re.I),
    re.compile(r"^(Physics[\w\s]*)", re.I),
    re.compile(r"^(World\s+Hist[\w\s]*)", re.I),
    re.compile(r"^(US\s+Hist?[\w\s]*)", re.I),
    re.compile(r"^(Intro\s+to[\w\s.]+)", re.I),
    re.compile(r"^(Economics)", re.I),
    re.compile(r"^(Comp\s+Sci[\w\s]*)", re.I),
    re.compile(r"^(Web\s+Design)", re.I),
    re.compile(r"^(Pre-Eng[\w\s]*)", re.I),
    re.compile(r"^(Photo\s*[IV\d]*)", re.I),
    re.compile(r"^(Art\s+History)", re.I),
    re.compile(r"^(Drawing\s*[&\w\s]*)", re.I),
    re.compile(r"^(Sculpture)", re.I),
    re.compile(rf"^({_NAME_CHARS}+)"),  # anything else that reads like text
)

TRAILING_CODE_PAT = re.compile(r"\s+\d{4}-\d+.*$")
TRAILING_NUMBER_PAT = re.compile(r"\s+\d+\s*$")

# Credits are printed with exactly three decimals: 5.000, 3.750
CREDIT_TOKEN = re.compile(r"^(\d+\.\d{3})$")


def is_boilerplate(row_text: str) -> bool:
    return any(pat.search(row_text) for pat in SKIP_ROW_PATTERNS)


def _can_start_name(text: str) -> bool:
    return not (
        COURSE_CODE_PAT.match(text)
        or DECIMAL_PAT.match(text)
        or INTEGER_PAT.match(text)
        or text in VALID_GRADES
        or text in SKIP_GRADES
        or len(text) <= 1
    )


def match_course_name(first: str) -> str | None:
    """Name candidate taken from the first fragment of a row, if it can be one."""
    if not first or not _can_start_name(first):
        return None
    for pat in COURSE_NAME_PATTERNS:
        m = pat.match(first)
        if m:
            return m.group(1)
    return None


def clean_course_name(name: str) -> str:
    name = TRAILING_CODE_PAT.sub("", name)
    name = TRAILING_NUMBER_PAT.sub("", name)
    return name.strip()


def find_grades(texts: Sequence[str], start: int = 1) -> list[tuple[int, str]]:
    return [(i, t) for i, t in enumerate(texts) if i >= start and t in VALID_GRADES]


def find_credits(texts: Sequence[str]) -> float | None:
    """Rightmost three-decimal token whose value is a plausible credit count."""
    for t in reversed(texts):
        m = CREDIT_TOKEN.match(t)
        if m:
            value = float(m.group(1))
            if in_credit_range(value):
                return value
    return None


def classify_row(row: Row) -> CourseRecord | None:
    """Return the course on this row, or None when the row is not a course entry."""
    texts = [t for t in row.texts() if t]
    if not texts:
        return None
    row_text = " ".join(texts)

    if is_boilerplate(row_text):
        return None

    raw_name = match_course_name(texts[0])
    if raw_name is None:
        return None
    name = clean_course_name(raw_name)
    if len(name) < 2:
        return None

    grades = find_grades(texts, start=1)
    if len(grades) < MIN_GRADE_TOKENS:
        logger.debug("skip %r: %d letter grade(s)", row_text, len(grades))
        return None
    # Marking-period grades come first; the final grade is printed last.
    grade = grades[-1][1]

    credits = resolve_credits(find_credits(texts), name)

    return CourseRecord(
        id=str(uuid.uuid4()),
        name=name,
        grade=grade,
        level=detect_level(name),
        credits=format_credits(credits),
    )
