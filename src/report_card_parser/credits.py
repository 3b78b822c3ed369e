from __future__ import annotations

import re

# Accepted range for a credit value printed on the card.
MIN_CREDITS = 1.0
MAX_CREDITS = 10.0

# Courses with a fixed credit value, used when the card prints none
# (first-semester cards have no earned-credit column).
DEFAULT_CREDIT_RULES: tuple[tuple[re.Pattern[str], float], ...] = (
    (re.compile(r"Physical\s*Ed", re.I), 3.75),
    (re.compile(r"^Health", re.I), 1.25),
    (re.compile(r"Drivers?\s*Ed|Driver's\s*Ed", re.I), 1.25),
)
FALLBACK_CREDITS = 5.0


def in_credit_range(value: float) -> bool:
    return MIN_CREDITS <= value <= MAX_CREDITS


def default_credits(course_name: str) -> float:
    for pat, value in DEFAULT_CREDIT_RULES:
        if pat.search(course_name):
            return value
    return FALLBACK_CREDITS


def resolve_credits(parsed: float | None, course_name: str) -> float:
    if parsed is not None and in_credit_range(parsed):
        return parsed
    return default_credits(course_name)


def format_credits(value: float) -> str:
    """Shortest decimal form: 5.0 -> '5', 3.75 -> '3.75'."""
    return f"{value:g}"
