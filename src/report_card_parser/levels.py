from __future__ import annotations

import re

from report_card_parser.models import ADVANCED, AP, CP, HONORS

# Checked top to bottom; the first hit decides the level.
LEVEL_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^AP\s", re.I), AP),
    (re.compile(r"\bAP\b"), AP),
    (re.compile(r"^Hon\s", re.I), HONORS),
    (re.compile(r"\bHonors?\b", re.I), HONORS),
    (re.compile(r"^H\s", re.I), HONORS),
    (re.compile(r"\bAdv\b", re.I), ADVANCED),
    (re.compile(r"\bAdvanced\b", re.I), ADVANCED),
)


def detect_level(course_name: str) -> str:
    for pat, level in LEVEL_PATTERNS:
        if pat.search(course_name):
            return level
    return CP
