from __future__ import annotations

import re
from collections.abc import Iterable

from report_card_parser.models import Row

YEAR_RANGE_PAT = re.compile(r"(\d{4}-\d{2})\b")
GRADE_LEVEL_PAT = re.compile(r"\b(09|10|11|12)\b")
GRADE_MARKER = "Grade"

GRADE_LEVEL_NAMES = {9: "Freshman", 10: "Sophomore", 11: "Junior", 12: "Senior"}

PLACEHOLDER_LABEL = "Imported Year"


def grade_level_name(level: int) -> str:
    return GRADE_LEVEL_NAMES.get(level, f"Grade {level}")


class MetadataScanner:
    """Finds the school year and grade level of a report card.

    Both values lock on their first match; later rows and pages never
    overwrite them, so rows must be fed in page order.
    """

    def __init__(self) -> None:
        self.year_range: str | None = None
        self.grade_level: int | None = None

    def scan_row(self, text: str) -> None:
        if self.year_range is None:
            m = YEAR_RANGE_PAT.search(text)
            if m:
                self.year_range = m.group(1)
        if self.grade_level is None and GRADE_MARKER in text:
            m = GRADE_LEVEL_PAT.search(text)
            if m:
                self.grade_level = int(m.group(1))

    def scan_rows(self, rows: Iterable[Row]) -> None:
        for r in rows:
            self.scan_row(r.text())

    def year_label(self) -> str:
        if self.year_range is None:
            return PLACEHOLDER_LABEL
        if self.grade_level is not None:
            return f"{grade_level_name(self.grade_level)} Year ({self.year_range})"
        return f"{self.year_range} School Year"
