from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from report_card_parser.classify import classify_row
from report_card_parser.metadata import MetadataScanner
from report_card_parser.models import CourseRecord, Fragment, ImportResult
from report_card_parser.rows import assemble_rows
from report_card_parser.sources import extract_pages

logger = logging.getLogger(__name__)


def parse_pages(pages: Iterable[Sequence[Fragment]]) -> ImportResult:
    """Build the import result for one document from its pages, in page order.

    Nothing is returned until every page has been consumed; an error raised
    while reading a page leaves no partial result behind.
    """
    scanner = MetadataScanner()
    courses: list[CourseRecord] = []
    for pidx, frags in enumerate(pages, start=1):
        rows = assemble_rows(frags)
        scanner.scan_rows(rows)
        found = 0
        for row in rows:
            course = classify_row(row)
            if course is not None:
                courses.append(course)
                found += 1
        logger.debug("page %d: %d rows, %d courses", pidx, len(rows), found)
    return ImportResult(scanner.year_label(), tuple(courses))


def parse_file(path: Path | str, prefer_ocr: bool = False) -> ImportResult:
    path = Path(path)
    pages, ocr_used = extract_pages(path, prefer_ocr=prefer_ocr)
    result = parse_pages(pages)
    logger.info(
        "%s: %d page(s), %d course(s), %s%s",
        path.name,
        len(pages),
        len(result.courses),
        result.year_label,
        " [ocr]" if ocr_used else "",
    )
    return result
