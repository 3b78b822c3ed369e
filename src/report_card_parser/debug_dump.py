from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import List, Optional, Pattern, Set

from report_card_parser.classify import classify_row
from report_card_parser.rows import assemble_rows
from report_card_parser.sources import DocumentDecodeError, extract_pages


def parse_pages_arg(p: Optional[str]) -> Optional[Set[int]]:
    """Page selection like "1-2,4" as 1-based page numbers; bad chunks are ignored."""
    if not p:
        return None
    pages: Set[int] = set()
    for chunk in p.split(","):
        lo, sep, hi = chunk.strip().partition("-")
        if not lo.isdigit() or (sep and not hi.isdigit()):
            continue
        first, last = int(lo), int(hi) if sep else int(lo)
        if first > last:
            first, last = last, first
        pages.update(range(max(first, 1), last + 1))
    return pages


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(
        prog="report-card-debug-dump", description="Dump assembled fragment rows for debugging"
    )
    ap.add_argument("pdf", help="Path to PDF")
    ap.add_argument("--pages", help="Pages to include, e.g. 1-2,4", default=None)
    ap.add_argument("--grep", help="Regex to filter rows", default=None)
    ap.add_argument("--force-ocr", action="store_true", help="Read pages with PaddleOCR")
    args = ap.parse_args(argv)

    page_set = parse_pages_arg(args.pages)
    rx: Optional[Pattern[str]] = re.compile(args.grep, re.I) if args.grep else None

    try:
        pages, ocr_used = extract_pages(Path(args.pdf), prefer_ocr=args.force_ocr)
    except DocumentDecodeError as exc:
        print("Cannot read", exc.path, "-", exc.reason)
        return
    if ocr_used:
        print("(fragments from OCR)")

    for pidx, frags in enumerate(pages, start=1):
        if page_set is not None and pidx not in page_set:
            continue
        for r in assemble_rows(frags):
            joined = r.text()
            if rx and not rx.search(joined):
                continue
            course = classify_row(r)
            mark = f"  => {course.name} / {course.grade} / {course.credits}" if course else ""
            print(f"[page {pidx} y={r.y}] {joined}{mark}")
            for f in r.frags:
                print(f"   - {f.text!r} @ x={f.x} w={f.width:.1f} y={f.y}")
            print("-" * 60)


if __name__ == "__main__":
    main()
