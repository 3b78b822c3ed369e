from __future__ import annotations

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from report_card_parser.models import ImportResult
from report_card_parser.parse_report_card import parse_file
from report_card_parser.sources import DocumentDecodeError

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    accepted: list[tuple[Path, ImportResult]] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    empty: list[Path] = field(default_factory=list)

    @property
    def discarded(self) -> int:
        return len(self.failed) + len(self.empty)


def _parse_one(path: Path, prefer_ocr: bool) -> ImportResult | DocumentDecodeError:
    try:
        return parse_file(path, prefer_ocr=prefer_ocr)
    except DocumentDecodeError as exc:
        return exc


def import_documents(paths: list[Path], prefer_ocr: bool = False, jobs: int = 1) -> BatchReport:
    """Parse each document on its own and sort the outcomes, keeping input order."""
    if jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(lambda p: _parse_one(p, prefer_ocr), paths))
    else:
        outcomes = [_parse_one(p, prefer_ocr) for p in paths]

    report = BatchReport()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, DocumentDecodeError):
            logger.warning("skipping %s: %s", path.name, outcome.reason)
            report.failed.append((path, outcome.reason))
        elif not outcome.courses:
            logger.warning("skipping %s: no courses recognized", path.name)
            report.empty.append(path)
        else:
            report.accepted.append((path, outcome))
    return report


def _print_result(path: Path, result: ImportResult) -> None:
    print(f"Results for {path.name}")
    print(f"  Year: {result.year_label}")
    for c in result.courses:
        print(f"  {c.name} — grade: {c.grade} — level: {c.level} — credits: {c.credits}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="report-card-parser", description="Extract courses from report card PDFs"
    )
    parser.add_argument("inputs", nargs="+", help="PDF file(s)")
    parser.add_argument("--out", default=None, help="Write accepted results as JSON to this path")
    parser.add_argument("--jobs", type=int, default=1, help="Documents to parse in parallel")
    parser.add_argument(
        "--force-ocr",
        action="store_true",
        help="Read pages with PaddleOCR instead of the PDF text layer",
    )
    parser.add_argument("--verbose", action="store_true", help="Log parsing details")
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = [Path(p) for p in args.inputs]
    report = import_documents(paths, prefer_ocr=args.force_ocr, jobs=max(1, args.jobs))

    for path, result in report.accepted:
        _print_result(path, result)
    for path, reason in report.failed:
        print(f"Failed {path.name}: {reason}")
    for path in report.empty:
        print(f"No courses found in {path.name}")

    print(
        f"Imported {len(report.accepted)} of {len(paths)} documents "
        f"({report.discarded} discarded)"
    )

    if args.out:
        payload = [result.to_dict() for _path, result in report.accepted]
        Path(args.out).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    return 0 if report.accepted else 1


if __name__ == "__main__":
    sys.exit(main())
