from __future__ import annotations

import logging
import os
from pathlib import Path

import pdfplumber

from report_card_parser.models import Fragment

logger = logging.getLogger(__name__)

# Characters closer than this (in points) are merged into one fragment, spaces
# included, so a course name like "AP Biology" survives as a single run.
WORD_X_TOLERANCE = 3.0
WORD_Y_TOLERANCE = 3.0

OCR_DPI = 300
POINTS_PER_INCH = 72.0

FORCE_OCR_ENV = "REPORT_CARD_FORCE_OCR"


class DocumentDecodeError(Exception):
    """The document could not be opened or paged at all."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


# -------- Optional OCR stack (PaddleOCR) --------
def _lazy_import_paddle():
    try:
        from paddleocr import PaddleOCR  # type: ignore
    except ImportError:
        PaddleOCR = None  # type: ignore
    try:
        from pdf2image import convert_from_path  # type: ignore
    except ImportError:
        convert_from_path = None  # type: ignore
    try:
        import numpy as np  # type: ignore
    except ImportError:
        np = None  # type: ignore
    return PaddleOCR, convert_from_path, np


def _normalize_text(s: str) -> str:
    s = s.replace("\xa0", " ")
    s = s.replace("–", "-").replace("—", "-").replace("−", "-")
    return s.strip()


def _fragments_from_words(words: list[dict], page_height: float) -> list[Fragment]:  # type: ignore[type-arg]
    frags: list[Fragment] = []
    for w in words:
        t = _normalize_text(w.get("text", "") or "")
        if not t:
            continue
        x0 = float(w.get("x0", 0.0))
        x1 = float(w.get("x1", x0))
        bottom = float(w.get("bottom", 0.0))
        frags.append(Fragment(t, round(x0), round(page_height - bottom), x1 - x0))
    return frags


def _extract_pages_pdfplumber(path: Path) -> list[list[Fragment]]:
    pages: list[list[Fragment]] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page in pdf.pages:
                words = page.extract_words(
                    keep_blank_chars=True,
                    x_tolerance=WORD_X_TOLERANCE,
                    y_tolerance=WORD_Y_TOLERANCE,
                )
                pages.append(_fragments_from_words(words or [], float(page.height)))
    except Exception as exc:
        raise DocumentDecodeError(path, f"cannot read PDF ({exc})") from exc
    return pages


def _extract_pages_ocr(path: Path, dpi: int = OCR_DPI) -> list[list[Fragment]]:
    PaddleOCR, convert_from_path, np = _lazy_import_paddle()
    if PaddleOCR is None or convert_from_path is None:
        logger.info("OCR fallback unavailable: paddleocr/pdf2image not installed")
        return []

    try:
        ocr = PaddleOCR(lang="en")  # type: ignore
    except Exception as exc:
        logger.warning("OCR fallback unavailable: %s", exc)
        return []

    try:
        images = convert_from_path(str(path), dpi=dpi)
    except Exception as exc:
        raise DocumentDecodeError(path, f"cannot render pages ({exc})") from exc

    scale = POINTS_PER_INCH / dpi
    pages: list[list[Fragment]] = []
    for pidx, pil_im in enumerate(images, start=1):
        im = pil_im.convert("RGB")
        height = im.height
        frags: list[Fragment] = []
        try:
            res = ocr.ocr(np.array(im) if np is not None else im)  # type: ignore
        except Exception as exc:
            logger.warning("%s page %d: OCR failed (%s)", path.name, pidx, exc)
            pages.append(frags)
            continue
        for line in (res[0] if res and res[0] else []):
            try:
                box, (txt, _conf) = line
            except (TypeError, ValueError):
                logger.debug("page %d: unexpected OCR line %r", pidx, line)
                continue
            t = _normalize_text(txt or "")
            if not t:
                continue
            xs = [pt[0] for pt in box]
            ys = [pt[1] for pt in box]
            x0, x1 = float(min(xs)), float(max(xs))
            y1 = float(max(ys))
            frags.append(Fragment(t, round(x0 * scale), round((height - y1) * scale), (x1 - x0) * scale))
        pages.append(frags)
    return pages


def extract_pages(path: Path | str, prefer_ocr: bool = False) -> tuple[list[list[Fragment]], bool]:
    """Return per-page fragments in page order, and whether OCR produced them."""
    path = Path(path)
    if not path.exists():
        raise DocumentDecodeError(path, "file not found")

    force_ocr = prefer_ocr or os.environ.get(FORCE_OCR_ENV, "").strip() == "1"
    if not force_ocr:
        pages = _extract_pages_pdfplumber(path)
        if any(pages):
            return pages, False
        logger.debug("%s: no text layer, trying OCR", path.name)
    else:
        pages = []

    ocr_pages = _extract_pages_ocr(path)
    if any(ocr_pages):
        return ocr_pages, True
    return pages, False
