from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from report_card_parser.models import Fragment, Row

# Fragments this close vertically are ordered left to right before grouping.
SORT_Y_TOLERANCE = 3
# A fragment further than this from the row anchor starts a new row.
ROW_Y_TOLERANCE = 5


def _reading_order(a: Fragment, b: Fragment) -> int:
    dy = b.y - a.y
    if abs(dy) > SORT_Y_TOLERANCE:
        return dy
    return a.x - b.x


def assemble_rows(fragments: Iterable[Fragment]) -> list[Row]:
    """Group one page's fragments into visual rows, top of page first.

    The anchor of a row is the y of its first fragment and is never moved,
    so a line that drifts steadily in y can split into several rows.
    """
    items = sorted(fragments, key=cmp_to_key(_reading_order))
    rows: list[Row] = []
    cur: Row | None = None
    for frag in items:
        if cur is None or abs(frag.y - cur.y) > ROW_Y_TOLERANCE:
            if cur is not None:
                rows.append(cur)
            cur = Row(frag.y, [frag])
        else:
            cur.frags.append(frag)
    if cur is not None:
        rows.append(cur)

    for r in rows:
        r.frags.sort(key=lambda f: f.x)
    return rows
