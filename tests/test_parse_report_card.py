from report_card_parser.models import Fragment
from report_card_parser.parse_report_card import parse_pages


def _line(y, *cells):
    """Fragments for one visual line; cells are (x, text) pairs."""
    return [Fragment(text, x, y, 6.0 * len(text)) for x, text in cells]


def _sample_page():
    return (
        _line(750, (50, "2024-25"), (200, "Grade"), (260, "11"))
        + _line(700, (50, "Subject"), (200, "Teacher"), (300, "Grade"))
        + _line(680, (50, "AP Biology"), (200, "5750-1"), (300, "A"), (340, "A-"), (400, "5.000"))
    )


def test_end_to_end_single_page():
    result = parse_pages([_sample_page()])
    assert result.year_label == "Junior Year (2024-25)"
    assert len(result.courses) == 1
    c = result.courses[0]
    assert (c.name, c.grade, c.level, c.credits) == ("AP Biology", "A-", "AP", "5")


def test_empty_document():
    for pages in ([], [[], []]):
        result = parse_pages(pages)
        assert result.to_dict() == {"yearLabel": "Imported Year", "courses": []}


def test_metadata_locks_on_first_page():
    page1 = _line(700, (50, "2023-24"))
    page2 = _line(700, (50, "2024-25")) + _line(650, (50, "Grade"), (100, "12"))
    result = parse_pages([page1, page2])
    assert result.year_label == "Senior Year (2023-24)"


def test_courses_kept_in_page_and_row_order():
    page1 = _line(700, (50, "English 10"), (300, "A"), (340, "B")) + _line(
        660, (50, "Geometry"), (300, "B"), (340, "B+")
    )
    page2 = _line(700, (50, "Health 10"), (300, "A"), (340, "A"))
    result = parse_pages([page1, page2])
    assert [c.name for c in result.courses] == ["English", "Geometry", "Health"]
    assert [c.credits for c in result.courses] == ["5", "5", "1.25"]


def test_page_without_courses_keeps_metadata():
    result = parse_pages([_line(700, (50, "Report Card"), (200, "2022-23"))])
    assert result.courses == ()
    assert result.year_label == "2022-23 School Year"


def test_to_dict_shape():
    d = parse_pages([_sample_page()]).to_dict()
    assert set(d) == {"yearLabel", "courses"}
    assert set(d["courses"][0]) == {"id", "name", "grade", "level", "credits"}
