from report_card_parser.metadata import PLACEHOLDER_LABEL, MetadataScanner, grade_level_name


def _scan(*lines):
    s = MetadataScanner()
    for line in lines:
        s.scan_row(line)
    return s


def test_no_metadata_gives_placeholder():
    assert _scan("English 10 A B 5.000").year_label() == PLACEHOLDER_LABEL == "Imported Year"


def test_year_only():
    assert _scan("Marking Period Report 2024-25").year_label() == "2024-25 School Year"


def test_year_and_grade_level():
    s = _scan("2024-25", "Grade 11")
    assert s.grade_level == 11
    assert s.year_label() == "Junior Year (2024-25)"


def test_grade_level_needs_grade_word():
    s = _scan("2024-25 Homeroom 12")
    assert s.grade_level is None
    assert s.year_label() == "2024-25 School Year"


def test_leading_zero_grade_level():
    assert _scan("Grade 09 2022-23").year_label() == "Freshman Year (2022-23)"


def test_grade_level_without_year_is_placeholder():
    assert _scan("Grade 10").year_label() == PLACEHOLDER_LABEL


def test_first_match_locks():
    s = _scan("2023-24", "Grade 10", "2024-25", "Grade 12")
    assert s.year_range == "2023-24"
    assert s.year_label() == "Sophomore Year (2023-24)"


def test_grade_level_names():
    assert grade_level_name(12) == "Senior"
    assert grade_level_name(8) == "Grade 8"
