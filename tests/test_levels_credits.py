import pytest

from report_card_parser.credits import default_credits, format_credits, resolve_credits
from report_card_parser.levels import detect_level


@pytest.mark.parametrize(
    "name, level",
    [
        ("AP Biology", "AP"),
        ("Spanish Lang AP", "AP"),
        ("Honors Chemistry", "Honors"),
        ("Hon English 10", "Honors"),
        ("H Geometry", "Honors"),
        ("Adv. Studio Art", "Advanced"),
        ("Advanced Drawing", "Advanced"),
        ("Intro to Sociology", "CP"),
        ("Map Skills", "CP"),
    ],
)
def test_detect_level(name, level):
    assert detect_level(name) == level


@pytest.mark.parametrize(
    "name, credits",
    [
        ("Physical Ed 9", 3.75),
        ("physical education", 3.75),
        ("Health 10", 1.25),
        ("Drivers Ed", 1.25),
        ("Driver's Ed", 1.25),
        ("Biology", 5.0),
        ("Mental Health", 5.0),
    ],
)
def test_default_credits(name, credits):
    assert default_credits(name) == credits


def test_resolve_prefers_parsed_value_in_range():
    assert resolve_credits(2.5, "Biology") == 2.5
    assert resolve_credits(12.0, "Biology") == 5.0
    assert resolve_credits(None, "Health") == 1.25


def test_format_credits():
    assert format_credits(5.0) == "5"
    assert format_credits(3.75) == "3.75"
    assert format_credits(7.5) == "7.5"
