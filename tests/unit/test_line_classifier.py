"""Unit tests for line classification."""

import pytest

from vellum.contexts.inference.line_classifier import (
    LineKind,
    ParserState,
    classify,
    is_name_header,
    split_two_column,
    strip_bullet_marker,
)

GAP = " " * 20


@pytest.mark.unit
@pytest.mark.parametrize("line", ["", "   ", "\t"])
def test_blank_lines(line):
    """Test that empty and whitespace-only lines are BLANK."""
    assert classify(line, ParserState(line_index=4)) is LineKind.BLANK


@pytest.mark.unit
@pytest.mark.parametrize("line", ["EXPERIENCE", "experience", "  Technical Skills  ", "VOLUNTEER WORK"])
def test_section_headings_any_case(line):
    """Test that known headings match case-insensitively as whole lines."""
    assert classify(line, ParserState(line_index=7)) is LineKind.SECTION_HEADING


@pytest.mark.unit
def test_heading_must_be_whole_line():
    """Test that a heading word inside a sentence is not a heading."""
    assert classify("Experience with Python", ParserState(line_index=7)) is LineKind.PLAIN_TEXT


@pytest.mark.unit
def test_summary_is_not_a_heading():
    """Test that SUMMARY stays plain text."""
    assert classify("SUMMARY", ParserState(line_index=3)) is LineKind.PLAIN_TEXT


@pytest.mark.unit
def test_heading_takes_priority_on_first_line():
    """Test that a heading on line 0 is not mistaken for a name."""
    assert classify("EDUCATION", ParserState(line_index=0)) is LineKind.SECTION_HEADING


@pytest.mark.unit
def test_name_header_only_on_first_line():
    """Test that NAME_HEADER is positional."""
    assert classify("Jane Doe", ParserState(line_index=0)) is LineKind.NAME_HEADER
    assert classify("Jane Doe", ParserState(line_index=3)) is LineKind.PLAIN_TEXT


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, expected",
    [
        ("Jane Doe", True),
        ("Mary Ann Van Smith", True),
        ("Madonna", False),  # One word
        ("Jane Mary Ann Van Smith", False),  # Five words
        ("jane doe", False),  # Not capitalized
        ("Jane O'Doe", False),  # Punctuation
        ("Jane Doe 3rd", False),  # Digits
    ],
)
def test_is_name_header(line, expected):
    """Test name heuristics."""
    assert is_name_header(line) is expected


@pytest.mark.unit
def test_contact_line_requires_name_on_line_zero():
    """Test that CONTACT_LINE is only recognized on line 1 after a name."""
    contact = "jane@example.com | 555-0100"
    assert classify(contact, ParserState(line_index=1, follows_name_header=True)) is (
        LineKind.CONTACT_LINE
    )
    assert classify(contact, ParserState(line_index=1)) is LineKind.PLAIN_TEXT
    assert classify(contact, ParserState(line_index=2, follows_name_header=True)) is (
        LineKind.PLAIN_TEXT
    )


@pytest.mark.unit
@pytest.mark.parametrize("marker", ["@", "+", "•", "linkedin", "http"])
def test_contact_markers(marker):
    """Test each contact marker."""
    state = ParserState(line_index=1, follows_name_header=True)
    assert classify(f"Austin TX {marker} example", state) is LineKind.CONTACT_LINE


@pytest.mark.unit
def test_two_column_line():
    """Test that a long whitespace run splits a line into two columns."""
    line = f"Bachelor of Science{GAP}May 2024"
    assert classify(line, ParserState(line_index=5)) is LineKind.TWO_COLUMN
    assert split_two_column(line) == ("Bachelor of Science", "May 2024")


@pytest.mark.unit
def test_two_column_gap_threshold():
    """Test that gaps shorter than the minimum are single-column."""
    short_gap = "Bachelor of Science" + " " * 14 + "May 2024"
    assert classify(short_gap, ParserState(line_index=5)) is LineKind.PLAIN_TEXT
    assert classify(short_gap, ParserState(line_index=5), min_gap=10) is LineKind.TWO_COLUMN


@pytest.mark.unit
def test_two_column_splits_on_first_gap():
    """Test that the left column ends at the first qualifying gap."""
    line = f"Acme{GAP}Austin{GAP}2020"
    assert split_two_column(line) == ("Acme", f"Austin{GAP}2020")


@pytest.mark.unit
def test_two_column_ignores_leading_indentation():
    """Test that indentation alone never creates a two-column line."""
    assert split_two_column(f"{GAP}Only one column") is None


@pytest.mark.unit
@pytest.mark.parametrize("line", ["• Led a team", "- Built a service", "* Shipped v2", "   •\tIndented"])
def test_bullets(line):
    """Test bullet markers followed by whitespace."""
    assert classify(line, ParserState(line_index=9)) is LineKind.BULLET


@pytest.mark.unit
@pytest.mark.parametrize("line", ["-Led a team", "**Languages:** Python"])
def test_marker_without_whitespace_is_not_bullet(line):
    """Test that a marker glued to text is not a bullet."""
    assert classify(line, ParserState(line_index=9)) is not LineKind.BULLET


@pytest.mark.unit
def test_two_column_takes_priority_over_bullet():
    """Test priority order: TWO_COLUMN before BULLET."""
    line = f"• Award{GAP}2022"
    assert classify(line, ParserState(line_index=9)) is LineKind.TWO_COLUMN


@pytest.mark.unit
def test_skill_category_only_in_skills_section():
    """Test that "Category: items" is a skill category only inside a skills section."""
    line = "Languages: Python, Go"
    assert classify(line, ParserState(line_index=9, in_skills_section=True)) is (
        LineKind.SKILL_CATEGORY
    )
    assert classify(line, ParserState(line_index=9)) is LineKind.PLAIN_TEXT


@pytest.mark.unit
def test_bullet_takes_priority_over_skill_category():
    """Test that a bullet with a colon inside a skills section is still a bullet."""
    state = ParserState(line_index=9, in_skills_section=True)
    assert classify("- Python: expert", state) is LineKind.BULLET


@pytest.mark.unit
def test_strip_bullet_marker():
    """Test that only the leading marker and whitespace are removed."""
    assert strip_bullet_marker("  •   Cut costs - by 30%") == "Cut costs - by 30%"
    assert strip_bullet_marker("* Shipped *fast*") == "Shipped *fast*"
