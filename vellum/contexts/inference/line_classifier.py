"""
Line classification for plain-text resumes.

classify() is a pure function of a single line and the parser state at that
line. It never raises: every line falls into exactly one LineKind, with
PLAIN_TEXT as the fallback.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

from vellum.contexts.inference.line_patterns import (
    TWO_COLUMN_MIN_GAP,
    ContentPatterns,
    HeaderPatterns,
    SectionVocabulary,
    two_column_pattern,
)


class LineKind(Enum):
    """Kinds of resume lines, in classification priority order."""

    BLANK = "blank"
    SECTION_HEADING = "section_heading"
    NAME_HEADER = "name_header"
    CONTACT_LINE = "contact_line"
    TWO_COLUMN = "two_column"
    BULLET = "bullet"
    SKILL_CATEGORY = "skill_category"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class ParserState:
    """
    Parser context needed to classify one line.

    Attributes:
        line_index: 0-based index of the line in the input
        in_skills_section: Whether the current section is a skills section
        follows_name_header: Whether line 0 was classified as NAME_HEADER
    """

    line_index: int = 0
    in_skills_section: bool = False
    follows_name_header: bool = False


_SECTION_HEADINGS = frozenset(SectionVocabulary.HEADINGS)
_SKILLS_HEADINGS = frozenset(SectionVocabulary.SKILLS_HEADINGS)


@lru_cache(maxsize=8)
def _two_column_regex(min_gap: int) -> "re.Pattern":
    return re.compile(two_column_pattern(min_gap))


def is_section_heading(line: str) -> bool:
    """Check whether a line is exactly one of the known section headings (any case)."""
    return line.strip().upper() in _SECTION_HEADINGS


def is_skills_heading(heading: str) -> bool:
    """Check whether a section heading introduces "Category: items" content."""
    return heading.strip().upper() in _SKILLS_HEADINGS


def is_name_header(line: str) -> bool:
    """
    Check whether a line looks like a person's name.

    Capitalized, 2-4 words of letters only, 3-40 characters, and not a section heading.
    """
    stripped = line.strip()
    if not re.match(HeaderPatterns.NAME, stripped):
        return False
    word_count = len(stripped.split())
    if not HeaderPatterns.NAME_MIN_WORDS <= word_count <= HeaderPatterns.NAME_MAX_WORDS:
        return False
    return not is_section_heading(stripped)


def is_contact_line(line: str) -> bool:
    """Check whether a line carries contact markers (email, phone, links)."""
    return any(marker in line for marker in HeaderPatterns.CONTACT_MARKERS)


def split_two_column(line: str, min_gap: int = TWO_COLUMN_MIN_GAP) -> Optional[Tuple[str, str]]:
    """
    Split a two-column line on its first gap of at least min_gap whitespace characters.

    Args:
        line: Line to split (leading indentation is ignored)
        min_gap: Minimum run of whitespace that separates the columns

    Returns:
        (left, right) with both sides trimmed, or None if the line is single-column

    Example:
        >>> split_two_column("Bachelor of Science" + " " * 20 + "May 2024")
        ('Bachelor of Science', 'May 2024')
    """
    match = _two_column_regex(min_gap).match(line.strip())
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def is_bullet(line: str) -> bool:
    """Check whether a line starts with a bullet marker followed by whitespace."""
    return bool(re.match(ContentPatterns.BULLET, line.strip()))


def starts_with_bullet_marker(line: str) -> bool:
    """Check whether a line starts with any bullet marker character."""
    return line.strip().startswith(ContentPatterns.BULLET_MARKERS)


def strip_bullet_marker(line: str) -> str:
    """
    Remove a leading bullet marker and surrounding whitespace.

    Example:
        >>> strip_bullet_marker("•   Reduced latency by 40%")
        'Reduced latency by 40%'
    """
    return re.sub(ContentPatterns.BULLET, "", line.strip(), count=1).strip()


def classify(
    line: str,
    state: ParserState = ParserState(),
    min_gap: int = TWO_COLUMN_MIN_GAP,
) -> LineKind:
    """
    Classify a single resume line.

    The header kinds are positional: NAME_HEADER is only considered for line 0 and
    CONTACT_LINE only for line 1 after a name. Everything else is checked in priority
    order, falling back to PLAIN_TEXT.

    Args:
        line: One input line, right-trimmed; interior spacing must be intact
        state: Parser state at this line
        min_gap: Minimum whitespace run for a two-column line

    Returns:
        LineKind for the line
    """
    stripped = line.strip()

    if not stripped:
        return LineKind.BLANK

    if is_section_heading(stripped):
        return LineKind.SECTION_HEADING

    if state.line_index == 0 and is_name_header(stripped):
        return LineKind.NAME_HEADER

    if state.line_index == 1 and state.follows_name_header and is_contact_line(stripped):
        return LineKind.CONTACT_LINE

    if split_two_column(stripped, min_gap) is not None:
        return LineKind.TWO_COLUMN

    if is_bullet(stripped):
        return LineKind.BULLET

    if state.in_skills_section and ContentPatterns.SKILL_CATEGORY_SEPARATOR in stripped:
        return LineKind.SKILL_CATEGORY

    return LineKind.PLAIN_TEXT
