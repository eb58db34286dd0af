"""
Line Pattern Constants

Regex patterns and vocabularies used to classify lines of plain-text resumes.

Pattern classes follow the convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions in line_classifier.py use these patterns
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# Minimum run of whitespace separating a left label from a right-aligned label.
# Tab-expanded single-column text with long internal gaps also matches.
TWO_COLUMN_MIN_GAP = int(os.getenv("TWO_COLUMN_MIN_GAP", "15"))


@dataclass(frozen=True)
class SectionVocabulary:
    """
    Section headings recognized as structure.

    Matching is case-insensitive and against the whole line, so "Experience with
    Python" is content, not a heading. SUMMARY is deliberately absent: summaries
    stay unstructured text.
    """

    HEADINGS: tuple = (
        "EDUCATION",
        "EXPERIENCE",
        "PROFESSIONAL EXPERIENCE",
        "WORK EXPERIENCE",
        "PROJECTS",
        "RELEVANT PROJECTS",
        "TECHNICAL SKILLS",
        "TECHNOLOGIES",
        "SKILLS",
        "AWARDS",
        "CERTIFICATIONS",
        "ACTIVITIES",
        "LEADERSHIP",
        "VOLUNTEER WORK",
        "VOLUNTEER",
        "PUBLICATIONS",
        "EXTRACURRICULAR EXPERIENCE",
    )

    # Headings whose content is "Category: item, item" lines
    SKILLS_HEADINGS: tuple = ("SKILLS", "TECHNICAL SKILLS", "TECHNOLOGIES")

    # Heading whose two-column lines pair up as degree/date + institution/GPA
    EDUCATION_HEADING: str = "EDUCATION"


@dataclass(frozen=True)
class HeaderPatterns:
    """
    Patterns for the name and contact lines at the top of a resume.
    """

    # "Jane Doe", "Mary Ann Smith" - letters and spaces, capitalized, 3-40 chars
    NAME: str = r"^[A-Z][a-zA-Z ]{2,39}$"
    NAME_MIN_WORDS: int = 2
    NAME_MAX_WORDS: int = 4

    # Any of these marks the second line as contact information
    CONTACT_MARKERS: tuple = ("@", "+", "•", "linkedin", "http")


@dataclass(frozen=True)
class ContentPatterns:
    """
    Patterns for entry content lines.
    """

    # Bullet marker followed by whitespace: "• Led ...", "- Built ...", "* Shipped ..."
    BULLET: str = r"^[•\-*]\s+"

    # Bullet marker characters, for lookahead checks
    BULLET_MARKERS: tuple = ("•", "-", "*")

    # Separator between a skill category and its items
    SKILL_CATEGORY_SEPARATOR: str = ":"

    # Separator between skill items
    SKILL_ITEM_SEPARATOR: str = ","


def two_column_pattern(min_gap: int = TWO_COLUMN_MIN_GAP) -> str:
    """
    Build the two-column regex for a given gap width.

    The left group is lazy so the split happens on the first qualifying gap.

    Example:
        >>> import re
        >>> re.match(two_column_pattern(3), "BS Physics    2024").groups()
        ('BS Physics', '2024')
    """
    return rf"^(.+?)\s{{{min_gap},}}(.+)$"
