"""
Text processing utilities shared by the inference and rendering contexts.
"""

import re
from typing import List

MARKDOWN_BOLD_MARKER = "**"

# Four-digit year at the start of a line ("2021 - 2023", "2019 Dean's List")
LEADING_YEAR_PATTERN = re.compile(r"^\d{4}")


def strip_markdown_bold(text: str) -> str:
    """
    Remove markdown bold markers from text.

    Language models often wrap labels in **...** even when asked for plain text.

    Example:
        >>> strip_markdown_bold("**Languages:** Python, Go")
        'Languages: Python, Go'
    """
    return text.replace(MARKDOWN_BOLD_MARKER, "")


def starts_with_year(text: str) -> bool:
    """Check whether text begins with a four-digit year."""
    return bool(LEADING_YEAR_PATTERN.match(text))


def split_and_trim(text: str, separator: str) -> List[str]:
    """Split text on separator, trimming each part and dropping empty parts."""
    return [part.strip() for part in text.split(separator) if part.strip()]


def non_blank_lines(text: str) -> List[str]:
    """
    Return the trimmed non-blank lines of text in their original order.

    Example:
        >>> non_blank_lines("  Jane Doe\\n\\n  Austin, TX  ")
        ['Jane Doe', 'Austin, TX']
    """
    return [line.strip() for line in text.split("\n") if line.strip()]
