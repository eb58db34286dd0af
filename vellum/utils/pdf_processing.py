"""
PDF processing utilities for reading rendered resumes back.

Main class:
    RenderedPDF: In-memory PDF with per-page line extraction and search.

Helper functions:
    page_count: Quick page count without full extraction.
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

import io
from typing import Dict, Iterator, List, Optional, Tuple

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_bytes: bytes) -> Optional[int]:
    """Get page count from PDF bytes, or None if unreadable."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        return len(reader.pages)
    except Exception:
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


class RenderedPDF:
    """
    Rendered PDF held in memory, with line-based text extraction.

    Page data is lazily loaded and cached on first access.

    Args:
        pdf_bytes: Encoded PDF document
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = RenderedPDF(result.pdf_bytes)
        >>> for line in pdf.get_lines(page=1):
        ...     print(line)
    """

    def __init__(self, pdf_bytes: bytes, y_tolerance: float = 3.0):
        self.pdf_bytes = pdf_bytes
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[str]]] = None
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.pdf_bytes) or 0
        return self._page_count

    def _extract_pages(self) -> Dict[int, List[str]]:
        """
        Extract text lines from all pages.

        Returns:
            Dict mapping page_num (1-indexed) to its text lines, top to bottom.
        """
        pages_data: Dict[int, List[str]] = {}

        with pdfplumber.open(io.BytesIO(self.pdf_bytes)) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                pages_data[page_num] = self._chars_to_lines(page.chars)

        return pages_data

    def _chars_to_lines(self, chars: List) -> List[str]:
        """Convert character list to text lines with Y-clustering."""
        line_clusters = cluster_by_y_tolerance(chars, tolerance=self.y_tolerance)

        text_lines = []
        for char_objs in line_clusters:
            char_objs.sort(key=lambda c: c["x0"])
            text_lines.append("".join(c["text"] for c in char_objs))

        return text_lines

    def _ensure_loaded(self) -> None:
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_lines(self, page: int) -> List[str]:
        """
        Get text lines for a specific page.

        Args:
            page: Page number (1-indexed)

        Returns:
            List of text lines, top-to-bottom order.
            Empty list if the page doesn't exist.
        """
        self._ensure_loaded()
        return self._pages_cache.get(page, [])

    def find_all(
        self, text: str, whole_line: bool = False, limit: Optional[int] = None
    ) -> List[Tuple[int, int]]:
        """
        Find all occurrences of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.
            limit: Maximum number of results to return (None = all)

        Returns:
            List of (page, line_index) tuples for each match.
        """
        self._ensure_loaded()

        results: List[Tuple[int, int]] = []
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            for line_idx, line in enumerate(self._pages_cache[page_num]):
                line_norm = normalize_for_matching(line)
                match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                if match:
                    results.append((page_num, line_idx))
                    if limit and len(results) >= limit:
                        return results

        return results

    def find(self, text: str, whole_line: bool = False) -> Optional[Tuple[int, int]]:
        """Find first occurrence of text as (page, line_index), or None."""
        result = self.find_all(text, whole_line=whole_line, limit=1)
        return result[0] if result else None

    def iter_pages(self) -> Iterator[int]:
        """Iterate over page numbers (1-indexed)."""
        self._ensure_loaded()
        return iter(sorted(self._pages_cache.keys()))
