"""
Shared utilities for VELLUM.

Common functionality used across contexts:
- Logging setup
- Text processing
- PDF inspection
"""

from vellum.utils.pdf_processing import page_count
from vellum.utils.text_processing import non_blank_lines, strip_markdown_bold

__all__ = ["page_count", "non_blank_lines", "strip_markdown_bold"]
