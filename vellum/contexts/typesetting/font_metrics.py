"""
Font metrics for text measurement.

The typesetter never measures text itself; it is handed a FontMetrics object.
ReportLabMetrics measures with the AFM glyph-width tables ReportLab ships for
the standard PDF fonts, so widths match what the renderer draws.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Union

from reportlab.pdfbase import pdfmetrics

from vellum.contexts.typesetting.logger import _log_debug


class FontStyle(str, Enum):
    """Font weights the layout engine asks for."""

    NORMAL = "normal"
    BOLD = "bold"


def resolve_style(style: Union[str, FontStyle, None]) -> FontStyle:
    """
    Map a style request to a supported FontStyle.

    Unknown requests (e.g., "italic") fall back to NORMAL.
    """
    if isinstance(style, FontStyle):
        return style
    try:
        return FontStyle(str(style).lower())
    except ValueError:
        _log_debug(f"Unknown font style '{style}', using normal")
        return FontStyle.NORMAL


class FontMetrics(ABC):
    """Measurement interface injected into the typesetter."""

    @abstractmethod
    def font_name(self, style: Union[str, FontStyle]) -> str:
        """Concrete font name for a style."""

    @abstractmethod
    def text_width(self, text: str, size: float, style: Union[str, FontStyle]) -> float:
        """Advance width of text at the given size, in points."""


# Standard-14 font families available without embedding
FONT_FAMILIES: Dict[str, Dict[FontStyle, str]] = {
    "Helvetica": {FontStyle.NORMAL: "Helvetica", FontStyle.BOLD: "Helvetica-Bold"},
    "Times": {FontStyle.NORMAL: "Times-Roman", FontStyle.BOLD: "Times-Bold"},
    "Courier": {FontStyle.NORMAL: "Courier", FontStyle.BOLD: "Courier-Bold"},
}


class ReportLabMetrics(FontMetrics):
    """
    FontMetrics backed by ReportLab's standard font width tables.

    Args:
        family: One of FONT_FAMILIES ("Helvetica", "Times", "Courier")

    Example:
        >>> metrics = ReportLabMetrics()
        >>> metrics.text_width("May 2024", 10, "normal") > 0
        True
    """

    def __init__(self, family: str = "Helvetica"):
        if family not in FONT_FAMILIES:
            raise ValueError(
                f"Unsupported font family '{family}'. Available: {list(FONT_FAMILIES)}"
            )
        self.family = family
        self._fonts = FONT_FAMILIES[family]

    def font_name(self, style: Union[str, FontStyle]) -> str:
        return self._fonts[resolve_style(style)]

    def text_width(self, text: str, size: float, style: Union[str, FontStyle]) -> float:
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, self.font_name(style), size)

    def __repr__(self) -> str:
        return f"ReportLabMetrics(family={self.family!r})"
