"""
Typesetting Context

Responsibilities:
- Lays out an inferred Document as positioned draw commands
- Wraps text by measured width and breaks pages at the bottom margin
- Resolves named layout presets and fits resumes onto a single page

Owns: Page geometry, layout settings, font metrics, draw commands
Never: Parses text or encodes PDF bytes
"""

from vellum.contexts.typesetting.config_resolver import apply_presets, load_layout_presets
from vellum.contexts.typesetting.defaults import SINGLE_PAGE_PRESETS
from vellum.contexts.typesetting.draw_commands import (
    Alignment,
    CommandKind,
    DrawCommand,
    count_pages,
    split_pages,
)
from vellum.contexts.typesetting.font_metrics import FontMetrics, FontStyle, ReportLabMetrics
from vellum.contexts.typesetting.layout_settings import LayoutSettings, PageGeometry
from vellum.contexts.typesetting.typesetter import FitResult, Typesetter, layout, layout_to_fit

__all__ = [
    # Orchestrators
    "layout",
    "layout_to_fit",
    "FitResult",
    "Typesetter",
    # Settings and presets
    "PageGeometry",
    "LayoutSettings",
    "apply_presets",
    "load_layout_presets",
    "SINGLE_PAGE_PRESETS",
    # Measurement
    "FontMetrics",
    "FontStyle",
    "ReportLabMetrics",
    # Draw commands
    "DrawCommand",
    "CommandKind",
    "Alignment",
    "count_pages",
    "split_pages",
]
