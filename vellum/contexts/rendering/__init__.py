"""
Rendering Context

Responsibilities:
- Replays draw commands onto a page encoder (ReportLab canvas)
- Composes parse, layout and render into one call
- Reads rendered PDFs back and reports layout issues

Owns: PDF generation, render errors, rendered-output diagnostics
Never: Decides positions or re-parses text structure
"""

from vellum.contexts.rendering.exceptions import RenderError
from vellum.contexts.rendering.pdf_renderer import (
    PageRenderer,
    RenderResult,
    ReportLabRenderer,
    render_commands,
    render_resume,
)
from vellum.contexts.rendering.validator import ValidationResult, validate_pdf

__all__ = [
    # Orchestrator
    "render_resume",
    "RenderResult",
    # Renderers
    "PageRenderer",
    "ReportLabRenderer",
    "render_commands",
    # Validation
    "validate_pdf",
    "ValidationResult",
    # Errors
    "RenderError",
]
