"""
VELLUM - Plain-text resume inference and paginated layout

Turns the free-form resume text returned by a language model into a structured
document model and lays it out as absolute-positioned draw commands for PDF output.

Architecture:
- Inference Context: Line classification and document model construction
- Typesetting Context: Page geometry, font metrics and the layout walk
- Rendering Context: PDF encoding of draw commands and render validation
"""

__version__ = "0.1.0"
