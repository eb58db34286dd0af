"""
Inference Context

Responsibilities:
- Classifies lines of model-generated resume text
- Infers header, sections, entries, bullets and skill categories
- Falls back to raw lines when no structure is recognized

Owns: Document model, line classification, document building
Never: Measures text or decides positions on a page
"""

from vellum.contexts.inference.document_builder import parse
from vellum.contexts.inference.document_data_structure import Document, Entry, Section
from vellum.contexts.inference.line_classifier import LineKind, ParserState, classify

__all__ = [
    # Orchestrator
    "parse",
    # Classification
    "classify",
    "LineKind",
    "ParserState",
    # Data structure classes
    "Document",
    "Section",
    "Entry",
]
