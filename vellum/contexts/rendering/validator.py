"""
Render validation for PDF resumes.

Reads a rendered PDF back (PyPDF2 for the page count, pdfplumber for text
lines) and compares it with the Document it was laid out from.

Detection capabilities:
- Page count mismatch: Resume spilled past the intended number of pages
- Missing name: Header name not found on page 1
- Missing sections: Section heading not found as a whole line anywhere
- Headerless continuation pages: A page that starts mid-section, because
  headings are not repeated after an automatic page break

Known limitation - line grouping:
    Characters are grouped into lines by baseline proximity. A two-column line
    reads back as one line (left label followed by the right label), so only
    centered headings and the name are matched as whole lines.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from vellum.contexts.inference import Document
from vellum.contexts.rendering.logger import _log_debug, log_validation_result
from vellum.utils.pdf_processing import RenderedPDF, normalize_for_matching


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {intended})"
    NAME_NOT_FOUND = "Name '{name}' not found on page 1"

    # Page-level
    HEADERLESS_CONTINUATION = "Page {page} continues '{section}' without repeating its heading"

    # Section-level
    HEADING_NOT_FOUND = "'{section}': heading not found in PDF"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Issues at this level only. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        return len(self.get_inherited_issues()) == 0


@dataclass
class SectionDiagnostics(Diagnostics):
    """Where a section heading was found."""

    section_name: str = ""
    page: Optional[int] = None
    line_index: Optional[int] = None

    @property
    def heading_found(self) -> bool:
        return self.page is not None

    def get_issues(self) -> List[str]:
        if not self.heading_found:
            return [IssueTemplates.HEADING_NOT_FOUND.format(section=self.section_name)]
        return []


@dataclass
class PageDiagnostics(Diagnostics):
    """Diagnostics for one rendered page."""

    page_number: int = 0
    first_line: str = ""
    continued_section: Optional[str] = None  # Set when the page starts mid-section

    def get_issues(self) -> List[str]:
        if self.continued_section:
            return [
                IssueTemplates.HEADERLESS_CONTINUATION.format(
                    page=self.page_number, section=self.continued_section
                )
            ]
        return []


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the entire document."""

    actual_page_count: int = 0
    intended_page_count: int = 1
    name: Optional[str] = None
    name_found: Optional[bool] = None  # None = document has no name

    def get_issues(self) -> List[str]:
        issues = []
        if self.actual_page_count != self.intended_page_count:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    actual=self.actual_page_count,
                    intended=self.intended_page_count,
                )
            )
        if self.name_found is False:
            issues.append(IssueTemplates.NAME_NOT_FOUND.format(name=self.name))
        return issues

    @property
    def sections(self) -> List[SectionDiagnostics]:
        return [c for c in self.components if isinstance(c, SectionDiagnostics)]

    @property
    def pages(self) -> List[PageDiagnostics]:
        return [c for c in self.components if isinstance(c, PageDiagnostics)]


@dataclass
class ValidationResult:
    """
    Result of render validation.

    Attributes:
        is_valid: Whether the PDF passes all checks
        diagnostics: Diagnostics tree from the PDF/Document comparison
    """

    is_valid: bool
    diagnostics: DocumentDiagnostics

    @property
    def issues(self) -> List[str]:
        """All issues from diagnostics hierarchy."""
        return self.diagnostics.get_inherited_issues()

    @property
    def page_count(self) -> int:
        """Actual page count from PDF."""
        return self.diagnostics.actual_page_count


# =============================================================================
# Main Analysis Function
# =============================================================================


def _locate_sections(pdf: RenderedPDF, document: Document) -> List[SectionDiagnostics]:
    """Find each heading as a whole line, searching forward from the previous heading."""
    located = []
    all_matches = {
        section.heading: pdf.find_all(section.heading, whole_line=True)
        for section in document.sections
    }
    previous = (0, -1)

    for section in document.sections:
        diagnostics = SectionDiagnostics(section_name=section.heading)
        for position in all_matches[section.heading]:
            if position > previous:
                diagnostics.page, diagnostics.line_index = position
                previous = position
                break
        located.append(diagnostics)

    return located


def _check_continuation_pages(
    pdf: RenderedPDF, sections: List[SectionDiagnostics]
) -> List[PageDiagnostics]:
    """Flag pages after the first whose opening line is not a section heading."""
    found = [s for s in sections if s.heading_found]
    pages = []

    for page in pdf.iter_pages():
        lines = pdf.get_lines(page)
        diagnostics = PageDiagnostics(page_number=page, first_line=lines[0] if lines else "")

        if page > 1 and lines:
            starts_with_heading = any(s.page == page and s.line_index == 0 for s in found)
            open_sections = [s for s in found if s.page < page]
            if not starts_with_heading and open_sections:
                diagnostics.continued_section = open_sections[-1].section_name

        pages.append(diagnostics)

    return pages


def analyze_render(
    pdf_bytes: bytes, document: Document, intended_page_count: int = 1
) -> DocumentDiagnostics:
    """
    Compare a rendered PDF against the Document it was laid out from.

    Args:
        pdf_bytes: Rendered PDF
        document: Document passed to layout()
        intended_page_count: Pages the resume should occupy

    Returns:
        DocumentDiagnostics tree. Call .get_inherited_issues() for all issues,
        or .is_valid to check if the render passes.
    """
    pdf = RenderedPDF(pdf_bytes)

    diagnostics = DocumentDiagnostics(
        actual_page_count=pdf.page_count,
        intended_page_count=intended_page_count,
        name=document.name,
    )

    if document.name:
        name_norm = normalize_for_matching(document.name)
        first_page = [normalize_for_matching(line) for line in pdf.get_lines(1)]
        diagnostics.name_found = name_norm in first_page

    sections = _locate_sections(pdf, document)
    diagnostics.components.extend(sections)
    diagnostics.components.extend(_check_continuation_pages(pdf, sections))

    for section in sections:
        _log_debug(f"  {section.section_name}: page {section.page}, line {section.line_index}")

    return diagnostics


def validate_pdf(
    pdf_bytes: bytes, document: Document, intended_page_count: int = 1
) -> ValidationResult:
    """
    Validate a rendered resume.

    Args:
        pdf_bytes: Rendered PDF
        document: Document passed to layout()
        intended_page_count: Pages the resume should occupy (default: 1)

    Returns:
        ValidationResult with the diagnostics tree

    Example:
        >>> result = render_resume(text)
        >>> validation = validate_pdf(result.pdf_bytes, result.document)
        >>> validation.is_valid
        True
    """
    diagnostics = analyze_render(pdf_bytes, document, intended_page_count)
    result = ValidationResult(is_valid=diagnostics.is_valid, diagnostics=diagnostics)
    log_validation_result(result.is_valid, result.page_count, result.issues)
    return result
