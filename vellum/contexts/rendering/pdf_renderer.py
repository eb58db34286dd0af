"""
PDF rendering of draw commands.

The typesetter emits top-down coordinates; ReportLabRenderer flips them to
ReportLab's bottom-left origin (pdf_y = page height - y). Fonts are the
standard PDF fonts that ReportLabMetrics measures, so rendered widths match
the widths the layout was computed with.
"""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from reportlab.pdfgen import canvas

from vellum.contexts.inference import Document, parse
from vellum.contexts.rendering.exceptions import RenderError
from vellum.contexts.rendering.logger import _log_debug, _log_error, _log_info, log_render_result
from vellum.contexts.typesetting import (
    SINGLE_PAGE_PRESETS,
    CommandKind,
    DrawCommand,
    FontMetrics,
    FontStyle,
    LayoutSettings,
    PageGeometry,
    ReportLabMetrics,
    layout,
    layout_to_fit,
)
from vellum.utils.pdf_processing import page_count


class PageRenderer(ABC):
    """Page encoder that draw commands are replayed onto."""

    @abstractmethod
    def new_page(self) -> None:
        """Close the current page and start a blank one."""

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, font_size: float, style: FontStyle) -> None:
        """Draw text with its left edge at x and baseline at y (top-down)."""

    @abstractmethod
    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, thickness: float = 1.0
    ) -> None:
        """Stroke a straight line (top-down coordinates)."""

    @abstractmethod
    def finish(self) -> bytes:
        """Close the last page and return the encoded document."""


class ReportLabRenderer(PageRenderer):
    """
    PageRenderer writing a PDF in memory through reportlab.pdfgen.canvas.

    Args:
        geometry: Page size; must match the geometry the layout used
        metrics: Supplies concrete font names for each style

    Example:
        >>> renderer = ReportLabRenderer(PageGeometry(), ReportLabMetrics())
        >>> pdf_bytes = render_commands(commands, renderer)
    """

    def __init__(self, geometry: PageGeometry, metrics: ReportLabMetrics):
        self.geometry = geometry
        self.metrics = metrics
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(geometry.width, geometry.height))

    def _flip(self, y: float) -> float:
        return self.geometry.height - y

    def new_page(self) -> None:
        self._canvas.showPage()

    def draw_text(self, x: float, y: float, text: str, font_size: float, style: FontStyle) -> None:
        self._canvas.setFont(self.metrics.font_name(style), font_size)
        self._canvas.drawString(x, self._flip(y), text)

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, thickness: float = 1.0
    ) -> None:
        self._canvas.setLineWidth(thickness)
        self._canvas.line(x1, self._flip(y1), x2, self._flip(y2))

    def finish(self) -> bytes:
        # showPage() before save() so an empty layout still yields one blank page
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()


def render_commands(commands: Sequence[DrawCommand], renderer: PageRenderer) -> bytes:
    """
    Replay draw commands onto a renderer and return the encoded document.

    Args:
        commands: Output of layout() or layout_to_fit()
        renderer: Page encoder

    Returns:
        Encoded document bytes

    Raises:
        RenderError: If the renderer fails; the cause is kept as original_error
    """
    try:
        for command in commands:
            if command.kind is CommandKind.PAGE_BREAK:
                renderer.new_page()
            elif command.kind is CommandKind.TEXT:
                renderer.draw_text(
                    command.x, command.y, command.text, command.font_size, command.style
                )
            elif command.kind is CommandKind.RULE:
                renderer.draw_line(command.x, command.y, command.x2, command.y, command.thickness)
        return renderer.finish()
    except RenderError:
        raise
    except Exception as e:
        _log_error(f"Renderer failed: {e}")
        raise RenderError("Failed to render draw commands", original_error=e) from e


@dataclass
class RenderResult:
    """
    Result of rendering a text resume.

    Attributes:
        pdf_bytes: Encoded PDF
        page_count: Pages in the PDF as read back by PyPDF2
        preset_name: Preset chosen by single-page fitting (None when fitting is off)
        document: Inferred document the layout was built from
        commands: Draw commands that were rendered
        settings: Settings the layout used
    """

    pdf_bytes: bytes
    page_count: int
    preset_name: Optional[str]
    document: Document
    commands: List[DrawCommand] = field(default_factory=list)
    settings: Optional[LayoutSettings] = None


def render_resume(
    text: str,
    geometry: PageGeometry = PageGeometry(),
    settings: Optional[LayoutSettings] = None,
    fit_single_page: bool = True,
    preset_names: Sequence[str] = SINGLE_PAGE_PRESETS,
    metrics: Optional[FontMetrics] = None,
) -> RenderResult:
    """
    Parse, lay out and render a plain-text resume to PDF.

    Args:
        text: Resume text
        geometry: Page size and margin
        settings: Layout settings (base settings when fitting)
        fit_single_page: Try progressively denser presets until the resume fits one page
        preset_names: Presets tried when fitting, loosest first
        metrics: Text measurement (default ReportLab metrics for the settings' font family)

    Returns:
        RenderResult with PDF bytes and the document it was built from

    Raises:
        RenderError: If PDF encoding fails
        ValueError: If a preset name is unknown
    """
    _log_info(f"Rendering resume (single-page fitting: {'on' if fit_single_page else 'off'})")
    document = parse(text)
    settings = settings or LayoutSettings()

    if fit_single_page:
        fit = layout_to_fit(
            document, geometry, metrics, preset_names=preset_names, base_settings=settings
        )
        commands, settings, preset_name = fit.commands, fit.settings, fit.preset_name
    else:
        commands = layout(document, geometry, metrics, settings)
        preset_name = None

    renderer = ReportLabRenderer(geometry, ReportLabMetrics(settings.font_family))
    pdf_bytes = render_commands(commands, renderer)
    _log_debug(f"Encoded {len(commands)} draw commands")

    result = RenderResult(
        pdf_bytes=pdf_bytes,
        page_count=page_count(pdf_bytes) or 0,
        preset_name=preset_name,
        document=document,
        commands=commands,
        settings=settings,
    )
    log_render_result(result)
    return result
