"""
Paginated layout of resume documents.

Walks a Document top to bottom with a single cursor and emits DrawCommands:
centered header, centered section headings with a rule underneath, two-column
entry lines (label left, date/GPA right-aligned), indented bullets, inline skill
categories, and PAGE_BREAK markers whenever the next block would cross the
bottom margin.

Known limitation - headings on continuation pages:
    When a section overflows onto the next page, its heading and rule are not
    repeated there. The continuation page starts directly with the next entry or
    bullet. The render validator reports such pages.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from vellum.contexts.inference.document_data_structure import Document, Entry, Section
from vellum.contexts.typesetting.config_resolver import apply_presets
from vellum.contexts.typesetting.defaults import SINGLE_PAGE_PRESETS
from vellum.contexts.typesetting.draw_commands import (
    PAGE_BREAK,
    Alignment,
    DrawCommand,
    count_pages,
    rule_command,
    text_command,
)
from vellum.contexts.typesetting.font_metrics import (
    FontMetrics,
    FontStyle,
    ReportLabMetrics,
    resolve_style,
)
from vellum.contexts.typesetting.layout_settings import LayoutSettings, PageGeometry
from vellum.contexts.typesetting.logger import log_fit_attempt, log_fit_result, log_layout_result

BULLET_PREFIX = "• "


def compose_entry_heading(entry: Entry) -> str:
    """
    Build the bold left text of a non-education entry.

    Example:
        "Acme Corp" + "Austin, TX" + "Engineer" -> "Acme Corp, Austin, TX: Engineer"
    """
    text = entry.left_label
    if entry.sub_label:
        text += f", {entry.sub_label}"
    if entry.title:
        text += f": {entry.title}"
    return text


class Typesetter:
    """
    Single-use layout walk over one Document.

    Holds the cursor and the command list for one layout() call; nothing is
    shared between instances.

    Args:
        geometry: Page size and margin
        metrics: Text measurement used for wrapping and right alignment
        settings: Font sizes and spacing
    """

    def __init__(self, geometry: PageGeometry, metrics: FontMetrics, settings: LayoutSettings):
        self.geometry = geometry
        self.metrics = metrics
        self.settings = settings
        self.y = geometry.margin
        self.commands: List[DrawCommand] = []

    # =========================================================================
    # PRIMITIVES
    # =========================================================================

    def check_page_break(self, required_space: float) -> bool:
        """Start a new page if required_space would cross the bottom margin."""
        if self.y + required_space > self.geometry.bottom_limit:
            self.commands.append(PAGE_BREAK)
            self.y = self.geometry.margin
            return True
        return False

    def wrap_text(
        self,
        text: str,
        size: float,
        style: FontStyle,
        first_width: float,
        rest_width: Optional[float] = None,
    ) -> List[str]:
        """
        Greedy word wrap using font metrics.

        Tokens wider than the budget are split at the budget boundary, so every
        produced line holds at least one character and wrapping always terminates.
        The one exception is a first line narrower than rest_width: when the first
        token only fits the later budget, the first line is returned empty and the
        token moves whole to the second line.

        Args:
            text: Text to wrap (runs of whitespace collapse to single spaces)
            size: Font size
            style: Font style
            first_width: Width budget for the first line
            rest_width: Width budget for later lines (defaults to first_width)

        Returns:
            Wrapped lines; empty for whitespace-only text
        """
        if rest_width is None:
            rest_width = first_width

        lines: List[str] = []
        current = ""

        for token in text.split():
            width = first_width if not lines else rest_width
            candidate = f"{current} {token}" if current else token
            if self.metrics.text_width(candidate, size, style) <= width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""
                width = rest_width

            token_width = self.metrics.text_width(token, size, style)
            if not lines and width < token_width <= rest_width:
                # Leave the narrow first line empty rather than split a token that fits the next
                lines.append("")
                width = rest_width

            if token_width <= width:
                current = token
                continue

            pieces = self._hard_split(token, size, style, width, rest_width)
            lines.extend(pieces[:-1])
            current = pieces[-1]

        if current:
            lines.append(current)

        return lines

    def _hard_split(
        self, token: str, size: float, style: FontStyle, first_width: float, rest_width: float
    ) -> List[str]:
        pieces = []
        remaining = token
        width = first_width

        while remaining:
            end = 1
            while (
                end < len(remaining)
                and self.metrics.text_width(remaining[: end + 1], size, style) <= width
            ):
                end += 1
            pieces.append(remaining[:end])
            remaining = remaining[end:]
            width = rest_width

        return pieces

    def place_text(
        self,
        text: str,
        size: float,
        style: FontStyle = FontStyle.NORMAL,
        x: Optional[float] = None,
        centered: bool = False,
    ) -> None:
        """
        Wrap text and emit one TEXT command per line, advancing the cursor.

        The wrap width is the content width minus any indent (x beyond the margin).
        Continuation lines re-check the page break so a long paragraph cannot run
        past the bottom margin.
        """
        if not text or not text.strip():
            return

        margin = self.geometry.margin
        x = margin if x is None else x
        style = resolve_style(style)
        line_height = self.settings.line_height(size)
        max_width = self.geometry.content_width - (x - margin)

        for index, line in enumerate(self.wrap_text(text, size, style, max_width)):
            if index > 0:
                self.check_page_break(line_height)
            if centered:
                line_x = (self.geometry.width - self.metrics.text_width(line, size, style)) / 2
                self.commands.append(
                    text_command(line, line_x, self.y, size, style, Alignment.CENTER)
                )
            else:
                self.commands.append(text_command(line, x, self.y, size, style))
            self.y += line_height

    def place_two_column(
        self,
        left: Optional[str],
        right: Optional[str],
        size: float,
        style_left: FontStyle,
    ) -> None:
        """Emit left at the margin and right flush against the right margin on one line."""
        if left:
            self.commands.append(
                text_command(left, self.geometry.margin, self.y, size, resolve_style(style_left))
            )
        if right:
            right_width = self.metrics.text_width(right, size, FontStyle.NORMAL)
            right_x = self.geometry.width - self.geometry.margin - right_width
            self.commands.append(text_command(right, right_x, self.y, size, FontStyle.NORMAL))
        self.y += self.settings.line_height(size)

    def draw_rule_below_heading(self) -> None:
        """Underline the heading just placed across the content width."""
        margin = self.geometry.margin
        self.commands.append(
            rule_command(
                margin,
                margin + self.geometry.content_width,
                self.y - self.settings.rule_raise,
                self.settings.rule_thickness,
            )
        )
        self.y += self.settings.rule_gap

    # =========================================================================
    # DOCUMENT WALK
    # =========================================================================

    def place_header(self, document: Document) -> None:
        if document.name:
            self.place_text(document.name, self.settings.name_size, FontStyle.BOLD, centered=True)
            self.y += self.settings.header_gap
        if document.contact_line:
            self.place_text(
                document.contact_line, self.settings.contact_size, FontStyle.NORMAL, centered=True
            )
            self.y += self.settings.header_gap

    def place_section(self, section: Section) -> None:
        self.check_page_break(self.settings.section_min_space)
        if self.y > self.geometry.margin:
            self.y += self.settings.section_gap

        self.place_text(section.heading, self.settings.heading_size, FontStyle.BOLD, centered=True)
        self.draw_rule_below_heading()

        for entry in section.entries:
            if section.is_skills_section:
                self.place_skill_category(entry)
            else:
                self.place_entry(entry)

    def place_skill_category(self, entry: Entry) -> None:
        """Bold "Category:" followed inline by the comma-joined items."""
        settings = self.settings
        margin = self.geometry.margin
        size = settings.body_size
        line_height = settings.line_height(size)

        self.check_page_break(settings.entry_min_space)

        label = f"{entry.title or entry.left_label}:"
        self.commands.append(text_command(label, margin, self.y, size, FontStyle.BOLD))

        label_width = self.metrics.text_width(label, size, FontStyle.BOLD)
        items_x = margin + label_width + settings.skill_label_gap
        continuation_x = margin + settings.indent
        lines = self.wrap_text(
            ", ".join(entry.bullets),
            size,
            FontStyle.NORMAL,
            first_width=self.geometry.content_width - (items_x - margin),
            rest_width=self.geometry.content_width - settings.indent,
        )

        if not lines:
            self.y += line_height

        for index, line in enumerate(lines):
            if index > 0:
                self.check_page_break(line_height)
            x = items_x if index == 0 else continuation_x
            if line:
                self.commands.append(text_command(line, x, self.y, size, FontStyle.NORMAL))
            self.y += line_height

        self.y += settings.skill_category_gap

    def place_entry(self, entry: Entry) -> None:
        """Entry heading line(s), then indented bullets."""
        settings = self.settings
        size = settings.body_size

        self.check_page_break(settings.entry_min_space)

        if entry.is_education_entry:
            self.place_two_column(entry.left_label, entry.right_label, size, FontStyle.BOLD)
            if entry.sub_label:
                self.place_two_column(entry.sub_label, entry.title, size, FontStyle.NORMAL)
            self.y += settings.education_gap
        else:
            heading = compose_entry_heading(entry)
            if heading or entry.right_label:
                self.place_two_column(heading, entry.right_label, size, FontStyle.BOLD)

        for bullet in entry.bullets:
            self.check_page_break(settings.bullet_min_space)
            self.place_text(
                f"{BULLET_PREFIX}{bullet}",
                size,
                FontStyle.NORMAL,
                x=self.geometry.margin + settings.indent,
            )

        self.y += settings.entry_gap

    def place_raw_lines(self, lines: Sequence[str]) -> None:
        """Plain left-aligned paragraphs for documents without structure."""
        for line in lines:
            self.check_page_break(self.settings.line_min_space)
            self.place_text(line, self.settings.body_size, FontStyle.NORMAL)

    def run(self, document: Document) -> List[DrawCommand]:
        self.place_header(document)
        for section in document.sections:
            self.place_section(section)
        self.place_raw_lines(document.raw_lines)
        return self.commands


# =============================================================================
# Public API
# =============================================================================


def layout(
    document: Document,
    geometry: PageGeometry = PageGeometry(),
    metrics: Optional[FontMetrics] = None,
    settings: Optional[LayoutSettings] = None,
) -> List[DrawCommand]:
    """
    Lay out a Document as draw commands.

    Deterministic: the same document, geometry, metrics and settings always give
    an identical command list.

    Args:
        document: Document from parse()
        geometry: Page size and margin (default A4, 20mm margin)
        metrics: Text measurement (default ReportLab metrics for settings.font_family)
        settings: Typography and spacing (default LayoutSettings())

    Returns:
        Ordered TEXT, RULE and PAGE_BREAK commands
    """
    settings = settings or LayoutSettings()
    metrics = metrics or ReportLabMetrics(settings.font_family)

    commands = Typesetter(geometry, metrics, settings).run(document)
    log_layout_result(commands, count_pages(commands))
    return commands


@dataclass
class FitResult:
    """
    Result of single-page fitting.

    Attributes:
        commands: Draw commands of the chosen attempt
        preset_name: Preset used for the chosen attempt
        settings: Settings used for the chosen attempt
        page_count: Pages the chosen attempt occupies
    """

    commands: List[DrawCommand]
    preset_name: str
    settings: LayoutSettings
    page_count: int

    @property
    def fits_single_page(self) -> bool:
        return self.page_count <= 1


def layout_to_fit(
    document: Document,
    geometry: PageGeometry = PageGeometry(),
    metrics: Optional[FontMetrics] = None,
    preset_names: Sequence[str] = SINGLE_PAGE_PRESETS,
    base_settings: Optional[LayoutSettings] = None,
    config_path=None,
) -> FitResult:
    """
    Lay out with progressively denser presets until the document fits one page.

    Each preset is applied on top of base_settings on its own (presets do not
    accumulate). Returns the first single-page attempt, or the last attempt if
    none fits.

    Args:
        document: Document from parse()
        geometry: Page size and margin
        metrics: Text measurement (default ReportLab metrics per attempt's font family)
        preset_names: Presets to try, loosest first
        base_settings: Settings each preset is applied to
        config_path: Optional path to layout_presets.yaml

    Raises:
        ValueError: If preset_names is empty or names an unknown preset
    """
    if not preset_names:
        raise ValueError("layout_to_fit needs at least one preset name")

    base_settings = base_settings or LayoutSettings()
    result = None

    for preset_name in preset_names:
        settings = apply_presets(base_settings, [preset_name], config_path)
        commands = layout(document, geometry, metrics, settings)
        pages = count_pages(commands)
        log_fit_attempt(preset_name, pages)

        result = FitResult(
            commands=commands, preset_name=preset_name, settings=settings, page_count=pages
        )
        if result.fits_single_page:
            break

    log_fit_result(result.preset_name, result.page_count)
    return result
