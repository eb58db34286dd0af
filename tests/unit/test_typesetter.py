"""Unit tests for the layout engine."""

from pathlib import Path

import pytest

from vellum.contexts.inference import Document, Entry, Section, parse
from vellum.contexts.typesetting import (
    Alignment,
    CommandKind,
    FontStyle,
    LayoutSettings,
    PageGeometry,
    count_pages,
    layout,
    layout_to_fit,
    split_pages,
)
from vellum.contexts.typesetting.draw_commands import PAGE_BREAK, text_command
from vellum.contexts.typesetting.font_metrics import FontMetrics
from vellum.contexts.typesetting.typesetter import Typesetter, compose_entry_heading

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


class FixedWidthMetrics(FontMetrics):
    """Every character is half the font size wide; bold adds 10%."""

    def font_name(self, style):
        return f"Fixed-{FontStyle(style).value}"

    def text_width(self, text, size, style):
        width = len(text) * size * 0.5
        return width * 1.1 if FontStyle(style) is FontStyle.BOLD else width


GEOMETRY = PageGeometry()
METRICS = FixedWidthMetrics()
SETTINGS = LayoutSettings()


def make_typesetter():
    return Typesetter(GEOMETRY, METRICS, SETTINGS)


def text_commands(commands):
    return [c for c in commands if c.kind is CommandKind.TEXT]


def long_document(bullet_count=120):
    entry = Entry(
        left_label="Acme",
        right_label="2020",
        bullets=tuple(f"Bullet number {i}" for i in range(bullet_count)),
    )
    return Document(
        name="Jane Doe",
        contact_line="jane@example.com",
        sections=(Section(heading="EXPERIENCE", entries=(entry,)),),
    )


@pytest.fixture
def sample_document():
    return parse((FIXTURES_PATH / "sample_resume.txt").read_text(encoding="utf-8"))


# =============================================================================
# Wrapping
# =============================================================================


@pytest.mark.unit
def test_wrap_text_fits_width():
    """Test that every wrapped line fits the budget."""
    typesetter = make_typesetter()
    text = "the quick brown fox jumps over the lazy dog " * 10

    lines = typesetter.wrap_text(text, 10, FontStyle.NORMAL, 100)

    assert len(lines) > 1
    assert all(METRICS.text_width(line, 10, FontStyle.NORMAL) <= 100 for line in lines)
    assert " ".join(lines) == " ".join(text.split())


@pytest.mark.unit
def test_wrap_text_splits_long_token():
    """Test that a token wider than the budget is hard-split."""
    typesetter = make_typesetter()
    token = "x" * 50  # 250pt at size 10

    lines = typesetter.wrap_text(token, 10, FontStyle.NORMAL, 100)

    assert "".join(lines) == token
    assert all(0 < len(line) <= 20 for line in lines)


@pytest.mark.unit
def test_wrap_text_terminates_when_nothing_fits():
    """Test that a budget narrower than one character still makes progress."""
    typesetter = make_typesetter()

    lines = typesetter.wrap_text("abc de", 10, FontStyle.NORMAL, 1)

    assert lines == ["a", "b", "c", "d", "e"]


@pytest.mark.unit
def test_wrap_text_blank():
    """Test that whitespace-only text wraps to nothing."""
    assert make_typesetter().wrap_text("   ", 10, FontStyle.NORMAL, 100) == []


@pytest.mark.unit
def test_wrap_text_uses_rest_width():
    """Test separate budgets for the first and later lines."""
    typesetter = make_typesetter()

    lines = typesetter.wrap_text("aa bb cc dd", 10, FontStyle.NORMAL, 10, rest_width=55)

    assert lines == ["aa", "bb cc dd"]


@pytest.mark.unit
def test_wrap_text_moves_token_to_wider_line():
    """Test that a token too wide for the first line but not the next moves down whole."""
    typesetter = make_typesetter()

    lines = typesetter.wrap_text("abcdefgh ij", 10, FontStyle.NORMAL, 20, rest_width=100)

    assert lines == ["", "abcdefgh ij"]


@pytest.mark.unit
def test_wrap_text_splits_token_wider_than_every_line():
    """Test that hard splitting still applies when the token exceeds the later budget."""
    typesetter = make_typesetter()

    lines = typesetter.wrap_text("x" * 30, 10, FontStyle.NORMAL, 20, rest_width=100)

    assert lines == ["xxxx", "x" * 20, "xxxxxx"]


# =============================================================================
# Layout walk
# =============================================================================


@pytest.mark.unit
def test_empty_document_lays_out_nothing():
    """Test that an empty document yields no commands and no pages."""
    commands = layout(Document(), GEOMETRY, METRICS)

    assert commands == []
    assert count_pages(commands) == 0


@pytest.mark.unit
def test_header_is_centered(sample_document):
    """Test name and contact line centered at the top of page 1."""
    name, contact = text_commands(layout(sample_document, GEOMETRY, METRICS))[:2]

    assert name.text == "Jane Doe"
    assert name.style is FontStyle.BOLD
    assert name.font_size == SETTINGS.name_size
    assert name.align is Alignment.CENTER
    assert name.y == GEOMETRY.margin
    name_width = METRICS.text_width("Jane Doe", SETTINGS.name_size, FontStyle.BOLD)
    assert name.x == pytest.approx((GEOMETRY.width - name_width) / 2)

    assert contact.text == sample_document.contact_line
    assert contact.style is FontStyle.NORMAL
    assert contact.y == pytest.approx(
        GEOMETRY.margin + SETTINGS.line_height(SETTINGS.name_size) + SETTINGS.header_gap
    )


@pytest.mark.unit
def test_heading_followed_by_rule(sample_document):
    """Test that each section heading is underlined across the content width."""
    commands = layout(sample_document, GEOMETRY, METRICS)
    headings = {s.heading for s in sample_document.sections}

    for index, command in enumerate(commands):
        if command.kind is CommandKind.TEXT and command.text in headings:
            rule = commands[index + 1]
            assert rule.kind is CommandKind.RULE
            assert rule.x == GEOMETRY.margin
            assert rule.x2 == pytest.approx(GEOMETRY.width - GEOMETRY.margin)
            assert rule.y > command.y


@pytest.mark.unit
def test_right_labels_flush_right(sample_document):
    """Test that dates and GPAs end exactly at the right margin."""
    commands = layout(sample_document, GEOMETRY, METRICS)
    right_labels = {"May 2020", "GPA: 3.8", "Jun 2020 - Present", "Jan 2019 - May 2020", "2023"}

    placed = [c for c in text_commands(commands) if c.text in right_labels]

    assert len(placed) == len(right_labels)
    for command in placed:
        width = METRICS.text_width(command.text, command.font_size, command.style)
        assert command.x + width == pytest.approx(GEOMETRY.width - GEOMETRY.margin)


@pytest.mark.unit
def test_two_column_pieces_share_baseline(sample_document):
    """Test that left and right labels of one line are drawn at the same y."""
    commands = text_commands(layout(sample_document, GEOMETRY, METRICS))
    by_text = {c.text: c for c in commands}

    assert by_text["Bachelor of Science in Computer Science"].y == by_text["May 2020"].y
    assert by_text["Bachelor of Science in Computer Science"].style is FontStyle.BOLD
    assert by_text["University of Texas at Austin"].style is FontStyle.NORMAL


@pytest.mark.unit
def test_entry_heading_composition():
    """Test composed bold label for non-education entries."""
    entry = Entry(left_label="Acme", sub_label="Austin, TX", title="Engineer")
    assert compose_entry_heading(entry) == "Acme, Austin, TX: Engineer"
    assert compose_entry_heading(Entry(left_label="Acme")) == "Acme"


@pytest.mark.unit
def test_bullets_indented_in_order(sample_document):
    """Test bullet prefix, indent and source order."""
    commands = text_commands(layout(sample_document, GEOMETRY, METRICS))
    bullets = [c for c in commands if c.text.startswith("• ")]

    assert [c.text for c in bullets][:3] == [
        "• Built a streaming ingestion service handling 2M events per day",
        "• Reduced p99 latency by 40% through query batching and connection pooling",
        "• Mentored three junior engineers",
    ]
    assert all(c.x == pytest.approx(GEOMETRY.margin + SETTINGS.indent) for c in bullets)


@pytest.mark.unit
def test_skill_category_inline(sample_document):
    """Test bold category label followed on the same line by its items."""
    commands = text_commands(layout(sample_document, GEOMETRY, METRICS))
    label = next(c for c in commands if c.text == "Languages:")
    items = next(c for c in commands if c.text == "Python, Go, SQL")

    assert label.style is FontStyle.BOLD
    assert label.x == GEOMETRY.margin
    assert items.y == label.y
    label_width = METRICS.text_width("Languages:", SETTINGS.body_size, FontStyle.BOLD)
    assert items.x == pytest.approx(GEOMETRY.margin + label_width + SETTINGS.skill_label_gap)


@pytest.mark.unit
def test_skill_items_wrap_to_indent():
    """Test that wrapped skill items continue at the indent."""
    entry = Entry(
        left_label="Tools",
        title="Tools",
        bullets=tuple(f"tool{i}" for i in range(60)),
        is_skill_category=True,
    )
    document = Document(sections=(Section(heading="SKILLS", is_skills_section=True, entries=(entry,)),))

    commands = text_commands(layout(document, GEOMETRY, METRICS))
    item_lines = [c for c in commands if c.text not in ("SKILLS", "Tools:")]

    assert len(item_lines) > 1
    assert all(c.x == pytest.approx(GEOMETRY.margin + SETTINGS.indent) for c in item_lines[1:])


@pytest.mark.unit
def test_long_skill_item_starts_on_continuation_line():
    """Test that an item too wide beside the label is placed whole on the next line."""
    label = "Certifications:"
    size = SETTINGS.body_size
    items_x = GEOMETRY.margin + METRICS.text_width(label, size, FontStyle.BOLD) + SETTINGS.skill_label_gap
    first_width = GEOMETRY.content_width - (items_x - GEOMETRY.margin)
    rest_width = GEOMETRY.content_width - SETTINGS.indent
    item = "c" * int(rest_width // METRICS.text_width("c", size, FontStyle.NORMAL))
    assert first_width < METRICS.text_width(item, size, FontStyle.NORMAL) <= rest_width

    entry = Entry(left_label="Certifications", title="Certifications", bullets=(item,), is_skill_category=True)
    document = Document(sections=(Section(heading="SKILLS", is_skills_section=True, entries=(entry,)),))

    commands = text_commands(layout(document, GEOMETRY, METRICS))
    label_command = next(c for c in commands if c.text == label)
    item_commands = [c for c in commands if c.text not in ("SKILLS", label)]

    assert [c.text for c in item_commands] == [item]
    assert item_commands[0].x == pytest.approx(GEOMETRY.margin + SETTINGS.indent)
    assert item_commands[0].y == pytest.approx(label_command.y + SETTINGS.line_height(size))


@pytest.mark.unit
def test_raw_lines_left_aligned():
    """Test raw fallback rendering as plain left-aligned lines."""
    document = Document(raw_lines=("First line", "Second line"))

    commands = layout(document, GEOMETRY, METRICS)

    assert [c.text for c in commands] == ["First line", "Second line"]
    assert all(c.x == GEOMETRY.margin for c in commands)
    assert commands[1].y - commands[0].y == pytest.approx(SETTINGS.line_height(SETTINGS.body_size))


@pytest.mark.unit
def test_layout_is_deterministic(sample_document):
    """Test that identical inputs give identical command lists."""
    assert layout(sample_document, GEOMETRY, METRICS) == layout(sample_document, GEOMETRY, METRICS)


# =============================================================================
# Pagination
# =============================================================================


@pytest.mark.unit
def test_long_document_breaks_pages():
    """Test that overflowing content is split across pages."""
    commands = layout(long_document(), GEOMETRY, METRICS)

    assert count_pages(commands) > 1
    assert commands[-1].kind is not CommandKind.PAGE_BREAK


@pytest.mark.unit
def test_pages_stay_within_margins():
    """Test y monotonicity per page, first line at the margin and nothing below the limit."""
    commands = layout(long_document(), GEOMETRY, METRICS)

    for page in split_pages(commands):
        texts = text_commands(page)
        ys = [c.y for c in texts]
        assert ys == sorted(ys)
        assert ys[0] == pytest.approx(GEOMETRY.margin)
        assert all(y <= GEOMETRY.bottom_limit for y in ys)


@pytest.mark.unit
def test_heading_not_repeated_on_continuation_page():
    """Test that a section continuing onto a new page starts without its heading."""
    commands = layout(long_document(), GEOMETRY, METRICS)
    second_page = split_pages(commands)[1]

    assert second_page[0].text.startswith("• Bullet number")
    assert all(c.text != "EXPERIENCE" for c in second_page)


@pytest.mark.unit
def test_check_page_break():
    """Test the page-break primitive."""
    typesetter = make_typesetter()

    assert typesetter.check_page_break(10) is False
    assert typesetter.commands == []

    typesetter.y = GEOMETRY.bottom_limit - 5
    assert typesetter.check_page_break(10) is True
    assert typesetter.commands == [PAGE_BREAK]
    assert typesetter.y == GEOMETRY.margin


@pytest.mark.unit
def test_count_and_split_pages():
    """Test page counting helpers."""
    a = text_command("a", 0, 0, 10)
    b = text_command("b", 0, 0, 10)

    assert count_pages([a]) == 1
    assert count_pages([a, PAGE_BREAK, b]) == 2
    assert split_pages([a, PAGE_BREAK, b]) == [[a], [b]]
    assert split_pages([]) == []


# =============================================================================
# Single-page fitting
# =============================================================================


@pytest.mark.unit
def test_layout_to_fit_keeps_standard_when_it_fits(sample_document):
    """Test that a short resume uses the loosest preset."""
    result = layout_to_fit(sample_document, GEOMETRY, METRICS)

    assert result.preset_name == "spacing_standard"
    assert result.page_count == 1
    assert result.fits_single_page


@pytest.mark.unit
def test_layout_to_fit_tries_denser_presets():
    """Test that a resume just over one page is rescued by a denser preset."""
    bullet_count = next(
        n for n in range(10, 80) if count_pages(layout(long_document(n), GEOMETRY, METRICS)) > 1
    )

    result = layout_to_fit(long_document(bullet_count), GEOMETRY, METRICS)

    assert result.preset_name in ("spacing_compact", "spacing_tight")
    assert result.page_count == 1


@pytest.mark.unit
def test_layout_to_fit_returns_last_attempt_when_nothing_fits():
    """Test the fallback when no preset fits on one page."""
    result = layout_to_fit(long_document(300), GEOMETRY, METRICS)

    assert result.preset_name == "spacing_tight"
    assert result.page_count > 1
    assert not result.fits_single_page


@pytest.mark.unit
def test_layout_to_fit_requires_presets(sample_document):
    """Test that an empty preset list is rejected."""
    with pytest.raises(ValueError):
        layout_to_fit(sample_document, GEOMETRY, METRICS, preset_names=())
