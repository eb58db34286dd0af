"""
Document inference for plain-text resumes.

Folds classified lines into a Document with an explicit state machine:

    HEADER -> SCANNING -> IN_SECTION | IN_SKILLS_SECTION

advance() is the transition function: given the builder state, one line and
its lookahead, it returns the next state. parse() drives it over the whole input
in a single forward pass. Nothing here raises; lines that carry no recognizable
structure are dropped, and input with no section headings at all falls back to
raw lines.

Bullets, entries and sections collect in lists owned by the state and become
tuples once, when their container closes. A state is threaded forward exactly
once; advance() may extend the lists of the state it was given.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from vellum.contexts.inference.document_data_structure import Document, Entry, Section
from vellum.contexts.inference.line_classifier import (
    LineKind,
    ParserState,
    classify,
    is_skills_heading,
    split_two_column,
    starts_with_bullet_marker,
    strip_bullet_marker,
)
from vellum.contexts.inference.line_patterns import (
    TWO_COLUMN_MIN_GAP,
    ContentPatterns,
    SectionVocabulary,
)
from vellum.contexts.inference.logger import log_dropped_line, log_parse_result
from vellum.utils.text_processing import (
    non_blank_lines,
    split_and_trim,
    starts_with_year,
    strip_markdown_bold,
)


class BuilderPhase(Enum):
    """States of the document builder."""

    HEADER = "header"
    SCANNING = "scanning"
    IN_SECTION = "in_section"
    IN_SKILLS_SECTION = "in_skills_section"


@dataclass(frozen=True)
class BuilderState:
    """
    Accumulator for the document fold.

    Attributes:
        phase: Current builder phase
        name: Name consumed from line 0
        contact_line: Contact line consumed from line 1
        sections: Closed sections, in input order
        open_section: Section currently receiving entries (entries attached on close)
        section_entries: Closed entries of the open section
        open_entry: Entry currently receiving bullets (bullets attached on close)
        entry_bullets: Bullets of the open entry
    """

    phase: BuilderPhase = BuilderPhase.HEADER
    name: Optional[str] = None
    contact_line: Optional[str] = None
    sections: List[Section] = field(default_factory=list)
    open_section: Optional[Section] = None
    section_entries: List[Entry] = field(default_factory=list)
    open_entry: Optional[Entry] = None
    entry_bullets: List[str] = field(default_factory=list)

    def parser_state(self, line_index: int) -> ParserState:
        """Classifier context for the line at line_index."""
        return ParserState(
            line_index=line_index,
            in_skills_section=self.phase is BuilderPhase.IN_SKILLS_SECTION,
            follows_name_header=self.name is not None,
        )


# =============================================================================
# State helpers
# =============================================================================


def _close_entry(state: BuilderState) -> BuilderState:
    """Append the open entry to the open section."""
    if state.open_entry is None:
        return state
    if state.open_section is not None:
        state.section_entries.append(replace(state.open_entry, bullets=tuple(state.entry_bullets)))
    return replace(state, open_entry=None, entry_bullets=[])


def _close_section(state: BuilderState) -> BuilderState:
    """Close the open entry and append the open section to the document."""
    state = _close_entry(state)
    if state.open_section is None:
        return state
    state.sections.append(replace(state.open_section, entries=tuple(state.section_entries)))
    return replace(state, open_section=None, section_entries=[])


def _open_entry(state: BuilderState, entry: Entry) -> BuilderState:
    # Bullets already on the entry (skill items) seed the open bullet list
    return replace(
        _close_entry(state),
        open_entry=replace(entry, bullets=()),
        entry_bullets=list(entry.bullets),
    )


def _parse_entry_left_text(left_text: str, right_text: str) -> Entry:
    """
    Build a non-education entry from the left side of a two-column line.

    "Company, City: Title" -> left_label "Company, City", title "Title"
    "Project, Type"        -> left_label "Project", sub_label "Type"
    """
    if ":" in left_text:
        label, title = left_text.split(":", 1)
        return Entry(left_label=label.strip(), right_label=right_text, title=title.strip() or None)

    if "," in left_text:
        parts = [part.strip() for part in left_text.split(",")]
        sub_label = ", ".join(parts[1:])
        return Entry(left_label=parts[0], right_label=right_text, sub_label=sub_label or None)

    return Entry(left_label=left_text, right_label=right_text)


def _parse_skill_category(line: str) -> Entry:
    """
    Build a skill-category entry from "Category: item, item".

    Example:
        >>> _parse_skill_category("**Languages:** Python, Go, Rust").bullets
        ('Python', 'Go', 'Rust')
    """
    cleaned = strip_markdown_bold(line.strip())
    category, items = cleaned.split(ContentPatterns.SKILL_CATEGORY_SEPARATOR, 1)
    category = category.strip()
    return Entry(
        left_label=category,
        title=category,
        bullets=tuple(split_and_trim(items, ContentPatterns.SKILL_ITEM_SEPARATOR)),
        is_skill_category=True,
    )


# =============================================================================
# Transitions
# =============================================================================


def _on_section_heading(state: BuilderState, line: str) -> BuilderState:
    heading = line.strip().upper()
    is_skills = is_skills_heading(heading)
    state = _close_section(state)
    return replace(
        state,
        open_section=Section(heading=heading, is_skills_section=is_skills),
        phase=BuilderPhase.IN_SKILLS_SECTION if is_skills else BuilderPhase.IN_SECTION,
    )


def _on_two_column(
    state: BuilderState, line: str, lookahead: Optional[str], min_gap: int
) -> Tuple[BuilderState, bool]:
    left_text, right_text = split_two_column(line, min_gap)
    left_text = strip_markdown_bold(left_text).strip()

    if state.open_section.heading != SectionVocabulary.EDUCATION_HEADING:
        return _open_entry(state, _parse_entry_left_text(left_text, right_text)), False

    entry = Entry(left_label=left_text, right_label=right_text, is_education_entry=True)
    consumed_lookahead = False

    # Degree/date line may be followed by an institution/GPA line
    if lookahead is not None and not starts_with_bullet_marker(lookahead):
        second = split_two_column(lookahead, min_gap)
        if second is not None:
            entry = replace(entry, sub_label=second[0], title=second[1])
            consumed_lookahead = True

    return _open_entry(state, entry), consumed_lookahead


def _on_bullet(state: BuilderState, line: str, line_index: int) -> BuilderState:
    if state.open_entry is None:
        log_dropped_line(line_index, "bullet without entry", line)
        return state

    bullet = strip_bullet_marker(line)
    if not bullet:
        return state

    state.entry_bullets.append(bullet)
    return state


def _on_plain_text(state: BuilderState, line: str, line_index: int) -> BuilderState:
    entry = state.open_entry
    text = line.strip()

    if entry is None or starts_with_year(text):
        log_dropped_line(line_index, "continuation text", line)
        return state

    if entry.title is None and not entry.is_education_entry:
        return replace(state, open_entry=replace(entry, title=text))

    if entry.is_education_entry and entry.sub_label is None:
        return replace(state, open_entry=replace(entry, sub_label=text))

    log_dropped_line(line_index, "continuation text", line)
    return state


def _dispatch(
    state: BuilderState,
    kind: LineKind,
    line: str,
    line_index: int,
    lookahead: Optional[str],
    min_gap: int,
) -> Tuple[BuilderState, bool]:
    """Apply one classified line to a non-header phase."""
    if kind is LineKind.BLANK:
        return state, False

    if kind is LineKind.SECTION_HEADING:
        return _on_section_heading(state, line), False

    if state.phase is BuilderPhase.IN_SKILLS_SECTION:
        if kind is LineKind.SKILL_CATEGORY:
            return _open_entry(state, _parse_skill_category(line)), False
        if kind is LineKind.BULLET:
            return _on_bullet(state, line, line_index), False

    elif state.phase is BuilderPhase.IN_SECTION:
        if kind is LineKind.TWO_COLUMN:
            return _on_two_column(state, line, lookahead, min_gap)
        if kind is LineKind.BULLET:
            return _on_bullet(state, line, line_index), False
        if kind is LineKind.PLAIN_TEXT:
            return _on_plain_text(state, line, line_index), False

    log_dropped_line(line_index, f"{kind.value} in {state.phase.value}", line)
    return state, False


def advance(
    state: BuilderState,
    line: str,
    line_index: int,
    lookahead: Optional[str] = None,
    min_gap: int = TWO_COLUMN_MIN_GAP,
) -> Tuple[BuilderState, bool]:
    """
    Apply one line to the builder state.

    Args:
        state: Current builder state
        line: Current line, right-trimmed
        line_index: 0-based index of the line
        lookahead: Next line, if any (only education entries consume it)
        min_gap: Minimum whitespace run for two-column lines

    Returns:
        (next_state, consumed_lookahead)
    """
    kind = classify(line, state.parser_state(line_index), min_gap)

    if state.phase is BuilderPhase.HEADER:
        if kind is LineKind.NAME_HEADER:
            return replace(state, name=line.strip()), False
        if kind is LineKind.CONTACT_LINE:
            return replace(state, contact_line=line.strip(), phase=BuilderPhase.SCANNING), False
        # Not a header line: leave the header and handle it as ordinary content
        state = replace(state, phase=BuilderPhase.SCANNING)

    return _dispatch(state, kind, line, line_index, lookahead, min_gap)


def finish(state: BuilderState, text: str) -> Document:
    """
    Close open structures and build the Document.

    Falls back to raw lines when no section was recognized in non-blank input.
    """
    state = _close_section(state)

    if not state.sections and text.strip():
        return Document(raw_lines=tuple(non_blank_lines(text)))

    return Document(
        name=state.name,
        contact_line=state.contact_line,
        sections=tuple(state.sections),
    )


def parse(text: str, min_gap: int = TWO_COLUMN_MIN_GAP) -> Document:
    """
    Infer a Document from plain-text resume output.

    Args:
        text: Resume text with no guaranteed schema
        min_gap: Minimum whitespace run for two-column lines

    Returns:
        Immutable Document. Never raises for any input string.
    """
    lines: List[str] = [line.rstrip() for line in text.split("\n")]
    state = BuilderState()

    index = 0
    while index < len(lines):
        lookahead = lines[index + 1] if index + 1 < len(lines) else None
        state, consumed_lookahead = advance(state, lines[index], index, lookahead, min_gap)
        index += 2 if consumed_lookahead else 1

    document = finish(state, text)
    log_parse_result(document)
    return document
