"""
Resume Document Data Structures

Immutable document model inferred from plain-text resumes. The inference context
builds one Document per parse() call and the typesetting context consumes it.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from omegaconf import OmegaConf


@dataclass(frozen=True)
class Entry:
    """
    One item within a section: a job, degree, project or skill category.

    Attributes:
        left_label: Institution, company, project name or degree
        right_label: Right-aligned date or GPA
        title: Job title, or GPA/extra info on an education entry's second line
        sub_label: Secondary content (location, or institution for education)
        bullets: Bullet texts with markers stripped, in source order
        is_education_entry: Entry came from a two-column line under EDUCATION
        is_skill_category: Entry is a "Category: item, item" line in a skills section
    """

    left_label: str
    right_label: Optional[str] = None
    title: Optional[str] = None
    sub_label: Optional[str] = None
    bullets: Tuple[str, ...] = ()
    is_education_entry: bool = False
    is_skill_category: bool = False


@dataclass(frozen=True)
class Section:
    """
    Section of a resume (e.g., "EDUCATION", "EXPERIENCE", "SKILLS").

    Attributes:
        heading: Upper-cased section name
        is_skills_section: Heading is SKILLS, TECHNICAL SKILLS or TECHNOLOGIES
        entries: Entries in first-seen order
    """

    heading: str
    is_skills_section: bool = False
    entries: Tuple[Entry, ...] = ()


@dataclass(frozen=True)
class Document:
    """
    Structured resume inferred from plain text.

    Either `sections` is populated, or the input had no recognizable structure and
    `raw_lines` holds every non-blank input line for plain paragraph rendering.

    Factory methods:
        from_text(text) - Parse raw resume text
        from_file(path) - Parse a UTF-8 text file
    """

    name: Optional[str] = None
    contact_line: Optional[str] = None
    sections: Tuple[Section, ...] = ()
    raw_lines: Tuple[str, ...] = field(default=())

    @property
    def is_raw(self) -> bool:
        """True if the document is in raw fallback mode."""
        return not self.sections and bool(self.raw_lines)

    @property
    def is_empty(self) -> bool:
        """True if there is nothing to render."""
        return (
            not self.sections and not self.raw_lines and not self.name and not self.contact_line
        )

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Parse resume text into a Document."""
        from vellum.contexts.inference.document_builder import parse

        return parse(text)

    @classmethod
    def from_file(cls, file_path: Path) -> "Document":
        """Parse a UTF-8 resume text file into a Document."""
        return cls.from_text(Path(file_path).read_text(encoding="utf-8"))

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to plain nested dicts and lists.

        Tuples become lists so the result can be fed to OmegaConf or json.
        """
        return _tuples_to_lists(asdict(self))

    def to_yaml(self) -> str:
        """Render the document as YAML for inspection."""
        return OmegaConf.to_yaml(OmegaConf.create({"document": self.to_dict()}))


def _tuples_to_lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _tuples_to_lists(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_tuples_to_lists(item) for item in value]
    return value
