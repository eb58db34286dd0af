"""
Page geometry and layout settings for the typesetter.
"""

from dataclasses import dataclass, fields
from typing import List

from vellum.contexts.typesetting.defaults import DEFAULT_PAGE, DEFAULT_SPACING, DEFAULT_TYPOGRAPHY


@dataclass(frozen=True)
class PageGeometry:
    """
    Page size and uniform margin, in points.

    Attributes:
        width: Page width
        height: Page height
        margin: Margin applied on all four sides
    """

    width: float = DEFAULT_PAGE["width"]
    height: float = DEFAULT_PAGE["height"]
    margin: float = DEFAULT_PAGE["margin"]

    @property
    def content_width(self) -> float:
        """Width between the left and right margins."""
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest y (top-down) that content may reach."""
        return self.height - self.margin


@dataclass(frozen=True)
class LayoutSettings:
    """
    Typography and spacing used by the layout walk.

    Font sizes are points; every gap is added to the cursor in points.
    line_height_factor multiplies the font size to give the advance per text line.
    """

    font_family: str = DEFAULT_TYPOGRAPHY["font_family"]
    name_size: float = DEFAULT_TYPOGRAPHY["name_size"]
    contact_size: float = DEFAULT_TYPOGRAPHY["contact_size"]
    heading_size: float = DEFAULT_TYPOGRAPHY["heading_size"]
    body_size: float = DEFAULT_TYPOGRAPHY["body_size"]
    line_height_factor: float = DEFAULT_TYPOGRAPHY["line_height_factor"]

    header_gap: float = DEFAULT_SPACING["header_gap"]
    section_gap: float = DEFAULT_SPACING["section_gap"]
    section_min_space: float = DEFAULT_SPACING["section_min_space"]
    entry_min_space: float = DEFAULT_SPACING["entry_min_space"]
    bullet_min_space: float = DEFAULT_SPACING["bullet_min_space"]
    line_min_space: float = DEFAULT_SPACING["line_min_space"]
    rule_raise: float = DEFAULT_SPACING["rule_raise"]
    rule_gap: float = DEFAULT_SPACING["rule_gap"]
    rule_thickness: float = DEFAULT_SPACING["rule_thickness"]
    indent: float = DEFAULT_SPACING["indent"]
    skill_label_gap: float = DEFAULT_SPACING["skill_label_gap"]
    skill_category_gap: float = DEFAULT_SPACING["skill_category_gap"]
    education_gap: float = DEFAULT_SPACING["education_gap"]
    entry_gap: float = DEFAULT_SPACING["entry_gap"]

    def line_height(self, size: float) -> float:
        """Cursor advance for one line of text at the given size."""
        return self.line_height_factor * size

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]
