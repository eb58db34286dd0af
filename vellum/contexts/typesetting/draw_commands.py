"""
Draw commands emitted by the typesetter.

Coordinates are top-down: y grows from the top edge of the page, matching the
cursor used during layout. Renderers with a bottom-left origin flip y themselves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from vellum.contexts.typesetting.font_metrics import FontStyle


class CommandKind(Enum):
    TEXT = "text"
    RULE = "rule"
    PAGE_BREAK = "page_break"


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class DrawCommand:
    """
    One positioned rendering instruction.

    Attributes:
        kind: TEXT, RULE or PAGE_BREAK
        text: Text to draw (TEXT only)
        x: Left edge of the text, or start of the rule
        y: Baseline of the text, or height of the rule
        x2: End of the rule (RULE only)
        font_size: Size in points (TEXT only)
        style: Font style (TEXT only)
        align: How x was derived (TEXT only); x is always the final left edge
        thickness: Stroke width (RULE only)
    """

    kind: CommandKind
    text: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    x2: Optional[float] = None
    font_size: Optional[float] = None
    style: Optional[FontStyle] = None
    align: Optional[Alignment] = None
    thickness: Optional[float] = None

    @property
    def is_text(self) -> bool:
        return self.kind is CommandKind.TEXT

    @property
    def is_page_break(self) -> bool:
        return self.kind is CommandKind.PAGE_BREAK


PAGE_BREAK = DrawCommand(kind=CommandKind.PAGE_BREAK)


def text_command(
    text: str,
    x: float,
    y: float,
    font_size: float,
    style: FontStyle = FontStyle.NORMAL,
    align: Alignment = Alignment.LEFT,
) -> DrawCommand:
    return DrawCommand(
        kind=CommandKind.TEXT,
        text=text,
        x=x,
        y=y,
        font_size=font_size,
        style=style,
        align=align,
    )


def rule_command(x1: float, x2: float, y: float, thickness: float) -> DrawCommand:
    return DrawCommand(kind=CommandKind.RULE, x=x1, x2=x2, y=y, thickness=thickness)


def count_pages(commands: Sequence[DrawCommand]) -> int:
    """Number of pages a command list occupies (0 for an empty layout)."""
    if not commands:
        return 0
    return 1 + sum(1 for command in commands if command.is_page_break)


def split_pages(commands: Sequence[DrawCommand]) -> List[List[DrawCommand]]:
    """Group commands by page, dropping the PAGE_BREAK markers."""
    if not commands:
        return []
    pages: List[List[DrawCommand]] = [[]]
    for command in commands:
        if command.is_page_break:
            pages.append([])
        else:
            pages[-1].append(command)
    return pages
