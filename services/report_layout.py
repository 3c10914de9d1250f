"""
Report row geometry.

Computes every line and box needed to draw one report row from its
RowDescriptor and the cell box handed out by the layout engine. Coordinates
use a top-left origin with y growing downward; the renderer converts them to
its own space.

Connector columns: a note at depth d hangs off its parent's column d - 1
with a short tick. The ancestor at depth k (k >= 1) has its own tick in
column k - 1, so when that ancestor has a later sibling its trunk must pass
through every row of its subtree in column k - 1. Roots have no tick and no
trunk.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.constants import REPORT_LAYOUT, STATUS_COLORS
from core.models import RowDescriptor

Line = Tuple[float, float, float, float]


@dataclass
class RowDrawing:
    """Absolute draw instructions for one row."""
    background: Tuple[float, float, float, float]
    fill_color: str
    accent_color: str
    accent_line: Line
    text_x: float
    text_width: float
    bold: bool
    tick: Optional[Line] = None
    parent_connector: Optional[Line] = None
    trunks: List[Line] = field(default_factory=list)
    separator: Optional[Line] = None


def column_x(x: float, column: int, layout: dict = REPORT_LAYOUT) -> float:
    """X position of a connector column inside a cell starting at x."""
    return x + column * layout['indent_width'] + layout['trunk_offset']


def text_offset(indent: int, layout: dict = REPORT_LAYOUT) -> float:
    """Horizontal text offset from the cell's left edge."""
    return indent * layout['indent_width'] + layout['text_offset']


def tick_drop(layout: dict = REPORT_LAYOUT) -> float:
    """Distance from the row top to the tick."""
    return layout['tick_drop']


def layout_row(
    row: RowDescriptor,
    x: float,
    y: float,
    width: float,
    height: float,
    draw_separator: bool = True,
    continued: bool = False,
    layout: dict = REPORT_LAYOUT
) -> RowDrawing:
    """
    Compute draw instructions for a row.

    Args:
        row: Row descriptor
        x, y: Top-left corner of the cell
        width, height: Cell size, excluding the separator gap
        draw_separator: Whether a rule follows this row
        continued: True for the tail of a row split across pages; the tail
            repeats trunks but not the tick
        layout: Geometry constants

    Returns:
        RowDrawing with absolute coordinates
    """
    colors = STATUS_COLORS[row.status.value]
    offset = text_offset(row.indent, layout)
    bottom = y + height

    drawing = RowDrawing(
        background=(x, y, width, height),
        fill_color=colors['bg'],
        accent_color=colors['border'],
        accent_line=(x, y, x, bottom),
        text_x=x + offset,
        text_width=width - offset,
        bold=row.indent == 0
    )

    # Trunks of ancestors at depth 1..indent-1 with later siblings
    for depth in range(1, row.indent):
        if row.ancestor_continues[depth]:
            cx = column_x(x, depth - 1, layout)
            drawing.trunks.append((cx, y, cx, bottom))

    if row.indent > 0:
        start_x = column_x(x, row.indent - 1, layout)
        if continued:
            if not row.is_last_child:
                drawing.parent_connector = (start_x, y, start_x, bottom)
        else:
            line_y = y + tick_drop(layout)
            drawing.tick = (start_x, line_y, start_x + layout['indent_width'], line_y)
            if row.is_last_child:
                drawing.parent_connector = (start_x, y, start_x, line_y)
            else:
                drawing.parent_connector = (start_x, y, start_x, bottom)

    if draw_separator:
        line_y = bottom + layout['separator_gap']
        inset = layout['separator_inset']
        drawing.separator = (x + inset, line_y, x + width - inset, line_y)

    return drawing
