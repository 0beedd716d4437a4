"""
Module: export.output.decorations

Purpose:
    Cell frames and practice guides.

    Border modes:
        full        square outline plus the chosen guide
        lines-only  one separator line per cell (left edge for vertical
                    text, bottom edge for horizontal text)
        none        nothing

    Guides (dashed):
        mizi     米字格: horizontal, vertical and both diagonals
        tianzi   田字格: horizontal and vertical
        huigong  回宫格: inner square, 25% inset
"""

from __future__ import annotations

from ...layout.config import BorderMode, Direction, GridDecoration
from .canvas import DrawingService

BORDER_COLOR = (213, 139, 133)
BORDER_LINE_WIDTH_MM = 0.1
HUIGONG_INSET = 0.25


def draw_guides(service: DrawingService, x: float, y: float, size: float, decoration: GridDecoration) -> None:
    """Draw the dashed guide lines of one cell."""
    half = size / 2
    if decoration in (GridDecoration.MIZI, GridDecoration.TIANZI):
        service.draw_line(x, y + half, x + size, y + half, dashed=True)
        service.draw_line(x + half, y, x + half, y + size, dashed=True)
    if decoration is GridDecoration.MIZI:
        service.draw_line(x, y, x + size, y + size, dashed=True)
        service.draw_line(x + size, y, x, y + size, dashed=True)
    elif decoration is GridDecoration.HUIGONG:
        inset = size * HUIGONG_INSET
        inner = size - 2 * inset
        service.draw_rect(x + inset, y + inset, inner, inner, dashed=True)


def draw_cell_frame(
    service: DrawingService,
    x: float,
    y: float,
    size: float,
    *,
    border_mode: BorderMode,
    decoration: GridDecoration,
    direction: Direction,
) -> None:
    """
    Draw one cell's border and guides.

    Args:
        service: Drawing service with the target page selected
        x: Cell left edge (mm)
        y: Cell top edge (mm)
        size: Cell edge (mm)
        border_mode: Border drawing mode
        decoration: Guide type (full borders only)
        direction: Text direction (decides the lines-only separator)
    """
    if border_mode is BorderMode.NONE:
        return

    service.set_draw_color(BORDER_COLOR)
    service.set_line_width(BORDER_LINE_WIDTH_MM)

    if border_mode is BorderMode.LINES_ONLY:
        if direction is Direction.VERTICAL:
            service.draw_line(x, y, x, y + size)
        else:
            service.draw_line(x, y + size, x + size, y + size)
        return

    service.draw_rect(x, y, size, size)
    draw_guides(service, x, y, size, decoration)
