"""
Module: export.output.renderer

Purpose:
    Draw paginated cells onto a drawing service: frame first, then the
    character centred in its cell.

Key Functions:
    - render_cells(): Draw every PlacedCell, allocating pages lazily
    - text_position(): Baseline origin of a centred character

Algorithm:
    cell x = margin + visual_col * cell
    cell y = margin + visual_row * cell
    font size = cell * FONT_RATIO
    text x = cell x + (cell - measured width) / 2
    baseline = cell y + cell / 2 + font size / 2.8

Dependencies:
    - export.output.canvas: DrawingService
    - export.output.decorations: Cell frames

Used By:
    - export.controller: PAGES_DRAWN stage
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from reportlab.lib.units import mm

from ...layout.config import FONT_RATIO, BorderMode, Direction, GridDecoration
from ...layout.models import PlacedCell
from .canvas import DrawingService
from .decorations import draw_cell_frame

logger = logging.getLogger(__name__)

# Baseline sits this fraction of the font size below the cell centre
BASELINE_OFFSET_RATIO = 1 / 2.8


def text_position(
    cell_x: float,
    cell_y: float,
    cell_size: float,
    text_width: float,
) -> Tuple[float, float]:
    """
    Baseline origin that centres a character in its cell.

    Args:
        cell_x: Cell left edge (mm)
        cell_y: Cell top edge (mm)
        cell_size: Cell edge (mm)
        text_width: Measured character width (mm)

    Returns:
        (x, baseline_y) in mm
    """
    font_size_mm = cell_size * FONT_RATIO
    return (
        cell_x + (cell_size - text_width) / 2,
        cell_y + cell_size / 2 + font_size_mm * BASELINE_OFFSET_RATIO,
    )


def render_cells(
    service: DrawingService,
    cells: Iterable[PlacedCell],
    *,
    cell_size: float,
    margin: float,
    border_mode: BorderMode,
    decoration: GridDecoration,
    direction: Direction,
) -> int:
    """
    Draw cells page by page.

    Args:
        service: Drawing service (font already set)
        cells: Placed cells from the paginator
        cell_size: Cell edge (mm)
        margin: Page margin (mm)
        border_mode: Border drawing mode
        decoration: Guide type
        direction: Text direction

    Returns:
        Number of characters drawn (blank cells excluded)
    """
    # Font size in points: the cell edge in points scaled by the font ratio
    service.set_font_size(cell_size * mm * FONT_RATIO)
    drawn = 0
    current_page = -1
    for cell in cells:
        while service.page_count <= cell.page_index:
            service.add_page()
        if cell.page_index != current_page:
            service.select_page(cell.page_index)
            current_page = cell.page_index

        x = margin + cell.visual_col * cell_size
        y = margin + cell.visual_row * cell_size
        draw_cell_frame(
            service, x, y, cell_size,
            border_mode=border_mode,
            decoration=decoration,
            direction=direction,
        )

        if cell.is_blank:
            continue
        text_x, text_y = text_position(x, y, cell_size, service.measure_text_width(cell.char))
        service.draw_text(cell.char, text_x, text_y)
        drawn += 1

    logger.debug(f"Drew {drawn} characters on {service.page_count} page(s)")
    return drawn
