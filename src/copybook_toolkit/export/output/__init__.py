"""
Export output: drawing service, cell decorations and cell rendering.
"""

from .canvas import DrawingService, ReportLabDrawingService, register_font
from .decorations import BORDER_COLOR, draw_cell_frame, draw_guides
from .renderer import render_cells, text_position

__all__ = [
    "BORDER_COLOR",
    "DrawingService",
    "ReportLabDrawingService",
    "draw_cell_frame",
    "draw_guides",
    "register_font",
    "render_cells",
    "text_position",
]
