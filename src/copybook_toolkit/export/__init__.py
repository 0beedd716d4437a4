"""
Export Package

PDF export of copybook sheets: request/response messages, the export
state machine and the background worker.
"""

from .config import (
    A4,
    MM_TO_PX,
    ExportRequest,
    ExportResponse,
    PageGeometry,
    cell_size_mm,
    compute_page_capacity,
)
from .controller import (
    ExportOrchestrator,
    ExportResult,
    ExportState,
    export_pdf,
    needs_font_confirmation,
    write_pdf,
)
from .worker import ExportWorker, start_export

__all__ = [
    "A4",
    "MM_TO_PX",
    "ExportOrchestrator",
    "ExportRequest",
    "ExportResponse",
    "ExportResult",
    "ExportState",
    "ExportWorker",
    "PageGeometry",
    "cell_size_mm",
    "compute_page_capacity",
    "export_pdf",
    "needs_font_confirmation",
    "start_export",
    "write_pdf",
]
