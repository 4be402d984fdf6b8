"""
PDF margin inspection for print production.

Pipeline: rasterized page -> content-boundary scan -> millimeter margins ->
per-document statistics, uniformity and consistency -> JSON/CSV export.

This package performs NO OCR, layout analysis, or color-aware detection;
content is anything visible and not near-white.
"""

from .artifacts import ExportArtifact, ExportFormat, export_report
from .boundary import PixelGrid, detect_pixel_margins
from .contracts import (
    BleedFlags,
    DocumentReport,
    DocumentSummary,
    Edge,
    EdgeMargins,
    EdgeStats,
    InspectConfig,
    InspectError,
    InspectRunResult,
    InvalidInputError,
    MarginInspectError,
    MisconfigurationError,
    PageResult,
    PixelMargins,
    RenderFailureError,
    TrimArea,
    UniformityVerdict,
)
from .doc_module import (
    analyze_document,
    classify_page_consistency,
    compute_edge_stats,
    compute_uniformity,
    summarize_report,
)
from .module import MarginInspector, inspect_document_bytes, run_inspect_pdf_relpath
from .page_module import analyze_page

__all__ = [
    "BleedFlags",
    "DocumentReport",
    "DocumentSummary",
    "Edge",
    "EdgeMargins",
    "EdgeStats",
    "ExportArtifact",
    "ExportFormat",
    "InspectConfig",
    "InspectError",
    "InspectRunResult",
    "InvalidInputError",
    "MarginInspectError",
    "MarginInspector",
    "MisconfigurationError",
    "PageResult",
    "PixelGrid",
    "PixelMargins",
    "RenderFailureError",
    "TrimArea",
    "UniformityVerdict",
    "analyze_document",
    "analyze_page",
    "classify_page_consistency",
    "compute_edge_stats",
    "compute_uniformity",
    "detect_pixel_margins",
    "export_report",
    "inspect_document_bytes",
    "run_inspect_pdf_relpath",
    "summarize_report",
]
