from __future__ import annotations

import logging
from typing import Any, Iterable

from .contracts import (
    EDGES,
    DocumentReport,
    DocumentSummary,
    Edge,
    EdgeStats,
    InspectConfig,
    UniformityVerdict,
)
from .engines.base import RenderedPage
from .page_module import analyze_page
from .units import round_mm, within_tolerance

logger = logging.getLogger(__name__)


def analyze_document(
    *,
    pages: Iterable[RenderedPage],
    config: InspectConfig,
    meta: dict[str, Any] | None = None,
) -> DocumentReport:
    """
    Analyze every page in order and return a fresh report.

    `pages` may be lazy (a generator over the rasterizer): each page is
    rendered and measured before the next one is requested. Page numbers are
    assigned 1..N in iteration order. Any exception from the iterator aborts
    the run; nothing partial is returned.
    """

    results = []
    for page_number, rendered in enumerate(pages, start=1):
        results.append(
            analyze_page(
                page_number=page_number,
                width_pt=rendered.width_pt,
                height_pt=rendered.height_pt,
                grid=rendered.grid,
                scale=rendered.scale,
                config=config,
            )
        )

    return DocumentReport(
        pages=tuple(results),
        bleed_size_mm=config.bleed_size_mm,
        margin_threshold_mm=config.margin_threshold_mm,
        meta=dict(meta or {}),
    )


def _edge_values(report: DocumentReport, edge: Edge) -> list[float]:
    return [p.margins.get(edge) for p in report.pages]


def compute_edge_stats(report: DocumentReport) -> dict[Edge, EdgeStats]:
    if not report.pages:
        raise ValueError("cannot compute statistics for a report without pages")

    stats: dict[Edge, EdgeStats] = {}
    for edge in EDGES:
        values = _edge_values(report, edge)
        stats[edge] = EdgeStats(
            min=round_mm(min(values)),
            max=round_mm(max(values)),
            avg=round_mm(sum(values) / len(values)),
        )
    return stats


def compute_uniformity(report: DocumentReport) -> UniformityVerdict:
    """
    An edge is uniform when its spread (max - min) across pages stays within
    the report's margin threshold. Uses the stored, rounded page values.
    """

    if not report.pages:
        raise ValueError("cannot judge uniformity for a report without pages")

    threshold = report.margin_threshold_mm
    flags: dict[str, bool] = {}
    for edge in EDGES:
        values = _edge_values(report, edge)
        flags[edge.value] = within_tolerance(max(values), min(values), threshold)
    return UniformityVerdict(**flags)


def classify_page_consistency(report: DocumentReport) -> list[bool]:
    """
    Per-page flag: every edge within the threshold of page 1's margin.

    A single-page document is consistent by definition.
    """

    if len(report.pages) <= 1:
        return [True] * len(report.pages)

    first = report.pages[0].margins
    threshold = report.margin_threshold_mm
    return [
        all(within_tolerance(p.margins.get(e), first.get(e), threshold) for e in EDGES)
        for p in report.pages
    ]


def summarize_report(report: DocumentReport) -> DocumentSummary:
    summary = DocumentSummary(
        edge_stats=compute_edge_stats(report),
        uniformity=compute_uniformity(report),
        page_consistency=classify_page_consistency(report),
    )
    if not summary.uniformity.overall:
        logger.info(
            "non-uniform margins (threshold %.2f mm): %s",
            report.margin_threshold_mm,
            ", ".join(e.value for e in summary.uniformity.non_uniform_edges()),
        )
    return summary
