from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterator

from .artifacts import ExportArtifact, ExportFormat, ExportSink, export_report
from .contracts import (
    DocumentReport,
    DocumentSummary,
    InspectConfig,
    InspectError,
    InspectRunResult,
    InvalidInputError,
    MarginInspectError,
    RenderFailureError,
    parse_setting,
)
from .data_access import DataAccessError, read_pdf_bytes, sha256_bytes
from .doc_module import analyze_document, summarize_report
from .engines import Pypdfium2Engine, RasterEngine, RenderedPage

logger = logging.getLogger(__name__)


def _get_engine() -> RasterEngine:
    return Pypdfium2Engine()


def _iter_rendered_pages(
    *, engine: RasterEngine, document: Any, page_count: int, scale: float
) -> Iterator[RenderedPage]:
    for page_number in range(1, page_count + 1):
        try:
            yield engine.render_page(document=document, page_number=page_number, scale=scale)
        except MarginInspectError:
            raise
        except Exception as e:
            raise RenderFailureError(f"Failed to render page {page_number}: {e!r}") from e


def inspect_document_bytes(
    *,
    data: bytes,
    config: InspectConfig,
    engine: RasterEngine | None = None,
) -> DocumentReport:
    """
    Load a document from bytes and analyze every page.

    Raises InvalidInputError (not a loadable document, or no pages) or
    RenderFailureError (any page failed; the whole run is abandoned).
    """

    engine = engine or _get_engine()
    document = engine.open_document(data=data)
    try:
        page_count = engine.get_page_count(document=document)
        if page_count < 1:
            raise InvalidInputError("Document has no pages")

        meta: dict[str, Any] = {
            "backend": engine.backend_id(),
            "backend_version": engine.backend_version(),
            "render_scale": config.render_scale,
        }
        if config.compute_source_sha256:
            meta["source_sha256"] = sha256_bytes(data)

        logger.info("analyzing %d page(s) with %s", page_count, engine.backend_id())
        report = analyze_document(
            pages=_iter_rendered_pages(
                engine=engine, document=document, page_count=page_count, scale=config.render_scale
            ),
            config=config,
            meta=meta,
        )
    finally:
        engine.close_document(document=document)

    logger.info("analysis complete: %d page(s)", report.total_pages)
    return report


def _failed(
    *, pdf_relpath: str, code: str, message: str, detail: dict[str, Any], meta: dict[str, Any]
) -> InspectRunResult:
    logger.warning("run failed [%s]: %s", code, message)
    return InspectRunResult(
        ok=False,
        source_pdf_relpath=pdf_relpath,
        report=None,
        summary=None,
        errors=[InspectError(code=code, message=message, detail=detail)],
        meta=meta,
    )


def run_inspect_pdf_relpath(*, data_root: Path, pdf_relpath: str, config: InspectConfig) -> InspectRunResult:
    """
    Preferred programmatic entrypoint.

    Input: PDF relpath under `data_root`
    Output: run result with the document report and its summary, or a single
    terminal error. Never raises for run failures.
    """

    meta: dict[str, Any] = {
        "bleed_size_mm": config.bleed_size_mm,
        "margin_threshold_mm": config.margin_threshold_mm,
        "render_scale": config.render_scale,
    }

    try:
        data = read_pdf_bytes(data_root=data_root, pdf_relpath=pdf_relpath)
    except DataAccessError as e:
        return _failed(
            pdf_relpath=pdf_relpath,
            code=e.code,
            message=str(e),
            detail={"data_root": str(data_root), "pdf_relpath": pdf_relpath},
            meta=meta,
        )

    try:
        report = inspect_document_bytes(data=data, config=config)
    except MarginInspectError as e:
        return _failed(
            pdf_relpath=pdf_relpath,
            code=e.code,
            message=str(e),
            detail={"pdf_relpath": pdf_relpath},
            meta=meta,
        )

    return InspectRunResult(
        ok=True,
        source_pdf_relpath=pdf_relpath,
        report=report,
        summary=summarize_report(report),
        errors=[],
        meta=meta,
    )


class MarginInspector:
    """
    Interactive session: adjustable settings, one loaded document, last report.

    Settings changes apply to the next `analyze()` only. A failed load keeps
    the previously loaded document; a failed analysis keeps the previous
    report.
    """

    def __init__(self, config: InspectConfig | None = None, *, engine: RasterEngine | None = None) -> None:
        self._config = config or InspectConfig()
        self._engine = engine or _get_engine()
        self._document_data: bytes | None = None
        self._page_count = 0
        self._report: DocumentReport | None = None

    @property
    def config(self) -> InspectConfig:
        return self._config

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def report(self) -> DocumentReport | None:
        return self._report

    def set_bleed_size(self, value: Any) -> None:
        self._config = replace(self._config, bleed_size_mm=parse_setting("bleed_size_mm", value))

    def set_margin_threshold(self, value: Any) -> None:
        self._config = replace(self._config, margin_threshold_mm=parse_setting("margin_threshold_mm", value))

    def load(self, data: bytes) -> int:
        document = self._engine.open_document(data=data)
        try:
            page_count = self._engine.get_page_count(document=document)
        finally:
            self._engine.close_document(document=document)
        if page_count < 1:
            raise InvalidInputError("Document has no pages")

        self._document_data = data
        self._page_count = page_count
        logger.info("document loaded: %d page(s)", page_count)
        return page_count

    def analyze(self) -> DocumentReport:
        if self._document_data is None:
            raise InvalidInputError("No document loaded")
        report = inspect_document_bytes(data=self._document_data, config=self._config, engine=self._engine)
        self._report = report
        return report

    def summary(self) -> DocumentSummary:
        if self._report is None:
            raise InvalidInputError("No analysis has been run")
        return summarize_report(self._report)

    def export(self, fmt: ExportFormat, *, sink: ExportSink | None = None) -> ExportArtifact:
        if self._report is None:
            raise InvalidInputError("No analysis has been run")
        artifact = export_report(self._report, fmt)
        if sink is not None:
            sink.deliver(artifact)
        return artifact
