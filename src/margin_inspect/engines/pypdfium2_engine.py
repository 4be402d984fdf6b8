from __future__ import annotations

import logging
from typing import Any

from ..boundary import PixelGrid
from ..contracts import InvalidInputError, RenderFailureError

from .base import RasterEngine, RenderedPage

logger = logging.getLogger(__name__)


class Pypdfium2Engine(RasterEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except ImportError:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError(
                "Missing dependency: pypdfium2 is required for PDF rasterization."
            ) from e

    def open_document(self, *, data: bytes) -> Any:
        pdfium = self._require_pdfium()
        if not data:
            raise InvalidInputError("Empty input: no PDF bytes supplied")
        try:
            return pdfium.PdfDocument(data)
        except pdfium.PdfiumError as e:
            raise InvalidInputError(f"Not a loadable PDF document: {e}") from e

    def get_page_count(self, *, document: Any) -> int:
        return len(document)

    def render_page(self, *, document: Any, page_number: int, scale: float) -> RenderedPage:
        pdfium = self._require_pdfium()
        page_count = len(document)
        if page_number < 1 or page_number > page_count:
            raise RenderFailureError(f"Page out of range: {page_number} (1..{page_count})")

        try:
            page = document[page_number - 1]
            try:
                width_pt, height_pt = page.get_size()
                bitmap = page.render(scale=scale)
                try:
                    pil_img = bitmap.to_pil()
                    grid = PixelGrid.from_image(pil_img)
                finally:
                    bitmap.close()
            finally:
                page.close()
        except pdfium.PdfiumError as e:
            raise RenderFailureError(f"Failed to render page {page_number}: {e}") from e

        logger.debug(
            "rendered page %d: %.2fx%.2f pt -> %dx%d px at scale %s",
            page_number,
            width_pt,
            height_pt,
            grid.width,
            grid.height,
            scale,
        )
        return RenderedPage(
            page_number=page_number,
            width_pt=float(width_pt),
            height_pt=float(height_pt),
            scale=float(scale),
            grid=grid,
        )

    def close_document(self, *, document: Any) -> None:
        document.close()
