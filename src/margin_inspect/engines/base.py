from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..boundary import PixelGrid


@dataclass(frozen=True, slots=True)
class RenderedPage:
    page_number: int  # 1-indexed
    width_pt: float  # native page geometry
    height_pt: float
    scale: float  # grid pixels per point
    grid: PixelGrid


class RasterEngine(ABC):
    """
    Document loader + page rasterizer abstraction.

    Engines must:
    - Raise InvalidInputError when the bytes are not a loadable document
    - Raise RenderFailureError when a page cannot be rendered
    - Perform NO content detection; that is the core's job
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, *, data: bytes) -> Any:
        raise NotImplementedError

    @abstractmethod
    def get_page_count(self, *, document: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, *, document: Any, page_number: int, scale: float) -> RenderedPage:
        raise NotImplementedError

    def close_document(self, *, document: Any) -> None:
        return None
