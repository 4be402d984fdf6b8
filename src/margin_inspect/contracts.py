from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Edge(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


EDGES: tuple[Edge, ...] = (Edge.TOP, Edge.BOTTOM, Edge.LEFT, Edge.RIGHT)


class MarginInspectError(Exception):
    """
    Base class for terminal run failures.

    `code` is stable and machine-readable; the message is for humans.
    """

    code = "INSPECT_ERROR"


class InvalidInputError(MarginInspectError):
    code = "INSPECT_INVALID_INPUT"


class RenderFailureError(MarginInspectError):
    code = "INSPECT_RENDER_FAILED"


class MisconfigurationError(MarginInspectError, ValueError):
    code = "INSPECT_MISCONFIGURED"


@dataclass(frozen=True, slots=True)
class InspectError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class PixelMargins:
    """
    Pixel distance from each page edge to the nearest content pixel.

    A page without any content reports all zeros with `has_content=False`.
    """

    top: int
    bottom: int
    left: int
    right: int
    has_content: bool = True


@dataclass(frozen=True, slots=True)
class EdgeMargins:
    top: float  # mm, 2 decimals
    bottom: float
    left: float
    right: float

    def get(self, edge: Edge) -> float:
        return getattr(self, edge.value)


@dataclass(frozen=True, slots=True)
class BleedFlags:
    size: float  # bleed size (mm) active when the page was analyzed
    has_top_bleed: bool
    has_bottom_bleed: bool
    has_left_bleed: bool
    has_right_bleed: bool

    def get(self, edge: Edge) -> bool:
        return getattr(self, f"has_{edge.value}_bleed")

    def edges(self) -> list[Edge]:
        return [e for e in EDGES if self.get(e)]


@dataclass(frozen=True, slots=True)
class TrimArea:
    width: float  # mm; negative when opposing margins overlap
    height: float


@dataclass(frozen=True, slots=True)
class PageResult:
    page_number: int  # 1-indexed
    page_width_mm: float
    page_height_mm: float
    margins: EdgeMargins
    bleed: BleedFlags
    trim_area: TrimArea
    is_blank: bool = False
    # Overlay-drawing aid only; aggregation and export never read it.
    margins_px: PixelMargins | None = None


@dataclass(frozen=True, slots=True)
class DocumentReport:
    pages: tuple[PageResult, ...]
    bleed_size_mm: float
    margin_threshold_mm: float
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return len(self.pages)


@dataclass(frozen=True, slots=True)
class EdgeStats:
    min: float
    max: float
    avg: float


@dataclass(frozen=True, slots=True)
class UniformityVerdict:
    top: bool
    bottom: bool
    left: bool
    right: bool

    @property
    def overall(self) -> bool:
        return self.top and self.bottom and self.left and self.right

    def get(self, edge: Edge) -> bool:
        return getattr(self, edge.value)

    def non_uniform_edges(self) -> list[Edge]:
        return [e for e in EDGES if not self.get(e)]


@dataclass(frozen=True, slots=True)
class DocumentSummary:
    edge_stats: dict[Edge, EdgeStats]
    uniformity: UniformityVerdict
    page_consistency: list[bool]  # index i => page i + 1

    def inconsistent_pages(self) -> list[int]:
        return [i + 1 for i, ok in enumerate(self.page_consistency) if not ok]


def parse_setting(name: str, value: Any, *, minimum: float = 0.0, allow_equal: bool = True) -> float:
    """
    Coerce a user-supplied setting to a finite float, rejecting bad input.

    Raises MisconfigurationError; callers keep their previous value.
    """

    if isinstance(value, bool):
        raise MisconfigurationError(f"{name} must be a number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as e:
        raise MisconfigurationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(out):
        raise MisconfigurationError(f"{name} must be finite, got {value!r}")
    if out < minimum or (not allow_equal and out == minimum):
        op = ">=" if allow_equal else ">"
        raise MisconfigurationError(f"{name} must be {op} {minimum:g}, got {out:g}")
    return out


@dataclass(frozen=True, slots=True)
class InspectConfig:
    """
    Snapshot of the settings for one analysis run.

    A run reads this once; later changes only affect the next run.
    """

    bleed_size_mm: float = 3.0
    margin_threshold_mm: float = 5.0
    render_scale: float = 2.0  # pixels per PDF point
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "bleed_size_mm", parse_setting("bleed_size_mm", self.bleed_size_mm))
        object.__setattr__(
            self, "margin_threshold_mm", parse_setting("margin_threshold_mm", self.margin_threshold_mm)
        )
        object.__setattr__(
            self, "render_scale", parse_setting("render_scale", self.render_scale, allow_equal=False)
        )


@dataclass(frozen=True, slots=True)
class InspectRunResult:
    """
    Outcome of one document run.

    On failure `ok` is False, `report`/`summary` are None and `errors` carries
    the single terminal cause. No partial report is produced.
    """

    ok: bool
    source_pdf_relpath: str
    report: DocumentReport | None
    summary: DocumentSummary | None
    errors: list[InspectError]
    meta: dict[str, Any]
