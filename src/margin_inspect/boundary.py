"""
Content-boundary detection over a rasterized page.

Detection is deliberately simple: a pixel is content when it is visible and
not near-white. No layout analysis and no sub-pixel estimation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .contracts import Edge, PixelMargins

# Fixed, not user-configurable: anti-aliased near-white pixels are noise.
ALPHA_VISIBLE_THRESHOLD = 10
NEAR_WHITE_THRESHOLD = 250


@dataclass(frozen=True, slots=True, eq=False)
class PixelGrid:
    """
    Immutable RGBA sample grid, a (height, width, 4) uint8 array.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        px = self.pixels
        if px.ndim != 3 or px.shape[2] != 4:
            raise ValueError(f"expected a (height, width, 4) RGBA array, got shape {px.shape}")
        if px.dtype != np.uint8:
            raise ValueError(f"expected uint8 samples, got {px.dtype}")

    @classmethod
    def from_image(cls, image: Any) -> "PixelGrid":
        """
        Build a grid from a Pillow image (any mode; converted to RGBA).

        `convert` always copies, so the grid never aliases a renderer buffer.
        """

        return cls(pixels=np.asarray(image.convert("RGBA")))

    @classmethod
    def from_bytes(cls, *, width: int, height: int, samples: bytes) -> "PixelGrid":
        """
        Build a grid from a flat, row-major RGBA byte buffer.
        """

        if width < 0 or height < 0:
            raise ValueError("grid dimensions must be >= 0")
        expected = width * height * 4
        if len(samples) != expected:
            raise ValueError(
                f"sample buffer has {len(samples)} bytes, expected {expected} for {width}x{height} RGBA"
            )
        return cls(pixels=np.frombuffer(samples, dtype=np.uint8).reshape(height, width, 4))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def sample(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def is_content(self, x: int, y: int) -> bool:
        return is_content_pixel(*self.sample(x, y))


def is_content_pixel(r: int, g: int, b: int, a: int) -> bool:
    return a > ALPHA_VISIBLE_THRESHOLD and (
        r < NEAR_WHITE_THRESHOLD or g < NEAR_WHITE_THRESHOLD or b < NEAR_WHITE_THRESHOLD
    )


def content_mask(grid: PixelGrid) -> np.ndarray:
    """
    Boolean (height, width) mask of content pixels, same rule as `is_content_pixel`.
    """

    px = grid.pixels
    r, g, b, a = px[..., 0], px[..., 1], px[..., 2], px[..., 3]
    near_white = NEAR_WHITE_THRESHOLD
    return (a > ALPHA_VISIBLE_THRESHOLD) & ((r < near_white) | (g < near_white) | (b < near_white))


def _first_content_line(mask: np.ndarray, edge: Edge) -> int | None:
    # Collapse to one flag per row (top/bottom) or per column (left/right).
    along_rows = edge in (Edge.TOP, Edge.BOTTOM)
    lines = mask.any(axis=1 if along_rows else 0)
    if not lines.any():
        return None
    if edge in (Edge.BOTTOM, Edge.RIGHT):
        lines = lines[::-1]
    return int(np.argmax(lines))


def scan_edge(grid: PixelGrid, edge: Edge) -> int | None:
    """
    Scan inward from `edge` and return the offset of the first content line.

    Rows are the lines for top/bottom, columns for left/right. Returns None
    when the whole grid is blank.
    """

    return _first_content_line(content_mask(grid), edge)


def detect_pixel_margins(grid: PixelGrid) -> PixelMargins:
    mask = content_mask(grid)
    top = _first_content_line(mask, Edge.TOP)
    if top is None:
        return PixelMargins(top=0, bottom=0, left=0, right=0, has_content=False)

    # A non-blank mask has a content line from every side.
    return PixelMargins(
        top=top,
        bottom=_first_content_line(mask, Edge.BOTTOM),
        left=_first_content_line(mask, Edge.LEFT),
        right=_first_content_line(mask, Edge.RIGHT),
        has_content=True,
    )
