from __future__ import annotations

import logging

from .boundary import PixelGrid, detect_pixel_margins
from .contracts import BleedFlags, EdgeMargins, InspectConfig, PageResult, TrimArea
from .units import points_to_mm, px_to_mm, round_mm

logger = logging.getLogger(__name__)


def analyze_page(
    *,
    page_number: int,
    width_pt: float,
    height_pt: float,
    grid: PixelGrid,
    scale: float,
    config: InspectConfig,
) -> PageResult:
    """
    Measure one rasterized page.

    Margins are stored rounded to 2 decimals, and the bleed flags compare
    those rounded values (inclusive) against `config.bleed_size_mm`. The trim
    area is not clamped: a negative dimension means the measured margins
    overlap.
    """

    if page_number < 1:
        raise ValueError("page_number must be 1-indexed")

    px = detect_pixel_margins(grid)
    if not px.has_content:
        logger.warning("page %d: no content detected, reporting zero margins", page_number)

    margins = EdgeMargins(
        top=round_mm(px_to_mm(px.top, scale)),
        bottom=round_mm(px_to_mm(px.bottom, scale)),
        left=round_mm(px_to_mm(px.left, scale)),
        right=round_mm(px_to_mm(px.right, scale)),
    )
    page_width_mm = round_mm(points_to_mm(width_pt))
    page_height_mm = round_mm(points_to_mm(height_pt))

    bleed_size = config.bleed_size_mm
    bleed = BleedFlags(
        size=bleed_size,
        has_top_bleed=margins.top <= bleed_size,
        has_bottom_bleed=margins.bottom <= bleed_size,
        has_left_bleed=margins.left <= bleed_size,
        has_right_bleed=margins.right <= bleed_size,
    )
    trim_area = TrimArea(
        width=round_mm(page_width_mm - margins.left - margins.right),
        height=round_mm(page_height_mm - margins.top - margins.bottom),
    )

    logger.debug(
        "page %d: margins top=%.2f bottom=%.2f left=%.2f right=%.2f mm",
        page_number,
        margins.top,
        margins.bottom,
        margins.left,
        margins.right,
    )
    return PageResult(
        page_number=page_number,
        page_width_mm=page_width_mm,
        page_height_mm=page_height_mm,
        margins=margins,
        bleed=bleed,
        trim_area=trim_area,
        is_blank=not px.has_content,
        margins_px=px,
    )
