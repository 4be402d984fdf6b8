from __future__ import annotations

# PDF points are 1/72 inch; 25.4 / 72
MM_PER_POINT = 0.3527778


def round_mm(value: float) -> float:
    """
    Two-decimal rounding shared by display, export and every comparison.
    """

    return round(value, 2) + 0.0  # folds -0.0 into 0.0


def points_to_mm(points: float) -> float:
    return points * MM_PER_POINT


def px_to_mm(px: float, scale: float) -> float:
    """
    Convert a pixel offset rendered at `scale` pixels per point to millimeters.
    """

    if scale <= 0:
        raise ValueError("scale must be > 0")
    return (px / scale) * MM_PER_POINT


def within_tolerance(a: float, b: float, tolerance: float) -> bool:
    # Inclusive, at display precision: |a - b| rounding to exactly `tolerance` passes.
    return round_mm(abs(a - b)) <= tolerance


def format_mm(value: float) -> str:
    return f"{round_mm(value):.2f}"
