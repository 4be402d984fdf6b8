"""
Rasterizer/loader collaborators.

The core only consumes `RenderedPage` values; how a backend produces them is
its own business.
"""

from .base import RasterEngine, RenderedPage
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["Pypdfium2Engine", "RasterEngine", "RenderedPage"]
