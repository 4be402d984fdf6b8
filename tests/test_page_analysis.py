from __future__ import annotations

import unittest

from PIL import Image, ImageDraw

from margin_inspect.boundary import PixelGrid
from margin_inspect.contracts import InspectConfig
from margin_inspect.page_module import analyze_page


def _page_grid(width: int, height: int, box: tuple[int, int, int, int] | None) -> PixelGrid:
    img = Image.new("RGBA", (width, height), (255, 255, 255, 255))
    if box is not None:
        ImageDraw.Draw(img).rectangle(list(box), fill=(0, 0, 0, 255))
    return PixelGrid.from_image(img)


class TestAnalyzePage(unittest.TestCase):
    def test_margins_dimensions_and_trim(self) -> None:
        # 200x300 pt page at scale 1: 20 px side margins, 30 px top/bottom margins.
        grid = _page_grid(200, 300, (20, 30, 179, 269))
        r = analyze_page(page_number=1, width_pt=200, height_pt=300, grid=grid, scale=1.0, config=InspectConfig())

        self.assertEqual(r.page_number, 1)
        self.assertEqual(r.page_width_mm, 70.56)
        self.assertEqual(r.page_height_mm, 105.83)
        self.assertEqual((r.margins.top, r.margins.bottom), (10.58, 10.58))
        self.assertEqual((r.margins.left, r.margins.right), (7.06, 7.06))
        self.assertEqual(r.trim_area.width, 56.44)
        self.assertEqual(r.trim_area.height, 84.67)
        self.assertFalse(r.is_blank)
        self.assertEqual((r.margins_px.top, r.margins_px.left), (30, 20))

    def test_scale_is_divided_out(self) -> None:
        grid = _page_grid(400, 600, (40, 60, 359, 539))
        r = analyze_page(page_number=1, width_pt=200, height_pt=300, grid=grid, scale=2.0, config=InspectConfig())
        self.assertEqual((r.margins.top, r.margins.left), (10.58, 7.06))
        self.assertEqual(r.page_width_mm, 70.56)

    def test_bleed_flags_are_inclusive(self) -> None:
        grid = _page_grid(200, 300, (20, 30, 179, 269))
        r = analyze_page(
            page_number=3,
            width_pt=200,
            height_pt=300,
            grid=grid,
            scale=1.0,
            config=InspectConfig(bleed_size_mm=7.06),
        )
        self.assertEqual(r.bleed.size, 7.06)
        self.assertTrue(r.bleed.has_left_bleed)
        self.assertTrue(r.bleed.has_right_bleed)
        self.assertFalse(r.bleed.has_top_bleed)
        self.assertFalse(r.bleed.has_bottom_bleed)

    def test_blank_page(self) -> None:
        grid = _page_grid(100, 100, None)
        r = analyze_page(page_number=2, width_pt=100, height_pt=100, grid=grid, scale=1.0, config=InspectConfig())
        self.assertTrue(r.is_blank)
        self.assertEqual((r.margins.top, r.margins.bottom, r.margins.left, r.margins.right), (0.0, 0.0, 0.0, 0.0))
        self.assertEqual(len(r.bleed.edges()), 4)
        self.assertEqual(r.trim_area.width, r.page_width_mm)

    def test_negative_trim_is_not_clamped(self) -> None:
        # Raster wider than the declared geometry: measured margins exceed the page.
        grid = _page_grid(100, 10, (50, 0, 50, 9))
        r = analyze_page(page_number=1, width_pt=10, height_pt=10, grid=grid, scale=1.0, config=InspectConfig())
        self.assertLess(r.trim_area.width, 0)

    def test_rejects_zero_page_number(self) -> None:
        grid = _page_grid(4, 4, None)
        with self.assertRaises(ValueError):
            analyze_page(page_number=0, width_pt=4, height_pt=4, grid=grid, scale=1.0, config=InspectConfig())


if __name__ == "__main__":
    unittest.main()
