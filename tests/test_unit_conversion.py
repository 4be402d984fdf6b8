from __future__ import annotations

import unittest

from margin_inspect.units import format_mm, points_to_mm, px_to_mm, round_mm, within_tolerance


class TestUnitConversion(unittest.TestCase):
    def test_one_inch_of_points(self) -> None:
        self.assertAlmostEqual(points_to_mm(72), 25.40, delta=0.01)
        self.assertEqual(round_mm(points_to_mm(72)), 25.4)

    def test_pixels_at_scale_one_match_points(self) -> None:
        self.assertEqual(px_to_mm(72, 1.0), points_to_mm(72))

    def test_halving_scale_doubles_mm_per_pixel(self) -> None:
        self.assertAlmostEqual(px_to_mm(10, 1.0), 2 * px_to_mm(10, 2.0))
        self.assertAlmostEqual(px_to_mm(144, 2.0), px_to_mm(72, 1.0))

    def test_non_positive_scale_rejected(self) -> None:
        with self.assertRaises(ValueError):
            px_to_mm(10, 0)

    def test_format_is_two_decimals(self) -> None:
        self.assertEqual(format_mm(7.0555556), "7.06")
        self.assertEqual(format_mm(3), "3.00")
        self.assertEqual(format_mm(-0.001), "0.00")


class TestTolerance(unittest.TestCase):
    def test_boundary_is_inclusive_at_display_precision(self) -> None:
        # 8.03 - 3.03 is 5.000000000000001 in binary floating point
        self.assertTrue(within_tolerance(8.03, 3.03, 5.0))
        self.assertTrue(within_tolerance(15.0, 10.0, 5.0))
        self.assertFalse(within_tolerance(15.01, 10.0, 5.0))

    def test_symmetric(self) -> None:
        self.assertEqual(within_tolerance(2.0, 9.0, 5.0), within_tolerance(9.0, 2.0, 5.0))
        self.assertFalse(within_tolerance(2.0, 9.0, 5.0))


if __name__ == "__main__":
    unittest.main()
