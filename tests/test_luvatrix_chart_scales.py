from __future__ import annotations

import math
import unittest

from luvatrix_chart import ChartDataError
from luvatrix_chart.scales import (
    NiceScale,
    closest_decimal,
    format_ticks_for_axis,
    format_value,
    nice_number,
    nice_scale,
    ratio_to_max,
    tick_decimals,
)


class NiceScaleTests(unittest.TestCase):
    def test_zero_to_hundred(self) -> None:
        scale = nice_scale(0, 100, 10)
        self.assertEqual(scale.min, 0)
        self.assertEqual(scale.max, 100)
        self.assertEqual(scale.tick_size, 10)
        self.assertEqual(scale.ticks, tuple(float(v) for v in range(0, 101, 10)))

    def test_symmetric_negative_range(self) -> None:
        scale = nice_scale(-100, 100, 10)
        self.assertEqual(scale.min, -100)
        self.assertEqual(scale.max, 100)
        self.assertEqual(scale.tick_size, 20)
        self.assertEqual(scale.ticks, tuple(float(v) for v in range(-100, 101, 20)))

    def test_scale_encloses_raw_range_with_whole_steps(self) -> None:
        cases = [(0, 7.3), (-3.2, 18.9), (-0.04, 0.013), (12, 987), (-5000, -120), (0, 1e-3), (1.5, 1.75)]
        for lo, hi in cases:
            with self.subTest(lo=lo, hi=hi):
                scale = nice_scale(lo, hi, 10)
                self.assertLessEqual(scale.min, lo)
                self.assertGreaterEqual(scale.max, hi)
                steps = (scale.max - scale.min) / scale.tick_size
                self.assertAlmostEqual(steps, round(steps), places=6)
                self.assertEqual(scale.ticks[0], scale.min)
                self.assertEqual(scale.ticks[-1], scale.max)
                self.assertEqual(list(scale.ticks), sorted(scale.ticks))
                for a, b in zip(scale.ticks, scale.ticks[1:]):
                    self.assertAlmostEqual(b - a, scale.tick_size, places=9)

    def test_tick_count_does_not_exceed_target_much(self) -> None:
        scale = nice_scale(0, 93, 5)
        self.assertLessEqual(len(scale.ticks), 6)

    def test_near_zero_ticks_snap_to_zero(self) -> None:
        scale = nice_scale(-0.3, 0.3, 7)
        self.assertIn(0.0, scale.ticks)
        zero = [t for t in scale.ticks if t == 0.0][0]
        self.assertEqual(math.copysign(1.0, zero), 1.0)

    def test_constant_range_widens_instead_of_failing(self) -> None:
        scale = nice_scale(5, 5, 10)
        self.assertLess(scale.min, 5)
        self.assertGreater(scale.max, 5)
        self.assertTrue(all(math.isfinite(t) for t in scale.ticks))

        zero = nice_scale(0, 0, 10)
        self.assertEqual(zero.min, -1)
        self.assertEqual(zero.max, 1)
        self.assertAlmostEqual(zero.tick_size, 0.2, places=12)

    def test_identical_inputs_give_identical_scales(self) -> None:
        self.assertEqual(nice_scale(-13.7, 42.1, 8), nice_scale(-13.7, 42.1, 8))

    def test_reversed_bounds_are_swapped(self) -> None:
        self.assertEqual(nice_scale(100, 0, 10), nice_scale(0, 100, 10))

    def test_degenerate_min_max_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            nice_scale(math.inf, -math.inf, 10)

    def test_single_tick_target_does_not_crash(self) -> None:
        scale = nice_scale(0, 10, 1)
        self.assertGreaterEqual(len(scale.ticks), 2)


class NiceNumberTests(unittest.TestCase):
    def test_ceiling_mode_snaps_up(self) -> None:
        self.assertAlmostEqual(nice_number(100, round_result=False), 100)
        self.assertAlmostEqual(nice_number(0.34, round_result=False), 0.5)
        self.assertAlmostEqual(nice_number(600, round_result=False), 1000)

    def test_rounding_mode_snaps_to_nearest(self) -> None:
        self.assertAlmostEqual(nice_number(11.11, round_result=True), 10)
        self.assertAlmostEqual(nice_number(22.2, round_result=True), 20)
        self.assertAlmostEqual(nice_number(45, round_result=True), 50)
        self.assertAlmostEqual(nice_number(8, round_result=True), 10)


class FormattingTests(unittest.TestCase):
    def test_closest_decimal(self) -> None:
        self.assertEqual(closest_decimal(0), 0)
        self.assertEqual(closest_decimal(1), 1)
        self.assertEqual(closest_decimal(11), 10)
        self.assertEqual(closest_decimal(15), 20)
        self.assertEqual(closest_decimal(19), 20)

    def test_ratio_to_max(self) -> None:
        self.assertEqual(ratio_to_max(4, 2), 2)
        self.assertEqual(ratio_to_max(4, 0), 0.0)
        self.assertEqual(ratio_to_max(0, 0), 0.0)

    def test_format_value_rounds_half_away_from_zero(self) -> None:
        self.assertEqual(format_value(1), "1")
        self.assertEqual(format_value(1.5), "2")
        self.assertEqual(format_value(-1), "-1")
        self.assertEqual(format_value(-1.5), "-2")
        self.assertEqual(format_value(-0.2), "0")

    def test_format_value_rounding_prefix_suffix(self) -> None:
        self.assertEqual(format_value(1.618, 3), "1.618")
        self.assertEqual(format_value(1, 0, "_suffix", "prefix_"), "prefix_1_suffix")

    def test_format_value_returns_non_numbers_unchanged(self) -> None:
        self.assertEqual(format_value("text"), "text")

    def test_axis_labels_share_decimals(self) -> None:
        self.assertEqual(format_ticks_for_axis(nice_scale(0, 0.4, 3)), ["0.0", "0.2", "0.4"])
        self.assertEqual(format_ticks_for_axis(nice_scale(20, 40, 3)), ["20", "30", "40"])
        labels = format_ticks_for_axis(nice_scale(-0.3, 0.3, 7))
        self.assertEqual(labels, ["-0.4", "-0.2", "0.0", "0.2", "0.4"])
        self.assertEqual(format_ticks_for_axis(NiceScale(0.0, 0.1, 0.05, (0.0, 0.05, 0.1))), ["0.00", "0.05", "0.10"])

    def test_tick_decimals(self) -> None:
        self.assertEqual(tick_decimals(5), 0)
        self.assertEqual(tick_decimals(0.2), 1)
        self.assertEqual(tick_decimals(0.1), 1)
        self.assertEqual(tick_decimals(0.05), 2)
        self.assertEqual(tick_decimals(0.001), 3)
        self.assertEqual(tick_decimals(0), 0)


if __name__ == "__main__":
    unittest.main()
